# src/html_loader/model.py
from __future__ import annotations

import json
import logging
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

DEFAULT_REGISTER_TEMPLATE_MODULE = "polymer-webpack-loader/register-html-template"


class TransformOptions(BaseModel):
    """
    Immutable per-run configuration of the transformer.

    Accepts the host's camelCase keys (ignoreLinks, ignoreLinksFromPartialMatches,
    ignorePathReWrite, registerTemplateModule) as well as the field names.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    ignore_links: FrozenSet[str] = Field(default_factory=frozenset, alias="ignoreLinks")
    ignore_links_from_partial_matches: FrozenSet[str] = Field(
        default_factory=frozenset, alias="ignoreLinksFromPartialMatches"
    )
    ignore_path_rewrite: FrozenSet[str] = Field(default_factory=frozenset, alias="ignorePathReWrite")
    register_template_module: str = Field(DEFAULT_REGISTER_TEMPLATE_MODULE, alias="registerTemplateModule")

    @field_validator(
        "ignore_links", "ignore_links_from_partial_matches", "ignore_path_rewrite", mode="before"
    )
    @classmethod
    def coerce_string_set(cls, v):
        if v is None:
            return frozenset()
        if isinstance(v, str):
            # A lone string is one entry, not a set of characters
            return frozenset([v]) if v else frozenset()
        # An empty marker is kept: it is contained in every href
        return frozenset(str(item) for item in v if item is not None)

    @field_validator("register_template_module", mode="before")
    @classmethod
    def default_register_module(cls, v):
        return v or DEFAULT_REGISTER_TEMPLATE_MODULE

    @classmethod
    def from_host(cls, options: Optional[Dict[str, Any]]) -> "TransformOptions":
        """Validates the loosely-typed option bag handed over by the host."""
        if isinstance(options, TransformOptions):
            return options
        return cls.model_validate(options or {})

    def rewrites_path(self, href: str) -> bool:
        """True unless the href contains one of the ignore_path_rewrite markers."""
        return not any(marker in href for marker in self.ignore_path_rewrite)

    def ignores_link(self, href: str) -> bool:
        """True if the href is ignored by exact or partial match."""
        if href in self.ignore_links:
            return True
        return any(partial in href for partial in self.ignore_links_from_partial_matches)


class OutputFragment(BaseModel):
    """A piece of generated code plus the number of lines it adds to the output buffer."""
    text: str = ""
    line_count: int = 0


class ScriptLocation(BaseModel):
    """
    Position metadata of a <script> element in the original document.
    Lines are 1-based, the column is 0-based.
    """
    start_tag_line: int
    content_line: int
    content_column: int
    end_tag_line: int

    @property
    def line_span(self) -> int:
        return self.end_tag_line - self.start_tag_line


class Mapping(BaseModel):
    """One generated position pointing back to a position in an original source."""
    model_config = ConfigDict(frozen=True)

    generated_line: int
    generated_column: int
    original_line: int
    original_column: int
    source: str
    name: Optional[str] = None


class SourceMap(BaseModel):
    """Source Map revision 3 record."""
    model_config = ConfigDict(populate_by_name=True)

    version: int = 3
    file: Optional[str] = None
    sources: List[str] = Field(default_factory=list)
    names: List[str] = Field(default_factory=list)
    mappings: str = ""
    sources_content: List[Optional[str]] = Field(default_factory=list, alias="sourcesContent")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


class TransformResult(BaseModel):
    code: str
    source_map: Optional[SourceMap] = None


class FileTransformReport(BaseModel):
    """Outcome of transforming one file on disk (batch mode)."""
    input_path: str
    output_path: Optional[str] = None
    map_path: Optional[str] = None
    success: bool = False
    error: Optional[str] = None
