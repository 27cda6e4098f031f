# src/html_loader/services/script_emit_service.py
from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

import esprima
from bs4 import BeautifulSoup, Tag
from esprima.error_handler import Error as EsprimaError

from html_loader.dom.builder import get_attribute, text_content
from html_loader.dom.location import LineIndex, locate_script
from html_loader.dom.predicates import SCRIPT, query_all
from html_loader.model import Mapping, ScriptLocation, TransformResult
from html_loader.sourcemap.generator import SourceMapGenerator
from html_loader.utils.js_literals import import_statement
from html_loader.utils.path_utils import PathUtils
from html_loader.utils.url_utils import ScriptKind, UrlUtils

logger = logging.getLogger(__name__)

IMPORT_LINE_COST = 2


class ScriptEmitService:
    """
    Re-emits <script> elements as module code.

    A local src becomes an import statement, an absolute src is left to the
    registered template, and inline text is appended verbatim while every token
    gets a source-map entry pointing back into the original HTML file.
    """

    def __init__(self, content: str, current_file_path: str):
        self.content = content
        self.current_file_path = current_file_path
        self._index = LineIndex(content)

    def tokenize(self, text: str, location: ScriptLocation) -> List[Any]:
        """
        Tokenizes inline script text; syntax errors abort the transformation of the file.

        esprima.tokenize has no module goal: it scans as a classic script, so an
        HTML-like comment (`<!--`, or `-->` at the start of a line) becomes a
        comment instead of the operator tokens a module would produce.
        """
        try:
            return esprima.tokenize(text, loc=True)
        except EsprimaError as e:
            raise ValueError(
                f"Failed to tokenize inline <script> at line {location.start_tag_line} "
                f"of {self.current_file_path}: {e}"
            ) from e

    def map_tokens(
            self,
            generator: SourceMapGenerator,
            tokens: List[Any],
            location: ScriptLocation,
            line_offset: int,
    ) -> int:
        """
        Records one mapping per token and returns the number recorded.

        Only the first token line shares its line with the <script> start tag, so
        only there the column is shifted by the start of the script text.
        """
        line_shift = location.content_line - 1
        count = 0
        for token in tokens:
            loc = getattr(token, "loc", None)
            if not loc:
                continue
            line, column = loc.start.line, loc.start.column
            generator.add_mapping(Mapping(
                generated_line=line + line_offset,
                generated_column=column,
                original_line=line + line_shift,
                original_column=column + (location.content_column if line == 1 else 0),
                source=self.current_file_path,
                name=token.value if token.type == "Identifier" else None,
            ))
            count += 1
        return count

    def _emit_inline(
            self,
            script: Tag,
            generator: SourceMapGenerator,
            line_offset: int,
    ) -> Tuple[str, int]:
        text = text_content(script)
        location = locate_script(script, self._index)
        tokens = self.tokenize(text, location)

        mapped = self.map_tokens(generator, tokens, location, line_offset)
        logger.debug(
            "Mapped %d tokens of inline script at line %d of %s",
            mapped, location.start_tag_line, self.current_file_path
        )
        return f"\n{text}\n", line_offset + 2 + location.line_span

    def scripts(
            self,
            doc: BeautifulSoup,
            prior_text: str = "",
            prior_line_count: int = 0,
    ) -> TransformResult:
        parts = [prior_text]
        line_offset = prior_line_count
        generator: Optional[SourceMapGenerator] = None

        for script in query_all(doc, SCRIPT):
            kind = UrlUtils.classify_script(script)

            if kind is ScriptKind.EXTERNAL:
                continue

            if kind is ScriptKind.LOCAL:
                src = get_attribute(script, "src")
                parts.append(import_statement(PathUtils.resolve_import(self.current_file_path, src)))
                line_offset += IMPORT_LINE_COST
                continue

            generator = generator or SourceMapGenerator()
            text, line_offset = self._emit_inline(script, generator, line_offset)
            parts.append(text)

        source_map = None
        if generator is not None:
            generator.set_source_content(self.current_file_path, self.content)
            source_map = generator.to_source_map()
        return TransformResult(code="".join(parts), source_map=source_map)
