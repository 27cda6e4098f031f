# src/html_loader/controllers/transform_controller.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from html_loader.dom.builder import parse_document
from html_loader.model import OutputFragment, TransformOptions, TransformResult
from html_loader.services.link_import_service import LinkImportService
from html_loader.services.minify_service import MinifyService
from html_loader.services.script_emit_service import ScriptEmitService
from html_loader.services.template_register_service import TemplateRegisterService

logger = logging.getLogger(__name__)


class TransformController:
    """
    Orchestrates the transformation of one HTML component file into a JS module.

    Runs three passes, each on a freshly parsed tree:
      1. <link> elements        -> import statements
      2. <dom-module> markup    -> template registration statement
      3. <script> elements      -> imports / inline code with a source map
    The generated line count of the first two passes seeds the third so the
    source map lines stay correct across the concatenated fragments.

    The controller keeps no state between calls; one instance may serve any
    number of files.
    """

    def __init__(self, options: Optional[TransformOptions] = None, minifier: Optional[MinifyService] = None):
        self.options = options or TransformOptions()
        self.minifier = minifier or MinifyService()

    def links(self, content: str, current_file_path: str) -> OutputFragment:
        return LinkImportService(self.options, current_file_path).links(parse_document(content))

    def dom_module(self, content: str) -> OutputFragment:
        return TemplateRegisterService(self.options, self.minifier).dom_module(parse_document(content))

    def scripts(
            self,
            content: str,
            current_file_path: str,
            prior_text: str = "",
            prior_line_count: int = 0,
    ) -> TransformResult:
        service = ScriptEmitService(content, current_file_path)
        return service.scripts(parse_document(content), prior_text, prior_line_count)

    def process(self, content: str, current_file_path: str) -> TransformResult:
        """Transforms the content of `current_file_path` into module code plus optional source map."""
        links = self.links(content, current_file_path)
        doms = self.dom_module(content)
        result = self.scripts(
            content,
            current_file_path,
            links.text + doms.text,
            links.line_count + doms.line_count,
        )
        logger.debug(
            "Transformed %s: %d link lines, %d template lines, source map: %s",
            current_file_path, links.line_count, doms.line_count, result.source_map is not None
        )
        return result


def transform(
        content: str,
        current_file_path: str,
        options: Union[TransformOptions, Dict[str, Any], None] = None,
) -> TransformResult:
    """Validates the host options once and runs the three-pass transformation."""
    return TransformController(TransformOptions.from_host(options)).process(content, current_file_path)
