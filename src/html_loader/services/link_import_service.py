# src/html_loader/services/link_import_service.py
import logging

from bs4 import BeautifulSoup

from html_loader.dom.builder import get_attribute
from html_loader.dom.predicates import LINK, query_all
from html_loader.model import OutputFragment, TransformOptions
from html_loader.utils.js_literals import import_statement
from html_loader.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

IMPORT_LINE_COST = 2


class LinkImportService:
    """
    A stateless service turning <link href="..."> elements into import statements.
    e.g.
        <link rel="import" href="paper-input/paper-input.html">
    becomes:
        import '/abs/dir/paper-input/paper-input.html';
    """

    def __init__(self, options: TransformOptions, current_file_path: str):
        self.options = options
        self.current_file_path = current_file_path

    def resolve_href(self, href: str) -> str:
        """Literal href for ignore_path_rewrite matches, otherwise resolved against the current file."""
        if self.options.rewrites_path(href):
            return PathUtils.resolve_import(self.current_file_path, href)
        return href

    def links(self, doc: BeautifulSoup) -> OutputFragment:
        """Reads every link in document order; the document is not modified."""
        parts = []
        line_count = 0

        for link in query_all(doc, LINK):
            href = get_attribute(link, "href")
            if not href:
                continue

            path = self.resolve_href(href)
            if self.options.ignores_link(href):
                logger.debug("Ignoring link '%s' in %s", href, self.current_file_path)
                continue

            parts.append(import_statement(path))
            line_count += IMPORT_LINE_COST

        logger.debug("Emitted %d link imports for %s", line_count // IMPORT_LINE_COST, self.current_file_path)
        return OutputFragment(text="".join(parts), line_count=line_count)
