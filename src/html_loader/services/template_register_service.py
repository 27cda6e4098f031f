# src/html_loader/services/template_register_service.py
import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag

from html_loader.dom.predicates import DOM_MODULE, LINK, SCRIPT, query, query_all
from html_loader.model import OutputFragment, TransformOptions
from html_loader.services.minify_service import MinifyService
from html_loader.utils.js_literals import quote_single
from html_loader.utils.url_utils import ScriptKind, UrlUtils

logger = logging.getLogger(__name__)

REGISTER_LINE_COST = 3


class TemplateRegisterService:
    """
    Extracts the markup of a component and emits the statement registering it.

    Scripts without an absolute src and all links are stripped first, as they
    are emitted separately as code. The document passed in is mutated, so it
    must be a tree of its own.
    """

    def __init__(self, options: TransformOptions, minifier: Optional[MinifyService] = None):
        self.options = options
        self.minifier = minifier or MinifyService()

    @staticmethod
    def strip_transient_nodes(doc: BeautifulSoup) -> int:
        """Removes inline/local scripts and every link. Returns the number of removed nodes."""
        removed = 0
        for script in query_all(doc, SCRIPT):
            if UrlUtils.classify_script(script) is not ScriptKind.EXTERNAL:
                script.decompose()
                removed += 1
        for link in query_all(doc, LINK):
            link.decompose()
            removed += 1
        return removed

    def _statement(self, method: str, markup: str) -> str:
        module = quote_single(self.options.register_template_module)
        return (
            f"\nconst RegisterHtmlTemplate = require('{module}');"
            f"\nRegisterHtmlTemplate.{method}('{quote_single(markup)}');\n"
        )

    def dom_module(self, doc: BeautifulSoup) -> OutputFragment:
        dom_module = query(doc, DOM_MODULE)
        removed = self.strip_transient_nodes(doc)
        logger.debug("Stripped %d script/link nodes from template copy.", removed)

        container: Tag = dom_module.parent if dom_module is not None and dom_module.parent is not None else doc
        minimized = self.minifier.minify_subtree(container)
        if not minimized:
            return OutputFragment()

        method = "register" if dom_module is not None else "toBody"
        return OutputFragment(text=self._statement(method, minimized), line_count=REGISTER_LINE_COST)
