# src/html_loader/services/minify_service.py
import logging

import htmlmin
import rcssmin
from bs4 import Tag

from html_loader.dom.builder import serialize_children, text_content
from html_loader.dom.predicates import STYLE, query_all

logger = logging.getLogger(__name__)


class MinifyService:
    """
    Minifies template markup before it is embedded into a JavaScript string.

    Policy: whitespace runs collapse to a single space (never removed entirely),
    <style> text is CSS-minified and HTML comments are stripped.
    """

    @staticmethod
    def minify_styles(node: Tag) -> int:
        """Minifies the text of every <style> element below `node` in place. Returns the count."""
        count = 0
        for style in query_all(node, STYLE):
            css = text_content(style)
            if not css.strip():
                continue
            style.string = rcssmin.cssmin(css)
            count += 1
        return count

    @staticmethod
    def minify_html(html: str) -> str:
        """Runs the markup minifier and trims the result ('' for blank markup)."""
        if not html or not html.strip():
            return ""
        minimized = htmlmin.minify(
            html,
            remove_comments=True,
            remove_empty_space=False,
            remove_all_empty_space=False,
            reduce_boolean_attributes=False,
            remove_optional_attribute_quotes=False,
            convert_charrefs=False,
            keep_pre=False,
        )
        return minimized.strip()

    def minify_subtree(self, node: Tag) -> str:
        """Serializes the children of `node` and minifies the result."""
        styles = self.minify_styles(node)
        markup = serialize_children(node)
        result = self.minify_html(markup)
        logger.debug(
            "Minified template markup from %d to %d chars (%d <style> blocks).",
            len(markup), len(result), styles
        )
        return result
