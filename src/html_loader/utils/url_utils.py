# src/html_loader/utils/url_utils.py
import logging
from enum import Enum
from urllib.parse import urlparse

from bs4 import Tag

from html_loader.dom.builder import get_attribute

logger = logging.getLogger(__name__)


class ScriptKind(str, Enum):
    EXTERNAL = "external"
    LOCAL = "local"
    INLINE = "inline"


class UrlUtils:
    """A collection of static methods for classifying src/href values."""

    @staticmethod
    def is_absolute_url(url: str) -> bool:
        """
        Checks if a URL carries both a scheme and the '//' authority marker.

        'https://cdn.example.com/a.js' and 'file:///a.js' are absolute;
        '//cdn.example.com/a.js', 'a.js', '/a.js' and 'C:\\a.js' are not.
        """
        url = (url or "").strip()
        if not url:
            return False
        try:
            parsed = urlparse(url)
        except ValueError:
            logger.debug("Could not parse URL: %s", url)
            return False

        if not parsed.scheme:
            return False
        return url[len(parsed.scheme) + 1:].startswith("//")

    @staticmethod
    def classify_src(src: str) -> ScriptKind:
        """Classifies a script by its src attribute value ('' when missing)."""
        if not src:
            return ScriptKind.INLINE
        if UrlUtils.is_absolute_url(src):
            return ScriptKind.EXTERNAL
        return ScriptKind.LOCAL

    @staticmethod
    def classify_script(script: Tag) -> ScriptKind:
        return UrlUtils.classify_src(get_attribute(script, "src"))
