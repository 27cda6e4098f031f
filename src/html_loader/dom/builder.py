# src/html_loader/dom/builder.py
import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

logger = logging.getLogger(__name__)

# html.parser keeps inline <script>/<style> text verbatim, records sourceline/sourcepos
# for every tag and never injects synthetic <html>/<head>/<body> wrappers.
PARSER_FEATURES = "html.parser"

# HTML5 void elements (<br>, not <br/>), valueless boolean attributes and no
# named-entity rewriting of non-ASCII text.
TEMPLATE_FORMATTER = HTMLFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
    empty_attributes_are_booleans=True,
)


def parse_document(content: str) -> BeautifulSoup:
    """
    Parses raw HTML into a fresh, mutable tree.

    Every call returns an independent tree so that a pass which removes nodes
    never affects another pass working on the same content.
    """
    return BeautifulSoup(content or "", PARSER_FEATURES, store_line_numbers=True)


def get_attribute(tag: Tag, name: str) -> str:
    """Returns the attribute value as a string ('' when missing)."""
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        # Multi-valued attributes (class, rel) come back as lists
        return " ".join(value)
    return str(value)


def text_content(tag: Tag) -> str:
    """Returns the raw text held by an element such as <script> ('' when empty)."""
    return "".join(str(child) for child in tag.children if not isinstance(child, Tag))


def serialize_children(node: Optional[Tag]) -> str:
    """Serializes the children of a node (or a whole BeautifulSoup document)."""
    if node is None:
        return ""
    return node.decode_contents(formatter=TEMPLATE_FORMATTER)
