# src/html_loader/dom/predicates.py
from typing import Callable, List, Optional

from bs4 import Tag

Predicate = Callable[[Tag], bool]


def has_tag_name(name: str) -> Predicate:
    """Builds a stateless predicate matching elements by (lower-case) tag name."""
    wanted = name.lower()

    def predicate(tag: Tag) -> bool:
        return isinstance(tag, Tag) and (tag.name or "").lower() == wanted

    predicate.__name__ = f"has_tag_name_{wanted.replace('-', '_')}"
    return predicate


DOM_MODULE = has_tag_name("dom-module")
LINK = has_tag_name("link")
SCRIPT = has_tag_name("script")
STYLE = has_tag_name("style")


def query(doc: Tag, predicate: Predicate) -> Optional[Tag]:
    """Returns the first matching element in document order, or None."""
    return doc.find(predicate)


def query_all(doc: Tag, predicate: Predicate) -> List[Tag]:
    """Returns all matching elements in document order."""
    return list(doc.find_all(predicate))
