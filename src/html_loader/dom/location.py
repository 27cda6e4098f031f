# src/html_loader/dom/location.py
import bisect
import logging
import re
from typing import List, Tuple

from bs4 import Tag

from html_loader.dom.builder import text_content
from html_loader.model import ScriptLocation

logger = logging.getLogger(__name__)

# A start tag up to its closing '>', skipping over quoted attribute values.
_START_TAG_RE = re.compile(r"""<[^\s/>]+(?:[^>"']|"[^"]*"|'[^']*')*>""")


class LineIndex:
    """
    Converts between absolute offsets and (line, column) positions of a text.

    Lines are 1-based and split on '\\n' only, columns are 0-based. This matches
    the positions html.parser reports through sourceline/sourcepos.
    """

    def __init__(self, text: str):
        self.text = text
        self._line_starts: List[int] = [0]
        for i, ch in enumerate(text):
            if ch == "\n":
                self._line_starts.append(i + 1)

    def offset(self, line: int, column: int) -> int:
        if line < 1 or line > len(self._line_starts):
            raise ValueError(f"Line {line} is outside of the document (1..{len(self._line_starts)}).")
        return self._line_starts[line - 1] + column

    def position(self, offset: int) -> Tuple[int, int]:
        line_idx = bisect.bisect_right(self._line_starts, offset) - 1
        return line_idx + 1, offset - self._line_starts[line_idx]


def locate_script(script: Tag, index: LineIndex) -> ScriptLocation:
    """
    Derives the position metadata of a <script> element.

    The parser only records where the start tag begins, so the end of the start
    tag is found in the raw text and the end tag is placed after the verbatim
    text content.
    """
    if script.sourceline is None or script.sourcepos is None:
        raise ValueError(f"No source position recorded for <{script.name}>.")

    tag_offset = index.offset(script.sourceline, script.sourcepos)
    match = _START_TAG_RE.match(index.text, tag_offset)
    if match:
        content_offset = match.end()
    else:
        # Unterminated start tag; html.parser treats the rest as text
        logger.debug("Could not match start tag at line %s, col %s.", script.sourceline, script.sourcepos)
        close = index.text.find(">", tag_offset)
        content_offset = close + 1 if close >= 0 else len(index.text)

    content_line, content_column = index.position(content_offset)
    content = text_content(script)

    return ScriptLocation(
        start_tag_line=script.sourceline,
        content_line=content_line,
        content_column=content_column,
        end_tag_line=content_line + content.count("\n"),
    )
