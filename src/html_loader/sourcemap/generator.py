# src/html_loader/sourcemap/generator.py
import logging
from typing import Dict, List, Optional

from html_loader.model import Mapping, SourceMap
from html_loader.sourcemap import vlq

logger = logging.getLogger(__name__)


class _IndexedSet:
    """Insertion-ordered set handing out stable indexes (sources, names)."""

    def __init__(self):
        self._items: List[str] = []
        self._index: Dict[str, int] = {}

    def add(self, item: str) -> int:
        if item not in self._index:
            self._index[item] = len(self._items)
            self._items.append(item)
        return self._index[item]

    def index_of(self, item: str) -> int:
        return self._index[item]

    def to_list(self) -> List[str]:
        return list(self._items)


class SourceMapGenerator:
    """
    Accumulates mappings incrementally and serializes them as a Source Map v3.

    Generated and original lines are 1-based, columns 0-based, as they are
    handed over by the tokenizer.
    """

    def __init__(self, file: Optional[str] = None):
        self.file = file
        self._mappings: List[Mapping] = []
        self._sources = _IndexedSet()
        self._names = _IndexedSet()
        self._sources_content: Dict[str, str] = {}

    def add_mapping(self, mapping: Mapping) -> None:
        if mapping.generated_line < 1 or mapping.original_line < 1:
            raise ValueError(f"Invalid mapping, lines are 1-based: {mapping}")
        if mapping.generated_column < 0 or mapping.original_column < 0:
            raise ValueError(f"Invalid mapping, columns must not be negative: {mapping}")

        self._sources.add(mapping.source)
        if mapping.name is not None:
            self._names.add(mapping.name)
        self._mappings.append(mapping)

    def set_source_content(self, source: str, content: Optional[str]) -> None:
        self._sources.add(source)
        if content is None:
            self._sources_content.pop(source, None)
        else:
            self._sources_content[source] = content

    @property
    def mapping_count(self) -> int:
        return len(self._mappings)

    def _serialize_mappings(self) -> str:
        # Stable sort keeps insertion order for mappings on the same generated position
        ordered = sorted(self._mappings, key=lambda m: (m.generated_line, m.generated_column))

        prev_generated_line = 1
        prev_generated_column = 0
        prev_source = 0
        prev_original_line = 0
        prev_original_column = 0
        prev_name = 0
        previous: Optional[Mapping] = None
        out: List[str] = []

        for mapping in ordered:
            if mapping.generated_line != prev_generated_line:
                prev_generated_column = 0
                out.append(";" * (mapping.generated_line - prev_generated_line))
                prev_generated_line = mapping.generated_line
            elif previous is not None:
                if mapping == previous:
                    continue
                out.append(",")

            segment = [vlq.encode(mapping.generated_column - prev_generated_column)]
            prev_generated_column = mapping.generated_column

            source_idx = self._sources.index_of(mapping.source)
            segment.append(vlq.encode(source_idx - prev_source))
            prev_source = source_idx

            # Original lines are stored 0-based in the encoded form
            segment.append(vlq.encode(mapping.original_line - 1 - prev_original_line))
            prev_original_line = mapping.original_line - 1

            segment.append(vlq.encode(mapping.original_column - prev_original_column))
            prev_original_column = mapping.original_column

            if mapping.name is not None:
                name_idx = self._names.index_of(mapping.name)
                segment.append(vlq.encode(name_idx - prev_name))
                prev_name = name_idx

            out.append("".join(segment))
            previous = mapping

        return "".join(out)

    def to_source_map(self) -> SourceMap:
        sources = self._sources.to_list()
        sources_content: List[Optional[str]] = []
        if self._sources_content:
            sources_content = [self._sources_content.get(src) for src in sources]

        return SourceMap(
            file=self.file,
            sources=sources,
            names=self._names.to_list(),
            mappings=self._serialize_mappings(),
            sources_content=sources_content,
        )


def decode_mappings(source_map: SourceMap) -> List[Mapping]:
    """Expands the 'mappings' string of a source map back into Mapping records."""
    result: List[Mapping] = []
    source = 0
    original_line = 0
    original_column = 0
    name = 0

    for line_no, line in enumerate(source_map.mappings.split(";"), start=1):
        generated_column = 0
        for segment in line.split(","):
            if not segment:
                continue
            values = vlq.decode_segment(segment)
            generated_column += values[0]
            if len(values) < 4:
                # Segment without an original position
                continue
            source += values[1]
            original_line += values[2]
            original_column += values[3]
            symbol = None
            if len(values) >= 5:
                name += values[4]
                symbol = source_map.names[name]

            result.append(Mapping(
                generated_line=line_no,
                generated_column=generated_column,
                original_line=original_line + 1,
                original_column=original_column,
                source=source_map.sources[source],
                name=symbol,
            ))
    return result
