# src/html_loader/sourcemap/vlq.py
"""
Base64 VLQ coding used by the 'mappings' field of a Source Map v3.

Each value is written as groups of 5 bits, least significant first; bit 6 of a
digit flags a continuation and the lowest bit of the first group holds the sign.
"""
from typing import List

BASE64_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
_BASE64_VALUES = {ch: i for i, ch in enumerate(BASE64_CHARS)}

VLQ_BASE_SHIFT = 5
VLQ_BASE = 1 << VLQ_BASE_SHIFT
VLQ_BASE_MASK = VLQ_BASE - 1
VLQ_CONTINUATION_BIT = VLQ_BASE


def encode(value: int) -> str:
    """Encodes one signed integer."""
    vlq = ((-value) << 1) + 1 if value < 0 else value << 1
    out = []
    while True:
        digit = vlq & VLQ_BASE_MASK
        vlq >>= VLQ_BASE_SHIFT
        if vlq > 0:
            digit |= VLQ_CONTINUATION_BIT
        out.append(BASE64_CHARS[digit])
        if vlq <= 0:
            break
    return "".join(out)


def decode_segment(segment: str) -> List[int]:
    """Decodes every value of one mappings segment (e.g. 'AAAA' -> [0, 0, 0, 0])."""
    values: List[int] = []
    shift = 0
    vlq = 0
    for ch in segment:
        try:
            digit = _BASE64_VALUES[ch]
        except KeyError:
            raise ValueError(f"Invalid base64 VLQ character: {ch!r}") from None

        vlq += (digit & VLQ_BASE_MASK) << shift
        if digit & VLQ_CONTINUATION_BIT:
            shift += VLQ_BASE_SHIFT
            continue

        values.append(-(vlq >> 1) if vlq & 1 else vlq >> 1)
        vlq = 0
        shift = 0

    if shift:
        raise ValueError(f"Truncated base64 VLQ segment: {segment!r}")
    return values
