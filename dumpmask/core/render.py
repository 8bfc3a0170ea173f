# dumpmask/core/render.py
# Render/View Formatter -- hexdump-like view of a dump with sentinel words
# replaced by a placeholder.
#
# Row format (one line per 16 bytes):
#   "%08x" offset, then up to four words as "%08x", single-space separated.
# Words are decoded in the pattern's word order, so a stored sentinel prints
# exactly as the configured hex string.
#
# Blanking is text based: any word whose text equals pattern.hex_text is
# replaced, whether or not it sits in a masked run. The block layout is not
# consulted here.

from typing import List

from dumpmask.core.pattern import SentinelPattern
from dumpmask.utils.constants import PLACEHOLDER, ROW_SIZE_BYTES, WORD_SIZE_BYTES


def _render_word(word: bytes, pattern: SentinelPattern) -> str:
    if len(word) < WORD_SIZE_BYTES:
        # Trailing fragment: bytes in storage order, never blanked.
        return word.hex()
    text = format(int.from_bytes(word, pattern.word_order), "08x")
    if text == pattern.hex_text:
        return PLACEHOLDER
    return text


def render_row(offset: int, row: bytes, pattern: SentinelPattern) -> str:
    """Render one row of at most ROW_SIZE_BYTES bytes starting at `offset`."""
    parts = ["%08x" % offset]
    for i in range(0, len(row), WORD_SIZE_BYTES):
        parts.append(_render_word(row[i:i + WORD_SIZE_BYTES], pattern))
    return " ".join(parts)


def render(data: bytes, pattern: SentinelPattern) -> str:
    """
    Render `data` as text, one line per 16-byte row.

    Returns the empty string for empty input; otherwise every line,
    including the last, ends with a newline.
    """
    lines: List[str] = []
    for offset in range(0, len(data), ROW_SIZE_BYTES):
        lines.append(render_row(offset, data[offset:offset + ROW_SIZE_BYTES], pattern))
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
