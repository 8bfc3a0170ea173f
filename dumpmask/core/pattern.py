# dumpmask/core/pattern.py
# Pattern Codec -- turns the configured sentinel hex string into the four
# bytes that appear in flash for an "unknown" word.
#
# The sentinel is written in its human-readable form (most significant byte
# first, e.g. d00dbeef). Flash words on the supported family are
# little-endian, so the default path reverses the bytes. SWAP keeps the
# written order for big-endian host/toolchain combinations.
#
# Standard import:
#   from dumpmask.core.pattern import Endianness, SentinelPattern, encode

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from dumpmask.core.exceptions import InvalidPatternFormat
from dumpmask.utils.constants import WORD_SIZE_BYTES

_HEX_PATTERN_RE = re.compile(r"(?:0[xX])?([0-9a-fA-F]{8})")


class Endianness(str, Enum):
    """
    Byte order applied when encoding the sentinel.

    NATIVE -- target order (little-endian ARM core). Default.
    SWAP   -- keep the bytes in the order they are written.
    """
    NATIVE = "native"
    SWAP   = "swap"


@dataclass(frozen=True)
class SentinelPattern:
    """
    The "unknown word" marker as it is stored in a dump.

    Fields:
      raw        -- exactly 4 bytes, in flash storage order.
      endianness -- Endianness used to produce raw.
    """
    raw:        bytes
    endianness: Endianness = Endianness.NATIVE

    def __post_init__(self) -> None:
        if not isinstance(self.raw, (bytes, bytearray)):
            raise TypeError(
                "SentinelPattern.raw must be bytes; got "
                + type(self.raw).__name__
            )
        if len(self.raw) != WORD_SIZE_BYTES:
            raise ValueError(
                "SentinelPattern.raw must be exactly "
                + str(WORD_SIZE_BYTES)
                + " bytes; got "
                + str(len(self.raw))
            )
        object.__setattr__(self, "raw", bytes(self.raw))

    @property
    def word_order(self) -> str:
        """Byte order used to turn a stored word into a number."""
        return "little" if self.endianness is Endianness.NATIVE else "big"

    @property
    def value(self) -> int:
        """Numeric value of the sentinel word."""
        return int.from_bytes(self.raw, self.word_order)

    @property
    def hex_text(self) -> str:
        """Lower-case 8 digit text of the word, as the formatter prints it."""
        return format(self.value, "08x")


def encode(hex_string: str, endianness: Endianness = Endianness.NATIVE) -> SentinelPattern:
    """
    Encode `hex_string` into a SentinelPattern.

    The string is split into four byte pairs in source order. With
    Endianness.NATIVE the resulting bytes are reversed; with
    Endianness.SWAP they are kept as written.

    Raises:
        InvalidPatternFormat if hex_string is not exactly 8 hex digits,
        optionally prefixed with 0x.
    """
    if not isinstance(hex_string, str):
        raise InvalidPatternFormat(hex_string)
    match = _HEX_PATTERN_RE.fullmatch(hex_string)
    if match is None:
        raise InvalidPatternFormat(hex_string)

    written = bytes.fromhex(match.group(1))
    endianness = Endianness(endianness)
    if endianness is Endianness.NATIVE:
        return SentinelPattern(raw=written[::-1], endianness=endianness)
    return SentinelPattern(raw=written, endianness=endianness)
