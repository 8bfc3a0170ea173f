# =============================================================================
# dumpmask -- FIRMWARE DUMP MASKING ENGINE
# File:   dumpmask/config.py
# =============================================================================
#
# SCOPE
# -----
# Frozen run configuration shared by view, mask and compare.
#
# VALIDATION
# ----------
# Fail-fast in __post_init__, in this fixed order:
#   C1  mcu_family   -- must have a registered BlockLayout.
#                       Raises UnsupportedMcuFamily.
#   C2  pattern_hex  -- exactly 8 hex digits, optional 0x prefix.
#                       Raises InvalidPatternFormat.
#   C3  length_kb    -- None, or an integer >= MIN_LENGTH_KB.
#                       Raises InvalidLength.
#
# No field is clipped, defaulted or coerced silently. Whether length_kb fits
# the actual inputs is checked by the comparator, once the inputs are known.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from dumpmask.core.exceptions import InvalidLength
from dumpmask.core.layout import BlockLayout, McuFamily, layout_for
from dumpmask.core.pattern import Endianness, SentinelPattern, encode
from dumpmask.utils.constants import (
    DEFAULT_MCU_FAMILY,
    DEFAULT_PATTERN_HEX,
    MIN_LENGTH_KB,
)


@dataclass(frozen=True)
class DumpMaskConfig:
    """
    Options recognised by every operation.

    Fields:
      mcu_family      -- MCU family whose block layout is applied.
      length_kb       -- Comparison length in KiB; None means the shortest
                         compared file (floored to whole blocks).
      pattern_hex     -- Sentinel in human-readable hex (e.g. "d00dbeef").
      endianness_swap -- Keep the sentinel bytes in written order instead of
                         reversing them for little-endian flash.
    """
    mcu_family:      Union[McuFamily, str] = DEFAULT_MCU_FAMILY
    length_kb:       Optional[int] = None
    pattern_hex:     str = DEFAULT_PATTERN_HEX
    endianness_swap: bool = False

    def __post_init__(self) -> None:
        # C1 / C2: both lookups raise on invalid input.
        layout_for(self.mcu_family)
        encode(self.pattern_hex, self.endianness)

        # C3
        if self.length_kb is not None:
            if isinstance(self.length_kb, bool) or not isinstance(self.length_kb, int):
                raise InvalidLength(self.length_kb, "must be an integer number of KiB")
            if self.length_kb < MIN_LENGTH_KB:
                raise InvalidLength(self.length_kb, "must be >= " + str(MIN_LENGTH_KB) + " KiB")

    @property
    def endianness(self) -> Endianness:
        return Endianness.SWAP if self.endianness_swap else Endianness.NATIVE

    @property
    def pattern(self) -> SentinelPattern:
        return encode(self.pattern_hex, self.endianness)

    @property
    def layout(self) -> BlockLayout:
        return layout_for(self.mcu_family)
