# =============================================================================
# dumpmask -- FIRMWARE DUMP MASKING ENGINE
# File:   dumpmask/core/layout.py
# =============================================================================
#
# SCOPE
# -----
# Block Mask Table: which words inside each flash block the extraction method
# can never recover. The table is periodic (it repeats every block) and is a
# static constant per MCU family. No mutation, no I/O.
#
# INVARIANTS ENFORCED (BlockLayout.__post_init__)
# -----------------------------------------------
#   block_size_bytes is a positive multiple of the word size.
#   Every run offset is word aligned and word_count >= 1.
#   Every run lies entirely inside the block.
#   Runs are ordered by offset and do not overlap.
#
# Adding a family means adding an McuFamily member and a BLOCK_LAYOUTS entry;
# the masking transform does not change.
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Tuple, Union

from dumpmask.core.exceptions import UnsupportedMcuFamily
from dumpmask.utils.constants import WORD_SIZE_BYTES


# =============================================================================
# SECTION 1 -- ENUMERATIONS
# =============================================================================

class McuFamily(str, Enum):
    """
    Microcontroller families with a known masking geometry.

    Inherits from str so McuFamily.STM32F1 == "stm32f1".
    """
    STM32F1 = "stm32f1"


# =============================================================================
# SECTION 2 -- DATACLASSES
# =============================================================================

@dataclass(frozen=True)
class MaskRun:
    """
    A run of always-unknown words.

    offset     -- byte offset of the first word inside the block.
    word_count -- number of consecutive 4-byte words.
    """
    offset:     int
    word_count: int

    @property
    def size_bytes(self) -> int:
        return self.word_count * WORD_SIZE_BYTES

    @property
    def end(self) -> int:
        """Byte offset one past the last masked byte of the run."""
        return self.offset + self.size_bytes


@dataclass(frozen=True)
class BlockLayout:
    """
    Masking geometry of one MCU family.

    Fields:
      family           -- McuFamily this layout describes.
      block_size_bytes -- period of the layout in bytes.
      runs             -- tuple of MaskRun, ordered by offset.
    """
    family:           McuFamily
    block_size_bytes: int
    runs:             Tuple[MaskRun, ...]

    def __post_init__(self) -> None:
        if self.block_size_bytes <= 0 or self.block_size_bytes % WORD_SIZE_BYTES:
            raise ValueError(
                "BlockLayout: block_size_bytes must be a positive multiple of "
                + str(WORD_SIZE_BYTES)
                + "; got "
                + repr(self.block_size_bytes)
            )
        object.__setattr__(self, "runs", tuple(self.runs))
        previous_end = 0
        for run in self.runs:
            if run.word_count < 1:
                raise ValueError(
                    "BlockLayout: run at offset "
                    + str(run.offset)
                    + " must cover at least one word"
                )
            if run.offset < 0 or run.offset % WORD_SIZE_BYTES:
                raise ValueError(
                    "BlockLayout: run offset must be a non-negative multiple of "
                    + str(WORD_SIZE_BYTES)
                    + "; got "
                    + repr(run.offset)
                )
            if run.end > self.block_size_bytes:
                raise ValueError(
                    "BlockLayout: run at offset "
                    + str(run.offset)
                    + " ends at "
                    + str(run.end)
                    + ", past block size "
                    + str(self.block_size_bytes)
                )
            if run.offset < previous_end:
                raise ValueError(
                    "BlockLayout: run at offset "
                    + str(run.offset)
                    + " overlaps or precedes the previous run (ends at "
                    + str(previous_end)
                    + ")"
                )
            previous_end = run.end

    def word_offsets(self) -> Iterator[int]:
        """Yield the byte offset of every masked word inside one block."""
        for run in self.runs:
            for index in range(run.word_count):
                yield run.offset + index * WORD_SIZE_BYTES


# =============================================================================
# SECTION 3 -- LOOKUP TABLE
# =============================================================================

BLOCK_LAYOUTS: Dict[McuFamily, BlockLayout] = {
    McuFamily.STM32F1: BlockLayout(
        family=McuFamily.STM32F1,
        block_size_bytes=512,
        runs=(
            MaskRun(offset=0,   word_count=2),
            MaskRun(offset=28,  word_count=4),
            MaskRun(offset=52,  word_count=1),
            MaskRun(offset=308, word_count=1),
        ),
    ),
}


def _resolve_family(mcu_family: Union[McuFamily, str]) -> McuFamily:
    supported = tuple(f.value for f in BLOCK_LAYOUTS)
    if isinstance(mcu_family, McuFamily):
        family = mcu_family
    elif isinstance(mcu_family, str):
        try:
            family = McuFamily(mcu_family.lower())
        except ValueError:
            raise UnsupportedMcuFamily(mcu_family, supported) from None
    else:
        raise UnsupportedMcuFamily(mcu_family, supported)
    if family not in BLOCK_LAYOUTS:
        raise UnsupportedMcuFamily(mcu_family, supported)
    return family


def layout_for(mcu_family: Union[McuFamily, str]) -> BlockLayout:
    """
    Return the BlockLayout registered for `mcu_family`.

    Accepts an McuFamily member or its string value (case-insensitive).

    Raises:
        UnsupportedMcuFamily for any other value.
    """
    return BLOCK_LAYOUTS[_resolve_family(mcu_family)]


def runs_for(mcu_family: Union[McuFamily, str]) -> Tuple[MaskRun, ...]:
    """Return the ordered mask runs of `mcu_family`."""
    return layout_for(mcu_family).runs


def supported_families() -> Tuple[str, ...]:
    return tuple(f.value for f in BLOCK_LAYOUTS)
