# dumpmask/utils/constants.py
# Fixed values shared by the codec, the formatter, the comparator and the CLI.
# Block geometry is NOT defined here; it lives in dumpmask/core/layout.py,
# keyed by MCU family.
#
# Standard import pattern:
#   from dumpmask.utils.constants import (
#       DEFAULT_PATTERN_HEX,
#       DEFAULT_MCU_FAMILY,
#       WORD_SIZE_BYTES,
#       KILOBYTE,
#   )


# ---------------------------------------------------------------------------
# DEFAULT OPTIONS
# ---------------------------------------------------------------------------

DEFAULT_PATTERN_HEX: str = "d00dbeef"   # "unknown word" marker of the dumper
DEFAULT_MCU_FAMILY:  str = "stm32f1"
MIN_LENGTH_KB:       int = 1


# ---------------------------------------------------------------------------
# GEOMETRY
# ---------------------------------------------------------------------------

WORD_SIZE_BYTES: int = 4
KILOBYTE:        int = 1024


# ---------------------------------------------------------------------------
# RENDERING
# ---------------------------------------------------------------------------

ROW_SIZE_BYTES: int = 16
PLACEHOLDER:    str = "_" * (2 * WORD_SIZE_BYTES)
