# dumpmask/core/__init__.py
# Engine building blocks: pattern codec, block mask table, masking transform,
# view formatter, event log and the exception hierarchy.

from dumpmask.core.exceptions import (
    DumpMaskError,
    InvalidPatternFormat,
    UnsupportedMcuFamily,
    InvalidLength,
    InputNotFound,
    InputNotReadable,
    InsufficientInputs,
    InvalidFilename,
    LengthExceedsInput,
    OutputNotWritable,
)
from dumpmask.core.pattern import Endianness, SentinelPattern, encode
from dumpmask.core.layout import (
    BLOCK_LAYOUTS,
    BlockLayout,
    MaskRun,
    McuFamily,
    layout_for,
    runs_for,
)
from dumpmask.core.masking import mask, masked_spans
from dumpmask.core.render import render
from dumpmask.core.logging_layer import EventLogger, Event, EventFilter, LoggingError
