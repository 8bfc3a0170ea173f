# dumpmask/operations.py
# The three operations exposed to callers: view, mask, compare.
#
# Standard import:
#   from dumpmask.operations import view, mask, mask_stream, compare
#
# OP-01: All validation (options, input count, file names, file access, length) runs
#        before any transform or comparison work. No partial success.
# OP-02: compare() masks every input with the configured layout first, so a
#        full reference image can be compared against a partial dump.
# OP-03: When a logger is supplied, each successful operation records one
#        event; failures are recorded as ERROR events and re-raised.

from pathlib import Path
from typing import Optional, Sequence, Union

from dumpmask.compare.comparator import (
    Comparator,
    check_input_count,
    check_names,
    resolve_effective_length,
)
from dumpmask.compare.data_models.compare_spec import CompareSpec
from dumpmask.compare.data_models.dump_stream import DumpStream
from dumpmask.compare.data_models.mismatch_report import MismatchReport
from dumpmask.config import DumpMaskConfig
from dumpmask.core.exceptions import DumpMaskError
from dumpmask.core.logging_layer import (
    EVENT_COMPARE_COMPLETED,
    EVENT_ERROR,
    EVENT_MASK_APPLIED,
    EVENT_VIEW_RENDERED,
    EventLogger,
)
from dumpmask.core.masking import mask as apply_mask
from dumpmask.core.render import render
from dumpmask.storage.dump_loader import read_dump, stream_from_bytes, write_dump

PathLike = Union[str, Path]


def _log(logger: Optional[EventLogger], event_type: str, **data) -> None:
    if logger is not None:
        logger.log_event(event_type, data)


def _log_error(logger: Optional[EventLogger], operation: str, exc: DumpMaskError) -> None:
    _log(
        logger,
        EVENT_ERROR,
        operation=operation,
        error=type(exc).__name__,
        field_name=exc.field_name,
        value=exc.value,
    )


def view(
    input_path: Optional[PathLike] = None,
    stream:     Optional[bytes] = None,
    config:     Optional[DumpMaskConfig] = None,
    logger:     Optional[EventLogger] = None,
) -> str:
    """
    Render a dump for inspection.

    Exactly one of `input_path` (a file) or `stream` (bytes the caller read,
    usually standard input) must be given.

    Raises:
        ValueError if both or neither source is given.
        InputNotFound / InputNotReadable for a bad input_path.
    """
    if (input_path is None) == (stream is None):
        raise ValueError("view() takes exactly one of input_path or stream")
    config = config if config is not None else DumpMaskConfig()

    try:
        dump = read_dump(input_path) if input_path is not None else stream_from_bytes(stream)
    except DumpMaskError as exc:
        _log_error(logger, "view", exc)
        raise

    text = render(dump.data, config.pattern)
    _log(logger, EVENT_VIEW_RENDERED, input=dump.name, size=len(dump.data))
    return text


def mask_stream(
    data:   bytes,
    config: Optional[DumpMaskConfig] = None,
    logger: Optional[EventLogger] = None,
    name:   str = "<stdin>",
) -> bytes:
    """Mask in-memory bytes with the configured pattern and layout."""
    config = config if config is not None else DumpMaskConfig()
    layout = config.layout
    masked = apply_mask(data, config.pattern, layout)
    _log(
        logger,
        EVENT_MASK_APPLIED,
        input=name,
        size=len(masked),
        mcu_family=layout.family.value,
        pattern=config.pattern.hex_text,
    )
    return masked


def mask(
    input_path:  PathLike,
    output_path: Optional[PathLike] = None,
    config:      Optional[DumpMaskConfig] = None,
    logger:      Optional[EventLogger] = None,
) -> Union[bytes, Path]:
    """
    Mask the dump at `input_path`.

    Returns the masked bytes when output_path is None (for the caller to
    emit on standard output); otherwise writes them to output_path and
    returns that Path.
    """
    config = config if config is not None else DumpMaskConfig()
    try:
        dump = read_dump(input_path)
    except DumpMaskError as exc:
        _log_error(logger, "mask", exc)
        raise

    masked = mask_stream(dump.data, config, logger=logger, name=dump.name)
    if output_path is None:
        return masked
    try:
        return write_dump(output_path, masked)
    except DumpMaskError as exc:
        _log_error(logger, "mask", exc)
        raise


def compare(
    primary_path:  PathLike,
    other_paths:   Sequence[PathLike],
    config:        Optional[DumpMaskConfig] = None,
    stop_at_first: bool = False,
    logger:        Optional[EventLogger] = None,
) -> MismatchReport:
    """
    Mask and compare `primary_path` against every path in `other_paths`.

    Input count and file names are checked before any file is opened; all
    files are read before any is masked.

    Raises:
        InsufficientInputs, InvalidFilename, InputNotFound, InputNotReadable,
        InvalidLength, LengthExceedsInput.
    """
    config = config if config is not None else DumpMaskConfig()
    names = [str(primary_path)] + [str(p) for p in other_paths]

    try:
        check_input_count(len(names))
        check_names(names)
        dumps = [read_dump(name) for name in names]

        pattern = config.pattern
        layout  = config.layout
        # Masking preserves length, so the raw dumps settle it.
        resolve_effective_length(dumps, config.length_kb, layout.block_size_bytes)
        masked = tuple(
            DumpStream(name=d.name, data=apply_mask(d.data, pattern, layout))
            for d in dumps
        )
        spec = CompareSpec(
            streams=masked,
            pattern=pattern,
            length_kb=config.length_kb,
            block_size_bytes=layout.block_size_bytes,
            stop_at_first=stop_at_first,
        )
        report = Comparator().compare(spec)
    except DumpMaskError as exc:
        _log_error(logger, "compare", exc)
        raise

    _log(
        logger,
        EVENT_COMPARE_COMPLETED,
        inputs=len(names),
        effective_length=report.effective_length,
        words_compared=report.words_compared,
        wildcard_words=report.wildcard_words,
        mismatches=len(report.mismatches),
        stopped_early=report.stopped_early,
    )
    return report
