# dumpmask/run_dumpmask.py
# Command-line entry point.
#
# Standard invocation:
#   python -m dumpmask.run_dumpmask view   [FILE]
#   python -m dumpmask.run_dumpmask mask   [FILE] [-o OUT]
#   python -m dumpmask.run_dumpmask compare FILE FILE [FILE ...] [--first]
#
# Common options (all commands):
#   --mcu FAMILY      block layout to apply (default stm32f1)
#   --pattern HEX     sentinel word (default d00dbeef)
#   --swap            keep sentinel bytes in written order
#   --length KB       compare only the first KB kilobytes
#   --log-events      print the operation event log to stderr
#
# view and mask read standard input when FILE is omitted; mask writes to
# standard output when -o is omitted.
#
# EXIT CODES: see dumpmask/failure_handler.py.

import argparse
import sys
from typing import List, Optional

from dumpmask import operations
from dumpmask.compare.comparator import check_input_count
from dumpmask.compare.data_models.mismatch_report import MismatchReport
from dumpmask.config import DumpMaskConfig
from dumpmask.core.layout import supported_families
from dumpmask.core.logging_layer import EventLogger
from dumpmask.failure_handler import EXIT_MISMATCH, EXIT_OK, FailureHandler
from dumpmask.storage.dump_loader import write_dump
from dumpmask.storage.report_serializer import ReportSerializer
from dumpmask.utils.constants import DEFAULT_MCU_FAMILY, DEFAULT_PATTERN_HEX
from dumpmask.version import TOOL_VERSION


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--mcu",
        default=DEFAULT_MCU_FAMILY,
        help="MCU family whose block layout is applied. Supported: "
             + ", ".join(supported_families()) + " (default: %(default)s).",
    )
    common.add_argument(
        "--pattern",
        default=DEFAULT_PATTERN_HEX,
        help="Sentinel marking unknown words, 8 hex digits (default: %(default)s).",
    )
    common.add_argument(
        "--swap",
        action="store_true",
        default=False,
        help="Swap endianness: keep the pattern bytes in the order written.",
    )
    common.add_argument(
        "--length",
        type=int,
        default=None,
        metavar="KB",
        help="Compare only the first KB kilobytes (minimum 1; "
             "default: size of the smallest file).",
    )
    common.add_argument(
        "--log-events",
        action="store_true",
        default=False,
        help="Print the operation event log to stderr.",
    )

    parser = argparse.ArgumentParser(
        description="Mask, view and compare partial firmware dumps.",
        prog="dumpmask",
    )
    parser.add_argument("--version", action="version", version="%(prog)s " + TOOL_VERSION)
    sub = parser.add_subparsers(dest="command", required=True)

    p_view = sub.add_parser(
        "view", parents=[common],
        help="Hexdump a dump with unknown words blanked.",
    )
    p_view.add_argument("file", nargs="?", default=None,
                        help="Dump to view (default: standard input).")

    p_mask = sub.add_parser(
        "mask", parents=[common],
        help="Overwrite always-unknown words with the pattern.",
    )
    p_mask.add_argument("file", nargs="?", default=None,
                        help="Dump to mask (default: standard input).")
    p_mask.add_argument("-o", "--output", default=None,
                        help="Output file (default: standard output).")

    p_cmp = sub.add_parser(
        "compare", parents=[common],
        help="Compare dumps, treating unknown words as wildcards.",
    )
    p_cmp.add_argument("files", nargs="*",
                       help="Primary dump followed by one or more dumps to compare.")
    p_cmp.add_argument("--first", action="store_true", default=False,
                       help="Stop at the first mismatch.")
    p_cmp.add_argument("--report", default=None, metavar="PATH",
                       help="Also write the mismatch report as JSON to PATH.")
    return parser


def format_report(report: MismatchReport) -> str:
    """Text summary of a MismatchReport, one line per mismatch."""
    names = report.stream_names
    lines = []
    for rec in report.mismatches:
        lines.append(
            "%08x %s=%08x %s=%08x"
            % (rec.offset, names[rec.stream_i], rec.value_i, names[rec.stream_j], rec.value_j)
        )
    if report.any_mismatch:
        verdict = "MISMATCH (%d)" % len(report.mismatches)
        if report.stopped_early:
            verdict += " [stopped at first]"
    else:
        verdict = "MATCH"
    lines.append(
        "COMPARE RESULT: %s  bytes=%d words=%d wildcards=%d"
        % (verdict, report.effective_length, report.words_compared, report.wildcard_words)
    )
    return "\n".join(lines) + "\n"


def _write_stdout_bytes(data: bytes) -> None:
    sys.stdout.flush()
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


def _run(args: argparse.Namespace, config: DumpMaskConfig, logger: EventLogger) -> int:
    if args.command == "view":
        if args.file is None:
            text = operations.view(stream=sys.stdin.buffer.read(), config=config, logger=logger)
        else:
            text = operations.view(input_path=args.file, config=config, logger=logger)
        sys.stdout.write(text)
        return EXIT_OK

    if args.command == "mask":
        if args.file is not None:
            result = operations.mask(args.file, args.output, config=config, logger=logger)
            if args.output is None:
                _write_stdout_bytes(result)
            return EXIT_OK
        masked = operations.mask_stream(sys.stdin.buffer.read(), config, logger=logger)
        if args.output is None:
            _write_stdout_bytes(masked)
        else:
            write_dump(args.output, masked)
        return EXIT_OK

    files = list(args.files)
    check_input_count(len(files))
    report = operations.compare(
        files[0],
        files[1:],
        config=config,
        stop_at_first=args.first,
        logger=logger,
    )
    if args.report is not None:
        ReportSerializer().serialize(report, args.report)
    sys.stdout.write(format_report(report))
    return EXIT_MISMATCH if report.any_mismatch else EXIT_OK


def main(argv: Optional[List[str]] = None) -> None:
    """
    Parse arguments, run one command and exit.

    All option validation happens in DumpMaskConfig before any file is
    touched. Any failure is handed to FailureHandler, which exits non-zero.
    """
    args   = _build_parser().parse_args(argv)
    fh     = FailureHandler(command=args.command)
    logger = EventLogger()

    try:
        config = DumpMaskConfig(
            mcu_family=args.mcu,
            length_kb=args.length,
            pattern_hex=args.pattern,
            endianness_swap=args.swap,
        )
        exit_code = _run(args, config, logger)
    except Exception as exc:
        if args.log_events:
            _print_events(logger)
        fh.handle(exc)

    if args.log_events:
        _print_events(logger)
    sys.exit(exit_code)


def _print_events(logger: EventLogger) -> None:
    for event in logger.get_event_stream():
        sys.stderr.write(event.format() + "\n")
    sys.stderr.flush()


if __name__ == "__main__":
    main()
