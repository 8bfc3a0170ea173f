# dumpmask/failure_handler.py
# FailureHandler -- hard failure policy for the command-line entry point.
#
# FH-01: Exit with a non-zero code on any failure. Exit codes:
#          1 -- compare found mismatches (set by the CLI, not here)
#          2 -- INPUT / OUTPUT error (missing, unreadable or unwritable file,
#               bad compare targets)
#          3 -- CONFIG error (pattern, MCU family, length)
#          4 -- internal error
# FH-02: No catch-and-continue. No retry. No fallback.
# FH-03: The failure summary goes to stderr; stdout may carry a masked dump.
# FH-04: sys.exit is the last operation.

import sys
from typing import Optional, TextIO

from dumpmask.core.exceptions import DumpMaskError

EXIT_OK:        int = 0
EXIT_MISMATCH:  int = 1
EXIT_INPUT:     int = 2
EXIT_CONFIG:    int = 3
EXIT_INTERNAL:  int = 4

_CATEGORY_EXIT_CODES = {
    "INPUT":  EXIT_INPUT,
    "OUTPUT": EXIT_INPUT,
    "CONFIG": EXIT_CONFIG,
}


def exit_code_for(exc: BaseException) -> int:
    """Map an exception to its FH-01 exit code."""
    if isinstance(exc, DumpMaskError):
        return _CATEGORY_EXIT_CODES.get(exc.category, EXIT_INTERNAL)
    return EXIT_INTERNAL


class FailureHandler:
    """
    Reports a failure on stderr and terminates the process.

    The command name is included so a failure inside a pipeline is
    attributable.
    """

    def __init__(self, command: str, stream: Optional[TextIO] = None):
        self._command = command
        self._stream  = stream

    def handle(self, exc: BaseException) -> None:
        """Execute the failure policy. This method does not return."""
        stream    = self._stream if self._stream is not None else sys.stderr
        exit_code = exit_code_for(exc)
        if isinstance(exc, DumpMaskError):
            failure_type = type(exc).__name__
            detail       = exc.message
        else:
            failure_type = "InternalError"
            detail       = type(exc).__name__ + ": " + str(exc)

        stream.write(
            "DUMPMASK RESULT: FAIL\n"
            + "Command:        " + self._command + "\n"
            + "Failure type:   " + failure_type + "\n"
            + "Exit code:      " + str(exit_code) + "\n"
            + "Detail:         " + detail + "\n"
        )
        stream.flush()

        # FH-04
        sys.exit(exit_code)
