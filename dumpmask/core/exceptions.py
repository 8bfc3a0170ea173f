# =============================================================================
# dumpmask -- FIRMWARE DUMP MASKING ENGINE
# File:   dumpmask/core/exceptions.py
# =============================================================================
#
# SCOPE
# -----
# Exception hierarchy for the masking / comparison engine.
# All exceptions are pure value objects: no side effects, no logging,
# no I/O of any kind.
#
# EXCEPTION HIERARCHY
# -------------------
#   DumpMaskError(Exception)                 -- base; never raised directly
#     InvalidPatternFormat(DumpMaskError)    -- sentinel hex string malformed
#     UnsupportedMcuFamily(DumpMaskError)    -- no block layout for family
#     InvalidLength(DumpMaskError)           -- length_kb / effective length
#     InputNotFound(DumpMaskError)           -- named dump does not exist
#     InputNotReadable(DumpMaskError)        -- named dump cannot be read
#     InsufficientInputs(DumpMaskError)      -- fewer than two dumps to compare
#     InvalidFilename(DumpMaskError)         -- whitespace in a compare target
#     LengthExceedsInput(DumpMaskError)      -- explicit length > dump size
#     OutputNotWritable(DumpMaskError)       -- masked output cannot be written
#
# CATEGORIES
# ----------
# Every concrete class carries a `category` used by the CLI failure handler:
#   CONFIG  -- the requested options are invalid.
#   INPUT   -- an input dump is missing, unreadable or unsuitable.
#   OUTPUT  -- a result could not be written.
#
# MESSAGE CONTRACT
# ----------------
# Every message is deterministic, ASCII-safe, and names the offending value
# (and the file, where one is involved).
# =============================================================================

from __future__ import annotations

from typing import Any


# =============================================================================
# BASE EXCEPTION
# =============================================================================

class DumpMaskError(Exception):
    """
    Base class for all dumpmask exceptions.

    Never raised directly. Use a concrete subclass.

    Attributes:
        field_name:  Name of the offending option or input, or empty string
                     if not applicable.
        value:       The offending value, or None if the violation is not
                     tied to a single value.
        message:     Human-readable description. Always non-empty.
    """

    category: str = "INTERNAL"

    def __init__(
        self,
        message:    str,
        field_name: str = "",
        value:      Any = None,
    ) -> None:
        if not isinstance(message, str) or not message:
            raise ValueError(
                "DumpMaskError: message must be a non-empty string"
            )
        if not isinstance(field_name, str):
            raise ValueError(
                "DumpMaskError: field_name must be a string"
            )
        super().__init__(message)
        self.field_name: str = field_name
        self.value:      Any = value
        self.message:    str = message

    def __repr__(self) -> str:
        return (
            self.__class__.__name__
            + "(field_name=" + repr(self.field_name)
            + ", value=" + repr(self.value)
            + ", message=" + repr(self.message)
            + ")"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DumpMaskError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.field_name == other.field_name
            and self.value == other.value
            and self.message == other.message
        )

    __hash__ = Exception.__hash__


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class InvalidPatternFormat(DumpMaskError):
    """
    Raised when the sentinel pattern is not exactly 8 hex digits
    (optionally prefixed with 0x).
    """

    category = "CONFIG"

    def __init__(self, value: Any) -> None:
        message = (
            "InvalidPatternFormat: pattern "
            + repr(value)
            + " must be exactly 8 hex digits, optionally prefixed with '0x'."
        )
        super().__init__(message=message, field_name="pattern_hex", value=value)


class UnsupportedMcuFamily(DumpMaskError):
    """Raised when no block layout is registered for the requested family."""

    category = "CONFIG"

    def __init__(self, value: Any, supported: tuple = ()) -> None:
        message = (
            "UnsupportedMcuFamily: no block layout for MCU family "
            + repr(value)
            + ". Supported: "
            + (", ".join(supported) if supported else "(none)")
            + "."
        )
        super().__init__(message=message, field_name="mcu_family", value=value)
        self.supported: tuple = tuple(supported)


class InvalidLength(DumpMaskError):
    """
    Raised when a comparison length is unusable.

    Covers an explicit length_kb below 1 and an implicit effective length
    of zero (some dump is shorter than one block).
    """

    category = "CONFIG"

    def __init__(self, value: Any, constraint: str) -> None:
        if not isinstance(constraint, str) or not constraint:
            raise ValueError(
                "InvalidLength: constraint must be a non-empty string"
            )
        message = (
            "InvalidLength: length violates constraint '"
            + constraint
            + "': got "
            + repr(value)
            + "."
        )
        super().__init__(message=message, field_name="length_kb", value=value)
        self.constraint: str = constraint


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputNotFound(DumpMaskError):
    """Raised when a named input dump does not exist."""

    category = "INPUT"

    def __init__(self, path: Any) -> None:
        message = "InputNotFound: input file not found: " + str(path)
        super().__init__(message=message, field_name="input_path", value=str(path))


class InputNotReadable(DumpMaskError):
    """Raised when a named input dump exists but cannot be read."""

    category = "INPUT"

    def __init__(self, path: Any, reason: str = "") -> None:
        message = "InputNotReadable: cannot read input file: " + str(path)
        if reason:
            message += " (" + reason + ")"
        super().__init__(message=message, field_name="input_path", value=str(path))
        self.reason: str = reason


class InsufficientInputs(DumpMaskError):
    """Raised when fewer than two dumps are supplied for comparison."""

    category = "INPUT"

    def __init__(self, count: int) -> None:
        message = (
            "InsufficientInputs: compare needs at least 2 inputs; got "
            + str(count)
            + "."
        )
        super().__init__(message=message, field_name="inputs", value=count)


class InvalidFilename(DumpMaskError):
    """
    Raised when a comparison target's name contains whitespace.

    Comparison targets are handed to the masking step by name, where a
    blank inside a name splits it into two arguments.
    """

    category = "INPUT"

    def __init__(self, name: str) -> None:
        message = (
            "InvalidFilename: comparison target name must not contain "
            "whitespace: "
            + repr(name)
        )
        super().__init__(message=message, field_name="inputs", value=name)


class LengthExceedsInput(DumpMaskError):
    """
    Raised when an explicit comparison length is larger than an input.

    The input is never silently truncated to fit.
    """

    category = "INPUT"

    def __init__(self, name: str, requested: int, actual: int) -> None:
        message = (
            "LengthExceedsInput: requested length "
            + str(requested)
            + " bytes exceeds size of "
            + str(name)
            + " ("
            + str(actual)
            + " bytes)."
        )
        super().__init__(message=message, field_name="length_kb", value=requested)
        self.name:      str = name
        self.requested: int = requested
        self.actual:    int = actual


# =============================================================================
# OUTPUT ERRORS
# =============================================================================

class OutputNotWritable(DumpMaskError):
    """Raised when a masked dump or a report cannot be written."""

    category = "OUTPUT"

    def __init__(self, path: Any, reason: str = "") -> None:
        message = "OutputNotWritable: cannot write output file: " + str(path)
        if reason:
            message += " (" + reason + ")"
        super().__init__(message=message, field_name="output_path", value=str(path))
        self.reason: str = reason


# =============================================================================
# MODULE __all__
# =============================================================================

__all__ = [
    "DumpMaskError",
    "InvalidPatternFormat",
    "UnsupportedMcuFamily",
    "InvalidLength",
    "InputNotFound",
    "InputNotReadable",
    "InsufficientInputs",
    "InvalidFilename",
    "LengthExceedsInput",
    "OutputNotWritable",
]
