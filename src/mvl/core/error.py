"""
Error handling for MVL.

Every fault raised by the view algebra and the sparse builder carries a
numeric code so callers can branch on the failure class without string
matching. The concrete exception classes also derive from the matching
builtin (ValueError, IndexError, RuntimeError) so plain ``except`` clauses
keep working.
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# Error Codes
# =============================================================================

# Success
MVL_OK = 0

# General errors (1-9)
MVL_ERROR_UNKNOWN = 1
MVL_ERROR_INTERNAL = 2

# Argument errors (10-19)
MVL_ERROR_INVALID_ARGUMENT = 10
MVL_ERROR_DIMENSION_MISMATCH = 11
MVL_ERROR_INDEX_OUT_OF_BOUNDS = 14

# Type errors (20-29)
MVL_ERROR_TYPE_ERROR = 20

# State errors (60-69)
MVL_ERROR_INVALID_STATE = 60


# Error code to message mapping
_ERROR_MESSAGES = {
    MVL_OK: "Success",
    MVL_ERROR_UNKNOWN: "Unknown error",
    MVL_ERROR_INTERNAL: "Internal error",
    MVL_ERROR_INVALID_ARGUMENT: "Invalid argument",
    MVL_ERROR_DIMENSION_MISMATCH: "Dimension mismatch",
    MVL_ERROR_INDEX_OUT_OF_BOUNDS: "Index out of bounds",
    MVL_ERROR_TYPE_ERROR: "Type error",
    MVL_ERROR_INVALID_STATE: "Invalid state",
}


# =============================================================================
# Exception Classes
# =============================================================================

class MVLError(Exception):
    """
    Base exception for all MVL errors.

    Attributes:
        code: One of the ``MVL_ERROR_*`` codes
        message: Human readable description
    """

    OK = MVL_OK
    ERROR_UNKNOWN = MVL_ERROR_UNKNOWN
    ERROR_INTERNAL = MVL_ERROR_INTERNAL
    ERROR_INVALID_ARGUMENT = MVL_ERROR_INVALID_ARGUMENT
    ERROR_DIMENSION_MISMATCH = MVL_ERROR_DIMENSION_MISMATCH
    ERROR_INDEX_OUT_OF_BOUNDS = MVL_ERROR_INDEX_OUT_OF_BOUNDS
    ERROR_TYPE_ERROR = MVL_ERROR_TYPE_ERROR
    ERROR_INVALID_STATE = MVL_ERROR_INVALID_STATE

    default_code = MVL_ERROR_UNKNOWN

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        """
        Create MVL exception.

        Args:
            message: Optional detailed message (derived from code if not provided)
            code: Error code (class default if not provided)
        """
        if code is None:
            code = self.default_code
        self.code = code
        if message is None:
            message = _ERROR_MESSAGES.get(code, f"Unknown error (code={code})")
        self.message = message
        super().__init__(f"MVL Error {code}: {message}")

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "MVLError":
        """Create the matching exception subclass from an error code."""
        base_msg = _ERROR_MESSAGES.get(code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        exc_type = _CODE_TO_CLASS.get(code, cls)
        return exc_type(msg, code)


class InvalidArgumentError(MVLError, ValueError):
    """Inconsistent construction arguments (negative extent, repetitions < 1, ...)."""

    default_code = MVL_ERROR_INVALID_ARGUMENT


class DimensionMismatchError(MVLError, ValueError):
    """Operand shapes do not line up."""

    default_code = MVL_ERROR_DIMENSION_MISMATCH


class IndexOutOfBoundsError(MVLError, IndexError):
    """Coordinate outside the logical extent (only raised in debug mode)."""

    default_code = MVL_ERROR_INDEX_OUT_OF_BOUNDS


class BuilderStateError(MVLError, RuntimeError):
    """A sparse builder was used after it was sealed by ``build()``."""

    default_code = MVL_ERROR_INVALID_STATE


_CODE_TO_CLASS = {
    MVL_ERROR_INVALID_ARGUMENT: InvalidArgumentError,
    MVL_ERROR_DIMENSION_MISMATCH: DimensionMismatchError,
    MVL_ERROR_INDEX_OUT_OF_BOUNDS: IndexOutOfBoundsError,
    MVL_ERROR_INVALID_STATE: BuilderStateError,
}


# =============================================================================
# Checking Helpers
# =============================================================================

def check_coordinates(rows: int, cols: int, row: int, col: int) -> None:
    """Raise IndexOutOfBoundsError if (row, col) is outside [0, rows) x [0, cols)."""
    if not (0 <= row < rows and 0 <= col < cols):
        raise IndexOutOfBoundsError(
            f"({row}, {col}) outside extent ({rows}, {cols})"
        )
