"""
Error handling for densekit.

Every error raised by the library derives from :class:`DenseKitError` and
carries a numeric code from the table below. Each concrete error also derives
the closest builtin exception, so ``except ValueError`` keeps working for
callers that do not know about densekit.
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# Error Codes
# =============================================================================

DK_OK = 0

# Construction errors (10-19)
DK_ERROR_CONSTRUCTION = 10
DK_ERROR_INCOMPLETE_SHAPE = 11
DK_ERROR_UNSUPPORTED_INPUT = 12

# Shape errors (20-29)
DK_ERROR_SHAPE_MISMATCH = 20

# Type errors (30-39)
DK_ERROR_UNKNOWN_ELEMENT_KIND = 30
DK_ERROR_DOMAIN_MISMATCH = 31

# State errors (40-49)
DK_ERROR_UNINITIALIZED = 40


_ERROR_MESSAGES = {
    DK_OK: "Success",
    DK_ERROR_CONSTRUCTION: "Cannot construct matrix",
    DK_ERROR_INCOMPLETE_SHAPE: "Incomplete shape",
    DK_ERROR_UNSUPPORTED_INPUT: "No construction mode matches the input",
    DK_ERROR_SHAPE_MISMATCH: "Shape mismatch",
    DK_ERROR_UNKNOWN_ELEMENT_KIND: "Unknown element kind",
    DK_ERROR_DOMAIN_MISMATCH: "Arithmetic domain mismatch",
    DK_ERROR_UNINITIALIZED: "Not initialized",
}


# =============================================================================
# Exception Classes
# =============================================================================

class DenseKitError(Exception):
    """
    Base exception for all densekit errors.

    Attributes:
        code: Numeric error code (``DK_ERROR_*``)
        message: Human-readable description including the offending values
    """

    default_code = DK_ERROR_CONSTRUCTION

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        if code is None:
            code = self.default_code
        self.code = code
        if message is None:
            message = _ERROR_MESSAGES.get(code, f"Unknown error (code={code})")
        self.message = message
        super().__init__(message)

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "DenseKitError":
        """Create exception from error code with optional context."""
        base_msg = _ERROR_MESSAGES.get(code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        return cls(msg, code)


class ConstructionError(DenseKitError, ValueError):
    """A matrix could not be built from the supplied arguments."""

    default_code = DK_ERROR_CONSTRUCTION


class IncompleteShapeError(ConstructionError):
    """A construction mode needs a row or column count that was not given."""

    default_code = DK_ERROR_INCOMPLETE_SHAPE


class UnsupportedConstructorInputError(ConstructionError, TypeError):
    """The first construction argument matches no construction mode."""

    default_code = DK_ERROR_UNSUPPORTED_INPUT


class ShapeMismatchError(DenseKitError, ValueError):
    """Two operands that must have compatible extents do not."""

    default_code = DK_ERROR_SHAPE_MISMATCH


class UnknownElementKindError(DenseKitError, ValueError):
    """An element-kind tag outside the supported set was supplied."""

    default_code = DK_ERROR_UNKNOWN_ELEMENT_KIND


class DomainMismatchError(DenseKitError, TypeError):
    """A value from one arithmetic domain was used where the other is required."""

    default_code = DK_ERROR_DOMAIN_MISMATCH


class UninitializedError(DenseKitError, RuntimeError):
    """An object was used before the step that initializes it."""

    default_code = DK_ERROR_UNINITIALIZED


__all__ = [
    "DK_OK",
    "DK_ERROR_CONSTRUCTION",
    "DK_ERROR_INCOMPLETE_SHAPE",
    "DK_ERROR_UNSUPPORTED_INPUT",
    "DK_ERROR_SHAPE_MISMATCH",
    "DK_ERROR_UNKNOWN_ELEMENT_KIND",
    "DK_ERROR_DOMAIN_MISMATCH",
    "DK_ERROR_UNINITIALIZED",
    "DenseKitError",
    "ConstructionError",
    "IncompleteShapeError",
    "UnsupportedConstructorInputError",
    "ShapeMismatchError",
    "UnknownElementKindError",
    "DomainMismatchError",
    "UninitializedError",
]
