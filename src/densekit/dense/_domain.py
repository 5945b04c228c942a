"""
Arithmetic Domains

Every element kind computes in one of two domains:

- BOUNDED: 8/16/32-bit integers and both float kinds. Values are handled as
  Python ``float`` (IEEE double), so results of integer kinds are exact and
  float32 results are rounded when stored back.
- WIDE: 64-bit integers. Values are handled as exact Python ``int`` and never
  pass through a float, so nothing above 2**53 is lost.

Values from the two domains are never combined implicitly: ``check`` rejects a
float offered to the wide domain, and callers convert explicitly with
``to_native`` when they cross over.
"""

from __future__ import annotations

import math
import numbers
from enum import Enum
from typing import Any, Union

from .._errors import DomainMismatchError

__all__ = [
    'Domain',
    'Arithmetic',
    'BoundedArithmetic',
    'WideArithmetic',
    'BOUNDED',
    'WIDE',
]

Native = Union[float, int]


class Domain(Enum):
    """Arithmetic value domain of an element kind."""

    BOUNDED = 'bounded'
    WIDE = 'wide'

    def __str__(self) -> str:
        return self.value

    @property
    def arithmetic(self) -> "Arithmetic":
        return _ARITHMETIC[self]


class Arithmetic:
    """Operations of one arithmetic domain."""

    domain: Domain

    def zero(self) -> Native:
        raise NotImplementedError

    def count(self, n: int) -> Native:
        """Build a divisor for ``n`` elements in this domain."""
        raise NotImplementedError

    def accepts(self, value: Any) -> bool:
        raise NotImplementedError

    def check(self, value: Any) -> Any:
        """Return ``value`` unchanged, or raise if it belongs to the other domain."""
        if not self.accepts(value):
            raise DomainMismatchError(
                f"{type(value).__name__} value {value!r} cannot be used in the "
                f"{self.domain} domain without explicit conversion"
            )
        return value

    def to_native(self, value: Any) -> Native:
        raise NotImplementedError

    def add(self, a: Native, b: Native) -> Native:
        return a + b

    def mul(self, a: Native, b: Native) -> Native:
        return a * b

    def divide(self, value: Native, divisor: Native) -> Native:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class BoundedArithmetic(Arithmetic):
    """IEEE double arithmetic shared by the bounded kinds."""

    domain = Domain.BOUNDED

    def zero(self) -> float:
        return 0.0

    def count(self, n: int) -> float:
        return float(n)

    def accepts(self, value: Any) -> bool:
        return isinstance(value, numbers.Real)

    def to_native(self, value: Any) -> float:
        return float(value)

    def divide(self, value: float, divisor: float) -> float:
        if divisor == 0:
            # IEEE semantics: 0/0 is nan, x/0 is a signed infinity
            if value == 0 or math.isnan(value):
                return math.nan
            return math.copysign(math.inf, value) * math.copysign(1.0, divisor)
        return value / divisor


class WideArithmetic(Arithmetic):
    """Exact integer arithmetic for the 64-bit kinds."""

    domain = Domain.WIDE

    def zero(self) -> int:
        return 0

    def count(self, n: int) -> int:
        return int(n)

    def accepts(self, value: Any) -> bool:
        return isinstance(value, numbers.Integral)

    def to_native(self, value: Any) -> int:
        if isinstance(value, numbers.Integral):
            return int(value)
        if isinstance(value, float) and value.is_integer():
            return int(value)
        raise DomainMismatchError(
            f"{value!r} has no exact integer value in the wide domain"
        )

    def divide(self, value: int, divisor: int) -> int:
        if divisor == 0:
            raise ZeroDivisionError("integer division by zero in the wide domain")
        # Truncate toward zero; floor division alone rounds negatives down
        quotient = abs(value) // abs(divisor)
        if (value < 0) != (divisor < 0):
            return -quotient
        return quotient


BOUNDED = BoundedArithmetic()
WIDE = WideArithmetic()

_ARITHMETIC = {
    Domain.BOUNDED: BOUNDED,
    Domain.WIDE: WIDE,
}
