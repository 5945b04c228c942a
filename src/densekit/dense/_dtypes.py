"""
densekit DTypes - Element-Kind Registry

Maps each of the ten supported element kinds to its ctypes storage type, its
arithmetic domain and a zero-filled allocator, and infers the kind of an
existing buffer.
"""

from __future__ import annotations

import ctypes
import math
import numbers
from ctypes import (
    c_double, c_float,
    c_int8, c_int16, c_int32, c_int64,
    c_uint8, c_uint16, c_uint32, c_uint64,
)
from enum import Enum
from typing import Any, Dict, Tuple, Type, Union

from .._errors import (
    DomainMismatchError,
    UnknownElementKindError,
    UnsupportedConstructorInputError,
)
from ._domain import Arithmetic, Domain

__all__ = [
    'DType',
    'uint8', 'uint16', 'uint32', 'uint64',
    'int8', 'int16', 'int32', 'int64',
    'float32', 'float64',
    'validate_dtype',
    'infer_dtype',
    'is_float_dtype',
    'is_int_dtype',
    'dtype_itemsize',
]


# =============================================================================
# Data Type Enumeration
# =============================================================================

class DType(Enum):
    """
    Supported element kinds.

    Example:
        >>> from densekit.dense import DType, Matrix
        >>> mat = Matrix.zeros(DType.float64, (2, 2))
        >>>
        >>> # Tags and numpy-style names are accepted wherever a dtype is
        >>> mat = Matrix.zeros('f64', (2, 2))
        >>> mat = Matrix.zeros('float64', (2, 2))
    """

    uint8 = 'u8'
    uint16 = 'u16'
    uint32 = 'u32'
    uint64 = 'u64'
    int8 = 'i8'
    int16 = 'i16'
    int32 = 'i32'
    int64 = 'i64'
    float32 = 'f32'
    float64 = 'f64'

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"DType.{self._name_}"

    @property
    def tag(self) -> str:
        """Short tag ('u8', 'f64', ...)."""
        return self.value

    @property
    def ctype(self) -> Type:
        """ctypes scalar type used for storage."""
        return _DTYPE_INFO[self][0]

    @property
    def itemsize(self) -> int:
        """Size in bytes of one element."""
        return ctypes.sizeof(self.ctype)

    @property
    def bits(self) -> int:
        return self.itemsize * 8

    @property
    def is_float(self) -> bool:
        return _DTYPE_INFO[self][1] == 'f'

    @property
    def is_signed(self) -> bool:
        return _DTYPE_INFO[self][1] in ('i', 'f')

    @property
    def domain(self) -> Domain:
        """BOUNDED for <=32-bit integers and floats, WIDE for 64-bit integers."""
        if not self.is_float and self.bits == 64:
            return Domain.WIDE
        return Domain.BOUNDED

    @property
    def arithmetic(self) -> Arithmetic:
        return self.domain.arithmetic

    def allocate(self, size: int) -> ctypes.Array:
        """Allocate a zero-filled ctypes buffer of ``size`` elements."""
        if size < 0:
            raise ValueError(f"Buffer size must be non-negative, got {size}")
        return (self.ctype * size)()

    def coerce(self, value: Any) -> Union[int, float]:
        """
        Convert ``value`` to what a slot of this kind stores.

        Integer kinds truncate toward zero and wrap two's-complement at the
        storage width; non-finite values become 0. Float kinds convert with
        ``float()`` and the store itself rounds float32. The wide kinds only
        take integers.
        """
        if self.is_float:
            if not isinstance(value, numbers.Real):
                raise DomainMismatchError(f"Cannot store {value!r} in {self}")
            try:
                return float(value)
            except OverflowError:
                # integers beyond the double range round to infinity
                return math.inf if value > 0 else -math.inf

        if isinstance(value, numbers.Integral):
            v = int(value)
        elif isinstance(value, numbers.Real):
            if self.domain is Domain.WIDE:
                raise DomainMismatchError(
                    f"Cannot store {type(value).__name__} {value!r} in {self}; "
                    f"convert to int first"
                )
            f = float(value)
            v = int(f) if math.isfinite(f) else 0
        else:
            raise DomainMismatchError(f"Cannot store {value!r} in {self}")

        bits = self.bits
        v &= (1 << bits) - 1
        if self.is_signed and v >> (bits - 1):
            v -= 1 << bits
        return v

    @classmethod
    def from_name(cls, name: str) -> "DType":
        """Get DType from a tag, member name or alias."""
        name_lower = name.lower()
        for dtype in cls:
            if name_lower in (dtype.value, dtype._name_):
                return dtype
        if name_lower in _ALIASES:
            return _ALIASES[name_lower]
        raise UnknownElementKindError(
            f"Unknown element kind: {name!r}. "
            f"Valid: {[d.value for d in cls]}"
        )

    @classmethod
    def from_ctype(cls, ctype: Type) -> "DType":
        """Get DType from a ctypes scalar type."""
        code = getattr(ctype, '_type_', None)
        if not isinstance(code, str):
            raise UnknownElementKindError(f"Unknown ctype: {ctype!r}")
        return _from_layout(code, ctypes.sizeof(ctype))


# (ctype, kind class)
_DTYPE_INFO: Dict[DType, Tuple[Type, str]] = {
    DType.uint8: (c_uint8, 'u'),
    DType.uint16: (c_uint16, 'u'),
    DType.uint32: (c_uint32, 'u'),
    DType.uint64: (c_uint64, 'u'),
    DType.int8: (c_int8, 'i'),
    DType.int16: (c_int16, 'i'),
    DType.int32: (c_int32, 'i'),
    DType.int64: (c_int64, 'i'),
    DType.float32: (c_float, 'f'),
    DType.float64: (c_double, 'f'),
}

_BY_LAYOUT: Dict[Tuple[str, int], DType] = {
    (info[1], ctypes.sizeof(info[0])): dtype for dtype, info in _DTYPE_INFO.items()
}

_ALIASES = {
    "double": DType.float64,
    "float": DType.float32,
    "real": DType.float64,
    "index": DType.int64,
    "byte": DType.uint8,
    "int": DType.int64,
    "long": DType.int64,
}

# struct/buffer format characters by kind class
_SIGNED_CODES = 'bhilqn'
_UNSIGNED_CODES = 'BHILQN'
_FLOAT_CODES = 'fd'


def _from_layout(code: str, itemsize: int) -> DType:
    if code in _SIGNED_CODES:
        kind = 'i'
    elif code in _UNSIGNED_CODES:
        kind = 'u'
    elif code in _FLOAT_CODES:
        kind = 'f'
    else:
        raise UnknownElementKindError(
            f"Unsupported element format {code!r} ({itemsize} bytes)"
        )
    try:
        return _BY_LAYOUT[(kind, itemsize)]
    except KeyError:
        raise UnknownElementKindError(
            f"Unsupported element format {code!r} ({itemsize} bytes)"
        ) from None


# =============================================================================
# Module-Level Constants
# =============================================================================

uint8 = DType.uint8
uint16 = DType.uint16
uint32 = DType.uint32
uint64 = DType.uint64
int8 = DType.int8
int16 = DType.int16
int32 = DType.int32
int64 = DType.int64
float32 = DType.float32
float64 = DType.float64


# =============================================================================
# Type Utilities
# =============================================================================

def validate_dtype(dtype: Union[DType, str, Type]) -> DType:
    """
    Validate and normalize a dtype argument.

    Args:
        dtype: DType member, tag ('f64'), name ('float64'), alias or ctypes type

    Returns:
        DType

    Raises:
        UnknownElementKindError: If the argument names no supported kind
    """
    if isinstance(dtype, DType):
        return dtype
    if isinstance(dtype, str):
        return DType.from_name(dtype)
    if isinstance(dtype, type) and issubclass(dtype, ctypes._SimpleCData):
        return DType.from_ctype(dtype)
    raise UnknownElementKindError(f"Cannot interpret {dtype!r} as an element kind")


def infer_dtype(buffer: Any) -> DType:
    """
    Infer the element kind of an existing buffer.

    Accepts densekit Arrays, ctypes arrays and any object exporting the
    buffer protocol (numpy arrays, ``array.array``, ``bytearray``).

    Raises:
        UnsupportedConstructorInputError: If ``buffer`` is not a buffer
        UnknownElementKindError: If its element format is not supported
    """
    from ._array import Array

    if isinstance(buffer, Array):
        return buffer.dtype
    if isinstance(buffer, ctypes.Array):
        return DType.from_ctype(buffer._type_)
    try:
        view = memoryview(buffer)
    except TypeError:
        raise UnsupportedConstructorInputError(
            f"{type(buffer).__name__} does not expose a buffer"
        ) from None
    with view:
        fmt = view.format
        itemsize = view.itemsize
    if fmt[:1] in ('>', '!') and itemsize > 1:
        raise UnknownElementKindError(f"Non-native byte order is not supported: {fmt!r}")
    code = fmt.lstrip('@=<>!')
    if len(code) != 1:
        raise UnknownElementKindError(f"Unsupported buffer format: {fmt!r}")
    return _from_layout(code, itemsize)


def is_float_dtype(dtype: Union[str, DType]) -> bool:
    """Check if dtype is floating point."""
    return validate_dtype(dtype).is_float


def is_int_dtype(dtype: Union[str, DType]) -> bool:
    """Check if dtype is integer."""
    return not validate_dtype(dtype).is_float


def dtype_itemsize(dtype: Union[str, DType]) -> int:
    """Get size in bytes for dtype."""
    return validate_dtype(dtype).itemsize
