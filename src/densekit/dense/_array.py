"""
Lightweight Array Container

Contiguous 1-D typed buffer over a ctypes array. This is what a Matrix stores
its elements in, and what row/column accessors and reductions return.
"""

import ctypes
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Union

from .._errors import ShapeMismatchError, UnsupportedConstructorInputError
from ._dtypes import DType, infer_dtype, validate_dtype

__all__ = ['Array', 'empty', 'zeros', 'ones', 'from_list', 'from_buffer']


# =============================================================================
# Array Class
# =============================================================================

class Array:
    """
    Contiguous typed array with a C-compatible memory layout.

    Values written through ``__setitem__``, ``set`` or ``fill`` are coerced
    into the element kind (integer kinds wrap, float32 rounds).

    Attributes:
        dtype (DType): Element kind
        size (int): Number of elements
        nbytes (int): Total bytes

    Example:
        >>> arr = Array.zeros(4, dtype='f32')
        >>> arr[0] = 3.14
        >>> arr.tolist()
        [3.140000104904175, 0.0, 0.0, 0.0]
    """

    __slots__ = ('_size', '_dtype', '_data', '_owner')

    def __init__(self, size: int, dtype: Union[str, DType] = 'f64'):
        """
        Allocate a zero-filled array.

        Args:
            size: Number of elements
            dtype: Element kind (DType or tag)
        """
        if size < 0:
            raise ValueError(f"Array size must be non-negative, got {size}")
        self._dtype = validate_dtype(dtype)
        self._size = size
        self._data = self._dtype.allocate(size)
        self._owner = None

    @classmethod
    def _adopt(cls, data: ctypes.Array, dtype: DType, owner: Any = None) -> 'Array':
        """Wrap an existing ctypes array without copying."""
        arr = cls.__new__(cls)
        arr._dtype = dtype
        arr._size = len(data)
        arr._data = data
        arr._owner = owner  # Keep reference
        return arr

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def size(self) -> int:
        """Number of elements."""
        return self._size

    @property
    def dtype(self) -> DType:
        return self._dtype

    @property
    def itemsize(self) -> int:
        """Bytes per element."""
        return self._dtype.itemsize

    @property
    def nbytes(self) -> int:
        return self._size * self._dtype.itemsize

    @property
    def buffer(self) -> ctypes.Array:
        """Underlying ctypes array (shared, not copied)."""
        return self._data

    # -------------------------------------------------------------------------
    # Initialization Methods
    # -------------------------------------------------------------------------

    @classmethod
    def zeros(cls, size: int, dtype: Union[str, DType] = 'f64') -> 'Array':
        """Create zero-initialized array."""
        return cls(size, dtype)

    @classmethod
    def from_list(cls, data: Sequence, dtype: Union[str, DType] = 'f64') -> 'Array':
        """Create array from a Python sequence, coercing every value."""
        arr = cls(len(data), dtype)
        coerce = arr._dtype.coerce
        buf = arr._data
        for i, val in enumerate(data):
            buf[i] = coerce(val)
        return arr

    @classmethod
    def from_buffer(
        cls,
        buffer: Any,
        dtype: Optional[Union[str, DType]] = None,
        size: Optional[int] = None,
    ) -> 'Array':
        """
        Create array from existing memory (zero-copy view).

        WARNING: This creates a view, not a copy. Writes through the Array are
        visible in ``buffer`` and vice versa.

        Args:
            buffer: Array, ctypes array, or writable buffer-protocol object
            dtype: Element kind; inferred from ``buffer`` when omitted
            size: Number of elements; defaults to everything in ``buffer``
        """
        dtype = infer_dtype(buffer) if dtype is None else validate_dtype(dtype)

        if isinstance(buffer, Array):
            if dtype is buffer.dtype and size in (None, buffer.size):
                return cls._adopt(buffer._data, dtype, buffer._owner)
            buffer = buffer._data

        if isinstance(buffer, ctypes.Array) and buffer._type_ is dtype.ctype:
            if size in (None, len(buffer)):
                return cls._adopt(buffer, dtype)

        try:
            with memoryview(buffer) as view:
                nbytes = view.nbytes
        except TypeError:
            raise UnsupportedConstructorInputError(
                f"{type(buffer).__name__} does not expose a buffer"
            ) from None

        if size is None:
            size = nbytes // dtype.itemsize
        if nbytes < size * dtype.itemsize:
            raise ShapeMismatchError(
                f"Buffer too small: {nbytes} bytes < {size} x {dtype} "
                f"({size * dtype.itemsize} bytes)"
            )
        try:
            data = (dtype.ctype * size).from_buffer(buffer)
        except (TypeError, ValueError, BufferError) as e:
            raise UnsupportedConstructorInputError(
                f"Cannot wrap {type(buffer).__name__} without copying: {e}"
            ) from e
        return cls._adopt(data, dtype, buffer)

    # -------------------------------------------------------------------------
    # Element Access
    # -------------------------------------------------------------------------

    def _check_index(self, idx: int) -> int:
        if idx < 0:
            idx += self._size
        if idx < 0 or idx >= self._size:
            raise IndexError(f"Index {idx} out of bounds [0, {self._size})")
        return idx

    def __getitem__(self, idx: Union[int, slice]):
        """Get an element, or a copied Array for a slice."""
        if isinstance(idx, slice):
            start, stop, step = idx.indices(self._size)
            if step == 1:
                return self.slice(start, stop)
            return Array.from_list(
                [self._data[i] for i in range(start, stop, step)], self._dtype
            )
        return self._data[self._check_index(idx)]

    def __setitem__(self, idx: Union[int, slice], value):
        """Set element(s), coercing into the element kind."""
        coerce = self._dtype.coerce
        if isinstance(idx, slice):
            indices = range(*idx.indices(self._size))
            if hasattr(value, '__iter__'):
                values = [coerce(v) for v in value]
                if len(values) != len(indices):
                    raise ShapeMismatchError(
                        f"Cannot assign {len(values)} values to a slice of {len(indices)}"
                    )
                for i, v in zip(indices, values):
                    self._data[i] = v
            else:
                v = coerce(value)
                for i in indices:
                    self._data[i] = v
        else:
            self._data[self._check_index(idx)] = coerce(value)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator:
        return iter(self._data)

    def __eq__(self, other) -> bool:
        if isinstance(other, Array):
            return self.tolist() == other.tolist()
        if isinstance(other, (list, tuple)):
            return self.tolist() == list(other)
        return NotImplemented

    __hash__ = None

    # -------------------------------------------------------------------------
    # Bulk Operations
    # -------------------------------------------------------------------------

    def set(self, values: Iterable, offset: int = 0) -> None:
        """
        Write ``values`` starting at ``offset``.

        Raises:
            ShapeMismatchError: If the values run past the end of the array
        """
        if isinstance(values, Array) and values._dtype is self._dtype:
            n = values._size
            self._check_fits(n, offset)
            itemsize = self._dtype.itemsize
            ctypes.memmove(
                ctypes.addressof(self._data) + offset * itemsize,
                ctypes.addressof(values._data),
                n * itemsize,
            )
            return

        coerce = self._dtype.coerce
        coerced = [coerce(v) for v in values]
        self._check_fits(len(coerced), offset)
        for i, v in enumerate(coerced, offset):
            self._data[i] = v

    def _check_fits(self, n: int, offset: int) -> None:
        if offset < 0 or offset + n > self._size:
            raise ShapeMismatchError(
                f"Cannot write {n} values at offset {offset} into Array of size {self._size}"
            )

    def slice(self, start: int = 0, end: Optional[int] = None) -> 'Array':
        """Copy elements ``[start, end)``; bounds follow Python slice rules."""
        start, stop, _ = slice(start, end).indices(self._size)
        n = max(stop - start, 0)
        new = Array(n, self._dtype)
        if n:
            itemsize = self._dtype.itemsize
            ctypes.memmove(
                ctypes.addressof(new._data),
                ctypes.addressof(self._data) + start * itemsize,
                n * itemsize,
            )
        return new

    def copy(self) -> 'Array':
        """Create a deep copy."""
        return self.slice()

    def fill(self, value) -> None:
        """Fill array with a constant value."""
        v = self._dtype.coerce(value)
        for i in range(self._size):
            self._data[i] = v

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def as_memoryview(self) -> memoryview:
        """Get memoryview of the underlying data (shared, not copied)."""
        return memoryview(self._data)

    def tobytes(self) -> bytes:
        return bytes(self._data)

    def tolist(self) -> List:
        return list(self._data)

    def to_numpy(self):
        """
        Convert to a numpy array (copy).

        Returns:
            numpy.ndarray with the matching numpy dtype
        """
        try:
            import numpy as np
        except ImportError:
            raise ImportError("numpy is required for to_numpy()")

        return np.frombuffer(self.tobytes(), dtype=np.dtype(self._dtype._name_)).copy()

    # -------------------------------------------------------------------------
    # Representation
    # -------------------------------------------------------------------------

    def __repr__(self) -> str:
        if self._size == 0:
            return f"Array([], dtype={self._dtype})"
        elif self._size <= 6:
            data_str = str(self.tolist())
        else:
            values = self.tolist()
            data_str = str(values[:3] + ['...'] + values[-3:])
        return f"Array({data_str}, dtype={self._dtype})"


# =============================================================================
# Factory Functions
# =============================================================================

def empty(size: int, dtype: Union[str, DType] = 'f64') -> Array:
    """Create array (ctypes buffers are always zero-filled)."""
    return Array(size, dtype)


def zeros(size: int, dtype: Union[str, DType] = 'f64') -> Array:
    """Create zero-initialized array."""
    return Array.zeros(size, dtype)


def ones(size: int, dtype: Union[str, DType] = 'f64') -> Array:
    """Create array filled with ones."""
    arr = Array(size, dtype)
    arr.fill(1)
    return arr


def from_list(data: Sequence, dtype: Union[str, DType] = 'f64') -> Array:
    """Create array from Python list."""
    return Array.from_list(data, dtype)


def from_buffer(buffer: Any, dtype: Optional[Union[str, DType]] = None,
                size: Optional[int] = None) -> Array:
    """Create array from existing buffer (zero-copy)."""
    return Array.from_buffer(buffer, dtype, size)
