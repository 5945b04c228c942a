"""
Dense Row-Major Matrix

A Matrix is a collection of row vectors stored in one flat typed buffer:
element ``(r, c)`` lives at offset ``r * n_cols + c``. The element kind is
fixed at construction and every arithmetic step runs in that kind's domain
(see ``_domain``).

Construction modes (one factory each):

    Matrix.wrap(buffer, shape)        adopt an existing buffer, zero-copy
    Matrix.zeros(dtype, shape)        allocate a zero-filled buffer
    Matrix.from_rows(rows, dtype)     copy and convert nested rows
    Matrix.from_matrix_like(obj)      adopt ``obj.data`` / ``obj.shape``

Accessors that return rows, columns, slices or reductions always return
independent copies.

Example:
    >>> from densekit.dense import Matrix
    >>> mat = Matrix.from_rows([[1, 2, 3], [4, 5, 6]], dtype='i32')
    >>> mat.row_sum().tolist()
    [5, 7, 9]
    >>> mat.T.shape
    (3, 2)
"""

import logging
from collections.abc import Mapping
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple, Union

from .._config import config
from .._errors import (
    ConstructionError,
    DomainMismatchError,
    IncompleteShapeError,
    ShapeMismatchError,
    UnsupportedConstructorInputError,
)
from ._array import Array
from ._dtypes import DType, validate_dtype
from . import _display

__all__ = ['Matrix', 'MatrixLike']

logger = logging.getLogger("densekit.dense")

MatrixLike = Any  # object exposing ``data`` and ``shape``
ShapeSpec = Union[Tuple[int, ...], Sequence[Optional[int]]]


def _resolve_shape(shape: Optional[ShapeSpec], length: Optional[int] = None) -> Tuple[int, int]:
    """
    Turn a ``(rows, cols)`` shape into concrete extents.

    ``cols`` may be missing or None when ``length`` (the buffer size) is
    known; it is then derived as ``length // rows``.
    """
    if shape is None or len(shape) == 0 or shape[0] is None:
        raise IncompleteShapeError("Cannot initialize with incomplete shape (n-rows, n-cols)")
    if len(shape) > 2:
        raise ShapeMismatchError(f"Matrix is strictly 2-D, got shape {tuple(shape)}")

    n_rows = int(shape[0])
    n_cols = shape[1] if len(shape) > 1 else None

    if n_cols is None:
        if length is None:
            raise IncompleteShapeError("Cannot initialize with incomplete shape (n-cols)")
        if n_rows == 0:
            raise IncompleteShapeError("Cannot derive n-cols from a shape with zero rows")
        if length % n_rows:
            raise ShapeMismatchError(
                f"Buffer of length {length} does not divide into {n_rows} rows"
            )
        n_cols = length // n_rows
    n_cols = int(n_cols)

    if n_rows < 0 or n_cols < 0:
        raise ConstructionError(f"Shape must be non-negative, got ({n_rows}, {n_cols})")
    if length is not None and n_rows * n_cols != length:
        raise ShapeMismatchError(
            f"Buffer of length {length} cannot hold shape ({n_rows}, {n_cols})"
        )
    return n_rows, n_cols


# =============================================================================
# Matrix Class
# =============================================================================

class Matrix:
    """
    Row-major 2-D array over one element kind.

    Attributes:
        dtype (DType): Element kind
        n_rows (int): Number of rows
        n_cols (int): Number of columns
        data (Array): Flat buffer of length ``n_rows * n_cols``
    """

    __slots__ = ('_data', '_buf', '_n_rows', '_n_cols')

    def __init__(self, data: Array, n_rows: int, n_cols: int):
        if n_rows * n_cols != data.size:
            raise ShapeMismatchError(
                f"Buffer of length {data.size} cannot hold shape ({n_rows}, {n_cols})"
            )
        self._data = data
        self._buf = data.buffer
        self._n_rows = n_rows
        self._n_cols = n_cols

    # -------------------------------------------------------------------------
    # Construction Modes
    # -------------------------------------------------------------------------

    @classmethod
    def wrap(cls, buffer: Any, shape: Optional[ShapeSpec] = None) -> 'Matrix':
        """
        Adopt an existing buffer without copying.

        Args:
            buffer: Array, ctypes array or writable buffer-protocol object
                (numpy array, ``array.array``); its element kind is inferred
            shape: ``(rows, cols)``; ``cols`` may be omitted

        Raises:
            IncompleteShapeError: If ``shape`` has no row count
            UnsupportedConstructorInputError: If ``buffer`` cannot be shared
            ShapeMismatchError: If the buffer length does not match the shape
        """
        data = Array.from_buffer(buffer)
        n_rows, n_cols = _resolve_shape(shape, data.size)
        logger.debug("Wrapping %s buffer as %dx%d matrix", data.dtype, n_rows, n_cols)
        return cls(data, n_rows, n_cols)

    @classmethod
    def zeros(cls, dtype: Union[str, DType], shape: ShapeSpec) -> 'Matrix':
        """Allocate a zero-filled ``rows x cols`` matrix of ``dtype``."""
        dtype = validate_dtype(dtype)
        n_rows, n_cols = _resolve_shape(shape)
        return cls(Array(n_rows * n_cols, dtype), n_rows, n_cols)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence], dtype: Union[str, DType]) -> 'Matrix':
        """
        Copy nested rows into a new matrix, converting every value.

        Raises:
            ConstructionError: If no dtype is given
            UnsupportedConstructorInputError: If a row is not a sequence
            ShapeMismatchError: If the rows have different lengths
            DomainMismatchError: If a float is given for a 64-bit integer kind
        """
        if dtype is None:
            raise ConstructionError("Cannot initialize nested rows without dtype")
        dtype = validate_dtype(dtype)
        rows = list(rows)
        for i, row in enumerate(rows):
            if isinstance(row, (str, bytes)) or not hasattr(row, "__len__"):
                raise UnsupportedConstructorInputError(
                    f"Row {i} is {type(row).__name__}, expected a sequence"
                )
        n_rows = len(rows)
        n_cols = len(rows[0]) if n_rows else 0

        data = Array(n_rows * n_cols, dtype)
        flat = []
        for i, row in enumerate(rows):
            if len(row) != n_cols:
                raise ShapeMismatchError(
                    f"Row {i} has {len(row)} values, expected {n_cols}"
                )
            flat.extend(row)
        data.set(flat)
        logger.debug("Converted %d nested rows into %dx%d %s matrix",
                     n_rows, n_rows, n_cols, dtype)
        return cls(data, n_rows, n_cols)

    @classmethod
    def from_matrix_like(cls, obj: MatrixLike) -> 'Matrix':
        """
        Adopt the buffer of an object exposing ``data`` and ``shape``.

        ``obj`` may be another Matrix, any object with those attributes, or
        a mapping with those keys. The buffer is shared, not copied.
        """
        if isinstance(obj, Mapping):
            if 'data' not in obj or 'shape' not in obj:
                raise UnsupportedConstructorInputError(
                    "Mapping must provide 'data' and 'shape'"
                )
            data, shape = obj['data'], obj['shape']
        elif hasattr(obj, 'data') and hasattr(obj, 'shape'):
            data, shape = obj.data, obj.shape
        else:
            raise UnsupportedConstructorInputError(
                f"{type(obj).__name__} does not expose 'data' and 'shape'"
            )
        return cls.wrap(data, shape)

    @classmethod
    def from_numpy(cls, arr: Any, copy: bool = False) -> 'Matrix':
        """
        Build a matrix from a 2-D numpy array.

        The array's memory is shared unless ``copy`` is True or the array is
        not C-contiguous and writable, in which case a copy is made.
        """
        import numpy as np

        if arr.ndim != 2:
            raise ShapeMismatchError(f"Expected a 2-D array, got shape {arr.shape}")
        if copy or not arr.flags.c_contiguous or not arr.flags.writeable:
            arr = np.array(arr, order='C', copy=True)
        return cls.wrap(arr, arr.shape)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def dtype(self) -> DType:
        return self._data.dtype

    @property
    def n_rows(self) -> int:
        return self._n_rows

    @property
    def n_cols(self) -> int:
        return self._n_cols

    @property
    def shape(self) -> Tuple[int, int]:
        """Returns (rows, columns)."""
        return (self._n_rows, self._n_cols)

    @property
    def data(self) -> Array:
        """Flat row-major buffer (shared, not copied)."""
        return self._data

    def __len__(self) -> int:
        return self._n_rows

    # -------------------------------------------------------------------------
    # Element Access
    # -------------------------------------------------------------------------

    def _check_cell(self, row: int, col: int) -> None:
        if not (0 <= row < self._n_rows and 0 <= col < self._n_cols):
            raise IndexError(f"Cell ({row}, {col}) out of bounds for shape {self.shape}")

    def item(self, row: int, col: int):
        """Get an item using a row and column index."""
        if config.bounds_check:
            self._check_cell(row, col)
        return self._buf[row * self._n_cols + col]

    def set_cell(self, row: int, col: int, value) -> None:
        """Overwrite one element; integer kinds wrap, float kinds round."""
        if config.bounds_check:
            self._check_cell(row, col)
        self._buf[row * self._n_cols + col] = self.dtype.coerce(value)

    def set_add(self, row: int, col: int, value) -> None:
        """
        Add ``value`` to an existing element in place.

        Raises:
            DomainMismatchError: If ``value`` belongs to the other arithmetic
                domain (e.g. a float added to an i64 element)
        """
        if config.bounds_check:
            self._check_cell(row, col)
        dtype = self.dtype
        arith = dtype.arithmetic
        arith.check(value)
        offset = row * self._n_cols + col
        self._buf[offset] = dtype.coerce(
            arith.add(arith.to_native(self._buf[offset]), arith.to_native(value))
        )

    def set_row(self, row: int, values: Sequence) -> None:
        """Replace a row. ``values`` must hold exactly ``n_cols`` elements."""
        if len(values) != self._n_cols:
            raise ShapeMismatchError(
                f"Row needs {self._n_cols} values, got {len(values)}"
            )
        if config.bounds_check and not 0 <= row < self._n_rows:
            raise IndexError(f"Row {row} out of bounds for shape {self.shape}")
        self._data.set(values, row * self._n_cols)

    def set_col(self, col: int, values: Sequence) -> None:
        """Replace a column. ``values`` must hold exactly ``n_rows`` elements."""
        if len(values) != self._n_rows:
            raise ShapeMismatchError(
                f"Column needs {self._n_rows} values, got {len(values)}"
            )
        if config.bounds_check and not 0 <= col < self._n_cols:
            raise IndexError(f"Column {col} out of bounds for shape {self.shape}")
        coerce = self.dtype.coerce
        coerced = [coerce(v) for v in values]
        offset = col
        for v in coerced:
            self._buf[offset] = v
            offset += self._n_cols

    def row(self, n: int) -> Array:
        """Get a copy of the nth row."""
        if config.bounds_check and not 0 <= n < self._n_rows:
            raise IndexError(f"Row {n} out of bounds for shape {self.shape}")
        return self._data.slice(n * self._n_cols, (n + 1) * self._n_cols)

    def at(self, pos: int) -> Array:
        """Alias for row."""
        return self.row(pos)

    def col(self, n: int) -> Array:
        """Get a copy of the nth column."""
        if config.bounds_check and not 0 <= n < self._n_cols:
            raise IndexError(f"Column {n} out of bounds for shape {self.shape}")
        out = Array(self._n_rows, self.dtype)
        dst = out.buffer
        src = self._buf
        offset = n
        for i in range(self._n_rows):
            dst[i] = src[offset]
            offset += self._n_cols
        return out

    # -------------------------------------------------------------------------
    # Reductions
    # -------------------------------------------------------------------------

    def row_sum(self) -> Array:
        """
        Sum all rows together.

        Returns:
            Array of length ``n_cols`` (one total per column). Each partial
            sum is stored in the element kind, so integer kinds wrap and
            float32 rounds at every step.
        """
        dtype = self.dtype
        arith = dtype.arithmetic
        coerce, add, native = dtype.coerce, arith.add, arith.to_native
        out = Array(self._n_cols, dtype)
        acc = out.buffer
        src = self._buf
        offset = 0
        for _ in range(self._n_rows):
            for j in range(self._n_cols):
                acc[j] = coerce(add(native(acc[j]), native(src[offset + j])))
            offset += self._n_cols
        return out

    def col_sum(self) -> Array:
        """Sum all columns together; returns an Array of length ``n_rows``."""
        dtype = self.dtype
        arith = dtype.arithmetic
        coerce, add, native = dtype.coerce, arith.add, arith.to_native
        out = Array(self._n_rows, dtype)
        acc = out.buffer
        src = self._buf
        for i in range(self._n_cols):
            for j in range(self._n_rows):
                acc[j] = coerce(add(native(acc[j]), native(src[j * self._n_cols + i])))
        return out

    def _divide_in_place(self, sums: Array, count: int) -> Array:
        dtype = self.dtype
        arith = dtype.arithmetic
        divisor = arith.count(count)
        acc = sums.buffer
        for i in range(sums.size):
            acc[i] = dtype.coerce(arith.divide(arith.to_native(acc[i]), divisor))
        return sums

    def row_mean(self) -> Array:
        """
        Mean of all rows (``row_sum() / n_rows``).

        Bounded kinds divide as IEEE doubles (zero rows gives nan, stored as
        0 by integer kinds); 64-bit integer kinds divide exactly, truncating
        toward zero, and raise ZeroDivisionError for zero rows.
        """
        return self._divide_in_place(self.row_sum(), self._n_rows)

    def col_mean(self) -> Array:
        """Mean of all columns (``col_sum() / n_cols``)."""
        return self._divide_in_place(self.col_sum(), self._n_cols)

    def dot(self, rhs: 'Matrix') -> Union[int, float]:
        """
        Sum of elementwise products of two equally shaped matrices.

        Accumulates column by column (outer loop over columns, inner loop
        over rows); float results depend on this order.

        Returns:
            float for bounded kinds, exact int for 64-bit integer kinds
        """
        if rhs.n_rows != self._n_rows:
            raise ShapeMismatchError(
                f"Matrices must have equal rows: {self.shape} vs {rhs.shape}"
            )
        if rhs.n_cols != self._n_cols:
            raise ShapeMismatchError(
                f"Matrices must have equal cols: {self.shape} vs {rhs.shape}"
            )
        arith = self.dtype.arithmetic
        if rhs.dtype.domain is not arith.domain:
            raise DomainMismatchError(
                f"Cannot take dot product of {self.dtype} and {rhs.dtype} "
                f"({arith.domain} vs {rhs.dtype.domain} domain)"
            )
        native, add, mul = arith.to_native, arith.add, arith.mul
        lhs_buf, rhs_buf = self._buf, rhs._buf
        res = arith.zero()
        for j in range(self._n_cols):
            offset = j
            for _ in range(self._n_rows):
                res = add(res, mul(native(lhs_buf[offset]), native(rhs_buf[offset])))
                offset += self._n_cols
        return res

    # -------------------------------------------------------------------------
    # Derived Matrices
    # -------------------------------------------------------------------------

    @property
    def T(self) -> 'Matrix':
        """Get the transpose of the matrix. This method clones the matrix."""
        res = Array(self._n_rows * self._n_cols, self.dtype)
        for i, col in enumerate(self.cols()):
            res.set(col, i * self._n_rows)
        return Matrix(res, self._n_cols, self._n_rows)

    def filter(self, predicate: Callable[[Array, int], bool]) -> 'Matrix':
        """
        Keep the rows for which ``predicate(row_copy, row_index)`` is true.

        The predicate is called once per row in ascending order; kept rows
        stay in their original order.
        """
        satisfying = [i for i in range(self._n_rows) if predicate(self.row(i), i)]
        matrix = Matrix.zeros(self.dtype, (len(satisfying), self._n_cols))
        for i, src in enumerate(satisfying):
            matrix.set_row(i, self.row(src))
        return matrix

    def slice(self, start: int = 0, end: Optional[int] = None) -> 'Matrix':
        """Copy rows ``[start, end)``; bounds follow Python slice rules."""
        start, stop, _ = slice(start, end).indices(self._n_rows)
        stop = max(stop, start)
        data = self._data.slice(start * self._n_cols, stop * self._n_cols)
        return Matrix(data, stop - start, self._n_cols)

    def copy(self) -> 'Matrix':
        """Create a deep copy."""
        return Matrix(self._data.copy(), self._n_rows, self._n_cols)

    # -------------------------------------------------------------------------
    # Iteration
    # -------------------------------------------------------------------------

    def rows(self) -> Iterator[Array]:
        """Iterate through copies of the rows."""
        i = 0
        while i < self._n_rows:
            yield self._data.slice(i * self._n_cols, (i + 1) * self._n_cols)
            i += 1

    def cols(self) -> Iterator[Array]:
        """Iterate through copies of the columns."""
        i = 0
        while i < self._n_cols:
            yield self.col(i)
            i += 1

    def __iter__(self) -> Iterator[Array]:
        return self.rows()

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def tolist(self) -> List[List]:
        """Nested Python lists, one per row."""
        return [row.tolist() for row in self.rows()]

    def to_numpy(self):
        """Convert to a 2-D numpy array (copy)."""
        return self._data.to_numpy().reshape(self.shape)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and self._data == other._data

    __hash__ = None

    # -------------------------------------------------------------------------
    # Representation
    # -------------------------------------------------------------------------

    @property
    def pretty(self) -> str:
        """Tab-separated rows. Do not use for matrices with many columns."""
        return _display.pretty(self)

    @property
    def html(self) -> str:
        """Convert the Matrix into an HTML table."""
        return _display.html(self)

    def _repr_html_(self) -> str:
        return _display.html(self)

    def __repr__(self) -> str:
        return _display.summary(self, config.display.max_rows)
