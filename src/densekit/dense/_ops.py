"""Matrix Operations.

- multiply_diags: scale each column by one entry of a vector, i.e. the
  product ``x @ diag(y)`` without building the diagonal matrix.
"""

import logging
from typing import Optional, Sequence, Union

from ._dtypes import DType, validate_dtype
from ._matrix import Matrix, MatrixLike

__all__ = ['multiply_diags']

logger = logging.getLogger("densekit.dense")


def multiply_diags(
    x: Union[Matrix, MatrixLike],
    y: Sequence,
    dtype: Optional[Union[str, DType]] = None,
) -> Matrix:
    """Multiply every column ``j`` of ``x`` by ``y[j]``.

    Args:
        x: Matrix (or anything exposing ``data`` and ``shape``) of shape m x n.
        y: Scale factors, normally of length n. Entries beyond n are ignored;
            if ``y`` is shorter, the remaining columns of the result stay 0.
        dtype: Element kind of the result. Defaults to the kind of ``x``;
            with another kind each product is computed in that kind's domain
            and stored in it, so ``x`` values are not truncated first.

    Returns:
        New m x n matrix with ``result[i][j] = x[i][j] * y[j]``.

    Raises:
        DomainMismatchError: If an entry of ``y`` cannot be used in the result
            kind's domain (e.g. a float factor for an i64 result).

    Example:
        >>> x = Matrix.from_rows([[1, 2], [3, 4]], dtype='f64')
        >>> multiply_diags(x, [10, 0.5]).tolist()
        [[10.0, 1.0], [30.0, 2.0]]
    """
    if not isinstance(x, Matrix):
        x = Matrix.from_matrix_like(x)

    dtype = x.dtype if dtype is None else validate_dtype(dtype)
    arith = dtype.arithmetic
    native, mul, coerce = arith.to_native, arith.mul, dtype.coerce

    n_rows, n_cols = x.shape
    n_scaled = min(len(y), n_cols)
    scale = [native(arith.check(y[j])) for j in range(n_scaled)]

    logger.debug("Scaling %dx%d %s matrix by %d factors into %s",
                 n_rows, n_cols, x.dtype, n_scaled, dtype)

    res = Matrix.zeros(dtype, (n_rows, n_cols))
    src = x.data.buffer
    dst = res.data.buffer
    offset = 0
    for _ in range(n_rows):
        for j in range(n_scaled):
            dst[offset + j] = coerce(mul(native(src[offset + j]), scale[j]))
        offset += n_cols
    return res
