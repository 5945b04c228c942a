"""Construction mode resolution.

``as_matrix`` accepts every input the factories accept and picks the mode
from the type of the first argument:

    ============================  =====================  ==================
    first argument                 extra argument         mode
    ============================  =====================  ==================
    Array / ctypes / numpy buffer  shape                  Matrix.wrap
    dtype (DType or tag string)    shape                  Matrix.zeros
    nested list/tuple rows         dtype                  Matrix.from_rows
    object with data and shape     (none)                 Matrix.from_matrix_like
    ============================  =====================  ==================
"""

import ctypes
import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from .._errors import ConstructionError, UnsupportedConstructorInputError
from ._array import Array
from ._dtypes import DType
from ._matrix import Matrix, ShapeSpec

__all__ = ['as_matrix']

logger = logging.getLogger("densekit.dense")


def _is_buffer(obj: Any) -> bool:
    if isinstance(obj, (Array, ctypes.Array)):
        return True
    try:
        memoryview(obj).release()
    except TypeError:
        return False
    return True


def _is_matrix_like(obj: Any) -> bool:
    if isinstance(obj, Mapping):
        return 'data' in obj and 'shape' in obj
    return hasattr(obj, 'data') and hasattr(obj, 'shape')


def as_matrix(
    obj: Any,
    shape: Optional[ShapeSpec] = None,
    dtype: Optional[Union[str, DType]] = None,
) -> Matrix:
    """
    Build a Matrix from any supported input.

    Args:
        obj: Buffer, dtype, nested rows, or matrix-like object
        shape: ``(rows, cols)`` for buffer and dtype inputs
        dtype: Element kind for nested rows

    Returns:
        Matrix (sharing memory with ``obj`` for buffer and matrix-like inputs)

    Raises:
        IncompleteShapeError: If the mode needs a shape that is missing
        ConstructionError: If nested rows are given without a dtype
        UnsupportedConstructorInputError: If ``obj`` matches no mode

    Example:
        >>> as_matrix('f64', shape=(2, 2)).tolist()
        [[0.0, 0.0], [0.0, 0.0]]
        >>> as_matrix([[1, 2], [3, 4]], dtype='u8').dtype
        DType.uint8
    """
    if isinstance(obj, Matrix):
        logger.debug("as_matrix: matrix-like pass-through")
        return Matrix.from_matrix_like(obj)

    if isinstance(obj, (str, DType)):
        logger.debug("as_matrix: allocate %s", obj)
        return Matrix.zeros(obj, shape)

    if _is_buffer(obj):
        if shape is None and getattr(obj, 'ndim', None) == 2:
            logger.debug("as_matrix: 2-D ndarray")
            return Matrix.from_numpy(obj)
        logger.debug("as_matrix: wrap buffer")
        return Matrix.wrap(obj, shape)

    if isinstance(obj, (list, tuple)):
        if dtype is None:
            raise ConstructionError("Cannot initialize nested rows without dtype")
        logger.debug("as_matrix: convert nested rows")
        return Matrix.from_rows(obj, dtype)

    if _is_matrix_like(obj):
        logger.debug("as_matrix: matrix-like pass-through")
        return Matrix.from_matrix_like(obj)

    raise UnsupportedConstructorInputError(
        f"No construction mode matches {type(obj).__name__}"
    )
