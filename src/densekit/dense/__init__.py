"""
densekit Dense Module

Row-major dense matrices over ten fixed-width element kinds.

Classes:
- Array: Contiguous 1-D typed buffer (ctypes-backed, no numpy needed)
- Matrix: Row-major 2-D container over one element kind
- DType: Element-kind registry (u8 ... i64, f32, f64)
- Domain: Arithmetic domain of an element kind (bounded or wide)

Usage:
    from densekit.dense import Matrix, multiply_diags

    mat = Matrix.from_rows([[1, 0, 2], [0, 1, 1]], dtype='f64')
    totals = mat.row_sum()
    scaled = multiply_diags(mat, [1.0, 2.0, 0.5])
"""

from ._domain import Domain, Arithmetic, BoundedArithmetic, WideArithmetic
from ._dtypes import (
    DType,
    uint8, uint16, uint32, uint64,
    int8, int16, int32, int64,
    float32, float64,
    validate_dtype,
    infer_dtype,
    is_float_dtype,
    is_int_dtype,
    dtype_itemsize,
)
from ._array import Array, empty, zeros, ones, from_list, from_buffer
from ._matrix import Matrix, MatrixLike
from ._construct import as_matrix
from ._ops import multiply_diags

__all__ = [
    # Containers
    'Array',
    'Matrix',
    'MatrixLike',
    # Array factories
    'empty',
    'zeros',
    'ones',
    'from_list',
    'from_buffer',
    # Construction dispatch
    'as_matrix',
    # Operations
    'multiply_diags',
    # Type system
    'DType',
    'Domain',
    'Arithmetic',
    'BoundedArithmetic',
    'WideArithmetic',
    'uint8', 'uint16', 'uint32', 'uint64',
    'int8', 'int16', 'int32', 'int64',
    'float32', 'float64',
    'validate_dtype',
    'infer_dtype',
    'is_float_dtype',
    'is_int_dtype',
    'dtype_itemsize',
]
