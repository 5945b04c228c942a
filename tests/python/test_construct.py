"""
Tests for as_matrix construction dispatch.
"""

import array
import types

import pytest
import numpy as np

from densekit import (
    as_matrix,
    ConstructionError,
    IncompleteShapeError,
    UnsupportedConstructorInputError,
    UnknownElementKindError,
)
from densekit.dense import Array, Matrix, DType


class TestAsMatrix:
    """Test that the first argument selects the construction mode."""

    def test_dtype_allocates(self):
        mat = as_matrix('f64', shape=(2, 2))
        assert mat.tolist() == [[0.0, 0.0], [0.0, 0.0]]
        mat = as_matrix(DType.uint16, (1, 3))
        assert mat.dtype is DType.uint16
        assert mat.shape == (1, 3)

    def test_dtype_without_shape(self):
        with pytest.raises(IncompleteShapeError):
            as_matrix('f64')
        with pytest.raises(IncompleteShapeError):
            as_matrix('f64', (2,))

    def test_unknown_tag(self):
        with pytest.raises(UnknownElementKindError):
            as_matrix('c128', (2, 2))

    def test_nested_rows(self):
        mat = as_matrix([[1, 2], [3, 4]], dtype='u8')
        assert mat.dtype is DType.uint8
        assert mat.tolist() == [[1, 2], [3, 4]]

    def test_nested_tuples(self):
        mat = as_matrix(((1.5,), (2.5,)), dtype='f32')
        assert mat.shape == (2, 1)

    def test_nested_rows_need_dtype(self):
        with pytest.raises(ConstructionError):
            as_matrix([[1, 2], [3, 4]])

    def test_buffer_wraps(self):
        buf = np.arange(6, dtype=np.float64)
        mat = as_matrix(buf, shape=(2, 3))
        mat.set_cell(0, 0, -1.0)
        assert buf[0] == -1.0

    def test_buffer_derives_cols(self):
        mat = as_matrix(array.array('i', range(8)), shape=(4,))
        assert mat.shape == (4, 2)
        assert mat.dtype is DType.int32

    def test_buffer_without_shape(self):
        with pytest.raises(IncompleteShapeError):
            as_matrix(np.zeros(4))

    def test_ctypes_buffer(self):
        buf = DType.int8.allocate(4)
        mat = as_matrix(buf, (2, 2))
        assert mat.dtype is DType.int8
        assert mat.data.buffer is buf

    def test_array(self):
        arr = Array.from_list([1, 2, 3, 4], 'u32')
        mat = as_matrix(arr, (2, 2))
        assert mat.tolist() == [[1, 2], [3, 4]]

    def test_2d_ndarray(self):
        arr = np.array([[1, 2, 3], [4, 5, 6]], dtype=np.int16)
        mat = as_matrix(arr)
        assert mat.shape == (2, 3)
        assert mat.dtype is DType.int16

    def test_matrix_passthrough(self, square_f64):
        mat = as_matrix(square_f64)
        assert mat is not square_f64
        assert mat.data.buffer is square_f64.data.buffer

    def test_matrix_like(self):
        obj = types.SimpleNamespace(data=Array(4, 'f32'), shape=(2, 2))
        assert as_matrix(obj).shape == (2, 2)
        assert as_matrix({'data': Array(2, 'i8'), 'shape': (1, 2)}).shape == (1, 2)

    def test_unsupported(self):
        with pytest.raises(UnsupportedConstructorInputError):
            as_matrix(3.5)
        with pytest.raises(UnsupportedConstructorInputError):
            as_matrix(None)
        with pytest.raises(TypeError):
            as_matrix({'rows': [[1]]})

    def test_flat_values_are_not_rows(self):
        with pytest.raises(UnsupportedConstructorInputError, match="Row 0 is int"):
            as_matrix([1, 2, 3], dtype='f64')
        with pytest.raises(UnsupportedConstructorInputError):
            Matrix.from_rows([1, 2], 'f64')
        with pytest.raises(UnsupportedConstructorInputError, match="Row 1 is float"):
            Matrix.from_rows([[1.0], 2.0], 'f64')

    def test_string_rows(self):
        with pytest.raises(UnsupportedConstructorInputError):
            Matrix.from_rows(["ab", "cd"], 'u8')

    def test_from_rows_needs_dtype(self):
        with pytest.raises(ConstructionError, match="without dtype"):
            Matrix.from_rows([[1, 2]], None)
