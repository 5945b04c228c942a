"""
Tests for matrix operations (diagonal scaling).
"""

import types

import pytest
import numpy as np

from densekit import DomainMismatchError, UnsupportedConstructorInputError
from densekit.dense import Array, Matrix, DType, multiply_diags


class TestMultiplyDiags:
    """Test x @ diag(y) without building the diagonal."""

    def test_basic(self):
        x = Matrix.from_rows([[1, 2], [3, 4]], dtype='f64')
        res = multiply_diags(x, [10, 0.5])
        assert res.tolist() == [[10.0, 1.0], [30.0, 2.0]]
        assert res.shape == x.shape

    def test_all_kinds(self, small_matrix, dtype):
        res = multiply_diags(small_matrix, [2, 1, 0])
        assert res.dtype is dtype
        assert res.tolist() == [[2, 2, 0], [8, 5, 0]]

    def test_input_unchanged(self, square_f64):
        multiply_diags(square_f64, [2.0, 2.0])
        assert square_f64.tolist() == [[1.0, 2.0], [3.0, 4.0]]

    def test_bounded_int_truncates_and_wraps(self):
        x = Matrix.from_rows([[3, 200]], dtype='u8')
        assert multiply_diags(x, [1.5, 2]).tolist() == [[4, 144]]

    def test_float32_rounds(self):
        x = Matrix.from_rows([[1.0]], dtype='f32')
        res = multiply_diags(x, [0.1])
        assert res.item(0, 0) == pytest.approx(0.1)
        assert res.item(0, 0) != 0.1

    def test_short_vector_leaves_zeros(self):
        x = Matrix.from_rows([[1, 2, 3]], dtype='f64')
        assert multiply_diags(x, [2]).tolist() == [[2.0, 0.0, 0.0]]
        assert multiply_diags(x, []).tolist() == [[0.0, 0.0, 0.0]]

    def test_long_vector_ignored(self):
        x = Matrix.from_rows([[1, 2, 3]], dtype='f64')
        assert multiply_diags(x, [2, 3, 4, 5]).tolist() == [[2.0, 6.0, 12.0]]

    def test_wide_exact(self):
        x = Matrix.from_rows([[2**40, 3]], dtype='i64')
        res = multiply_diags(x, [2**20, -1])
        assert res.tolist() == [[2**60, -3]]

    def test_wide_wraps(self):
        x = Matrix.from_rows([[2**63]], dtype='u64')
        assert multiply_diags(x, [2]).tolist() == [[0]]

    def test_wide_rejects_float_factor(self):
        x = Matrix.from_rows([[1, 2]], dtype='i64')
        with pytest.raises(DomainMismatchError):
            multiply_diags(x, [0.5, 0.5])

    def test_explicit_result_kind(self):
        x = Matrix.from_rows([[1, 2]], dtype='i64')
        res = multiply_diags(x, [0.5, 0.5], dtype='f64')
        assert res.dtype is DType.float64
        assert res.tolist() == [[0.5, 1.0]]

    def test_explicit_kind_stores_product(self):
        """The product is stored in the result kind; x is not truncated first."""
        x = Matrix.from_rows([[1.5, 2.7]], dtype='f64')
        assert multiply_diags(x, [2, 1], dtype='i32').tolist() == [[3, 2]]

    def test_ones_is_identity(self, small_matrix):
        assert multiply_diags(small_matrix, [1, 1, 1]) == small_matrix

    def test_ones_is_identity_floats(self):
        x = Matrix.from_rows([[0.1, -2.5], [1e30, 3.0]], dtype='f32')
        assert multiply_diags(x, [1.0, 1.0]) == x

    def test_explicit_wide_result_from_floats(self):
        x = Matrix.from_rows([[1.0, 2.5]], dtype='f64')
        assert multiply_diags(x, [3], dtype='i64').tolist()[0][0] == 3
        with pytest.raises(DomainMismatchError):
            multiply_diags(x, [3, 1], dtype='i64')

    def test_array_factors(self):
        x = Matrix.from_rows([[1, 1]], dtype='f64')
        scale = Array.from_list([0.25, 4.0], 'f64')
        assert multiply_diags(x, scale).tolist() == [[0.25, 4.0]]

    def test_numpy_factors(self):
        x = Matrix.from_rows([[1, 1]], dtype='i32')
        assert multiply_diags(x, np.array([3, 4])).tolist() == [[3, 4]]

    def test_matrix_like_input(self):
        obj = types.SimpleNamespace(data=np.array([1.0, 2.0, 3.0, 4.0]), shape=(2, 2))
        res = multiply_diags(obj, [1.0, -1.0])
        assert isinstance(res, Matrix)
        assert res.tolist() == [[1.0, -2.0], [3.0, -4.0]]

    def test_not_matrix_like(self):
        with pytest.raises(UnsupportedConstructorInputError):
            multiply_diags([[1.0, 2.0]], [1.0, 1.0])

    def test_empty(self):
        x = Matrix.zeros('f64', (0, 3))
        assert multiply_diags(x, [1, 2, 3]).shape == (0, 3)
