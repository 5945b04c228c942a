"""
Pytest configuration and shared fixtures for densekit tests.
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

from densekit import config
from densekit.dense import DType, Matrix


ALL_DTYPES = list(DType)
WIDE_DTYPES = [DType.uint64, DType.int64]
FLOAT_DTYPES = [DType.float32, DType.float64]


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    """Every test starts from default configuration."""
    monkeypatch.delenv("DENSEKIT_BOUNDS_CHECK", raising=False)
    monkeypatch.delenv("DENSEKIT_MAX_ROWS", raising=False)
    config.reset()
    yield
    monkeypatch.delenv("DENSEKIT_BOUNDS_CHECK", raising=False)
    monkeypatch.delenv("DENSEKIT_MAX_ROWS", raising=False)
    config.reset()


@pytest.fixture(params=ALL_DTYPES, ids=str)
def dtype(request):
    """Each of the ten element kinds."""
    return request.param


@pytest.fixture
def small_matrix(dtype):
    """2x3 matrix of small non-negative values, valid for every kind.

    Matrix:
    [[1, 2, 3],
     [4, 5, 6]]
    """
    return Matrix.from_rows([[1, 2, 3], [4, 5, 6]], dtype=dtype)


@pytest.fixture
def tf_matrix():
    """2-document, 3-feature term-frequency matrix."""
    return Matrix.from_rows([[1, 0, 2], [0, 1, 1]], dtype='f64')


@pytest.fixture
def square_f64():
    """Create a small square float64 matrix.

    Matrix:
    [[1, 2],
     [3, 4]]
    """
    return Matrix.from_rows([[1.0, 2.0], [3.0, 4.0]], dtype='f64')

