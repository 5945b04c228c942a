"""
densekit - Dense Numeric Matrices

Small numeric-computing substrate for feature engineering:
- Row-major Matrix over ten fixed-width element kinds (u8 ... i64, f32, f64)
- Exact 64-bit integer arithmetic kept apart from float arithmetic
- Reductions, transpose, dot product and diagonal scaling
- TF-IDF weighting on top of the matrix core

Modules:
- dense: Array, Matrix, element-kind registry and operations
- feature: TfIdfTransformer

Example:
    >>> import densekit
    >>> from densekit import Matrix, TfIdfTransformer
    >>>
    >>> tf = Matrix.from_rows([[1, 0, 2], [0, 1, 1]], dtype=densekit.float64)
    >>> tf.row_sum().tolist()
    [1.0, 1.0, 3.0]
    >>> weighted = TfIdfTransformer().fit_transform(tf)
"""

__version__ = '0.1.0'

from . import dense
from . import feature
from ._config import config, get_config, IndexingConfig, DisplayConfig
from ._errors import (
    DenseKitError,
    ConstructionError,
    IncompleteShapeError,
    UnsupportedConstructorInputError,
    ShapeMismatchError,
    UnknownElementKindError,
    DomainMismatchError,
    UninitializedError,
)

# Re-export common types
from .dense import (
    Array,
    Matrix,
    DType,
    Domain,
    as_matrix,
    multiply_diags,
    uint8, uint16, uint32, uint64,
    int8, int16, int32, int64,
    float32, float64,
)
from .feature import TfIdfTransformer

__all__ = [
    '__version__',
    # Modules
    'dense',
    'feature',
    # Config
    'config',
    'get_config',
    'IndexingConfig',
    'DisplayConfig',
    # Errors
    'DenseKitError',
    'ConstructionError',
    'IncompleteShapeError',
    'UnsupportedConstructorInputError',
    'ShapeMismatchError',
    'UnknownElementKindError',
    'DomainMismatchError',
    'UninitializedError',
    # Core classes
    'Array',
    'Matrix',
    'DType',
    'Domain',
    'as_matrix',
    'multiply_diags',
    'TfIdfTransformer',
    # Type constants
    'uint8', 'uint16', 'uint32', 'uint64',
    'int8', 'int16', 'int32', 'int64',
    'float32', 'float64',
]
