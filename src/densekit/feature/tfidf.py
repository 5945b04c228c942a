"""
TF-IDF Weighting.

Turns a term-frequency matrix (rows are documents, columns are features, as
produced by a count vectorizer) into tf-idf features:

    freq[j] = sum of column j over all documents
    idf[j]  = ln(n_documents / freq[j]) + 1
    tfidf   = tf @ diag(idf)

``freq`` is the total term count of a feature across the corpus, not the
number of documents containing it.
"""

from __future__ import annotations

import logging
import math
import warnings
from typing import Optional, Sequence, Union

from densekit._errors import UninitializedError
from densekit.dense import Array, DType, Matrix, MatrixLike, multiply_diags, validate_dtype

__all__ = ["TfIdfTransformer"]

logger = logging.getLogger("densekit.feature")


def _log_ratio(samples: float, freq: float) -> float:
    """``ln(samples / freq)`` with IEEE results instead of exceptions."""
    if freq == 0:
        ratio = math.nan if samples == 0 else math.inf
    else:
        ratio = samples / freq
    if math.isnan(ratio) or ratio < 0:
        return math.nan
    if ratio == 0:
        return -math.inf
    return math.log(ratio)


class TfIdfTransformer:
    """Convert tf features (CountVectorizer) into tf-idf features.

    Args:
        idf: Precomputed inverse document frequencies. When given, the
            transformer is usable without calling ``fit``.
        dtype: Element kind of transformed matrices. Defaults to the kind of
            the input matrix; pass ``"f64"`` to get floating output from
            integer counts.

    Example:
        >>> tf = Matrix.from_rows([[1, 0, 2], [0, 1, 1]], dtype='f64')
        >>> model = TfIdfTransformer().fit(tf)
        >>> [round(v, 3) for v in model.idf]
        [1.693, 1.693, 0.595]
    """

    def __init__(
        self,
        idf: Optional[Sequence[float]] = None,
        dtype: Optional[Union[str, DType]] = None,
    ):
        self.idf: Optional[Array] = None if idf is None else Array.from_list(list(idf), 'f64')
        self.dtype = None if dtype is None else validate_dtype(dtype)

    @property
    def is_fitted(self) -> bool:
        return self.idf is not None

    def fit(self, data: Union[Matrix, MatrixLike]) -> "TfIdfTransformer":
        """Get idf vector from tf features.

        Args:
            data: tf features, documents by features.

        Returns:
            The transformer itself.
        """
        if not isinstance(data, Matrix):
            data = Matrix.from_matrix_like(data)

        samples = data.n_rows
        freq = data.row_sum()

        idf = Array(freq.size, 'f64')
        non_finite = 0
        for i, f in enumerate(freq):
            value = _log_ratio(float(samples), float(f)) + 1
            if not math.isfinite(value):
                non_finite += 1
            idf[i] = value

        if non_finite:
            warnings.warn(
                f"{non_finite} of {idf.size} features have a non-finite idf "
                f"(zero or negative total frequency, or no documents)",
                RuntimeWarning,
                stacklevel=2,
            )

        logger.info("Fitted idf over %d documents and %d features", samples, idf.size)
        self.idf = idf
        return self

    def transform(self, data: Union[Matrix, MatrixLike]) -> Matrix:
        """Transform tf features into tf-idf features.

        Raises:
            UninitializedError: If neither ``fit`` nor an ``idf`` was given.
        """
        if self.idf is None:
            raise UninitializedError("IDF not initialized yet; call fit() first")
        return multiply_diags(data, self.idf, dtype=self.dtype)

    def fit_transform(self, data: Union[Matrix, MatrixLike]) -> Matrix:
        """Fit on ``data`` and return its tf-idf features."""
        return self.fit(data).transform(data)

    def __repr__(self) -> str:
        n = "unfitted" if self.idf is None else f"{self.idf.size} features"
        return f"TfIdfTransformer({n})"
