"""
densekit Feature Module.

Feature weighting built on the dense Matrix core.

Submodules:
    - tfidf: Term-frequency / inverse-document-frequency weighting

Example:
    >>> from densekit.dense import Matrix
    >>> from densekit.feature import TfIdfTransformer
    >>>
    >>> tf = Matrix.from_rows([[1, 0, 2], [0, 1, 1]], dtype='f64')
    >>> weighted = TfIdfTransformer().fit_transform(tf)
"""

from densekit.feature.tfidf import TfIdfTransformer

__all__ = [
    "TfIdfTransformer",
]
