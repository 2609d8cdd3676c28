"""
LDLTDesign: validated input wrapper for the functional LDL' API.

Wraps a square matrix and provides validation and metadata for the
backends. Follows the Design pattern: immutable after construction,
built through a classmethod.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pycholesky.core.validation import check_array, check_2d, check_square


@dataclass(frozen=True)
class LDLTDesign:
    """
    Design for an LDL' decomposition.

    Holds a square matrix in float64 (complex128 for complex input). Only
    the lower triangle is used by the decomposition; the upper triangle is
    kept solely to report whether the input was symmetric.

    Construction:
        LDLTDesign.from_array(matrix)
    """
    _matrix: NDArray[Any]
    _n: int

    @classmethod
    def from_array(cls, matrix: ArrayLike) -> LDLTDesign:
        """
        Build LDLTDesign from array-like data.

        Parameters
        ----------
        matrix : array-like
            Square matrix. numpy arrays, nested lists, or objects with a
            .values attribute (e.g. pandas DataFrame) are accepted.

        Raises
        ------
        ValidationError
            If the input is not numeric.
        DimensionError
            If the input is not 2D.
        DimensionMismatchError
            If the input is not square.
        """
        if hasattr(matrix, 'values'):
            matrix = matrix.values

        m = check_array(matrix, "matrix")
        check_2d(m, "matrix")
        check_square(m, "matrix")

        target = np.complex128 if np.iscomplexobj(m) else np.float64
        m = np.array(m, dtype=target, copy=True)
        return cls(_matrix=m, _n=m.shape[0])

    @property
    def matrix(self) -> NDArray[Any]:
        """Input matrix (n x n)."""
        return self._matrix

    @property
    def n(self) -> int:
        """Matrix size."""
        return self._n

    @property
    def dtype(self) -> np.dtype:
        return self._matrix.dtype

    @property
    def is_symmetric(self) -> bool:
        """Whether the upper triangle mirrors the lower one exactly."""
        return bool(np.array_equal(self._matrix, self._matrix.T, equal_nan=True))

    @property
    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite(self._matrix)))

    def __repr__(self) -> str:
        return f"LDLTDesign(n={self._n}, dtype={self.dtype})"
