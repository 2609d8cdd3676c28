"""
Cholesky: stateful square-root-free Cholesky (LDL') decomposition engine.

Owns one packed N x N buffer (see pycholesky.core.compute.linalg.ldlt for
the layout), computes the decomposition from the lower triangle of a
symmetric matrix, and solves, inverts and takes determinants from it.

    >>> chol = Cholesky([[4.0, 2.0], [2.0, 3.0]])
    >>> chol.D
    array([4., 2.])
    >>> float(chol.determinant())
    8.0
    >>> chol.backsub([1.0, 1.0])
    array([0.125, 0.25 ])

An engine built from a size alone is Empty until compute() is called:

    >>> chol = Cholesky(size=3)
    >>> chol.is_decomposed
    False
"""

from __future__ import annotations

from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pycholesky.core.exceptions import NotDecomposedError, ValidationError
from pycholesky.core.validation import (
    check_array,
    check_2d,
    check_square,
    check_size,
    check_finite,
    check_rhs,
)
from pycholesky.core.compute.precision import (
    resolve_dtype,
    default_pivot_tolerance,
)
from pycholesky.core.compute.linalg.ldlt import (
    as_working_array,
    ldlt_factor_cpu,
    ldlt_substitute_cpu,
    ldlt_unpack,
    ldlt_determinant,
    ldlt_log_determinant,
)


class Cholesky:
    """
    LDL' decomposition of a symmetric matrix, M = L D L'.

    Only the lower triangle (and diagonal) of M is read, so an asymmetric
    input is decomposed as the symmetric matrix its lower triangle implies.
    No pivoting: a zero pivot makes the results non-finite rather than
    raising, unless strict=True.

    Parameters
    ----------
    matrix : array-like, optional
        Square matrix to decompose immediately.
    size : int, optional
        Fixed size N. Without a matrix the engine starts Empty; with a
        matrix, a matrix of any other size is rejected.
    dtype : dtype, optional
        Working precision: float32, float64, complex64, complex128 or
        object (exact scalars such as fractions.Fraction). Defaults to the
        matrix's floating dtype, else float64.
    strict : bool
        Reject non-finite input and degenerate pivots with
        ValidationError / SingularMatrixError.
    pivot_tol : float, optional
        Strict-mode pivot tolerance. Defaults to N * eps * max|diag(M)|.

    Raises
    ------
    ValidationError
        If neither matrix nor size is given, or size is negative.
    DimensionMismatchError
        If matrix is not square or disagrees with size.
    """

    def __init__(
        self,
        matrix: ArrayLike | None = None,
        *,
        size: int | None = None,
        dtype: np.dtype | type | str | None = None,
        strict: bool = False,
        pivot_tol: float | None = None,
    ):
        if matrix is None and size is None:
            raise ValidationError(
                "Cholesky requires a matrix to decompose or a size"
            )
        if size is not None and (
            isinstance(size, (bool, np.bool_))
            or not isinstance(size, (int, np.integer))
            or size < 0
        ):
            raise ValidationError(f"size: expected a non-negative integer, got {size!r}")
        if pivot_tol is not None and pivot_tol < 0:
            raise ValidationError(f"pivot_tol: must be non-negative, got {pivot_tol}")

        self._strict = strict
        self._pivot_tol = pivot_tol
        self._decomposed = False

        if matrix is None:
            self._size = int(size)
            self._dtype = resolve_dtype(dtype)
            self._buffer = np.zeros((self._size, self._size), dtype=self._dtype)
            return

        m = self._check_matrix(matrix)
        self._size = int(size) if size is not None else m.shape[0]
        self._dtype = resolve_dtype(dtype, default=m.dtype)
        self._buffer = np.zeros((self._size, self._size), dtype=self._dtype)
        self._compute_checked(m)

    # ------------------------------------------------------------------
    # Decomposition
    # ------------------------------------------------------------------

    def compute(self, matrix: ArrayLike) -> None:
        """
        Decompose `matrix` in place of any previous decomposition.

        All checks run before any arithmetic. On failure the engine keeps
        its previous state.

        Raises
        ------
        DimensionError
            If matrix is not 2D.
        DimensionMismatchError
            If matrix is not square or its size differs from the engine's.
        ValidationError
            If matrix is complex and the engine's precision is real.
        SingularMatrixError
            In strict mode on a degenerate pivot, or on a zero pivot with
            exact (object) precision.
        """
        self._compute_checked(self._check_matrix(matrix))

    def _check_matrix(self, matrix: ArrayLike) -> NDArray[Any]:
        m = check_array(matrix, "matrix", allow_exact=True)
        check_2d(m, "matrix")
        check_square(m, "matrix")
        return m

    def _compute_checked(self, m: NDArray[Any]) -> None:
        check_size(m, self._size, "matrix")
        self._check_precision(m, "matrix")

        pivot_tol = None
        if self._strict:
            check_finite(m, "matrix")
            pivot_tol = self._pivot_tol
            if pivot_tol is None:
                pivot_tol = default_pivot_tolerance(m, self._dtype)

        buffer = ldlt_factor_cpu(
            m, self._dtype, pivot_tol=pivot_tol, matrix_name="matrix"
        )
        self._buffer = buffer
        self._decomposed = True

    def _check_precision(self, array: NDArray[Any], name: str) -> None:
        if np.iscomplexobj(array) and self._dtype.kind == 'f':
            raise ValidationError(
                f"{name}: complex values cannot be represented in the "
                f"engine's {self._dtype} precision; use a complex dtype"
            )

    # ------------------------------------------------------------------
    # Operations on the decomposition
    # ------------------------------------------------------------------

    def _require_decomposed(self) -> NDArray[Any]:
        if not self._decomposed:
            raise NotDecomposedError(
                "Cholesky has no decomposition yet; call compute(matrix) first"
            )
        return self._buffer

    def backsub(self, rhs: ArrayLike) -> NDArray[Any]:
        """
        Solve M x = v (1D rhs) or M X = B (2D rhs).

        Parameters
        ----------
        rhs : array-like
            Vector of length N or matrix with N rows.

        Returns
        -------
        ndarray
            Fresh solution array, same shape as rhs, in the engine's dtype.

        Raises
        ------
        NotDecomposedError
            If compute() has not been called.
        DimensionError
            If rhs is neither 1D nor 2D.
        DimensionMismatchError
            If the length / row count of rhs is not N.
        ValidationError
            If rhs is complex and the engine's precision is real.
        """
        buffer = self._require_decomposed()
        b = check_array(rhs, "rhs", allow_exact=True)
        check_rhs(b, self._size, "rhs")
        self._check_precision(b, "rhs")
        return ldlt_substitute_cpu(buffer, as_working_array(b, self._dtype))

    def get_inverse(self) -> NDArray[Any]:
        """
        M^-1, by solving against the identity.

        Prefer backsub() when only a solve is needed; inverting costs more
        and is less accurate.
        """
        buffer = self._require_decomposed()
        identity = as_working_array(np.eye(self._size, dtype=np.int64), self._dtype)
        return ldlt_substitute_cpu(buffer, identity)

    def determinant(self) -> Any:
        """det(M) = D[0] * D[1] * ... * D[N-1]."""
        buffer = self._require_decomposed()
        return ldlt_determinant(np.diagonal(buffer))

    def log_determinant(self) -> tuple[Any, float]:
        """(sign, log|det(M)|), matching numpy.linalg.slogdet."""
        buffer = self._require_decomposed()
        return ldlt_log_determinant(np.diagonal(buffer))

    def reconstruct(self) -> NDArray[Any]:
        """L D L', which equals M (lower triangle mirrored) up to rounding."""
        factors = ldlt_unpack(self._require_decomposed())
        return (factors.L * factors.D) @ factors.L.T

    @property
    def L(self) -> NDArray[Any]:
        """Unit lower triangular factor (fresh copy)."""
        return ldlt_unpack(self._require_decomposed()).L

    @property
    def D(self) -> NDArray[Any]:
        """Pivots, the diagonal of D (fresh copy)."""
        return ldlt_unpack(self._require_decomposed()).D

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @property
    def size(self) -> int:
        return self._size

    @property
    def shape(self) -> tuple[int, int]:
        return (self._size, self._size)

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def is_decomposed(self) -> bool:
        return self._decomposed

    def __repr__(self) -> str:
        state = "decomposed" if self._decomposed else "empty"
        return f"Cholesky(size={self._size}, dtype={self._dtype}, {state})"
