"""
LDL' solution types.

Contains the user-facing solution wrapper around Result[LDLTParams].
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.linalg import solve_triangular

from pycholesky.core.result import Result
from pycholesky.core.validation import check_array, check_rhs
from pycholesky.ldlt._common import LDLTParams

if TYPE_CHECKING:
    from pycholesky.ldlt.design import LDLTDesign


@dataclass
class LDLTSolution:
    """
    User-facing LDL' decomposition results.

    Wraps Result[LDLTParams] and provides solves, the inverse, the
    determinant and pivot diagnostics.
    """
    _result: Result[LDLTParams]
    _design: 'LDLTDesign'

    # --- Factors ---

    @property
    def L(self) -> NDArray[Any]:
        """Unit lower triangular factor, shape (n, n)."""
        return self._result.params.L

    @property
    def D(self) -> NDArray[Any]:
        """Pivots, shape (n,)."""
        return self._result.params.D

    @property
    def n(self) -> int:
        return self._design.n

    # --- Determinant ---

    @property
    def determinant(self) -> Any:
        return self._result.params.determinant

    @property
    def log_determinant(self) -> tuple[Any, float]:
        """(sign, log|det|), matching numpy.linalg.slogdet."""
        return self._result.params.log_determinant

    # --- Solves ---

    def solve(self, b: ArrayLike) -> NDArray[Any]:
        """
        Solve M x = b for a vector or a matrix of right-hand sides.

        Uses LAPACK unit-diagonal triangular solves on the stored factors:
        L z = b, then z / D, then L' x = z. Non-finite factors propagate
        into the result without raising.

        Raises
        ------
        DimensionError
            If b is neither 1D nor 2D.
        DimensionMismatchError
            If b's length / row count differs from n.
        """
        rhs = check_array(b, "b")
        check_rhs(rhs, self.n, "b")

        L, D = self.L, self.D
        with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
            z = solve_triangular(L, rhs, lower=True, unit_diagonal=True,
                                 check_finite=False)
            z = z / D if z.ndim == 1 else z / D[:, np.newaxis]
            return solve_triangular(L.T, z, lower=False, unit_diagonal=True,
                                    check_finite=False)

    @property
    def inverse(self) -> NDArray[Any]:
        """M^-1. Prefer solve() when only a solve is needed."""
        return self.solve(np.eye(self.n, dtype=self.L.dtype))

    def reconstruct(self) -> NDArray[Any]:
        """L D L'."""
        return (self.L * self.D) @ self.L.T

    # --- Pivot diagnostics ---

    @property
    def inertia(self) -> tuple[int, int, int]:
        """
        (positive, negative, zero) pivot counts.

        By Sylvester's law of inertia these are the eigenvalue sign counts
        of M. Complex pivots are classified by their real part.
        """
        real = np.real(self.D)
        return (
            int(np.sum(real > 0)),
            int(np.sum(real < 0)),
            int(np.sum(real == 0)),
        )

    @property
    def n_negative_pivots(self) -> int:
        return self.inertia[1]

    @property
    def min_pivot(self) -> float | None:
        """Smallest |D[i]|, or None for an empty matrix."""
        return self._result.info.get('min_abs_pivot')

    @property
    def is_positive_definite(self) -> bool:
        """True if every pivot is real, finite and strictly positive."""
        if np.iscomplexobj(self.D) and np.any(np.imag(self.D) != 0):
            return False
        real = np.real(self.D)
        return bool(np.all(np.isfinite(real)) and np.all(real > 0))

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def summary(self) -> str:
        """Plain-text report of the decomposition."""
        sign, logdet = self.log_determinant
        pos, neg, zero = self.inertia
        lines = [
            "LDL' decomposition",
            f"  size:            {self.n} x {self.n}",
            f"  backend:         {self.backend_name}",
            f"  determinant:     {self.determinant}",
            f"  log|det|:        {logdet:.6g} (sign {sign})",
            f"  inertia:         {pos} positive, {neg} negative, {zero} zero",
            f"  positive def.:   {'yes' if self.is_positive_definite else 'no'}",
        ]
        if self.n:
            lines.append("  pivots:")
            for i, d in enumerate(self.D):
                lines.append(f"    D[{i}] = {d:.6g}")
        for w in self.warnings:
            lines.append(f"  warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LDLTSolution(n={self.n}, backend={self.backend_name!r}, "
            f"positive_definite={self.is_positive_definite})"
        )
