"""
Common data types for the LDL' backends.

Contains the frozen parameter payload that goes inside Result[P]
envelopes, and the helpers both backends use to fill it.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pycholesky.core.compute.linalg.ldlt import (
    LDLTFactors,
    ldlt_determinant,
    ldlt_log_determinant,
)


@dataclass(frozen=True)
class LDLTParams:
    """
    Parameter payload for an LDL' decomposition.

    Pure data container: L D L' = M, det(M) = prod(D).
    """
    L: NDArray                      # unit lower triangular (n, n)
    D: NDArray                      # pivots (n,)
    determinant: Any                # float or complex
    log_determinant: tuple[Any, float]   # (sign, log|det|)


def build_params(factors: LDLTFactors) -> LDLTParams:
    return LDLTParams(
        L=factors.L,
        D=factors.D,
        determinant=ldlt_determinant(factors.D),
        log_determinant=ldlt_log_determinant(factors.D),
    )


def pivot_warnings(D: NDArray[Any]) -> list[str]:
    """
    Describe degenerate pivots left in a non-strict decomposition.

    Zero pivots are reported at their index; everything after them is
    non-finite as a consequence, so only the first non-finite pivot
    is reported.
    """
    messages = []
    zero_idx = np.flatnonzero(D == 0)
    if zero_idx.size:
        messages.append(
            f"zero pivot(s) at {zero_idx.tolist()}: matrix is singular, "
            f"solve/inverse results are non-finite"
        )
    bad = np.flatnonzero(~np.isfinite(D))
    if bad.size:
        messages.append(
            f"non-finite pivot at index {int(bad[0])}: decomposition is "
            f"numerically invalid from there on"
        )
    return messages


def pivot_info(D: NDArray[Any]) -> dict[str, Any]:
    """Pivot statistics recorded in Result.info."""
    if D.size == 0:
        return {'min_abs_pivot': None, 'max_abs_pivot': None}
    magnitudes = np.abs(D)
    return {
        'min_abs_pivot': float(np.min(magnitudes)),
        'max_abs_pivot': float(np.max(magnitudes)),
    }
