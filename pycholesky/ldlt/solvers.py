"""
Solver dispatch for LDL' decomposition.

Provides ldlt() as the primary entry point, plus one-shot helpers
solve(), inv() and det() that decompose and immediately use the result.
"""

from __future__ import annotations

from typing import Any, Literal
import warnings

from numpy.typing import ArrayLike, NDArray

from pycholesky.core.compute.device import select_device
from pycholesky.core.exceptions import ValidationError
from pycholesky.ldlt.design import LDLTDesign
from pycholesky.ldlt.solution import LDLTSolution
from pycholesky.ldlt.backends.cpu import CPULDLTBackend


BackendChoice = Literal['auto', 'cpu', 'gpu']


def _ensure_design(matrix: ArrayLike | LDLTDesign) -> LDLTDesign:
    """Convert raw array to LDLTDesign if needed."""
    if isinstance(matrix, LDLTDesign):
        return matrix
    return LDLTDesign.from_array(matrix)


def _get_backend(
    backend: BackendChoice,
    design: LDLTDesign,
    *,
    strict: bool,
    pivot_tol: float | None,
    use_fp64: bool,
):
    """Select backend based on preference."""
    if backend == 'cpu':
        return CPULDLTBackend(strict=strict, pivot_tol=pivot_tol)

    if backend == 'auto':
        device = select_device('auto')
        if not device.is_gpu or design.dtype.kind == 'c':
            return CPULDLTBackend(strict=strict, pivot_tol=pivot_tol)
        if use_fp64 and not device.supports_fp64:
            return CPULDLTBackend(strict=strict, pivot_tol=pivot_tol)
        from pycholesky.ldlt.backends.gpu import GPULDLTBackend
        return GPULDLTBackend(
            device=device, use_fp64=use_fp64, strict=strict, pivot_tol=pivot_tol,
        )

    if backend == 'gpu':
        device = select_device('gpu')
        from pycholesky.ldlt.backends.gpu import GPULDLTBackend
        return GPULDLTBackend(
            device=device, use_fp64=use_fp64, strict=strict, pivot_tol=pivot_tol,
        )

    raise ValidationError(f"Unknown backend: {backend!r}")


def ldlt(
    matrix: ArrayLike | LDLTDesign,
    *,
    strict: bool = False,
    pivot_tol: float | None = None,
    backend: BackendChoice = 'cpu',
    use_fp64: bool = False,
) -> LDLTSolution:
    """
    Square-root-free Cholesky decomposition M = L D L'.

    Only the lower triangle of `matrix` is read. No pivoting is performed:
    a zero pivot makes the factors non-finite. In that case the solution
    carries a warning and a RuntimeWarning is emitted, unless strict=True,
    which raises instead.

    Parameters
    ----------
    matrix : array-like or LDLTDesign
        Square symmetric matrix.
    strict : bool
        Raise ValidationError on non-finite input and SingularMatrixError
        on degenerate pivots.
    pivot_tol : float, optional
        Strict-mode pivot tolerance. Default N * eps * max|diag(M)|.
    backend : str
        'cpu' (default), 'gpu', or 'auto' (GPU when available, real input).
    use_fp64 : bool
        GPU only: compute in float64 instead of float32.

    Returns
    -------
    LDLTSolution

    Example
    -------
    >>> sol = ldlt([[4.0, 2.0], [2.0, 3.0]])
    >>> sol.D
    array([4., 2.])
    >>> sol.solve([1.0, 1.0])
    array([0.125, 0.25 ])
    """
    design = _ensure_design(matrix)
    be = _get_backend(
        backend, design, strict=strict, pivot_tol=pivot_tol, use_fp64=use_fp64,
    )
    result = be.solve(design)

    for message in result.warnings:
        warnings.warn(message, RuntimeWarning, stacklevel=2)

    return LDLTSolution(_result=result, _design=design)


def solve(matrix: ArrayLike | LDLTDesign, b: ArrayLike, **kwargs: Any) -> NDArray[Any]:
    """Solve M x = b (vector or matrix b) via ldlt(M). kwargs go to ldlt()."""
    return ldlt(matrix, **kwargs).solve(b)


def inv(matrix: ArrayLike | LDLTDesign, **kwargs: Any) -> NDArray[Any]:
    """M^-1 via ldlt(M). kwargs go to ldlt()."""
    return ldlt(matrix, **kwargs).inverse


def det(matrix: ArrayLike | LDLTDesign, **kwargs: Any) -> Any:
    """det(M) = prod(D) via ldlt(M). kwargs go to ldlt()."""
    return ldlt(matrix, **kwargs).determinant
