"""
Square-root-free Cholesky (LDL') kernels.

Factorizes a symmetric matrix as M = L D L' with L unit lower triangular
and D diagonal, packed into one N x N buffer:

    row > col   L[row, col]
    row == col  D[col]
    row < col   scratch: L[col, row] * D[row], written while column `row`
                is processed and read back by later columns

Only the lower triangle (and diagonal) of the input is read. Substitution,
determinant and factor extraction read only the diagonal and the strict
lower triangle of the buffer; the scratch triangle is never consulted
after factorization.

CPU kernels operate on NumPy arrays of any supported precision, including
object arrays of exact scalars. GPU kernels operate on PyTorch tensors
already placed on the target device.

No pivoting is performed. A zero pivot yields inf/nan that propagate
through the rest of the factorization unless strict checking is on.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
import math
from numbers import Integral
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pycholesky.core.compute.precision import is_exact
from pycholesky.core.exceptions import SingularMatrixError

if TYPE_CHECKING:
    import torch


@dataclass(frozen=True)
class LDLTFactors:
    """
    Unpacked factors of an LDL' decomposition.

    Attributes:
        L: Unit lower triangular factor (N x N)
        D: Pivots, the diagonal of D (N,)
    """
    L: NDArray[Any]
    D: NDArray[Any]


def _exact_scalar(value: Any) -> Any:
    if isinstance(value, Integral):
        return Fraction(int(value))
    if isinstance(value, (float, np.floating)) and math.isfinite(value):
        return Fraction(float(value))
    if isinstance(value, Decimal) and value.is_finite():
        return Fraction(value)
    return value


_to_field = np.frompyfunc(_exact_scalar, 1, 1)


def as_working_array(array: NDArray[Any], dtype: np.dtype) -> NDArray[Any]:
    """
    Fresh copy of `array` in the working precision.

    For exact (object) precision, integer, finite float and finite Decimal
    entries become Fractions (floats at their exact binary value), so that
    every entry lives in one field and 1/pivot stays exact.
    """
    result = np.array(array, dtype=dtype, copy=True)
    if is_exact(dtype) and result.size:
        result = _to_field(result).astype(object)
    return result


def _is_degenerate(pivot: Any, tol: float) -> bool:
    if isinstance(pivot, (np.floating, np.complexfloating, float, complex)):
        if not np.isfinite(pivot):
            return True
    return abs(pivot) <= tol


def ldlt_factor_cpu(
    matrix: NDArray[Any],
    dtype: np.dtype,
    pivot_tol: float | None = None,
    matrix_name: str = 'M',
) -> NDArray[Any]:
    """
    Factorize a square matrix into a fresh packed LDL' buffer (CPU).

    Columns are processed left to right. Within a column, the updates of
    all rows below the diagonal are independent and evaluated at once:

        v[row] = M[row, col] - sum_{k<col} L[row, k] * (L[col, k] * D[k])

    v[col] is the pivot D[col]; the remaining v[row] are stored unscaled in
    the scratch cell (col, row) and scaled by 1/D[col] into L[row, col].

    Args:
        matrix: Square input (N x N); only its lower triangle is read
        dtype: Working precision
        pivot_tol: If not None, raise on the first pivot with
            |D[col]| <= pivot_tol or a non-finite pivot (strict mode)
        matrix_name: Name used in error messages

    Returns:
        Packed buffer of shape (N, N) and dtype `dtype`

    Raises:
        SingularMatrixError: If pivot_tol is set and a pivot is degenerate,
            or if an exact (object) pivot is zero
    """
    buf = as_working_array(np.tril(matrix), dtype)
    n = buf.shape[0]
    exact = is_exact(dtype)

    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        for col in range(n):
            vals = buf[col:, col].copy()
            if col > 0:
                vals = vals - buf[col:, :col] @ buf[:col, col]

            pivot = vals[0]
            if pivot_tol is not None and _is_degenerate(pivot, pivot_tol):
                raise SingularMatrixError(
                    f"{matrix_name}: degenerate pivot D[{col}] = {pivot} "
                    f"(tolerance {pivot_tol:.3g})",
                    matrix_name=matrix_name,
                    pivot_index=col,
                    pivot_value=pivot,
                    tolerance=pivot_tol,
                )

            if exact:
                try:
                    inv_pivot = 1 / pivot
                except ZeroDivisionError as e:
                    raise SingularMatrixError(
                        f"{matrix_name}: zero pivot D[{col}] in exact arithmetic",
                        matrix_name=matrix_name,
                        pivot_index=col,
                        pivot_value=pivot,
                        tolerance=pivot_tol,
                    ) from e
            else:
                inv_pivot = 1 / pivot

            buf[col, col] = pivot
            buf[col, col + 1:] = vals[1:]
            buf[col + 1:, col] = vals[1:] * inv_pivot

    return buf


def ldlt_substitute_cpu(buf: NDArray[Any], rhs: NDArray[Any]) -> NDArray[Any]:
    """
    Solve M X = B from a packed LDL' buffer (CPU).

    Three passes: forward through L, scale by 1/D, backward through L'.
    A 2D right-hand side is handled row-wise, each row of B being the
    right-hand sides for one equation.

    Args:
        buf: Packed buffer from ldlt_factor_cpu (N x N)
        rhs: Vector (N,) or matrix (N, C), already in the buffer's dtype

    Returns:
        Fresh array with the shape of rhs
    """
    n = buf.shape[0]
    diag = np.diagonal(buf)

    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        # L y = b
        y = np.empty_like(rhs)
        for i in range(n):
            val = rhs[i].copy() if rhs.ndim > 1 else rhs[i]
            if i > 0:
                val = val - buf[i, :i] @ y[:i]
            y[i] = val

        # D z = y
        if rhs.ndim == 1:
            y = y / diag
        else:
            y = y * (1 / diag)[:, np.newaxis]

        # L' x = z
        x = np.empty_like(y)
        for i in range(n - 1, -1, -1):
            val = y[i].copy() if y.ndim > 1 else y[i]
            if i < n - 1:
                val = val - buf[i + 1:, i] @ x[i + 1:]
            x[i] = val

    return x


def ldlt_unpack(buf: NDArray[Any]) -> LDLTFactors:
    """Extract fresh L and D arrays from a packed buffer."""
    n = buf.shape[0]
    L = np.tril(buf, k=-1)
    L[np.diag_indices(n)] = 1
    if is_exact(buf.dtype):
        L = as_working_array(L, buf.dtype)
    D = np.diagonal(buf).copy()
    return LDLTFactors(L=L, D=D)


def ldlt_determinant(D: NDArray[Any]) -> Any:
    """det(M) = prod(D) since det(L) = det(L') = 1."""
    if is_exact(D.dtype):
        answer = 1
        for pivot in D:
            answer = answer * pivot
        return answer
    return D.dtype.type(np.prod(D))


def ldlt_log_determinant(D: NDArray[Any]) -> tuple[Any, float]:
    """
    Sign and natural log of |det(M)|, as numpy.linalg.slogdet.

    A zero pivot gives (0, -inf). For complex precision the sign is a
    complex number of unit modulus.
    """
    values = D.astype(np.float64) if is_exact(D.dtype) else D
    complex_valued = np.iscomplexobj(values)

    if values.size == 0:
        return (1.0 + 0.0j if complex_valued else 1.0), 0.0

    if np.any(values == 0):
        return (0.0 + 0.0j if complex_valued else 0.0), float('-inf')

    magnitudes = np.abs(values)
    logabsdet = float(np.sum(np.log(magnitudes)))
    if complex_valued:
        sign = complex(np.prod(values / magnitudes))
    else:
        sign = float(np.prod(np.sign(values)))
    return sign, logabsdet


def find_degenerate_pivot(D: NDArray[Any], tol: float) -> int | None:
    """
    Index of the first pivot that is non-finite or has |D[i]| <= tol.

    Returns:
        The index, or None if every pivot is acceptable
    """
    for i, pivot in enumerate(D):
        if _is_degenerate(pivot, tol):
            return i
    return None


def ldlt_factor_gpu(matrix: 'torch.Tensor') -> 'torch.Tensor':
    """
    Factorize a square matrix into a packed LDL' buffer (GPU).

    Same column-by-column algorithm as ldlt_factor_cpu, on a tensor that
    already lives on the target device in the target dtype. Degenerate
    pivots are never checked here; callers inspect the diagonal afterwards.

    Args:
        matrix: Square tensor (N x N); only its lower triangle is read

    Returns:
        Packed buffer tensor on the same device
    """
    import torch

    buf = torch.tril(matrix).clone()
    n = buf.shape[0]

    for col in range(n):
        vals = buf[col:, col].clone()
        if col > 0:
            vals = vals - buf[col:, :col] @ buf[:col, col]
        pivot = vals[0]
        buf[col, col] = pivot
        buf[col, col + 1:] = vals[1:]
        buf[col + 1:, col] = vals[1:] * (1.0 / pivot)

    return buf

