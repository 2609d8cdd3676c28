"""
Numerical precision constants and utilities.

Resolves the precision a decomposition works in and provides the
machine epsilon and pivot tolerance derived from it.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any

from pycholesky.core.exceptions import ValidationError


# Machine epsilon for float64
EPSILON_64: float = np.finfo(np.float64).eps  # ~2.22e-16

# Machine epsilon for float32
EPSILON_32: float = np.finfo(np.float32).eps  # ~1.19e-7

# Precisions the decomposition accepts. object holds exact scalars; int,
# float and Decimal entries are converted to fractions.Fraction.
SUPPORTED_DTYPES: tuple[np.dtype, ...] = (
    np.dtype(np.float32),
    np.dtype(np.float64),
    np.dtype(np.complex64),
    np.dtype(np.complex128),
    np.dtype(object),
)


def resolve_dtype(
    dtype: np.dtype | type | str | None,
    default: np.dtype | None = None
) -> np.dtype:
    """
    Resolve the working precision of a decomposition.

    Args:
        dtype: Requested precision, or None to infer from default
        default: dtype of the input matrix, if one is available

    Returns:
        A dtype from SUPPORTED_DTYPES. Integer and boolean defaults are
        promoted to float64.

    Raises:
        ValidationError: If the requested dtype is not supported
    """
    if dtype is None:
        if default is None:
            return np.dtype(np.float64)
        default = np.dtype(default)
        if default in SUPPORTED_DTYPES:
            return default
        if np.issubdtype(default, np.integer) or default == np.bool_:
            return np.dtype(np.float64)
        raise ValidationError(
            f"unsupported input dtype {default}; expected one of "
            f"{[str(d) for d in SUPPORTED_DTYPES]}"
        )

    try:
        resolved = np.dtype(dtype)
    except TypeError as e:
        raise ValidationError(f"dtype: not a valid dtype: {dtype!r}") from e

    if resolved not in SUPPORTED_DTYPES:
        raise ValidationError(
            f"dtype: unsupported precision {resolved}; expected one of "
            f"{[str(d) for d in SUPPORTED_DTYPES]}"
        )
    return resolved


def is_exact(dtype: np.dtype) -> bool:
    """True if dtype holds exact Python scalars rather than IEEE floats."""
    return np.dtype(dtype) == np.dtype(object)


def machine_epsilon(dtype: np.dtype | type = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.

    Exact (object) dtypes have no rounding, so their epsilon is 0.

    Args:
        dtype: NumPy dtype or type

    Returns:
        Machine epsilon for the dtype
    """
    if is_exact(np.dtype(dtype)):
        return 0.0
    return float(np.finfo(dtype).eps)


def default_pivot_tolerance(matrix: NDArray[Any], dtype: np.dtype) -> float:
    """
    Default tolerance below which a pivot counts as degenerate.

    tol = N * eps(dtype) * max|diag(M)|, the same scaling used to
    determine numerical rank from the diagonal of a triangular factor.

    Args:
        matrix: Square input matrix (N x N)
        dtype: Working precision

    Returns:
        Non-negative tolerance; 0.0 for an empty matrix
    """
    n = matrix.shape[0]
    if n == 0:
        return 0.0
    scale = max(abs(complex(v)) for v in np.diag(matrix))
    return n * machine_epsilon(dtype) * scale
