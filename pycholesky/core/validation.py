"""
Input validation utilities for pycholesky.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion (except np.asarray on array-likes)
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pycholesky.core.exceptions import (
    ValidationError,
    DimensionError,
    DimensionMismatchError,
)


def check_array(
    array: ArrayLike,
    name: str,
    allow_exact: bool = False,
) -> NDArray[Any]:
    """
    Validate and convert input to numpy array.

    Accepts any array-like and converts to numpy array. Object dtype is
    rejected unless allow_exact is True, in which case it is taken to hold
    exact scalars (e.g. fractions.Fraction).

    Args:
        array: Input to validate
        name: Parameter name for error messages
        allow_exact: Accept object dtype arrays

    Returns:
        numpy.ndarray with floating, complex or (if allowed) object dtype

    Raises:
        ValidationError: If input cannot be converted to numeric array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        if allow_exact:
            return result
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    # Reject non-numeric dtypes (strings, bytes, datetime, etc.)
    if not (np.issubdtype(result.dtype, np.number) or result.dtype == np.bool_):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if not np.issubdtype(result.dtype, np.inexact):
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[Any], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Args:
        array: Array to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If array contains non-finite values
    """
    if array.dtype == object:
        values = np.array([complex(v) for v in array.ravel()], dtype=np.complex128)
    else:
        values = array
    if not np.all(np.isfinite(values)):
        n_nan = int(np.sum(np.isnan(values)))
        n_inf = int(np.sum(np.isinf(values)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[Any], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Args:
        array: Array to check
        ndim: Required number of dimensions
        name: Parameter name for error messages

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_2d(array: NDArray[Any], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_square(array: NDArray[Any], name: str) -> None:
    """
    Verify a 2D array is square.

    Args:
        array: 2D array to check
        name: Parameter name for error messages

    Raises:
        DimensionMismatchError: If the row and column counts differ
    """
    n_rows, n_cols = array.shape
    if n_rows != n_cols:
        raise DimensionMismatchError(
            f"{name}: expected a square matrix, got shape {array.shape}",
            name=name,
            expected=n_rows,
            actual=n_cols,
        )


def check_size(array: NDArray[Any], size: int, name: str) -> None:
    """
    Verify the first dimension of an array equals a configured size.

    Covers the row count of a matrix and the length of a vector.

    Args:
        array: Array to check (at least 1D)
        size: Required length of the first dimension
        name: Parameter name for error messages

    Raises:
        DimensionMismatchError: If the first dimension differs from size
    """
    actual = array.shape[0]
    if actual != size:
        raise DimensionMismatchError(
            f"{name}: expected first dimension {size}, got {actual} "
            f"(shape {array.shape})",
            name=name,
            expected=size,
            actual=actual,
        )


def check_rhs(array: NDArray[Any], size: int, name: str) -> None:
    """
    Verify a right-hand side is a vector or matrix with `size` rows.

    Args:
        array: Right-hand side (1D vector or 2D matrix)
        size: Required length / row count
        name: Parameter name for error messages

    Raises:
        DimensionError: If array is neither 1D nor 2D
        DimensionMismatchError: If its length / row count differs from size
    """
    if array.ndim not in (1, 2):
        raise DimensionError(
            f"{name}: expected 1D vector or 2D matrix, got {array.ndim}D "
            f"with shape {array.shape}"
        )
    check_size(array, size, name)
