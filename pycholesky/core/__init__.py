"""
Core infrastructure for pycholesky.

Shared abstractions and utilities used by the ldlt package.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Device selection, timing, precision, tolerances, kernels
"""

from pycholesky.core.protocols import Backend
from pycholesky.core.result import Result
from pycholesky.core.exceptions import (
    PyCholeskyError,
    ValidationError,
    DimensionError,
    DimensionMismatchError,
    NumericalError,
    SingularMatrixError,
    NotDecomposedError,
)

__all__ = [
    # Protocols
    "Backend",
    # Result
    "Result",
    # Exceptions
    "PyCholeskyError",
    "ValidationError",
    "DimensionError",
    "DimensionMismatchError",
    "NumericalError",
    "SingularMatrixError",
    "NotDecomposedError",
]
