"""
Exception hierarchy for pycholesky.

All exceptions inherit from PyCholeskyError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyCholeskyError(Exception):
    """Base exception for all pycholesky errors."""
    pass


class ValidationError(PyCholeskyError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array has the wrong number of dimensions.

    Raised when a matrix argument is not 2D or a right-hand side is
    neither 1D nor 2D.
    """
    pass


class DimensionMismatchError(DimensionError):
    """
    Array sizes disagree.

    Raised when a matrix is not square, or when its size (or the length /
    row count of a right-hand side) differs from the size the
    decomposition was configured with. Always raised before any
    computation starts.

    Attributes:
        name: Parameter name of the offending array
        expected: Size that was required
        actual: Size that was supplied
    """

    def __init__(
        self,
        message: str,
        name: str | None = None,
        expected: int | None = None,
        actual: int | None = None
    ):
        super().__init__(message)
        self.name = name
        self.expected = expected
        self.actual = actual


class NumericalError(PyCholeskyError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    A pivot of the decomposition is zero or nearly zero.

    Only raised in strict mode, or with exact (object dtype) arithmetic
    where a zero pivot has no non-finite representation.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Column at which the degenerate pivot appeared
        pivot_value: The pivot D[pivot_index]
        tolerance: Pivot tolerance in effect, if any
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
        pivot_value: complex | float | None = None,
        tolerance: float | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index
        self.pivot_value = pivot_value
        self.tolerance = tolerance


class NotDecomposedError(PyCholeskyError):
    """
    Operation requires a decomposition that has not been computed.

    Raised when substitution, inverse, determinant or factor access is
    requested from a Cholesky engine constructed from a size alone,
    before compute() was called.
    """
    pass
