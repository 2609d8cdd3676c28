"""
pycholesky: square-root-free Cholesky (LDL') decomposition for Python.

Decomposes a symmetric matrix as M = L D L' (L unit lower triangular,
D diagonal) and solves, inverts and takes determinants from the factors,
with an optional PyTorch GPU path.

Entry points:
    Cholesky: stateful engine (compute / backsub / get_inverse / determinant)
    ldlt: functional decomposition returning an LDLTSolution
    solve, inv, det: one-shot helpers
"""

__version__ = "0.1.0"

from pycholesky.core.exceptions import (
    PyCholeskyError,
    ValidationError,
    DimensionError,
    DimensionMismatchError,
    NumericalError,
    SingularMatrixError,
    NotDecomposedError,
)
from pycholesky.ldlt import (
    Cholesky,
    LDLTDesign,
    LDLTParams,
    LDLTSolution,
    ldlt,
    solve,
    inv,
    det,
)

__all__ = [
    "__version__",
    # Engine and functional API
    "Cholesky",
    "ldlt",
    "solve",
    "inv",
    "det",
    "LDLTDesign",
    "LDLTParams",
    "LDLTSolution",
    # Exceptions
    "PyCholeskyError",
    "ValidationError",
    "DimensionError",
    "DimensionMismatchError",
    "NumericalError",
    "SingularMatrixError",
    "NotDecomposedError",
]
