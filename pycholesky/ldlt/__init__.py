"""
LDL' decomposition module.

Public API:
    Cholesky(matrix)  - Stateful engine: compute, backsub, get_inverse,
                        determinant
    ldlt(matrix)      - Decompose and return an LDLTSolution
    solve(matrix, b)  - Solve M x = b
    inv(matrix)       - M^-1
    det(matrix)       - det(M)
"""

from pycholesky.ldlt.engine import Cholesky
from pycholesky.ldlt.design import LDLTDesign
from pycholesky.ldlt._common import LDLTParams
from pycholesky.ldlt.solution import LDLTSolution
from pycholesky.ldlt.solvers import ldlt, solve, inv, det

__all__ = [
    "Cholesky",
    "ldlt",
    "solve",
    "inv",
    "det",
    "LDLTDesign",
    "LDLTParams",
    "LDLTSolution",
]
