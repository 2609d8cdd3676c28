"""
CPU reference backend for LDL' decomposition.

Runs the Cholesky engine in float64 (complex128 for complex input).
"""

from __future__ import annotations

from pycholesky.core.result import Result
from pycholesky.core.compute.timing import Timer
from pycholesky.core.compute.linalg.ldlt import LDLTFactors
from pycholesky.ldlt.engine import Cholesky
from pycholesky.ldlt.design import LDLTDesign
from pycholesky.ldlt._common import (
    LDLTParams,
    build_params,
    pivot_warnings,
    pivot_info,
)


class CPULDLTBackend:
    """CPU reference backend for LDL' decomposition."""

    def __init__(self, strict: bool = False, pivot_tol: float | None = None):
        """
        Parameters
        ----------
        strict : bool
            Raise on non-finite input or degenerate pivots.
        pivot_tol : float, optional
            Strict-mode pivot tolerance (see Cholesky).
        """
        self.strict = strict
        self.pivot_tol = pivot_tol

    @property
    def name(self) -> str:
        return 'cpu_ldlt'

    def solve(self, design: LDLTDesign) -> Result[LDLTParams]:
        """
        Decompose the design's matrix.

        Raises
        ------
        ValidationError
            Strict mode, non-finite input.
        SingularMatrixError
            Strict mode, degenerate pivot.
        """
        timer = Timer()
        timer.start()

        with timer.section('factorize'):
            engine = Cholesky(
                design.matrix,
                dtype=design.dtype,
                strict=self.strict,
                pivot_tol=self.pivot_tol,
            )

        with timer.section('unpack'):
            params = build_params(LDLTFactors(L=engine.L, D=engine.D))

        warnings_list = [] if self.strict else pivot_warnings(params.D)

        timer.stop()

        info = {
            'method': 'ldlt',
            'n': design.n,
            'dtype': str(engine.dtype),
            'strict': self.strict,
            'symmetric_input': design.is_symmetric,
        }
        info.update(pivot_info(params.D))

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
