"""
Tests for the functional LDL' API: ldlt(), solve(), inv(), det(),
LDLTDesign, LDLTSolution and the CPU backend.
"""

import warnings

import numpy as np
import pytest

from pycholesky import (
    LDLTDesign,
    LDLTSolution,
    det,
    inv,
    ldlt,
    solve,
)
from pycholesky.core.exceptions import (
    DimensionError,
    DimensionMismatchError,
    SingularMatrixError,
    ValidationError,
)
from pycholesky.core.protocols import Backend
from pycholesky.core.compute.tolerances import select_tolerance
from pycholesky.ldlt.backends.cpu import CPULDLTBackend


# ═══════════════════════════════════════════════════════════════════════
# Design
# ═══════════════════════════════════════════════════════════════════════


class TestDesign:

    def test_from_array(self, small_spd):
        design = LDLTDesign.from_array(small_spd)
        assert design.n == 2
        assert design.dtype == np.float64
        assert design.is_symmetric
        assert design.is_finite
        assert repr(design) == "LDLTDesign(n=2, dtype=float64)"

    def test_copies_input(self, small_spd):
        design = LDLTDesign.from_array(small_spd)
        small_spd[0, 0] = 100.0
        assert design.matrix[0, 0] == 4.0

    def test_float32_promoted(self, small_spd):
        assert LDLTDesign.from_array(small_spd.astype(np.float32)).dtype == np.float64

    def test_complex_kept(self):
        design = LDLTDesign.from_array(np.array([[2.0 + 1j, 0], [0, 1.0]]))
        assert design.dtype == np.complex128

    def test_values_attribute(self, small_spd):
        class Frame:
            values = small_spd
        assert LDLTDesign.from_array(Frame()).n == 2

    def test_asymmetric_flagged(self):
        assert not LDLTDesign.from_array([[1.0, 5.0], [0.0, 1.0]]).is_symmetric

    def test_non_square(self):
        with pytest.raises(DimensionMismatchError):
            LDLTDesign.from_array(np.ones((2, 3)))

    def test_object_rejected(self):
        with pytest.raises(ValidationError):
            LDLTDesign.from_array(np.array([[1, "a"], ["b", 2]], dtype=object))


# ═══════════════════════════════════════════════════════════════════════
# ldlt() and LDLTSolution
# ═══════════════════════════════════════════════════════════════════════


class TestLDLT:

    def test_worked_example(self, small_spd):
        sol = ldlt(small_spd)
        assert isinstance(sol, LDLTSolution)
        np.testing.assert_allclose(sol.D, [4.0, 2.0])
        np.testing.assert_allclose(sol.L, [[1.0, 0.0], [0.5, 1.0]])
        assert sol.determinant == pytest.approx(8.0)
        np.testing.assert_allclose(sol.inverse, [[0.375, -0.25], [-0.25, 0.5]])
        np.testing.assert_allclose(sol.solve([1.0, 1.0]), [0.125, 0.25])

    def test_solve_matches_engine(self, spd_matrix, rng):
        B = rng.standard_normal((6, 3))
        sol = ldlt(spd_matrix)
        tol = select_tolerance(sol.backend_name)
        np.testing.assert_allclose(spd_matrix @ sol.solve(B), B, rtol=1e-9, atol=1e-12)
        np.testing.assert_allclose(sol.reconstruct(), spd_matrix, rtol=tol.rtol, atol=tol.atol)

    def test_log_determinant(self, spd_matrix):
        sign, logdet = ldlt(spd_matrix).log_determinant
        assert sign == 1.0
        assert logdet == pytest.approx(np.linalg.slogdet(spd_matrix)[1])

    def test_metadata(self, spd_matrix):
        sol = ldlt(spd_matrix)
        assert sol.backend_name == 'cpu_ldlt'
        assert sol.info['method'] == 'ldlt'
        assert sol.info['n'] == 6
        assert sol.info['strict'] is False
        assert sol.info['symmetric_input']
        assert 'factorize' in sol.timing
        assert sol.warnings == ()
        assert sol.min_pivot == pytest.approx(float(np.min(np.abs(sol.D))))

    def test_positive_definite(self, spd_matrix):
        sol = ldlt(spd_matrix)
        assert sol.is_positive_definite
        assert sol.inertia == (6, 0, 0)
        assert sol.n_negative_pivots == 0

    def test_indefinite_inertia(self, indefinite_matrix):
        sol = ldlt(indefinite_matrix)
        assert not sol.is_positive_definite
        assert sol.inertia == (2, 1, 0)
        eigenvalues = np.linalg.eigvalsh(indefinite_matrix)
        assert sol.n_negative_pivots == int(np.sum(eigenvalues < 0))

    def test_solve_wrong_length(self, small_spd):
        with pytest.raises(DimensionMismatchError):
            ldlt(small_spd).solve([1.0, 2.0, 3.0])

    def test_solve_3d(self, small_spd):
        with pytest.raises(DimensionError):
            ldlt(small_spd).solve(np.ones((2, 2, 2)))

    def test_summary_and_repr(self, indefinite_matrix):
        sol = ldlt(indefinite_matrix)
        text = sol.summary()
        assert "LDL' decomposition" in text
        assert "2 positive, 1 negative, 0 zero" in text
        assert "D[1] = -3.5" in text
        assert repr(sol) == (
            "LDLTSolution(n=3, backend='cpu_ldlt', positive_definite=False)"
        )

    def test_accepts_design(self, small_spd):
        design = LDLTDesign.from_array(small_spd)
        assert ldlt(design).determinant == pytest.approx(8.0)


class TestDegenerate:

    def test_singular_warns(self):
        with pytest.warns(RuntimeWarning, match="zero pivot"):
            sol = ldlt(np.ones((2, 2)))
        assert sol.determinant == 0.0
        assert sol.inertia == (1, 0, 1)
        assert any("zero pivot" in w for w in sol.warnings)

    def test_non_finite_pivot_warns(self):
        with pytest.warns(RuntimeWarning, match="non-finite pivot"):
            sol = ldlt(np.array([[0.0, 1.0], [1.0, 0.0]]))
        assert not sol.is_positive_definite

    def test_singular_solve_is_non_finite(self):
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", RuntimeWarning)
            sol = ldlt(np.ones((2, 2)))
        assert not np.all(np.isfinite(sol.solve([1.0, 2.0])))

    def test_strict_raises(self):
        with pytest.raises(SingularMatrixError):
            ldlt(np.ones((2, 2)), strict=True)

    def test_strict_clean_matrix_no_warnings(self, spd_matrix):
        sol = ldlt(spd_matrix, strict=True)
        assert sol.warnings == ()
        assert sol.info['strict'] is True


# ═══════════════════════════════════════════════════════════════════════
# One-shot helpers and backend selection
# ═══════════════════════════════════════════════════════════════════════


class TestHelpers:

    def test_solve(self, small_spd):
        np.testing.assert_allclose(solve(small_spd, [1.0, 1.0]), [0.125, 0.25])

    def test_inv(self, spd_matrix):
        np.testing.assert_allclose(inv(spd_matrix) @ spd_matrix, np.eye(6), atol=1e-10)

    def test_det(self, spd_matrix):
        assert det(spd_matrix) == pytest.approx(np.linalg.det(spd_matrix), rel=1e-10)

    def test_kwargs_forwarded(self):
        with pytest.raises(SingularMatrixError):
            det(np.ones((3, 3)), strict=True)


class TestBackendSelection:

    def test_unknown_backend(self, small_spd):
        with pytest.raises(ValidationError, match="Unknown backend"):
            ldlt(small_spd, backend='tpu')

    def test_auto_returns_valid_solution(self, small_spd):
        sol = ldlt(small_spd, backend='auto')
        np.testing.assert_allclose(sol.D, [4.0, 2.0], rtol=1e-5)

    def test_auto_complex_uses_cpu(self):
        sol = ldlt(np.array([[2.0 + 1j, 1.0], [1.0, 3.0]]), backend='auto')
        assert sol.backend_name == 'cpu_ldlt'

    def test_cpu_backend_satisfies_protocol(self):
        assert isinstance(CPULDLTBackend(), Backend)

    def test_cpu_backend_direct(self, small_spd):
        result = CPULDLTBackend().solve(LDLTDesign.from_array(small_spd))
        assert result.backend_name == 'cpu_ldlt'
        assert result.params.determinant == pytest.approx(8.0)
        assert result.timing['total_seconds'] >= 0.0
