"""
Tests for the Result[P] envelope.

Validates:
    - Generic payloads
    - Frozen immutability
    - Default warnings and has_warning()
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pycholesky.core.result import Result


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


def _result(**overrides):
    kwargs = dict(
        params=FakeParams(value=8.0),
        info={"method": "ldlt"},
        timing={"total_seconds": 0.01},
        backend_name="cpu_ldlt",
    )
    kwargs.update(overrides)
    return Result(**kwargs)


class TestResult:

    def test_fields(self):
        result = _result()
        assert result.params.value == 8.0
        assert result.info["method"] == "ldlt"
        assert result.timing["total_seconds"] == 0.01
        assert result.backend_name == "cpu_ldlt"

    def test_timing_optional(self):
        assert _result(timing=None).timing is None

    def test_default_warnings_empty(self):
        assert _result().warnings == ()

    def test_frozen(self):
        result = _result()
        with pytest.raises(FrozenInstanceError):
            result.backend_name = "gpu_ldlt_fp32"

    def test_has_warning(self):
        result = _result(warnings=("zero pivot(s) at [1]: matrix is singular",))
        assert result.has_warning("zero pivot")
        assert not result.has_warning("non-finite")
