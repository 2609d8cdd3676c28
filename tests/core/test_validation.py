"""
Tests for input validation utilities.

Validates every function in core/validation.py:
    - check_array: conversion, dtype coercion, object handling
    - check_finite: NaN/Inf detection, including exact (object) arrays
    - check_ndim / check_2d: dimensionality checks
    - check_square / check_size / check_rhs: size agreement
"""

from fractions import Fraction

import numpy as np
import pytest

from pycholesky.core.exceptions import (
    DimensionError,
    DimensionMismatchError,
    ValidationError,
)
from pycholesky.core.validation import (
    check_2d,
    check_array,
    check_finite,
    check_ndim,
    check_rhs,
    check_size,
    check_square,
)


# ═══════════════════════════════════════════════════════════════════════
# check_array
# ═══════════════════════════════════════════════════════════════════════


class TestCheckArray:

    def test_list_to_float_array(self):
        result = check_array([1, 2, 3], "v")
        assert result.dtype == np.float64
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0])

    def test_bool_promoted_to_float(self):
        result = check_array([True, False], "v")
        assert result.dtype == np.float64

    def test_float32_preserved(self):
        arr = np.array([1.0, 2.0], dtype=np.float32)
        assert check_array(arr, "v").dtype == np.float32

    def test_complex_preserved(self):
        arr = np.array([1 + 1j, 2.0])
        assert check_array(arr, "v").dtype == np.complex128

    def test_object_rejected_by_default(self):
        with pytest.raises(ValidationError, match="object dtype"):
            check_array([Fraction(1, 2), Fraction(1, 3)], "v")

    def test_object_allowed_when_exact(self):
        result = check_array([Fraction(1, 2), Fraction(1, 3)], "v", allow_exact=True)
        assert result.dtype == object

    def test_string_rejected(self):
        with pytest.raises(ValidationError, match="non-numeric"):
            check_array(np.array(["a", "b"]), "v")

    def test_ragged_rejected(self):
        with pytest.raises(ValidationError, match="v:"):
            check_array([[1.0, 2.0], [3.0]], "v")


# ═══════════════════════════════════════════════════════════════════════
# check_finite
# ═══════════════════════════════════════════════════════════════════════


class TestCheckFinite:

    def test_finite_passes(self):
        check_finite(np.array([1.0, 2.0]), "M")

    def test_nan_and_inf_counted(self):
        with pytest.raises(ValidationError, match=r"1 NaN, 2 Inf"):
            check_finite(np.array([np.nan, np.inf, -np.inf, 1.0]), "M")

    def test_exact_values_pass(self):
        check_finite(np.array([Fraction(1, 3), Fraction(2)], dtype=object), "M")


# ═══════════════════════════════════════════════════════════════════════
# Dimensions and sizes
# ═══════════════════════════════════════════════════════════════════════


class TestDimensions:

    def test_check_ndim(self):
        with pytest.raises(DimensionError, match="expected 2D"):
            check_ndim(np.zeros(3), 2, "M")

    def test_check_2d_passes(self):
        check_2d(np.zeros((2, 3)), "M")

    def test_check_square_rejects_rectangular(self):
        with pytest.raises(DimensionMismatchError) as exc_info:
            check_square(np.zeros((2, 3)), "M")
        assert exc_info.value.expected == 2
        assert exc_info.value.actual == 3

    def test_check_size(self):
        check_size(np.zeros((3, 5)), 3, "B")
        with pytest.raises(DimensionMismatchError, match="expected first dimension 3"):
            check_size(np.zeros(4), 3, "v")

    def test_check_rhs_accepts_vector_and_matrix(self):
        check_rhs(np.zeros(3), 3, "b")
        check_rhs(np.zeros((3, 2)), 3, "b")

    def test_check_rhs_rejects_3d(self):
        with pytest.raises(DimensionError, match="1D vector or 2D matrix"):
            check_rhs(np.zeros((3, 3, 3)), 3, "b")

    def test_check_rhs_rejects_wrong_length(self):
        with pytest.raises(DimensionMismatchError):
            check_rhs(np.zeros((2, 3)), 3, "b")
