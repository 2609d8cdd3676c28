"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def small_spd():
    """The 2x2 worked example: D = (4, 2), L[1, 0] = 0.5, det = 8."""
    return np.array([[4.0, 2.0], [2.0, 3.0]])


@pytest.fixture
def spd_matrix(rng):
    """Well-conditioned 6x6 symmetric positive definite matrix."""
    n = 6
    A = rng.standard_normal((n, n))
    M = A @ A.T
    return (M + M.T) / 2 + n * np.eye(n)


@pytest.fixture
def indefinite_matrix():
    """Symmetric, nonsingular, one negative eigenvalue, no zero pivots."""
    return np.array([
        [2.0, 1.0, 0.0],
        [1.0, -3.0, 1.0],
        [0.0, 1.0, 4.0],
    ])
