# tests/conftest.py
"""
Shared pytest fixtures for the bond energy clustering tests.

Matrices here are small enough to check every bond by hand.
"""

import os

import numpy as np
import pytest

# Headless rendering for any matplotlib usage
os.environ.setdefault("MPLBACKEND", "Agg")


@pytest.fixture
def paired_matrix() -> np.ndarray:
    """3 attributes: A1 and A3 are accessed together, A2 alone."""
    return np.array([
        [45, 0, 45],
        [0, 80, 0],
        [45, 0, 45],
    ])


@pytest.fixture
def textbook_matrix() -> np.ndarray:
    """Classic 4-attribute example; BEA order is A1 A3 A2 A4."""
    return np.array([
        [45, 0, 45, 0],
        [0, 80, 5, 75],
        [45, 5, 53, 3],
        [0, 75, 3, 78],
    ])


@pytest.fixture
def leftmost_matrix() -> np.ndarray:
    """A3 bonds with A1 more than A1 bonds with A2, so A3 goes first."""
    return np.array([
        [10, 6, 8],
        [6, 10, 0],
        [8, 0, 10],
    ])


@pytest.fixture
def random_symmetric():
    """Factory for seeded random symmetric integer affinity matrices."""
    def _make(n: int, seed: int = 0) -> np.ndarray:
        rng = np.random.default_rng(seed)
        upper = rng.integers(0, 100, size=(n, n))
        return np.triu(upper) + np.triu(upper, 1).T
    return _make
