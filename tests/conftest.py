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
def unequal_pair(rng):
    """Two Normal samples of different size and spread (sd 1 vs 2)."""
    return rng.normal(0, 1, 15), rng.normal(0, 2, 25)
