"""Shared pytest fixtures."""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(20240917)
