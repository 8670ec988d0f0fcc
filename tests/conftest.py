"""Fixtures shared by unit and integration tests."""

import numpy as np
import pytest

from manifold_ekf.manifolds import RotationManifold


@pytest.fixture
def rng():
    """Seeded generator; every random manifold point in the suite draws from it."""
    return np.random.default_rng(42)


@pytest.fixture
def attitude(rng):
    """Random body-to-world attitude."""
    return RotationManifold.random(rng)
