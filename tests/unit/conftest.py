"""Shared pytest fixtures for unit tests."""

import numpy as np
import pytest

from manifold_ekf.manifolds import vector_manifold
from manifold_ekf.models import ModelBase


class LinearModel(ModelBase):
    """y = A x + B n on flat vector spaces."""

    input_type = vector_manifold(2)
    output_type = vector_manifold(3)
    meas_type = vector_manifold(0)
    noise_type = vector_manifold(2)

    A = np.array([[1.0, 2.0], [0.0, -1.0], [0.5, 0.5]])
    B = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])

    def evaluate(self, input_, meas, noise, dt):
        return self.output_type(self.A @ input_.value + self.B @ noise.value)

    def jac_input(self, input_, meas, dt=0.0):
        return self.A

    def jac_noise(self, input_, meas, dt=0.0):
        return self.B


@pytest.fixture
def linear_model():
    """Linear model with exact analytic Jacobians."""
    return LinearModel()


@pytest.fixture
def two_block_system(rng):
    """Innovation with an inlier block [0, 2) and an outlier block [2, 5)."""
    n = 5
    Py = np.eye(n) + 0.1 * (np.ones((n, n)) - np.eye(n))
    v = np.array([0.1, -0.1, 10.0, -10.0, 10.0])
    H = rng.standard_normal((n, 4))
    return {'v': v, 'Py': Py, 'H': H}
