"""Attitude models on SO(3) built on ModelBase."""
import numpy as np

from ..manifolds import (
    RotationManifold, vector_manifold, product_manifold,
    exp_so3, left_jacobian, skew,
)
from .model_base import ModelBase

GRAVITY = np.array([0.0, 0.0, -9.81])

Vector3 = vector_manifold(3)
AttitudeBias = product_manifold(RotationManifold, Vector3)


class AttitudePropagation(ModelBase):
    """Gyro-driven attitude propagation.

    State: attitude R (body to world)
    Meas: body angular rate w [rad/s]
    Noise: rotation increment n [rad]

    R_next = Exp(w dt + n) R
    """

    input_type = RotationManifold
    output_type = RotationManifold
    meas_type = Vector3
    noise_type = Vector3

    def evaluate(self, input_, meas, noise, dt):
        return RotationManifold(exp_so3(meas.value * dt + noise.value) @ input_.value)

    def jac_input(self, input_, meas, dt=0.0):
        return exp_so3(meas.value * dt)

    def jac_noise(self, input_, meas, dt=0.0):
        return left_jacobian(meas.value * dt)


class AttitudeBiasPropagation(ModelBase):
    """Gyro-driven attitude propagation with a random-walk gyro bias.

    State: (R, b), attitude and gyro bias
    Meas: biased body angular rate w
    Noise: [n_R, n_b], rotation increment and bias increment

    R_next = Exp((w - b) dt + n_R) R
    b_next = b + n_b
    """

    input_type = AttitudeBias
    output_type = AttitudeBias
    meas_type = Vector3
    noise_type = vector_manifold(6)

    def evaluate(self, input_, meas, noise, dt):
        R, b = input_
        phi = (meas.value - b.value) * dt + noise.value[:3]
        return AttitudeBias((RotationManifold(exp_so3(phi) @ R.value),
                             Vector3(b.value + noise.value[3:])))

    def jac_input(self, input_, meas, dt=0.0):
        phi = (meas.value - input_[1].value) * dt
        J = np.zeros((6, 6))
        J[:3, :3] = exp_so3(phi)
        J[:3, 3:] = -left_jacobian(phi) * dt
        J[3:, 3:] = np.eye(3)
        return J

    def jac_noise(self, input_, meas, dt=0.0):
        phi = (meas.value - input_[1].value) * dt
        J = np.zeros((6, 6))
        J[:3, :3] = left_jacobian(phi)
        J[3:, 3:] = np.eye(3)
        return J


class GravityMeasurement(ModelBase):
    """Accelerometer innovation for a static body.

    State: attitude R (body to world)
    Meas: accelerometer reading z (body frame)
    Noise: additive accelerometer noise n

    innovation = R' g + n - z

    Parameters
    ----------
    gravity : ndarray [3], optional
        Gravity in the world frame. Defaults to GRAVITY.
    """

    input_type = RotationManifold
    output_type = Vector3
    meas_type = Vector3
    noise_type = Vector3

    def __init__(self, gravity=None):
        self.gravity = np.asarray(gravity if gravity is not None else GRAVITY, dtype=float)

    def evaluate(self, input_, meas, noise, dt):
        return Vector3(input_.value.T @ self.gravity + noise.value - meas.value)

    def jac_input(self, input_, meas, dt=0.0):
        return input_.value.T @ skew(self.gravity)

    def jac_noise(self, input_, meas, dt=0.0):
        return np.eye(3)
