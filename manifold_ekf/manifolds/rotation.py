"""
SO(3) rotation manifold.

A point is stored as a 3x3 rotation matrix ``R``. The chart is the left
perturbation::

    R ⊞ d = Exp(d) R
    R ⊟ S = Log(R S^T)

Exp and Log are delegated to ``scipy.spatial.transform.Rotation``.
"""
import numpy as np
from scipy.spatial.transform import Rotation

from .base import Manifold, resolve_rng

# Below this angle the left Jacobian falls back to its Taylor expansion
SMALL_ANGLE = 1e-8


def skew(v):
    """Skew-symmetric matrix from 3-vector (hat operator)."""
    v = np.asarray(v, dtype=float).reshape(-1)
    return np.array([
        [0.0, -v[2], v[1]],
        [v[2], 0.0, -v[0]],
        [-v[1], v[0], 0.0]
    ])


def exp_so3(rotvec):
    """Rotation matrix for rotation vector ``rotvec``."""
    return Rotation.from_rotvec(np.asarray(rotvec, dtype=float).reshape(3)).as_matrix()


def log_so3(R):
    """Rotation vector for rotation matrix ``R``."""
    return Rotation.from_matrix(R).as_rotvec()


def left_jacobian(phi):
    """
    Left Jacobian of SO(3).

    J_l(phi) = I + (1 - cos t) / t^2 [phi]x + (t - sin t) / t^3 [phi]x^2,
    with t = |phi|. Satisfies Exp(phi + e) ≈ Exp(J_l(phi) e) Exp(phi).

    Parameters
    ----------
    phi : ndarray [3]
        Rotation vector

    Returns
    -------
    ndarray [3, 3]
    """
    phi = np.asarray(phi, dtype=float).reshape(3)
    theta = np.linalg.norm(phi)
    K = skew(phi)
    if theta < SMALL_ANGLE:
        return np.eye(3) + 0.5 * K
    return (np.eye(3)
            + (1.0 - np.cos(theta)) / theta**2 * K
            + (theta - np.sin(theta)) / theta**3 * (K @ K))


class RotationManifold(Manifold):
    """3D orientation, tangent dimension 3."""

    dim = 3

    def _coerce(self, value):
        value = np.array(value, dtype=float)
        if value.shape != (3, 3):
            raise ValueError(f"Expected 3x3 rotation matrix, got shape {value.shape}")
        return value

    @classmethod
    def from_rotvec(cls, rotvec):
        return cls(exp_so3(rotvec))

    def set_identity(self):
        self.value = np.eye(3)

    def set_random(self, rng=None, scale=1.0):
        self.value = exp_so3(scale * resolve_rng(rng).standard_normal(3))

    def box_plus(self, delta):
        return self.__class__(exp_so3(self._check_tangent(delta)) @ self.value)

    def box_minus(self, other):
        return log_so3(self.value @ other.value.T)
