"""Euclidean vector manifold R^n."""
from functools import lru_cache

import numpy as np

from .base import Manifold, resolve_rng


class VectorManifold(Manifold):
    """Flat vector space; box-plus is addition, box-minus is subtraction.

    Use ``vector_manifold(n)`` to obtain the type for a fixed dimension.
    """

    dim = 0

    def _coerce(self, value):
        value = np.array(value, dtype=float).reshape(-1)
        if value.shape[0] != self.dim:
            raise ValueError(f"{type(self).__name__} expects {self.dim} coordinates, got {value.shape[0]}")
        return value

    def set_identity(self):
        self.value = np.zeros(self.dim)

    def set_random(self, rng=None, scale=1.0):
        self.value = scale * resolve_rng(rng).standard_normal(self.dim)

    def box_plus(self, delta):
        return self.__class__(self.value + self._check_tangent(delta))

    def box_minus(self, other):
        return self.value - other.value


@lru_cache(maxsize=None)
def vector_manifold(dim):
    """
    Return the ``VectorManifold`` subclass for dimension ``dim``.

    Types are cached, so ``vector_manifold(3) is vector_manifold(3)``.

    Parameters
    ----------
    dim : int
        Dimension of the vector space (>= 0)

    Returns
    -------
    type
        Subclass of VectorManifold with ``dim`` fixed
    """
    dim = int(dim)
    if dim < 0:
        raise ValueError(f"dimension must be non-negative, got {dim}")
    return type(f"Vector{dim}", (VectorManifold,), {'dim': dim})
