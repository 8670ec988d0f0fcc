"""Manifold contract shared by model inputs, outputs, measurements and noise."""
from abc import ABC, abstractmethod

import numpy as np


class Manifold(ABC):
    """
    Point on a manifold with a local tangent-space chart.

    Subclasses set the class attribute ``dim`` to the tangent-space
    dimension and implement ``box_plus``, ``box_minus``, ``set_identity``
    and ``set_random``. Points are updated via ``box_plus`` rather than
    coordinate addition, and differences are taken via ``box_minus``.

    Round-trip law (up to numerical tolerance)::

        a.box_plus(t).box_minus(a) == t
        b.box_plus(a.box_minus(b)) == a
    """

    dim = None

    def __init__(self, value=None):
        if value is None:
            self.set_identity()
        else:
            self.value = self._coerce(value)

    def _coerce(self, value):
        return np.array(value, dtype=float)

    @classmethod
    def identity(cls):
        """New point at the identity element."""
        point = cls.__new__(cls)
        point.set_identity()
        return point

    @classmethod
    def random(cls, rng=None, scale=1.0):
        """New random point, see ``set_random``."""
        point = cls.__new__(cls)
        point.set_random(rng, scale)
        return point

    @abstractmethod
    def set_identity(self):
        """Reset this point to the identity element in place."""

    @abstractmethod
    def set_random(self, rng=None, scale=1.0):
        """Draw a random point in place.

        Parameters
        ----------
        rng : numpy.random.Generator, optional
            Source of randomness. A fresh default generator if None.
        scale : float
            Spread of the draw around the identity.
        """

    @abstractmethod
    def box_plus(self, delta):
        """Return a new point moved along tangent vector ``delta``."""

    @abstractmethod
    def box_minus(self, other):
        """Return the tangent vector ``self ⊟ other`` (ndarray [dim])."""

    def copy(self):
        point = self.__class__.__new__(self.__class__)
        point.value = np.array(self.value, copy=True)
        return point

    def _check_tangent(self, delta):
        delta = np.asarray(delta, dtype=float).reshape(-1)
        if delta.shape[0] != self.dim:
            raise ValueError(
                f"{type(self).__name__} expects a tangent vector of length "
                f"{self.dim}, got {delta.shape[0]}"
            )
        return delta

    def __repr__(self):
        return f"{type(self).__name__}({np.array2string(np.asarray(self.value), precision=4)})"


def resolve_rng(rng):
    """Return ``rng`` or a fresh default generator."""
    return rng if rng is not None else np.random.default_rng()
