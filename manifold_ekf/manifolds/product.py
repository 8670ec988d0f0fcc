"""Cartesian product of manifolds."""
from functools import lru_cache

import numpy as np

from .base import Manifold, resolve_rng


class ProductManifold(Manifold):
    """
    Tuple of component points with a concatenated tangent space.

    ``value`` holds one point per entry of ``components``. Tangent vectors
    are laid out component by component in declaration order.
    Use ``product_manifold(*types)`` to obtain a concrete type.
    """

    components = ()
    dim = 0

    def _coerce(self, value):
        points = tuple(value)
        if len(points) != len(self.components):
            raise ValueError(f"{type(self).__name__} expects {len(self.components)} components, got {len(points)}")
        return tuple(point if isinstance(point, kind) else kind(point)
                     for kind, point in zip(self.components, points))

    def __getitem__(self, index):
        return self.value[index]

    def _slices(self):
        start = 0
        for kind in self.components:
            yield slice(start, start + kind.dim)
            start += kind.dim

    def set_identity(self):
        self.value = tuple(kind.identity() for kind in self.components)

    def set_random(self, rng=None, scale=1.0):
        rng = resolve_rng(rng)
        self.value = tuple(kind.random(rng, scale) for kind in self.components)

    def box_plus(self, delta):
        delta = self._check_tangent(delta)
        return self.__class__(tuple(point.box_plus(delta[sl])
                                    for point, sl in zip(self.value, self._slices())))

    def box_minus(self, other):
        if not self.components:
            return np.zeros(0)
        return np.concatenate([point.box_minus(ref) for point, ref in zip(self.value, other.value)])

    def copy(self):
        return self.__class__(tuple(point.copy() for point in self.value))

    def __repr__(self):
        return f"{type(self).__name__}({', '.join(repr(point) for point in self.value)})"


@lru_cache(maxsize=None)
def product_manifold(*components):
    """
    Return the ``ProductManifold`` subclass over the given component types.

    Parameters
    ----------
    *components : type
        Manifold subclasses, in tangent-vector order

    Returns
    -------
    type
        Subclass of ProductManifold with ``dim`` equal to the summed dims
    """
    for kind in components:
        if not (isinstance(kind, type) and issubclass(kind, Manifold)):
            raise TypeError(f"product components must be Manifold types, got {kind!r}")
    name = "Product" + "".join(kind.__name__ for kind in components)
    return type(name, (ProductManifold,), {
        'components': tuple(components),
        'dim': sum(kind.dim for kind in components),
    })
