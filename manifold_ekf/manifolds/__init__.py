"""Manifold types used as model inputs, outputs, measurements and noise."""
from .base import Manifold
from .vector import VectorManifold, vector_manifold
from .rotation import RotationManifold, skew, exp_so3, log_so3, left_jacobian
from .product import ProductManifold, product_manifold

__all__ = [
    'Manifold',
    'VectorManifold',
    'vector_manifold',
    'RotationManifold',
    'ProductManifold',
    'product_manifold',
    # SO(3) helpers
    'skew',
    'exp_so3',
    'log_so3',
    'left_jacobian',
]
