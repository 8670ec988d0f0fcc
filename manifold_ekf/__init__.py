"""
Manifold EKF building blocks

This package contains:
- Manifold types with box-plus / box-minus charts
- ModelBase with analytic and finite-difference Jacobians
- Chi-square outlier gating over partitioned innovations
- Property registry and configuration utilities
"""
from .manifolds import Manifold, VectorManifold, RotationManifold, ProductManifold
from .models import ModelBase, JacobianCheck
from .outliers import ODEntry, OutlierGate, OutlierDetection
from .utils import PropertyHandler, load_config

__version__ = '0.1.0'

__all__ = [
    'Manifold',
    'VectorManifold',
    'RotationManifold',
    'ProductManifold',
    'ModelBase',
    'JacobianCheck',
    'ODEntry',
    'OutlierGate',
    'OutlierDetection',
    'PropertyHandler',
    'load_config',
]
