"""Measurement and process models."""
from .model_base import ModelBase, JacobianCheck
from .attitude import (
    AttitudePropagation,
    AttitudeBiasPropagation,
    GravityMeasurement,
    GRAVITY,
)

__all__ = [
    'ModelBase',
    'JacobianCheck',
    # Reference models
    'AttitudePropagation',
    'AttitudeBiasPropagation',
    'GravityMeasurement',
    'GRAVITY',
]
