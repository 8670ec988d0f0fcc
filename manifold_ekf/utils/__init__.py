"""
Utility Functions.

This module contains:
- Metrics shared by the Jacobian self-tests and outlier gates
- The tunable property registry
- YAML configuration loading
"""
from .metrics import mahalanobis_distance, max_abs_difference
from .properties import ScalarRegister, PropertyHandler
from .config import JacobianTestConfig, OutlierConfig, EstimatorConfig, load_config

__all__ = [
    # metrics
    'mahalanobis_distance',
    'max_abs_difference',
    # properties
    'ScalarRegister',
    'PropertyHandler',
    # config
    'JacobianTestConfig',
    'OutlierConfig',
    'EstimatorConfig',
    'load_config',
]
