"""Outlier rejection over partitioned innovation vectors."""
from .detection import ODEntry, OutlierGate, OutlierDetection
from .thresholds import quadratic_threshold, chi2_threshold

__all__ = [
    'ODEntry',
    'OutlierGate',
    'OutlierDetection',
    'quadratic_threshold',
    'chi2_threshold',
]
