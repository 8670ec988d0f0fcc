"""
Metrics shared by the Jacobian self-tests and the outlier gates.
"""
import numpy as np


def mahalanobis_distance(innovation, covariance):
    """
    Compute the squared Mahalanobis distance v' * P^{-1} * v.

    For a consistent filter this follows a chi-squared(n) distribution,
    where n is the length of the innovation.

    Parameters
    ----------
    innovation : ndarray [n]
        Innovation vector
    covariance : ndarray [n, n]
        Innovation covariance, assumed well-conditioned

    Returns
    -------
    float
        Squared Mahalanobis distance
    """
    v = np.asarray(innovation, dtype=float).reshape(-1)
    if v.shape[0] == 0:
        return 0.0
    return float(v @ np.linalg.solve(covariance, v))


def max_abs_difference(a, b):
    """
    Largest elementwise absolute difference between two arrays.

    Parameters
    ----------
    a, b : ndarray
        Arrays of identical shape

    Returns
    -------
    float
        max |a - b|, or 0.0 for empty arrays
    """
    diff = np.abs(np.asarray(a, dtype=float) - np.asarray(b, dtype=float))
    return float(diff.max()) if diff.size else 0.0
