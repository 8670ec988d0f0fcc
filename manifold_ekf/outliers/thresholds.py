"""Chi-square gating thresholds."""
from scipy.stats import chi2

# Quadratic fit to the 95% chi-square quantile over small block dimensions
QUADRATIC_COEFFS = (-0.0376136, 1.99223, 2.05183)


def quadratic_threshold(dim):
    """
    Approximate chi-square gate for a block of dimension ``dim``.

    -0.0376136 * dim^2 + 1.99223 * dim + 2.05183, which tracks the 95%
    quantile closely for dim up to about 10. Use ``chi2_threshold`` for
    larger blocks.
    """
    a, b, c = QUADRATIC_COEFFS
    return a * dim * dim + b * dim + c


def chi2_threshold(dim, confidence=0.95):
    """
    Exact chi-square quantile for ``dim`` degrees of freedom.

    Parameters
    ----------
    dim : int
        Degrees of freedom (block dimension)
    confidence : float
        Probability mass below the threshold

    Returns
    -------
    float
    """
    return float(chi2.ppf(confidence, dim))
