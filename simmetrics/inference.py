"""
Normal-approximation inference: confidence intervals and t-tests.

All intervals use the fixed two-sided 5% critical value 1.96 with no
small-sample correction.
"""

import numpy as np
from scipy import stats

Z_CRIT = 1.96


def confidence_interval(estimate, se, crit=Z_CRIT):
    """
    Symmetric interval [estimate - crit*se, estimate + crit*se].

    Parameters
    ----------
    estimate : float
        Point estimate.
    se : float
        Standard error (non-negative).
    crit : float
        Critical value (default 1.96 for a 95% interval).

    Returns
    -------
    ndarray, shape (2,)
        [lo, hi]; hi - lo = 2 * crit * se.
    """
    half = crit * se
    return np.array([estimate - half, estimate + half])


def t_statistic(estimate, se, null=0.0):
    """|estimate - null| / se."""
    return abs(estimate - null) / se


def p_value(t):
    """Two-sided p-value of a t statistic under the standard normal."""
    return 2 * (1 - stats.norm.cdf(abs(t)))


def rejects_null(t, crit=Z_CRIT):
    """True when |t| exceeds the critical value."""
    return bool(abs(t) > crit)


def covers(ci, value):
    """True when value lies inside the closed interval ci = [lo, hi]."""
    return bool(ci[0] <= value <= ci[1])
