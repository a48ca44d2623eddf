"""
Heteroskedasticity-robust (White / HC0) variance for OLS.

V_het = (X'X)^{-1} * [sum_i e_hat_i^2 * x_i x_i'] * (X'X)^{-1}

No finite-sample scaling is applied, so under homoskedastic errors
V_het and s2 * (X'X)^{-1} (with s2 = e'e / n) agree up to sampling noise.
"""

import numpy as np

from .utils import xtx_inverse


def sandwich_vcov(X, residuals, bread=None):
    """
    White sandwich variance-covariance matrix.

    Parameters
    ----------
    X : ndarray, shape (n, k)
        Design matrix.
    residuals : ndarray, shape (n,)
        OLS residuals.
    bread : ndarray, shape (k, k), optional
        Precomputed (X'X)^{-1}.

    Returns
    -------
    V_het : ndarray, shape (k, k)
    """
    if bread is None:
        bread = xtx_inverse(X)
    esq = residuals ** 2
    meat = (X.T * esq) @ X
    return bread @ meat @ bread

