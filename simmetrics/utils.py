"""
Shared utility functions used across all estimation modules.
"""

import numpy as np

from .exceptions import SingularDesign

# X'X with a larger condition number is treated as singular.
COND_LIMIT = 1e12


def ols_fit(X, y):
    """
    OLS estimation via the normal equations.

    Parameters
    ----------
    X : ndarray, shape (n, k)
        Design matrix (should include a constant column if an intercept is desired).
    y : ndarray, shape (n,)
        Outcome vector.

    Returns
    -------
    b : ndarray, shape (k,)
        Coefficient estimates  beta_hat = (X'X)^{-1} X'y.
    se : ndarray, shape (k,)
        Homoskedastic standard errors.
    e : ndarray, shape (n,)
        Residuals  y - X @ b.
    s2 : float
        Average squared residual  e'e / n.

    Raises
    ------
    SingularDesign
        If n < k, X has NaN/Inf entries, or X'X is singular / ill-conditioned.
    """
    X = np.asarray(X, dtype=float)
    y = np.asarray(y, dtype=float)
    bread = xtx_inverse(X)
    n = X.shape[0]
    b = bread @ (X.T @ y)
    e = y - X @ b
    s2 = (e @ e) / n
    se = np.sqrt(np.diag(s2 * bread))
    return b, se, e, s2


def xtx_inverse(X):
    """
    (X'X)^{-1}, refusing designs that cannot be inverted reliably.

    Parameters
    ----------
    X : ndarray, shape (n, k)

    Returns
    -------
    bread : ndarray, shape (k, k)
    """
    X = np.asarray(X, dtype=float)
    if X.ndim != 2:
        raise SingularDesign(f"design matrix must be 2-d, got shape {X.shape}")
    n, k = X.shape
    if n < k:
        raise SingularDesign(
            f"need at least as many observations as regressors (n={n}, k={k})"
        )
    if not np.all(np.isfinite(X)):
        raise SingularDesign("design matrix contains NaN or Inf")
    XtX = X.T @ X
    cond = np.linalg.cond(XtX)
    if not np.isfinite(cond) or cond > COND_LIMIT:
        raise SingularDesign(f"X'X is singular (condition number {cond:.3g})")
    try:
        return np.linalg.inv(XtX)
    except np.linalg.LinAlgError as exc:
        raise SingularDesign(f"X'X could not be inverted: {exc}") from exc


def add_const(x):
    """
    Prepend a column of ones (intercept) to the design matrix.

    Parameters
    ----------
    x : ndarray
        1-d array or 2-d matrix of regressors.

    Returns
    -------
    X : ndarray, shape (n, k+1)
        Design matrix with leading ones column.
    """
    x = np.asarray(x, dtype=float)
    x = np.atleast_2d(x).T if x.ndim == 1 else x
    return np.column_stack([np.ones(x.shape[0]), x])


def frozen(a):
    """Return a float copy of `a` that cannot be written to."""
    a = np.array(a, dtype=float)
    a.flags.writeable = False
    return a
