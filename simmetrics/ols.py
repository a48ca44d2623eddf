"""
OLS -- Ordinary Least Squares with intercept and one regressor

beta_hat = (X'X)^{-1} X'y, reported with homoskedastic and
heteroskedastic standard errors and 95% intervals for the slope.
"""

from dataclasses import dataclass

import numpy as np

from .exceptions import SingularDesign
from .heteroskedasticity import sandwich_vcov
from .inference import confidence_interval
from .utils import frozen, xtx_inverse

SLOPE = 1


@dataclass(frozen=True)
class OLSResult:
    """
    Attributes
    ----------
    beta : coefficient vector [intercept, slope]
    se_hom, se_het : homoskedastic / heteroskedastic SEs, shape (2,)
    ci_hom, ci_het : 95% CIs [lo, hi] for the slope
    vcov_hom, vcov_het : variance-covariance matrices, shape (2, 2)
    residuals : y - X @ beta
    s2 : average squared residual e'e / n
    """

    beta: np.ndarray
    se_hom: np.ndarray
    se_het: np.ndarray
    ci_hom: np.ndarray
    ci_het: np.ndarray
    vcov_hom: np.ndarray
    vcov_het: np.ndarray
    residuals: np.ndarray
    s2: float

    @property
    def slope(self):
        return float(self.beta[SLOPE])


def estimate(X, y):
    """
    OLS estimation with both variance estimators.

    Parameters
    ----------
    X : ndarray, shape (n, 2)
        Design matrix [1 | x].
    y : ndarray, shape (n,)
        Outcome vector.

    Returns
    -------
    OLSResult

    Raises
    ------
    SingularDesign
        If X'X is not reliably invertible or the estimates are not finite.
    """
    X = np.asarray(X, dtype=float)
    y = np.asarray(y, dtype=float)
    bread = xtx_inverse(X)
    n = X.shape[0]

    b = bread @ (X.T @ y)
    e = y - X @ b
    s2 = (e @ e) / n

    V_hom = s2 * bread
    V_het = sandwich_vcov(X, e, bread=bread)
    if not (np.all(np.isfinite(b)) and np.all(np.isfinite(V_hom))
            and np.all(np.isfinite(V_het))):
        raise SingularDesign("OLS produced non-finite estimates")

    se_hom = np.sqrt(np.diag(V_hom))
    se_het = np.sqrt(np.diag(V_het))

    return OLSResult(
        beta=frozen(b),
        se_hom=frozen(se_hom),
        se_het=frozen(se_het),
        ci_hom=frozen(confidence_interval(b[SLOPE], se_hom[SLOPE])),
        ci_het=frozen(confidence_interval(b[SLOPE], se_het[SLOPE])),
        vcov_hom=frozen(V_hom),
        vcov_het=frozen(V_het),
        residuals=frozen(e),
        s2=float(s2),
    )


def estimate_sample(sample):
    """OLS on an OLSSample."""
    return estimate(sample.X, sample.y)
