"""
Instrumental Variables -- scalar just-identified estimator

    beta_IV = z'y / z'x

with no intercept, one endogenous regressor x and one instrument z.
Setting z = x gives back the no-intercept OLS slope x'y / x'x.

Includes:
- Homoskedastic IV variance  s2 * z'z / (z'x)^2
- t-test of beta = 0 and the 95% normal interval
- First-stage F statistic for instrument strength
"""

from dataclasses import dataclass

import numpy as np

from .exceptions import WeakInstrument
from .inference import confidence_interval, p_value, t_statistic
from .utils import frozen, ols_fit

# |z'x| below WEAK_TOL * ||z|| * ||x|| is treated as zero.
WEAK_TOL = 1e-10


@dataclass(frozen=True)
class IVResult:
    """
    Attributes
    ----------
    beta : IV estimate
    se_hom : homoskedastic SE
    ci_hom : 95% CI [lo, hi]
    t_stat : |beta / se_hom|, for H0: beta = 0
    p_value : two-sided normal p-value of t_stat
    residuals : y - x * beta
    s2 : average squared residual e'e / n
    first_stage_f : (pi_hat / se)^2 from regressing x on z
    """

    beta: float
    se_hom: float
    ci_hom: np.ndarray
    t_stat: float
    p_value: float
    residuals: np.ndarray
    s2: float
    first_stage_f: float


def first_stage(x, z):
    """
    First stage: regress the endogenous x on the instrument z (no constant).

    Parameters
    ----------
    x : ndarray, shape (n,)
        Endogenous regressor.
    z : ndarray, shape (n,)
        Instrument.

    Returns
    -------
    dict with keys:
        pi     : first-stage coefficient
        se     : its homoskedastic SE
        F_stat : (pi / se)^2
        x_hat  : fitted values z * pi
    """
    b, se, _, _ = ols_fit(np.asarray(z, dtype=float)[:, None], x)
    pi, se_pi = b[0], se[0]
    F_stat = (pi / se_pi) ** 2 if se_pi > 0 else np.inf
    return dict(pi=pi, se=se_pi, F_stat=F_stat, x_hat=z * pi)


def check_identified(x, z):
    """
    Return z'x, raising WeakInstrument if it is (numerically) zero.
    """
    zx = z @ x
    scale = np.linalg.norm(z) * np.linalg.norm(x)
    if zx == 0 or not np.isfinite(zx) or abs(zx) <= WEAK_TOL * scale:
        raise WeakInstrument(
            f"instrument is not identified: z'x = {zx:.3g} "
            f"(||z||*||x|| = {scale:.3g})"
        )
    return zx


def estimate(x, y, z):
    """
    Scalar IV estimation.

    Parameters
    ----------
    x : ndarray, shape (n,)
        Endogenous regressor.
    y : ndarray, shape (n,)
        Outcome.
    z : ndarray, shape (n,)
        Instrument.

    Returns
    -------
    IVResult

    Raises
    ------
    WeakInstrument
        If z'x is zero or negligible relative to ||z|| ||x||.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    z = np.asarray(z, dtype=float)
    n = len(y)

    zx = check_identified(x, z)
    b_iv = (z @ y) / zx
    e = y - x * b_iv
    s2 = (e @ e) / n
    var_hom = s2 * (z @ z) / zx ** 2
    if not (np.isfinite(b_iv) and np.isfinite(var_hom)):
        raise WeakInstrument("IV produced non-finite estimates")
    se = np.sqrt(var_hom)

    # A perfect fit leaves se = 0 and an undefined t statistic.
    if se == 0:
        t = np.inf if b_iv != 0 else 0.0
    else:
        t = t_statistic(b_iv, se)

    fs_F = first_stage(x, z)["F_stat"]

    return IVResult(
        beta=float(b_iv),
        se_hom=float(se),
        ci_hom=frozen(confidence_interval(b_iv, se)),
        t_stat=float(t),
        p_value=float(p_value(t)),
        residuals=frozen(e),
        s2=float(s2),
        first_stage_f=float(fs_F),
    )


def estimate_sample(sample):
    """IV on an IVSample."""
    return estimate(sample.x, sample.y, sample.z)
