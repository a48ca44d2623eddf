"""
Data generating processes for the OLS and IV simulations.

OLS design
----------
    x ~ N(0, 1),  e ~ N(0, 1)  independent
    y = intercept + slope * x + e

IV design
---------
    (e, v) ~ N(0, [[1, rho], [rho, 1]])
    z ~ N(0, 1)                       independent of (e, v)
    x = pi * z + v,   pi = sqrt(F / N)
    y = beta * x + e

rho is the endogeneity: the correlation between the structural error e
and the first-stage error v, which makes x correlated with e and biases
OLS. F is the first-stage strength; with pi = sqrt(F / N) the
population first-stage F statistic is approximately F regardless of N.
"""

import dataclasses
import numbers
from dataclasses import dataclass

import numpy as np

from .exceptions import InvalidParameters
from .utils import add_const, frozen


def _check_sample_size(n):
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidParameters(f"sample_size must be an integer, got {n!r}")
    if n < 2:
        raise InvalidParameters(f"sample_size must be at least 2, got {n}")


def _check_finite(**values):
    for name, v in values.items():
        if not np.isfinite(v):
            raise InvalidParameters(f"{name} must be finite, got {v}")


@dataclass(frozen=True)
class OLSParameters:
    """Parameters of the two-coefficient OLS design."""

    sample_size: int
    intercept: float
    slope: float

    def __post_init__(self):
        _check_sample_size(self.sample_size)
        _check_finite(intercept=self.intercept, slope=self.slope)

    def replace(self, **changes):
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class IVParameters:
    """
    Parameters of the scalar IV design.

    Attributes
    ----------
    sample_size : int
        Number of observations N (>= 2).
    true_coefficient : float
        Structural coefficient beta on x.
    first_stage_strength : float
        Target first-stage F (>= 0). F = 0 makes the instrument irrelevant.
    endogeneity : float
        Correlation rho between e and v, |rho| <= 1.
    """

    sample_size: int
    true_coefficient: float
    first_stage_strength: float
    endogeneity: float

    def __post_init__(self):
        _check_sample_size(self.sample_size)
        _check_finite(true_coefficient=self.true_coefficient,
                      first_stage_strength=self.first_stage_strength,
                      endogeneity=self.endogeneity)
        if self.first_stage_strength < 0:
            raise InvalidParameters(
                "first_stage_strength must be non-negative, "
                f"got {self.first_stage_strength}"
            )
        if abs(self.endogeneity) > 1:
            raise InvalidParameters(
                f"endogeneity must lie in [-1, 1], got {self.endogeneity}"
            )

    def replace(self, **changes):
        """Copy with the given fields replaced (validated again)."""
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class OLSSample:
    X: np.ndarray
    y: np.ndarray


@dataclass(frozen=True)
class IVSample:
    x: np.ndarray
    y: np.ndarray
    z: np.ndarray


def first_stage_coefficient(params):
    """pi = sqrt(F / N)."""
    return np.sqrt(params.first_stage_strength / params.sample_size)


def generate_ols_sample(params, sampler):
    """
    Draw one sample from the OLS design.

    Parameters
    ----------
    params : OLSParameters
    sampler : RandomSampler
        Advanced by 2 * N normal draws (x first, then e).

    Returns
    -------
    OLSSample with X = [1 | x] of shape (N, 2) and y of shape (N,).
    """
    if not isinstance(params, OLSParameters):
        raise InvalidParameters(
            f"expected OLSParameters, got {type(params).__name__}"
        )
    n = params.sample_size
    x = sampler.gaussian(n)
    e = sampler.gaussian(n)
    y = params.intercept + params.slope * x + e
    return OLSSample(X=frozen(add_const(x)), y=frozen(y))


def generate_iv_sample(params, sampler):
    """
    Draw one sample from the IV design.

    Parameters
    ----------
    params : IVParameters
    sampler : RandomSampler
        Advanced by 3 * N normal draws ((e, v) pair first, then z).

    Returns
    -------
    IVSample with x, y, z each of shape (N,).
    """
    if not isinstance(params, IVParameters):
        raise InvalidParameters(
            f"expected IVParameters, got {type(params).__name__}"
        )
    n = params.sample_size
    e, v = sampler.correlated_pair(n, params.endogeneity)
    z = sampler.gaussian(n)
    x = first_stage_coefficient(params) * z + v
    y = params.true_coefficient * x + e
    return IVSample(x=frozen(x), y=frozen(y), z=frozen(z))
