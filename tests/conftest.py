"""
Pytest configuration file providing shared fixtures.
"""
import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from simmetrics import IVParameters, OLSParameters, RandomSampler


@pytest.fixture
def sampler():
    """Sampler seeded with 42."""
    return RandomSampler(42)


@pytest.fixture
def ols_params():
    """Large-N OLS design with intercept 24 and slope 8."""
    return OLSParameters(sample_size=1000, intercept=24.0, slope=8.0)


@pytest.fixture
def iv_params():
    """Moderately strong, endogenous IV design."""
    return IVParameters(sample_size=100, true_coefficient=1.0,
                        first_stage_strength=10.0, endogeneity=0.5)


@pytest.fixture
def strong_iv_params():
    """Strong-instrument design used for size and power checks."""
    return IVParameters(sample_size=500, true_coefficient=0.0,
                        first_stage_strength=100.0, endogeneity=0.3)


class ZeroSampler:
    """Sampler stand-in whose draws are all zero."""

    def gaussian(self, n):
        return np.zeros(n)

    def gaussian_matrix(self, n, k):
        return np.zeros((n, k))

    def correlated_pair(self, n, rho):
        return self.gaussian(n), self.gaussian(n)


@pytest.fixture
def zero_sampler():
    return ZeroSampler()
