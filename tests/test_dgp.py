"""
Tests for the OLS and IV data generating processes.
"""

import dataclasses

import numpy as np
import pytest

from simmetrics import (
    InvalidParameters, IVParameters, OLSParameters, RandomSampler,
    generate_iv_sample, generate_ols_sample,
)
from simmetrics.dgp import first_stage_coefficient


class TestParameters:

    @pytest.mark.parametrize("kwargs", [
        dict(sample_size=1),
        dict(sample_size=0),
        dict(sample_size=10.5),
        dict(sample_size=True),
        dict(endogeneity=1.01),
        dict(endogeneity=-1.5),
        dict(first_stage_strength=-0.1),
        dict(true_coefficient=np.nan),
        dict(first_stage_strength=np.inf),
    ])
    def test_invalid_iv_parameters(self, kwargs):
        base = dict(sample_size=50, true_coefficient=0.0,
                    first_stage_strength=10.0, endogeneity=0.5)
        base.update(kwargs)
        with pytest.raises(InvalidParameters):
            IVParameters(**base)

    def test_invalid_ols_parameters(self):
        with pytest.raises(InvalidParameters):
            OLSParameters(sample_size=1, intercept=0.0, slope=1.0)
        with pytest.raises(InvalidParameters):
            OLSParameters(sample_size=10, intercept=np.nan, slope=1.0)

    def test_boundary_values_are_valid(self):
        IVParameters(2, 0.0, 0.0, 1.0)
        IVParameters(2, 0.0, 0.0, -1.0)
        OLSParameters(np.int64(2), 0.0, 0.0)

    def test_frozen(self, iv_params):
        with pytest.raises(dataclasses.FrozenInstanceError):
            iv_params.true_coefficient = 3.0

    def test_replace(self, iv_params):
        new = iv_params.replace(true_coefficient=-0.4)
        assert new.true_coefficient == -0.4
        assert new.sample_size == iv_params.sample_size
        assert iv_params.true_coefficient == 1.0

    def test_replace_validates(self, iv_params):
        with pytest.raises(InvalidParameters):
            iv_params.replace(endogeneity=2.0)


class TestOLSSample:

    def test_shapes_and_design(self, ols_params, sampler):
        s = generate_ols_sample(ols_params, sampler)
        assert s.X.shape == (1000, 2)
        assert s.y.shape == (1000,)
        np.testing.assert_array_equal(s.X[:, 0], 1.0)

    def test_outcome_equation(self):
        params = OLSParameters(20, 2.0, -3.0)
        s = generate_ols_sample(params, RandomSampler(5))
        rs = np.random.RandomState(5)
        x = rs.normal(0, 1, 20)
        e = rs.normal(0, 1, 20)
        np.testing.assert_array_equal(s.X[:, 1], x)
        np.testing.assert_allclose(s.y, 2.0 - 3.0 * x + e)

    def test_deterministic(self, ols_params):
        a = generate_ols_sample(ols_params, RandomSampler(11))
        b = generate_ols_sample(ols_params, RandomSampler(11))
        np.testing.assert_array_equal(a.X, b.X)
        np.testing.assert_array_equal(a.y, b.y)

    def test_read_only(self, ols_params, sampler):
        s = generate_ols_sample(ols_params, sampler)
        with pytest.raises(ValueError):
            s.y[0] = 0.0

    def test_wrong_parameter_type(self, iv_params, sampler):
        with pytest.raises(InvalidParameters):
            generate_ols_sample(iv_params, sampler)


class TestIVSample:

    def test_first_stage_coefficient(self):
        assert first_stage_coefficient(IVParameters(100, 0.0, 25.0, 0.0)) == 0.5

    def test_structure(self, iv_params):
        s = generate_iv_sample(iv_params, RandomSampler(3))
        rs = np.random.RandomState(3)
        ev = rs.normal(0, 1, (100, 2))
        z = rs.normal(0, 1, 100)
        rho = iv_params.endogeneity
        e = ev[:, 0]
        v = rho * ev[:, 0] + np.sqrt(1 - rho ** 2) * ev[:, 1]
        x = np.sqrt(10.0 / 100) * z + v
        np.testing.assert_allclose(s.z, z)
        np.testing.assert_allclose(s.x, x)
        np.testing.assert_allclose(s.y, 1.0 * x + e)

    def test_deterministic(self, iv_params):
        a = generate_iv_sample(iv_params, RandomSampler(99))
        b = generate_iv_sample(iv_params, RandomSampler(99))
        for name in ("x", "y", "z"):
            np.testing.assert_array_equal(getattr(a, name), getattr(b, name))

    def test_stream_advances(self, iv_params, sampler):
        a = generate_iv_sample(iv_params, sampler)
        b = generate_iv_sample(iv_params, sampler)
        assert not np.array_equal(a.z, b.z)

    def test_endogeneity_biases_ols(self):
        params = IVParameters(20000, 1.0, 2000.0, 0.8)
        s = generate_iv_sample(params, RandomSampler(1))
        b_ols = (s.x @ s.y) / (s.x @ s.x)
        # plim OLS = beta + rho / var(x) = 1 + 0.8 / 1.1
        assert b_ols == pytest.approx(1 + 0.8 / 1.1, abs=0.03)

    def test_perfect_endogeneity(self):
        params = IVParameters(30, 0.5, 4.0, 1.0)
        s = generate_iv_sample(params, RandomSampler(0))
        assert np.all(np.isfinite(s.x)) and np.all(np.isfinite(s.y))
