"""
Tests for the Monte Carlo loop over IV samples.
"""

import logging

import numpy as np
import pytest

from simmetrics import (
    InvalidParameters, OLSParameters, RandomSampler, WeakInstrument,
    generate_iv_sample, run_simulation,
)
from simmetrics import iv as m_iv
from simmetrics.monte_carlo import DEFAULT_REPETITIONS, SimulationResult


class TestRunSimulation:

    def test_default_repetitions(self):
        assert DEFAULT_REPETITIONS == 5000

    def test_shapes_and_ranges(self, iv_params):
        res = run_simulation(iv_params, 200, seed=1)
        assert isinstance(res, SimulationResult)
        assert res.estimates.shape == (200,)
        assert res.repetitions == 200
        assert 0.0 <= res.power <= 1.0
        assert 0.0 <= res.coverage <= 1.0
        assert res.true_coefficient == iv_params.true_coefficient

    def test_matches_manual_loop(self, iv_params):
        res = run_simulation(iv_params, 25, sampler=RandomSampler(3))
        sampler = RandomSampler(3)
        manual = []
        rejections = 0
        for _ in range(25):
            r = m_iv.estimate_sample(generate_iv_sample(iv_params, sampler))
            manual.append(r.beta)
            rejections += r.t_stat > 1.96
        np.testing.assert_array_equal(res.estimates, manual)
        assert res.rejections == rejections
        assert res.power == rejections / 25

    def test_idempotent_for_same_seed(self, iv_params):
        a = run_simulation(iv_params, 300, seed=17)
        b = run_simulation(iv_params, 300, seed=17)
        np.testing.assert_array_equal(a.estimates, b.estimates)
        assert a.power == b.power

    def test_shared_sampler_advances(self, iv_params):
        sampler = RandomSampler(17)
        a = run_simulation(iv_params, 50, sampler=sampler)
        b = run_simulation(iv_params, 50, sampler=sampler)
        assert not np.array_equal(a.estimates, b.estimates)

    def test_sampler_takes_precedence_over_seed(self, iv_params):
        a = run_simulation(iv_params, 30, sampler=RandomSampler(5), seed=99)
        b = run_simulation(iv_params, 30, seed=5)
        np.testing.assert_array_equal(a.estimates, b.estimates)

    def test_estimates_read_only(self, iv_params):
        res = run_simulation(iv_params, 10, seed=0)
        with pytest.raises(ValueError):
            res.estimates[0] = 0.0

    @pytest.mark.parametrize("reps", [0, -5, 2.5, True])
    def test_invalid_repetitions(self, iv_params, reps):
        with pytest.raises(InvalidParameters):
            run_simulation(iv_params, reps, seed=0)

    def test_requires_iv_parameters(self):
        with pytest.raises(InvalidParameters):
            run_simulation(OLSParameters(10, 0.0, 1.0), 5, seed=0)

    def test_failed_repetition_aborts_run(self, iv_params, zero_sampler, caplog):
        with caplog.at_level(logging.ERROR, logger="simmetrics.monte_carlo"):
            with pytest.raises(WeakInstrument, match="repetition 0"):
                run_simulation(iv_params, 10, sampler=zero_sampler)
        assert "repetition 0 of 10 failed" in caplog.text

    def test_summary_statistics(self):
        res = SimulationResult(estimates=np.array([0.5, 1.0, 2.5]),
                               rejections=2, covered=3, repetitions=3,
                               true_coefficient=1.0)
        assert res.bias() == pytest.approx(1 / 3)
        assert res.median() == 1.0
        assert res.std() == pytest.approx(np.std([0.5, 1.0, 2.5]))
        assert res.power == pytest.approx(2 / 3)
        assert res.coverage == 1.0


@pytest.mark.slow
class TestSizeAndCoverage:

    def test_size_near_nominal(self, strong_iv_params):
        res = run_simulation(strong_iv_params, seed=42)
        assert res.repetitions == 5000
        assert res.power == pytest.approx(0.05, abs=0.01)

    def test_coverage_near_nominal(self, strong_iv_params):
        params = strong_iv_params.replace(true_coefficient=1.0)
        res = run_simulation(params, 2000, seed=42)
        assert res.coverage == pytest.approx(0.95, abs=0.02)
        assert abs(res.bias()) < 0.02
