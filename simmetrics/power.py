"""
Power function of the IV t-test

For each true beta on a grid, run the Monte Carlo study and keep the
rejection rate of H0: beta = 0. At beta = 0 the rejection rate is the
empirical size of the test rather than its power.
"""

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from .dgp import IVParameters
from .exceptions import InvalidParameters
from .monte_carlo import DEFAULT_REPETITIONS, check_repetitions, run_simulation
from .sampler import RandomSampler
from .utils import frozen

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PowerCurve:
    grid: np.ndarray
    power: np.ndarray

    @property
    def size(self):
        """Rejection rate at beta = 0, or None if 0 is not on the grid."""
        hits = np.flatnonzero(np.isclose(self.grid, 0.0, rtol=0.0, atol=1e-9))
        if len(hits) == 0:
            return None
        return float(self.power[hits[0]])

    def to_frame(self):
        """Grid and power as a two-column DataFrame."""
        return pd.DataFrame({"beta": self.grid, "power": self.power})


def default_grid(lo=-2.0, hi=2.0, step=0.1):
    """
    Evenly spaced grid from lo up to hi, rounded so that 0 is exact.
    hi is included when the step divides hi - lo; no point exceeds hi.

    default_grid() has 41 points: -2.0, -1.9, ..., 2.0.
    """
    n = int(np.floor((hi - lo) / step + 1e-9)) + 1
    return np.round(lo + step * np.arange(n), 10)


def build_power_curve(base_params, grid=None, repetitions=DEFAULT_REPETITIONS,
                      sampler=None, seed=None):
    """
    Trace out the power function over a grid of true coefficients.

    Parameters
    ----------
    base_params : IVParameters
        Design; only true_coefficient is varied.
    grid : sequence of float or None
        True coefficients, in the order they should appear in the output.
        Defaults to default_grid().
    repetitions : int
        Monte Carlo replications per grid point.
    sampler : RandomSampler or None
        Shared stream, advanced across grid points. If None a new
        RandomSampler(seed) is created.
    seed : int or None
        Seed for the new sampler; ignored when `sampler` is given.

    Returns
    -------
    PowerCurve
    """
    if not isinstance(base_params, IVParameters):
        raise InvalidParameters(
            f"expected IVParameters, got {type(base_params).__name__}"
        )
    check_repetitions(repetitions)
    grid = default_grid() if grid is None else np.asarray(grid, dtype=float)
    if grid.ndim != 1 or len(grid) == 0:
        raise InvalidParameters("coefficient grid must be a non-empty 1-d sequence")
    if sampler is None:
        sampler = RandomSampler(seed)

    power = np.empty(len(grid))
    for i, b in enumerate(grid):
        params = base_params.replace(true_coefficient=float(b))
        power[i] = run_simulation(params, repetitions, sampler=sampler).power
        logger.debug("grid point %d/%d beta=%.3f power=%.4f",
                     i + 1, len(grid), b, power[i])

    return PowerCurve(grid=frozen(grid), power=frozen(power))
