"""
simmetrics -- OLS and IV estimation studied by simulation.

Each sub-module implements one piece of the pipeline using only
numpy / scipy: data generation from a known DGP, OLS and scalar IV
estimation, normal-approximation inference, and the Monte Carlo
power study of the IV t-test.
"""

from .utils import ols_fit, add_const
from .exceptions import (
    SimMetricsError,
    InvalidParameters,
    SingularDesign,
    WeakInstrument,
)
from .sampler import RandomSampler
from .dgp import (
    OLSParameters,
    IVParameters,
    generate_ols_sample,
    generate_iv_sample,
)
from .monte_carlo import SimulationResult, run_simulation
from .power import PowerCurve, build_power_curve, default_grid
from . import ols
from . import heteroskedasticity
from . import iv
from . import inference
