"""
Exception classes raised by the simmetrics estimators and simulators.

Every error derives from SimMetricsError, so a caller can catch any
package failure with a single except clause:

    try:
        res = run_simulation(params)
    except SimMetricsError as e:
        print(f"simulation failed: {e}")
"""

import numpy as np


class SimMetricsError(Exception):
    """Base class for all simmetrics errors."""
    pass


class InvalidParameters(SimMetricsError, ValueError):
    """
    Raised when a DGP or simulation argument is structurally invalid.

    Triggers include a sample size below 2, an endogeneity correlation
    outside [-1, 1], a negative first-stage strength, non-finite values,
    and a repetition count below 1.
    """
    pass


class SingularDesign(SimMetricsError, np.linalg.LinAlgError):
    """
    Raised when X'X cannot be inverted reliably in OLS.

    Covers a constant regressor column, fewer observations than
    regressors, and any design whose condition number exceeds
    utils.COND_LIMIT.
    """
    pass


class WeakInstrument(SimMetricsError, ArithmeticError):
    """
    Raised when the instrument-regressor cross product z'x is zero or
    numerically indistinguishable from zero, so the IV ratio z'y / z'x
    is not identified.
    """
    pass
