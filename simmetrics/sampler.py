"""
Seedable Gaussian random source.

RandomSampler owns its own numpy RandomState (the Mersenne Twister
stream behind np.random.seed), so two samplers never share state and a
seeded sampler reproduces the classic `np.random.seed(seed)` draws
exactly without touching the global generator.
"""

import numpy as np

from .exceptions import InvalidParameters


def cholesky_upper(rho):
    """
    Upper-triangular Cholesky factor U of [[1, rho], [rho, 1]], so that
    U'U equals the correlation matrix.

    Written in closed form so that |rho| = 1 returns a factor with a zero
    in the lower-right entry instead of failing the way
    np.linalg.cholesky does on a singular matrix.

    Parameters
    ----------
    rho : float
        Correlation, must satisfy |rho| <= 1.

    Returns
    -------
    U : ndarray, shape (2, 2)
    """
    rho = float(rho)
    if not np.isfinite(rho) or abs(rho) > 1:
        raise InvalidParameters(f"correlation must lie in [-1, 1], got {rho}")
    return np.array([[1.0, rho],
                     [0.0, np.sqrt(max(1.0 - rho ** 2, 0.0))]])


class RandomSampler:
    """
    Explicitly owned random stream for the data generators.

    Parameters
    ----------
    seed : int or None
        Seed for the underlying RandomState. None seeds from the OS.
    """

    def __init__(self, seed=None):
        self.seed = seed
        self._rs = np.random.RandomState(seed)

    def reseed(self, seed):
        """Reset the stream so the next draws repeat those after `seed`."""
        self.seed = seed
        self._rs.seed(seed)

    def gaussian(self, n):
        """n i.i.d. standard-normal draws."""
        return self._rs.normal(0, 1, n)

    def gaussian_matrix(self, n, k):
        """(n, k) matrix of i.i.d. standard-normal draws."""
        return self._rs.normal(0, 1, (n, k))

    def correlated_pair(self, n, rho):
        """
        Two length-n vectors, jointly normal with unit variances and
        correlation rho.

        Draws an (n, 2) matrix of independent standard normals E and
        returns the columns of E @ U, where U is the upper Cholesky factor
        of [[1, rho], [rho, 1]].

        Returns
        -------
        u1, u2 : ndarray, shape (n,)
        """
        U = cholesky_upper(rho)
        draws = self.gaussian_matrix(n, 2) @ U
        return draws[:, 0], draws[:, 1]

    def __repr__(self):
        return f"RandomSampler(seed={self.seed!r})"
