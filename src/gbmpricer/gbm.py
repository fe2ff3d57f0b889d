r"""
gbmpricer.gbm
=============

Exact-transition discretization of Geometric Brownian Motion.

The SDE

.. math::
   dS_t = \mu S_t\,dt + \sigma S_t\,dW_t

has the solution :math:`S_t = S_0 \exp\big((\mu - \tfrac12\sigma^2)t + \sigma W_t\big)`.
Sampling it on a uniform grid :math:`t_k = k\,\Delta t` gives the recurrence

.. math::
   S_{t_k} = S_{t_{k-1}} \exp\!\Big((\mu - \tfrac{1}{2}\sigma^2)\Delta t
   + \sigma \sqrt{\Delta t}\,Z_k\Big),

which is free of discretization bias for any :math:`\Delta t`.
"""

from __future__ import annotations

import math

import numpy as np

from .exceptions import ShapeMismatchError
from .params import GBMParameters

__all__ = ["GBMPathSimulator"]


class GBMPathSimulator:
    r"""
    Deterministic map from a shock vector to a GBM price path.

    Parameters
    ----------
    params : GBMParameters
        Model parameters. ``dt`` and the per-step coefficients are computed once
        here.

    Attributes
    ----------
    params : GBMParameters
    dt : float
        Step length :math:`\Delta t`.
    log_drift : float
        :math:`(\mu - \tfrac12\sigma^2)\Delta t`.
    diffusion : float
        :math:`\sigma\sqrt{\Delta t}`.

    Examples
    --------
    >>> sim = GBMPathSimulator(GBMParameters(100.0, 0.0, 0.0, 1.0, 2))
    >>> sim.simulate_path(np.zeros(2)).tolist()
    [100.0, 100.0, 100.0]
    """

    def __init__(self, params: GBMParameters):
        self.params = params
        self.dt = params.dt
        sigma = params.volatility
        self.log_drift = (params.drift - 0.5 * sigma * sigma) * self.dt
        self.diffusion = sigma * math.sqrt(self.dt)

    @property
    def steps(self) -> int:
        return self.params.steps

    def simulate_path(self, shocks: np.ndarray) -> np.ndarray:
        r"""
        Materialize one price path.

        Parameters
        ----------
        shocks : array_like
            Standard-normal draws of shape ``(steps,)``.

        Returns
        -------
        numpy.ndarray
            Path of shape ``(steps + 1,)``; element 0 is ``initial_price``.

        Raises
        ------
        ShapeMismatchError
            If ``shocks`` is not one-dimensional of length ``steps``.
        """
        z = np.asarray(shocks, dtype=float)
        if z.shape != (self.steps,):
            raise ShapeMismatchError(
                f"shock vector must have shape ({self.steps},), got {z.shape}"
            )
        return self.simulate_paths(z[np.newaxis, :])[0]

    def simulate_paths(self, shock_matrix: np.ndarray) -> np.ndarray:
        r"""
        Materialize one path per row of ``shock_matrix``.

        Parameters
        ----------
        shock_matrix : array_like
            Array of shape ``(n_paths, steps)``.

        Returns
        -------
        numpy.ndarray
            Array of shape ``(n_paths, steps + 1)`` where row :math:`i` equals
            ``simulate_path(shock_matrix[i])``.
        """
        z = np.asarray(shock_matrix, dtype=float)
        if z.ndim != 2 or z.shape[1] != self.steps:
            raise ShapeMismatchError(
                f"shock matrix must have shape (n_paths, {self.steps}), got {z.shape}"
            )
        s0 = self.params.initial_price
        log_increments = self.log_drift + self.diffusion * z
        paths = np.empty((z.shape[0], self.steps + 1), dtype=float)
        paths[:, 0] = s0
        paths[:, 1:] = s0 * np.exp(np.cumsum(log_increments, axis=1))
        return paths

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.params!r})"
