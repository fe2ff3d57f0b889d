r"""
Vectorized payoff functions over blocks of simulated paths.

Every payoff has the signature ``payoff(paths, strike) -> ndarray`` where
``paths`` has shape ``(n_paths, steps + 1)`` and the result has shape
``(n_paths,)``. Functions are module-level so they pickle for the process
backend.

The arithmetic Asian average runs over the simulated steps only:

.. math::
   A = \frac{1}{n}\sum_{k=1}^{n} S_{t_k},

so the initial price :math:`S_0` is excluded and a one-step Asian option pays
exactly like its European counterpart.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

from .params import OptionKind, OptionSpec, OptionStyle

__all__ = [
    "Payoff",
    "european_call",
    "european_put",
    "asian_call",
    "asian_put",
    "path_average",
    "PAYOFFS",
    "get_payoff",
]

Payoff = Callable[[np.ndarray, float], np.ndarray]


def path_average(paths: np.ndarray) -> np.ndarray:
    """Arithmetic mean of ``S_1..S_n`` per row (``S_0`` excluded)."""
    return np.mean(paths[:, 1:], axis=1)


def european_call(paths: np.ndarray, strike: float) -> np.ndarray:
    r""":math:`\max(S_T - K, 0)`."""
    return np.maximum(paths[:, -1] - strike, 0.0)


def european_put(paths: np.ndarray, strike: float) -> np.ndarray:
    r""":math:`\max(K - S_T, 0)`."""
    return np.maximum(strike - paths[:, -1], 0.0)


def asian_call(paths: np.ndarray, strike: float) -> np.ndarray:
    r""":math:`\max(A - K, 0)` with :math:`A` from :func:`path_average`."""
    return np.maximum(path_average(paths) - strike, 0.0)


def asian_put(paths: np.ndarray, strike: float) -> np.ndarray:
    r""":math:`\max(K - A, 0)` with :math:`A` from :func:`path_average`."""
    return np.maximum(strike - path_average(paths), 0.0)


PAYOFFS: dict[tuple[OptionStyle, OptionKind], Payoff] = {
    (OptionStyle.european, OptionKind.call): european_call,
    (OptionStyle.european, OptionKind.put): european_put,
    (OptionStyle.asian_arithmetic, OptionKind.call): asian_call,
    (OptionStyle.asian_arithmetic, OptionKind.put): asian_put,
}


def get_payoff(option: OptionSpec) -> Payoff:
    """Look up the payoff function for ``option``'s style and kind."""
    return PAYOFFS[(option.style, option.kind)]
