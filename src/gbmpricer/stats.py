r"""
gbmpricer.stats
===============

Estimate summaries for a vector of simulated payoffs.

Given undiscounted payoffs :math:`X_1,\dots,X_N` and discount factor
:math:`D = e^{-rT}`, the price estimate is

.. math::
   \hat V = D\,\frac{1}{N}\sum_{i=1}^N X_i

with standard error :math:`SE = D\,s_X / \sqrt{N}` and confidence interval

.. math::
   \hat V \pm c \cdot SE,

where :math:`c` comes from :func:`gbmpricer.utils.autocrit`.

The sum is evaluated with :func:`math.fsum`, which is exactly rounded and
therefore independent of how the payoffs were produced or ordered.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .utils import autocrit

__all__ = ["PricingResult", "exact_mean", "summarize_payoffs"]


@dataclass
class PricingResult:
    r"""
    Price estimate with its sampling uncertainty.

    Attributes
    ----------
    price : float
        Discounted mean payoff :math:`\hat V`.
    std_error : float
        Standard error of :math:`\hat V`; ``nan`` when ``n_paths < 2``.
    ci_low, ci_high : float
        Confidence interval endpoints; equal to ``price`` when the standard
        error is zero, ``nan`` when ``n_paths < 2``.
    confidence : float
        Confidence level of the interval.
    ci_method : str
        Resolved critical value family, ``"z"`` or ``"t"``.
    n_paths : int
        Number of simulated paths.
    execution_time : float
        Wall-clock seconds spent simulating and reducing.
    metadata : dict
        Freeform details such as ``"backend"``, ``"n_workers"``, ``"style"``.
    """

    price: float
    std_error: float
    ci_low: float
    ci_high: float
    confidence: float
    ci_method: str
    n_paths: int
    execution_time: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def ci(self) -> tuple[float, float]:
        return self.ci_low, self.ci_high


def exact_mean(values: np.ndarray) -> float:
    """Exactly-rounded arithmetic mean via :func:`math.fsum`."""
    arr = np.asarray(values, dtype=float).ravel()
    if arr.size == 0:
        raise ValueError("cannot average an empty sample")
    return math.fsum(arr.tolist()) / arr.size


def summarize_payoffs(
    payoffs: np.ndarray,
    discount: float,
    confidence: float = 0.95,
    ci_method: str = "auto",
) -> PricingResult:
    r"""
    Reduce per-path payoffs to a :class:`PricingResult`.

    Parameters
    ----------
    payoffs : ndarray
        Undiscounted payoffs, one per path.
    discount : float
        Discount factor :math:`e^{-rT}`, applied once to the mean.
    confidence : float, default ``0.95``
        Confidence level in :math:`(0, 1)`.
    ci_method : {"auto", "z", "t"}, default ``"auto"``
        Critical value family.

    Returns
    -------
    PricingResult
        ``execution_time`` and ``metadata`` are left for the caller to fill.
    """
    if not 0.0 < confidence < 1.0:
        raise ValueError("confidence must be in the interval (0, 1)")
    arr = np.asarray(payoffs, dtype=float).ravel()
    n = int(arr.size)
    price = discount * exact_mean(arr)

    if n < 2:
        _, kind = autocrit(confidence, max(n, 1), ci_method)
        nan = float("nan")
        return PricingResult(price, nan, nan, nan, confidence, kind, n)

    s = float(np.std(arr, ddof=1))
    se = 0.0 if s == 0.0 else discount * s / math.sqrt(n)
    crit, kind = autocrit(confidence, n, ci_method)
    return PricingResult(
        price=price,
        std_error=se,
        ci_low=price - crit * se,
        ci_high=price + crit * se,
        confidence=confidence,
        ci_method=kind,
        n_paths=n,
    )
