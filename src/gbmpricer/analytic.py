r"""
gbmpricer.analytic
==================

Closed-form Black–Scholes reference prices for European options.

.. math::
   C = S_0\,\Phi(d_1) - K e^{-rT}\Phi(d_2), \qquad
   P = K e^{-rT}\Phi(-d_2) - S_0\,\Phi(-d_1),

with

.. math::
   d_{1,2} = \frac{\ln(S_0/K) + (r \pm \tfrac12\sigma^2)T}{\sigma\sqrt T}.

The Monte Carlo engine simulates under an arbitrary drift :math:`\mu` and
discounts at :math:`r`. Its target is then
:math:`e^{-rT}\,\mathbb{E}^{\mu}[\Phi(S_T)] = e^{(\mu - r)T}\,\mathrm{BS}(r=\mu)`,
see :func:`forward_discounted_price`.
"""

from __future__ import annotations

import math

from scipy.stats import norm

from .params import OptionKind

__all__ = ["black_scholes_price", "forward_discounted_price"]


def black_scholes_price(
    spot: float,
    strike: float,
    horizon: float,
    rate: float,
    volatility: float,
    kind: OptionKind | str = OptionKind.call,
) -> float:
    r"""
    Black–Scholes price of a European call or put.

    Parameters
    ----------
    spot : float
        :math:`S_0`.
    strike : float
        :math:`K`.
    horizon : float
        :math:`T` in years; ``0`` returns intrinsic value.
    rate : float
        Continuously compounded rate :math:`r`.
    volatility : float
        :math:`\sigma`; ``0`` returns the discounted deterministic payoff.
    kind : {"call", "put"}, default ``"call"``

    Examples
    --------
    >>> round(black_scholes_price(100.0, 100.0, 1.0, 0.05, 0.2), 4)
    10.4506
    """
    kind = OptionKind(kind)
    if horizon <= 0.0:
        intrinsic = spot - strike if kind is OptionKind.call else strike - spot
        return max(intrinsic, 0.0)

    discount = math.exp(-rate * horizon)
    if volatility <= 0.0:
        forward = spot * math.exp(rate * horizon)
        intrinsic = forward - strike if kind is OptionKind.call else strike - forward
        return discount * max(intrinsic, 0.0)

    vol_sqrt_t = volatility * math.sqrt(horizon)
    d1 = (math.log(spot / strike) + (rate + 0.5 * volatility * volatility) * horizon) / vol_sqrt_t
    d2 = d1 - vol_sqrt_t
    if kind is OptionKind.call:
        return float(spot * norm.cdf(d1) - strike * discount * norm.cdf(d2))
    return float(strike * discount * norm.cdf(-d2) - spot * norm.cdf(-d1))


def forward_discounted_price(
    spot: float,
    strike: float,
    horizon: float,
    drift: float,
    rate: float,
    volatility: float,
    kind: OptionKind | str = OptionKind.call,
) -> float:
    r"""
    Expected discounted European payoff when the path drifts at ``drift``.

    Returns :math:`e^{-rT}\,\mathbb{E}[\Phi(S_T)]` with
    :math:`S_T = S_0 e^{(\mu - \sigma^2/2)T + \sigma W_T}`. Equals
    :func:`black_scholes_price` when ``drift == rate``.
    """
    return math.exp((drift - rate) * horizon) * black_scholes_price(
        spot, strike, horizon, drift, volatility, kind
    )
