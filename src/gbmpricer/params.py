r"""
gbmpricer.params
================

Immutable configuration objects shared by the simulator and the pricing engine.

- :class:`GBMParameters` – model inputs :math:`(S_0, \mu, \sigma, T, n)`.
- :class:`OptionSpec` – strike, discount rate, payoff kind and exercise style.
- :class:`EngineConfig` – execution backend, worker count and block layout.

All three validate their fields in ``__post_init__`` and raise
:class:`~gbmpricer.exceptions.InvalidParameterError` naming the offending field.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from .exceptions import InvalidParameterError

__all__ = [
    "GBMParameters",
    "OptionKind",
    "OptionStyle",
    "OptionSpec",
    "EngineConfig",
    "DEFAULT_BLOCK_SIZE",
    "PARALLEL_THRESHOLD",
]

# Paths per work block; fixed so the block layout never depends on worker count
DEFAULT_BLOCK_SIZE = 1024
# Minimum number of paths before "auto" goes parallel
PARALLEL_THRESHOLD = 20_000

_VALID_BACKENDS = ("auto", "sequential", "thread", "process")


def _require_finite(name: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidParameterError(name, "a real number", value) from None
    if not math.isfinite(value):
        raise InvalidParameterError(name, "finite", value)
    return value


def _require_int(name: str, value, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(name, "an integer", value)
    if value < minimum:
        raise InvalidParameterError(name, f">= {minimum}", value)
    return int(value)


class OptionKind(str, Enum):
    """Payoff direction."""

    call = "call"
    put = "put"


class OptionStyle(str, Enum):
    r"""
    Payoff style.

    Attributes
    ----------
    european : str
        Payoff on the terminal price :math:`S_T`.
    asian_arithmetic : str
        Payoff on the arithmetic average :math:`\frac{1}{n}\sum_{i=1}^n S_{t_i}`.
    """

    european = "european"
    asian_arithmetic = "asian_arithmetic"


@dataclass(frozen=True)
class GBMParameters:
    r"""
    Geometric Brownian Motion model parameters.

    .. math::
       dS_t = \mu S_t\,dt + \sigma S_t\,dW_t

    Attributes
    ----------
    initial_price : float
        Spot :math:`S_0 > 0`.
    drift : float
        Drift :math:`\mu`; any finite value, including negative.
    volatility : float
        Diffusion coefficient :math:`\sigma \ge 0`.
    time_horizon : float
        Horizon :math:`T > 0` in years.
    steps : int
        Number of uniform discretization steps :math:`n \ge 1`.

    Examples
    --------
    >>> p = GBMParameters(100.0, 0.05, 0.2, 1.0, 4)
    >>> p.dt
    0.25
    """

    initial_price: float
    drift: float
    volatility: float
    time_horizon: float
    steps: int

    def __post_init__(self) -> None:
        s0 = _require_finite("initial_price", self.initial_price)
        mu = _require_finite("drift", self.drift)
        sigma = _require_finite("volatility", self.volatility)
        horizon = _require_finite("time_horizon", self.time_horizon)
        if s0 <= 0.0:
            raise InvalidParameterError("initial_price", "> 0", self.initial_price)
        if sigma < 0.0:
            raise InvalidParameterError("volatility", ">= 0", self.volatility)
        if horizon <= 0.0:
            raise InvalidParameterError("time_horizon", "> 0", self.time_horizon)
        steps = _require_int("steps", self.steps, 1)
        object.__setattr__(self, "initial_price", s0)
        object.__setattr__(self, "drift", mu)
        object.__setattr__(self, "volatility", sigma)
        object.__setattr__(self, "time_horizon", horizon)
        object.__setattr__(self, "steps", steps)

    @property
    def dt(self) -> float:
        r"""Step length :math:`\Delta t = T / n`."""
        return self.time_horizon / self.steps

    def with_overrides(self, **changes) -> "GBMParameters":
        """Return a validated copy with selected fields replaced."""
        return replace(self, **changes)


@dataclass(frozen=True)
class OptionSpec:
    r"""
    Option contract priced by :class:`~gbmpricer.engine.PricingEngine`.

    Attributes
    ----------
    strike : float
        Strike :math:`K > 0`.
    risk_free_rate : float
        Continuously compounded discount rate :math:`r`.
    kind : OptionKind
        ``"call"`` or ``"put"``. Strings are coerced.
    style : OptionStyle
        ``"european"`` or ``"asian_arithmetic"``. Strings are coerced.
    """

    strike: float
    risk_free_rate: float
    kind: OptionKind = OptionKind.call
    style: OptionStyle = OptionStyle.european

    def __post_init__(self) -> None:
        strike = _require_finite("strike", self.strike)
        if strike <= 0.0:
            raise InvalidParameterError("strike", "> 0", self.strike)
        rate = _require_finite("risk_free_rate", self.risk_free_rate)
        try:
            kind = OptionKind(self.kind)
        except ValueError:
            raise InvalidParameterError("kind", "one of 'call', 'put'", self.kind) from None
        try:
            style = OptionStyle(self.style)
        except ValueError:
            raise InvalidParameterError(
                "style", "one of 'european', 'asian_arithmetic'", self.style
            ) from None
        object.__setattr__(self, "strike", strike)
        object.__setattr__(self, "risk_free_rate", rate)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "style", style)

    def discount_factor(self, horizon: float) -> float:
        r"""Return :math:`e^{-rT}` for the given horizon."""
        return math.exp(-self.risk_free_rate * horizon)


@dataclass(frozen=True)
class EngineConfig:
    r"""
    Execution settings for :class:`~gbmpricer.engine.PricingEngine`.

    Attributes
    ----------
    backend : {"auto", "sequential", "thread", "process"}, default ``"auto"``
        ``"auto"`` runs sequentially below :attr:`parallel_threshold` paths and
        on a worker pool above it.
    n_workers : int, optional
        Pool size. ``None`` means :func:`multiprocessing.cpu_count`.
    block_size : int, default ``1024``
        Paths per work block.
    parallel_threshold : int, default ``20_000``
        Minimum path count for ``"auto"`` to use a pool.

    Notes
    -----
    The block layout depends on ``block_size`` only, so changing ``backend``
    or ``n_workers`` never changes the numerical result.
    """

    backend: str = "auto"
    n_workers: Optional[int] = None
    block_size: int = DEFAULT_BLOCK_SIZE
    parallel_threshold: int = PARALLEL_THRESHOLD

    def __post_init__(self) -> None:
        if self.backend not in _VALID_BACKENDS:
            raise InvalidParameterError("backend", f"one of {_VALID_BACKENDS}", self.backend)
        if self.n_workers is not None:
            object.__setattr__(self, "n_workers", _require_int("n_workers", self.n_workers, 1))
        object.__setattr__(self, "block_size", _require_int("block_size", self.block_size, 1))
        object.__setattr__(
            self, "parallel_threshold", _require_int("parallel_threshold", self.parallel_threshold, 0)
        )

    def with_overrides(self, **changes) -> "EngineConfig":
        """Return a validated copy with selected fields replaced."""
        return replace(self, **changes)
