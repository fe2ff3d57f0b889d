"""Exception hierarchy for :mod:`gbmpricer`."""

from __future__ import annotations

from typing import Any

__all__ = [
    "GBMPricerError",
    "InvalidParameterError",
    "ShapeMismatchError",
]


class GBMPricerError(Exception):
    """Base class for errors raised by the package."""


class InvalidParameterError(GBMPricerError, ValueError):
    r"""
    A model, option or engine parameter is outside its allowed range.

    Parameters
    ----------
    field : str
        Name of the offending field, e.g. ``"volatility"``.
    constraint : str
        Human-readable constraint, e.g. ``">= 0"``.
    value : Any
        The rejected value.

    Examples
    --------
    >>> str(InvalidParameterError("steps", ">= 1", 0))
    'steps must be >= 1, got 0'
    """

    def __init__(self, field: str, constraint: str, value: Any):
        self.field = field
        self.constraint = constraint
        self.value = value
        super().__init__(f"{field} must be {constraint}, got {value!r}")


class ShapeMismatchError(GBMPricerError, ValueError):
    """A shock vector or matrix does not match the configured step/path counts."""
