"""gbmpricer package public API."""

from .analytic import black_scholes_price, forward_discounted_price
from .engine import PricingEngine
from .exceptions import GBMPricerError, InvalidParameterError, ShapeMismatchError
from .gbm import GBMPathSimulator
from .params import EngineConfig, GBMParameters, OptionKind, OptionSpec, OptionStyle
from .random_source import RandomNormalSource
from .stats import PricingResult
from .utils import autocrit, t_crit, z_crit

__all__ = [
    "GBMParameters",
    "OptionSpec",
    "OptionKind",
    "OptionStyle",
    "EngineConfig",
    "RandomNormalSource",
    "GBMPathSimulator",
    "PricingEngine",
    "PricingResult",
    "GBMPricerError",
    "InvalidParameterError",
    "ShapeMismatchError",
    "black_scholes_price",
    "forward_discounted_price",
    "z_crit",
    "t_crit",
    "autocrit",
]

__version__ = "0.1.0"
