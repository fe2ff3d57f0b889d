import multiprocessing as mp

import pytest

from gbmpricer import EngineConfig, GBMParameters, PricingEngine, RandomNormalSource


@pytest.fixture(scope="session", autouse=True)
def _set_spawn_start_method():
    try:
        mp.set_start_method("spawn")
    except RuntimeError:
        pass  # already set


@pytest.fixture
def gbm_params():
    """Standard one-year daily-step model."""
    return GBMParameters(initial_price=100.0, drift=0.05, volatility=0.2, time_horizon=1.0, steps=252)


@pytest.fixture
def small_params():
    """Coarse grid for fast engine tests."""
    return GBMParameters(initial_price=100.0, drift=0.05, volatility=0.2, time_horizon=1.0, steps=16)


@pytest.fixture
def source():
    """Seeded normal source."""
    return RandomNormalSource(seed=42)


@pytest.fixture
def small_shocks(small_params):
    """Seeded 5000 x 16 shock matrix."""
    return RandomNormalSource(seed=7).generate_matrix(5_000, small_params.steps)


@pytest.fixture
def sequential_engine(small_params):
    """Engine forced onto the sequential backend."""
    return PricingEngine(
        small_params, strike=100.0, risk_free_rate=0.05,
        config=EngineConfig(backend="sequential", block_size=256),
    )
