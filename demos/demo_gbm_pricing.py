"""
GBM Option Pricing Demo
=======================

Prices European and arithmetic Asian options with :mod:`gbmpricer`, compares
the European estimates against their closed-form reference, and plots sample
paths and the convergence of the European call estimate.

Features:
    - European and Asian call/put pricing from one shared shock matrix
    - Standard errors and 95% confidence intervals
    - Sequential vs. thread backend timing
    - Path and convergence plots

Example:
    python demo_gbm_pricing.py
"""

from __future__ import annotations

import multiprocessing as mp
import time
from pathlib import Path

import matplotlib

matplotlib.use('Agg')  # Use non-interactive backend for headless environments
import matplotlib.pyplot as plt
import numpy as np

from gbmpricer import (
    EngineConfig,
    GBMParameters,
    GBMPathSimulator,
    OptionSpec,
    PricingEngine,
    RandomNormalSource,
    forward_discounted_price,
)

# =============================================================================
# Configuration Constants
# =============================================================================

OUTPUT_DIR = Path("img/gbm_pricing")
DPI = 150
FIGURE_SIZE = (10, 6)
N_PATHS_TO_DISPLAY = 20
GRID_ALPHA = 0.3

SEED = 999
N_PATHS = 100_000
PARAMS = GBMParameters(initial_price=100.0, drift=0.05, volatility=0.2, time_horizon=1.0, steps=252)
STRIKE = 100.0
RATE = 0.03


def ensure_output_directory() -> None:
    """Create the output directory if it doesn't exist."""
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)


def save_figure(fig: plt.Figure, filename: str) -> None:
    """Save ``fig`` under :data:`OUTPUT_DIR` and close it."""
    filepath = OUTPUT_DIR / filename
    fig.savefig(filepath, dpi=DPI, bbox_inches='tight', pad_inches=0.5)
    plt.close(fig)
    print(f"Saved plot to {filepath}")


def price_all(engine: PricingEngine, shocks: np.ndarray) -> None:
    """Print every option style and kind priced from the same shocks."""
    print("\n" + "=" * 50)
    print("PRICES:")
    for style in ("european", "asian_arithmetic"):
        for kind in ("call", "put"):
            res = engine.evaluate(OptionSpec(STRIKE, RATE, kind=kind, style=style), shocks, N_PATHS)
            print(
                f"  {style:>16} {kind:<4}: {res.price:8.4f}  "
                f"SE {res.std_error:.4f}  CI [{res.ci_low:.4f}, {res.ci_high:.4f}]"
            )
    for kind in ("call", "put"):
        ref = forward_discounted_price(
            PARAMS.initial_price, STRIKE, PARAMS.time_horizon, PARAMS.drift, RATE, PARAMS.volatility, kind
        )
        print(f"  closed-form european {kind}: {ref:.4f}")
    print("=" * 50)


def compare_backends(shocks: np.ndarray) -> None:
    """Time the European call on each CPU backend."""
    print("\n" + "=" * 50)
    print("BACKEND TIMING:")
    for backend in ("sequential", "thread", "process"):
        engine = PricingEngine(PARAMS, STRIKE, RATE, config=EngineConfig(backend=backend))
        t0 = time.time()
        price = engine.price_european_call(shocks, N_PATHS)
        print(f"  {backend:<10}: {price:.10f} in {time.time() - t0:.2f} s")
    print("=" * 50)


def plot_paths(shocks: np.ndarray) -> None:
    """Plot a handful of simulated paths."""
    paths = GBMPathSimulator(PARAMS).simulate_paths(shocks[:N_PATHS_TO_DISPLAY])
    t = np.linspace(0.0, PARAMS.time_horizon, PARAMS.steps + 1)
    fig, ax = plt.subplots(figsize=FIGURE_SIZE)
    ax.plot(t, paths.T, linewidth=0.8, alpha=0.6)
    ax.axhline(STRIKE, color='black', linestyle='--', label=f'Strike K={STRIKE:g}')
    ax.set_xlabel('Time (years)')
    ax.set_ylabel('Price')
    ax.set_title(f'{N_PATHS_TO_DISPLAY} GBM Sample Paths')
    ax.grid(alpha=GRID_ALPHA)
    ax.legend()
    save_figure(fig, 'gbm_paths.png')


def plot_convergence(engine: PricingEngine, shocks: np.ndarray) -> None:
    """Plot the running European call estimate against its reference value."""
    option = OptionSpec(STRIKE, RATE)
    payoffs = engine.simulate_payoffs(option, shocks, N_PATHS)
    running = option.discount_factor(PARAMS.time_horizon) * np.cumsum(payoffs) / np.arange(1, N_PATHS + 1)
    ref = forward_discounted_price(
        PARAMS.initial_price, STRIKE, PARAMS.time_horizon, PARAMS.drift, RATE, PARAMS.volatility
    )
    fig, ax = plt.subplots(figsize=FIGURE_SIZE)
    ax.plot(np.arange(1, N_PATHS + 1), running, label='Running estimate')
    ax.axhline(ref, color='red', linestyle='--', label=f'Closed form = {ref:.4f}')
    ax.set_xscale('log')
    ax.set_xlabel('Number of paths')
    ax.set_ylabel('European call price')
    ax.set_title('Convergence of the Monte Carlo Estimate')
    ax.grid(alpha=GRID_ALPHA)
    ax.legend()
    save_figure(fig, 'convergence.png')


# =============================================================================
# Main Execution
# =============================================================================

def main() -> None:
    """Run the pricing demo and write plots to :data:`OUTPUT_DIR`."""
    ensure_output_directory()
    engine = PricingEngine(PARAMS, STRIKE, RATE)

    print("Generating shock matrix...")
    shocks = RandomNormalSource(seed=SEED).generate_matrix(N_PATHS, PARAMS.steps)

    price_all(engine, shocks)
    compare_backends(shocks)

    print("\nGenerating plots...")
    plot_paths(shocks)
    plot_convergence(engine, shocks)

    print("\nGBM pricing demo complete.")
    print(f"Plots saved to: {OUTPUT_DIR}\n")


if __name__ == "__main__":
    # Set multiprocessing start method for compatibility
    try:
        mp.set_start_method("spawn", force=True)
    except RuntimeError:
        pass  # Already set

    main()
