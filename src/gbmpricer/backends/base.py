r"""
Base classes and utilities for execution backends.

This module provides:

Protocol
    :class:`ExecutionBackend` — Interface for path-pricing execution strategies

Functions
    :func:`make_blocks` — Chunking helper for work distribution
    :func:`price_block` — Top-level worker that prices one block of paths

Helpers
    :func:`is_windows_platform` — Platform detection for backend selection
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Callable, Protocol

import numpy as np

if TYPE_CHECKING:
    from ..gbm import GBMPathSimulator
    from ..payoffs import Payoff

__all__ = [
    "ExecutionBackend",
    "make_blocks",
    "price_block",
    "is_windows_platform",
]


def is_windows_platform() -> bool:
    """Return True when running on a Windows platform."""
    return sys.platform.startswith("win") or (sys.platform == "cli")


def make_blocks(n: int, block_size: int = 1024) -> list[tuple[int, int]]:
    r"""
    Partition an integer range :math:`[0, n)` into half-open blocks :math:`(i, j)`.

    Parameters
    ----------
    n : int
        Total number of items.
    block_size : int, default: 1024
        Target block length.

    Returns
    -------
    list of tuple[int, int]
        List of ``(i, j)`` index pairs covering ``[0, n)``.

    Examples
    --------
    >>> make_blocks(5, block_size=2)
    [(0, 2), (2, 4), (4, 5)]
    """
    if block_size < 1:
        raise ValueError("block_size must be positive")
    blocks = []
    i = 0
    while i < n:
        j = min(i + block_size, n)
        blocks.append((i, j))
        i = j
    return blocks


def price_block(
    simulator: "GBMPathSimulator",
    payoff: "Payoff",
    strike: float,
    shocks: np.ndarray,
) -> np.ndarray:
    r"""
    Simulate the paths of one block and evaluate their undiscounted payoffs.

    Parameters
    ----------
    simulator : GBMPathSimulator
        Path generator. Must be pickleable when used with a process backend.
    payoff : callable
        Module-level payoff ``payoff(paths, strike) -> ndarray``.
    strike : float
        Strike passed to ``payoff``.
    shocks : numpy.ndarray
        Rows of the shock matrix belonging to this block.

    Returns
    -------
    numpy.ndarray
        One payoff per row of ``shocks``.
    """
    paths = simulator.simulate_paths(shocks)
    return np.asarray(payoff(paths, strike), dtype=float)


class ExecutionBackend(Protocol):
    r"""
    Protocol defining the interface for execution backends.

    Backends evaluate :func:`price_block` over a fixed block layout and write
    each block's payoffs into its own slice of the output array. The caller
    performs the reduction, so backends never share an accumulator.
    """

    def run(
        self,
        simulator: "GBMPathSimulator",
        payoff: "Payoff",
        strike: float,
        shock_matrix: np.ndarray,
        blocks: list[tuple[int, int]],
        progress_callback: Callable[[int, int], None] | None,
    ) -> np.ndarray:
        r"""
        Price every block and return the per-path payoffs.

        Parameters
        ----------
        simulator : GBMPathSimulator
            Path generator.
        payoff : callable
            Payoff function.
        strike : float
            Option strike.
        shock_matrix : np.ndarray
            Shocks of shape ``(n_paths, steps)``.
        blocks : list of tuple[int, int]
            Layout from :func:`make_blocks`.
        progress_callback : callable or None
            Optional callback ``f(completed, total)`` for progress reporting.

        Returns
        -------
        np.ndarray
            Undiscounted payoffs with shape ``(n_paths,)``.
        """
