r"""
Sequential execution backend.

Prices the blocks one after another on the calling thread.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

import numpy as np

from .base import price_block

if TYPE_CHECKING:
    from ..gbm import GBMPathSimulator
    from ..payoffs import Payoff

__all__ = ["SequentialBackend"]


class SequentialBackend:
    r"""
    Sequential (single-threaded) execution backend.

    Suitable for small path counts or debugging.

    Examples
    --------
    >>> backend = SequentialBackend()
    >>> payoffs = backend.run(sim, european_call, 100.0, shocks, make_blocks(len(shocks)), None)  # doctest: +SKIP
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
        """Price ``blocks`` in order and return per-path payoffs."""
        n_paths = shock_matrix.shape[0]
        results = np.empty(n_paths, dtype=float)
        for i, j in blocks:
            results[i:j] = price_block(simulator, payoff, strike, shock_matrix[i:j])
            if progress_callback:
                progress_callback(j, n_paths)
        return results
