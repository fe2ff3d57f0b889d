r"""
Parallel execution backends.

This module provides:

Classes
    :class:`ThreadBackend` — Thread-based parallelism using ThreadPoolExecutor
    :class:`ProcessBackend` — Process-based parallelism using ProcessPoolExecutor

Both receive a block layout from the caller and write each finished block into
its own slice of a preallocated array, so the merge needs no lock and the
result does not depend on completion order.
"""

from __future__ import annotations

import logging
import multiprocessing as mp
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from typing import TYPE_CHECKING, Callable

import numpy as np

from .base import price_block

if TYPE_CHECKING:
    from ..gbm import GBMPathSimulator
    from ..payoffs import Payoff

logger = logging.getLogger(__name__)

__all__ = [
    "ThreadBackend",
    "ProcessBackend",
]


class ThreadBackend:
    r"""
    Thread-based parallel execution backend.

    Uses :class:`concurrent.futures.ThreadPoolExecutor`. Effective because the
    NumPy kernels in :func:`~gbmpricer.backends.base.price_block` release the GIL.

    Parameters
    ----------
    n_workers : int
        Number of worker threads to use.

    Examples
    --------
    >>> backend = ThreadBackend(n_workers=4)
    >>> payoffs = backend.run(sim, european_call, 100.0, shocks, blocks, None)  # doctest: +SKIP
    """

    def __init__(self, n_workers: int):
        self.n_workers = n_workers

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
        Price blocks in parallel using threads.

        Returns
        -------
        np.ndarray
            Undiscounted payoffs with shape ``(n_paths,)``.
        """
        n_paths = shock_matrix.shape[0]
        results = np.empty(n_paths, dtype=float)
        completed = 0
        max_workers = max(1, min(self.n_workers, len(blocks)))

        def _work(blk):
            a, b = blk
            return blk, price_block(simulator, payoff, strike, shock_matrix[a:b])

        with ThreadPoolExecutor(max_workers=max_workers) as ex:
            futs = [ex.submit(_work, blk) for blk in blocks]
            for f in as_completed(futs):
                (i, j), arr = f.result()
                results[i:j] = arr
                completed += j - i
                if progress_callback:
                    progress_callback(completed, n_paths)

        return results


class ProcessBackend:
    r"""
    Process-based parallel execution backend.

    Uses :class:`concurrent.futures.ProcessPoolExecutor` with a ``spawn``
    context. Preferred on Windows, where threads tend to serialize.

    Parameters
    ----------
    n_workers : int
        Number of worker processes to use.

    Notes
    -----
    The simulator and payoff are pickled once per block together with that
    block's rows of the shock matrix.

    Examples
    --------
    >>> backend = ProcessBackend(n_workers=4)
    >>> payoffs = backend.run(sim, european_call, 100.0, shocks, blocks, None)  # doctest: +SKIP
    """

    def __init__(self, n_workers: int):
        self.n_workers = n_workers

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
        Price blocks in parallel using processes.

        Returns
        -------
        np.ndarray
            Undiscounted payoffs with shape ``(n_paths,)``.
        """
        n_paths = shock_matrix.shape[0]
        results = np.empty(n_paths, dtype=float)
        completed = 0
        max_workers = max(1, min(self.n_workers, len(blocks)))

        with ProcessPoolExecutor(
            max_workers=max_workers,
            mp_context=mp.get_context("spawn"),
        ) as ex:
            futs = []
            for i, j in blocks:
                f = ex.submit(price_block, simulator, payoff, strike, shock_matrix[i:j])
                f.blk = (i, j)  # type: ignore[attr-defined]
                futs.append(f)
            try:
                for f in as_completed(futs):
                    i, j = f.blk  # type: ignore[attr-defined]
                    results[i:j] = f.result()
                    completed += j - i
                    if progress_callback:
                        progress_callback(completed, n_paths)
            except KeyboardInterrupt:  # pragma: no cover
                logger.warning("Interrupted; cancelling %d pending blocks.", len(futs))
                for f in futs:
                    f.cancel()
                raise

        return results
