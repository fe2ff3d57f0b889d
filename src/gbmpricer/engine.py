r"""

gbmpricer.engine
================

Monte Carlo pricing of European and arithmetic Asian options under GBM.

The engine consumes a pre-generated shock matrix :math:`Z \in \mathbb{R}^{N \times n}`,
turns each row into a price path with :class:`~gbmpricer.gbm.GBMPathSimulator`,
evaluates the payoff per path and returns

.. math::
   \hat V = e^{-rT}\,\frac{1}{N}\sum_{i=1}^{N} \Phi\big(S^{(i)}\big).

Parallel backends
-----------------

The path range :math:`[0, N)` is cut into blocks of ``EngineConfig.block_size``
rows. ``"auto"`` keeps small jobs sequential and otherwise **prefers threads**,
because the NumPy kernels doing the work release the Global Interpreter Lock
(GIL). On Windows ``"auto"`` resolves to processes.

Every block writes its payoffs into a disjoint slice of one array and the sum is
exactly rounded, so a given shock matrix prices to the same bits on any backend
with any worker count.
"""

from __future__ import annotations

import logging
import multiprocessing as mp
import numbers
import time
from typing import Callable

import numpy as np

from .backends import ProcessBackend, SequentialBackend, ThreadBackend, is_windows_platform, make_blocks
from .exceptions import ShapeMismatchError
from .gbm import GBMPathSimulator
from .params import EngineConfig, GBMParameters, OptionKind, OptionSpec, OptionStyle
from .payoffs import get_payoff
from .stats import PricingResult, exact_mean, summarize_payoffs

logger = logging.getLogger(__name__)  # pragma: no cover
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

__all__ = ["PricingEngine"]


class PricingEngine:
    r"""
    Monte Carlo option pricer over a fixed GBM model.

    Parameters
    ----------
    params : GBMParameters
        Model used for every path.
    strike : float
        Strike :math:`K` shared by the four ``price_*`` shortcuts.
    risk_free_rate : float
        Discount rate :math:`r`.
    config : EngineConfig, optional
        Execution settings; defaults to ``EngineConfig()``.

    Examples
    --------
    >>> from gbmpricer import GBMParameters, PricingEngine, RandomNormalSource
    >>> params = GBMParameters(100.0, 0.05, 0.2, 1.0, 252)
    >>> shocks = RandomNormalSource(seed=7).generate_matrix(50_000, params.steps)
    >>> engine = PricingEngine(params, strike=100.0, risk_free_rate=0.05)
    >>> engine.price_european_call(shocks, 50_000)  # doctest: +SKIP
    10.43...
    """

    def __init__(
        self,
        params: GBMParameters,
        strike: float,
        risk_free_rate: float,
        config: EngineConfig | None = None,
    ):
        self.params = params
        self.simulator = GBMPathSimulator(params)
        reference = OptionSpec(strike, risk_free_rate)
        self.strike = reference.strike
        self.risk_free_rate = reference.risk_free_rate
        self.config = config or EngineConfig()

    def _option(self, style: OptionStyle, kind: OptionKind) -> OptionSpec:
        return OptionSpec(self.strike, self.risk_free_rate, kind=kind, style=style)

    def price_european_call(self, shock_matrix: np.ndarray, n_paths: int) -> float:
        r"""Price :math:`\max(S_T - K, 0)`."""
        return self.price(self._option(OptionStyle.european, OptionKind.call), shock_matrix, n_paths)

    def price_european_put(self, shock_matrix: np.ndarray, n_paths: int) -> float:
        r"""Price :math:`\max(K - S_T, 0)`."""
        return self.price(self._option(OptionStyle.european, OptionKind.put), shock_matrix, n_paths)

    def price_asian_call(self, shock_matrix: np.ndarray, n_paths: int) -> float:
        r"""Price :math:`\max(A - K, 0)`, :math:`A` the average of :math:`S_1..S_n`."""
        return self.price(
            self._option(OptionStyle.asian_arithmetic, OptionKind.call), shock_matrix, n_paths
        )

    def price_asian_put(self, shock_matrix: np.ndarray, n_paths: int) -> float:
        r"""Price :math:`\max(K - A, 0)`, :math:`A` the average of :math:`S_1..S_n`."""
        return self.price(
            self._option(OptionStyle.asian_arithmetic, OptionKind.put), shock_matrix, n_paths
        )

    def price(self, option: OptionSpec, shock_matrix: np.ndarray, n_paths: int) -> float:
        """Discounted mean payoff of ``option`` over the paths of ``shock_matrix``."""
        payoffs = self.simulate_payoffs(option, shock_matrix, n_paths)
        return option.discount_factor(self.params.time_horizon) * exact_mean(payoffs)

    def evaluate(
        self,
        option: OptionSpec,
        shock_matrix: np.ndarray,
        n_paths: int,
        *,
        confidence: float = 0.95,
        ci_method: str = "auto",
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> PricingResult:
        r"""
        Price ``option`` and report the sampling uncertainty.

        Parameters
        ----------
        option : OptionSpec
            Contract to price.
        shock_matrix : array_like
            Shocks of shape ``(n_paths, steps)``.
        n_paths : int
            Must equal ``len(shock_matrix)``.
        confidence : float, default ``0.95``
            Confidence level for the interval.
        ci_method : {"auto", "z", "t"}, default ``"auto"``
            Critical value family.
        progress_callback : callable, optional
            ``f(completed_paths, n_paths)`` called as blocks finish.

        Returns
        -------
        PricingResult
            Price, standard error and confidence interval.
        """
        t0 = time.time()
        payoffs = self.simulate_payoffs(option, shock_matrix, n_paths, progress_callback)
        result = summarize_payoffs(
            payoffs,
            option.discount_factor(self.params.time_horizon),
            confidence=confidence,
            ci_method=ci_method,
        )
        result.execution_time = time.time() - t0
        result.metadata = {
            "kind": option.kind.value,
            "style": option.style.value,
            "strike": option.strike,
            "risk_free_rate": option.risk_free_rate,
            "steps": self.params.steps,
            "backend": self.config.backend,
            "n_workers": self.config.n_workers,
            "block_size": self.config.block_size,
        }
        logger.info(
            "Priced %s %s over %d paths: %.6f (SE %.6f) in %.2f s",
            option.style.value, option.kind.value, n_paths,
            result.price, result.std_error, result.execution_time,
        )
        return result

    def simulate_payoffs(
        self,
        option: OptionSpec,
        shock_matrix: np.ndarray,
        n_paths: int,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> np.ndarray:
        r"""
        Undiscounted payoff of every path, in shock-matrix row order.

        Raises
        ------
        ShapeMismatchError
            If ``n_paths`` is not positive, differs from the number of rows,
            or the rows do not have ``steps`` columns.
        """
        shocks = self._validate_shocks(shock_matrix, n_paths)
        blocks = make_blocks(n_paths, self.config.block_size)
        logger.debug("Split %d paths into %d blocks of <= %d.", n_paths, len(blocks), self.config.block_size)
        backend = self._execute_backend_type(n_paths)
        backend_instance = self._create_backend(backend, self.config.n_workers)
        return backend_instance.run(
            self.simulator, get_payoff(option), option.strike, shocks, blocks, progress_callback
        )

    def _validate_shocks(self, shock_matrix: np.ndarray, n_paths: int) -> np.ndarray:
        if isinstance(n_paths, bool) or not isinstance(n_paths, numbers.Integral) or n_paths < 1:
            raise ShapeMismatchError(f"n_paths must be a positive integer, got {n_paths!r}")
        shocks = np.asarray(shock_matrix, dtype=float)
        if shocks.ndim != 2:
            raise ShapeMismatchError(f"shock matrix must be 2-D, got {shocks.ndim}-D")
        if shocks.shape[0] != n_paths:
            raise ShapeMismatchError(
                f"n_paths={n_paths} does not match the shock matrix row count {shocks.shape[0]}"
            )
        if shocks.shape[1] != self.params.steps:
            raise ShapeMismatchError(
                f"shock rows must have length steps={self.params.steps}, got {shocks.shape[1]}"
            )
        return shocks

    def _resolve_backend_type(self, requested: str | None = None) -> str:
        r"""
        Resolve ``"auto"`` to a *parallel* backend type.

        ``"auto"`` maps to ``"thread"`` on POSIX-like platforms and to
        ``"process"`` on Windows.
        """
        backend = requested or self.config.backend
        if backend == "auto":
            on_windows = is_windows_platform()
            if on_windows:
                logger.info("Parallel backend 'auto' resolved to 'process' on Windows platform.")
            return "process" if on_windows else "thread"
        return backend

    def _execute_backend_type(self, n_paths: int) -> str:
        """Backend actually used for ``n_paths`` paths, with the small-job fallback."""
        backend = self.config.backend
        n_workers = self.config.n_workers or mp.cpu_count()
        if backend == "auto":
            if n_workers <= 1 or n_paths < self.config.parallel_threshold:
                backend = "sequential"
            else:
                backend = self._resolve_backend_type()

        if backend == "sequential":
            logger.info("Pricing %d paths sequentially...", n_paths)
        else:
            logger.info(
                "Pricing %d paths in parallel using %s backend with %d workers...",
                n_paths, backend, n_workers,
            )
        return backend

    @staticmethod
    def _create_backend(
        backend: str, n_workers: int | None
    ) -> SequentialBackend | ThreadBackend | ProcessBackend:
        """Instantiate the backend named ``backend``."""
        if backend == "sequential":
            return SequentialBackend()
        if n_workers is None:
            n_workers = mp.cpu_count()  # pragma: no cover
        if backend == "thread":
            return ThreadBackend(n_workers=n_workers)
        return ProcessBackend(n_workers=n_workers)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(params={self.params!r}, strike={self.strike}, "
            f"risk_free_rate={self.risk_free_rate}, config={self.config!r})"
        )
