r"""
gbmpricer.random_source
=======================

Seedable standard-normal sampling.

:class:`RandomNormalSource` owns one :class:`numpy.random.Generator` built from a
:class:`numpy.random.SeedSequence`. Uniform draws from that generator are mapped
to :math:`\mathcal{N}(0, 1)` by one of two transforms:

``"inverse_cdf"``
    :math:`Z = \Phi^{-1}(U)` with :math:`U \sim \mathcal{U}(0, 1)`, evaluated by
    :func:`scipy.special.ndtri`.
``"box_muller"``
    :math:`Z_1 = \sqrt{-2\ln U_1}\cos(2\pi U_2)`,
    :math:`Z_2 = \sqrt{-2\ln U_1}\sin(2\pi U_2)`.

Example
-------
>>> src = RandomNormalSource(seed=42)
>>> shocks = src.generate_matrix(1_000, 252)
>>> shocks.shape
(1000, 252)
"""

from __future__ import annotations

import numbers

import numpy as np
from scipy.special import ndtri

from .exceptions import InvalidParameterError

__all__ = ["RandomNormalSource"]

_METHODS = ("inverse_cdf", "box_muller")
_TINY = np.finfo(float).tiny


def _require_count(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(name, "an integer", value)
    if value < 0:
        raise InvalidParameterError(name, ">= 0", value)
    return int(value)


class RandomNormalSource:
    r"""
    Independent :math:`\mathcal{N}(0, 1)` samples from a private generator.

    Parameters
    ----------
    seed : int or None, default ``None``
        Seed for :class:`numpy.random.SeedSequence`. ``None`` draws entropy from
        the OS, so two unseeded sources never share a stream.
    method : {"inverse_cdf", "box_muller"}, default ``"inverse_cdf"``
        Uniform-to-normal transform.

    Notes
    -----
    Every call advances the generator. Re-seeding only happens through
    :meth:`set_seed`.
    """

    def __init__(self, seed: int | None = None, method: str = "inverse_cdf"):
        if method not in _METHODS:
            raise InvalidParameterError("method", f"one of {_METHODS}", method)
        self.method = method
        self.seed_seq: np.random.SeedSequence
        self.rng: np.random.Generator
        self.set_seed(seed)

    @classmethod
    def _from_seed_seq(cls, seed_seq: np.random.SeedSequence, method: str) -> "RandomNormalSource":
        src = cls.__new__(cls)
        src.method = method
        src.seed_seq = seed_seq
        src.rng = np.random.default_rng(seed_seq)
        return src

    def set_seed(self, seed: int | None) -> None:
        r"""
        Reset the generator from ``seed``.

        Parameters
        ----------
        seed : int or None
            Seed for :class:`numpy.random.SeedSequence`. :data:`None` chooses
            entropy from the OS.
        """
        self.seed_seq = np.random.SeedSequence(seed)
        self.rng = np.random.default_rng(self.seed_seq)

    @property
    def seed_entropy(self) -> int:
        """Entropy of the underlying seed sequence; pass it back as ``seed`` to replay."""
        return self.seed_seq.entropy  # type: ignore[return-value]

    def spawn(self, n: int) -> list["RandomNormalSource"]:
        r"""
        Derive ``n`` statistically independent child sources.

        Uses :meth:`numpy.random.SeedSequence.spawn`, so children are
        deterministic given the parent's seed and spawn order.
        """
        n = _require_count("n", n)
        return [self._from_seed_seq(ss, self.method) for ss in self.seed_seq.spawn(n)]

    def generate_normal(self, count: int) -> np.ndarray:
        r"""
        Draw ``count`` independent standard-normal samples.

        Parameters
        ----------
        count : int
            Number of samples. ``0`` returns an empty array.

        Returns
        -------
        numpy.ndarray
            Float64 array of shape ``(count,)``.
        """
        count = _require_count("count", count)
        if count == 0:
            return np.empty(0, dtype=float)
        if self.method == "box_muller":
            return self._box_muller(count)
        return self._inverse_cdf(count)

    def generate_matrix(self, n_paths: int, steps: int) -> np.ndarray:
        r"""
        Draw a shock matrix of shape ``(n_paths, steps)``.

        Row :math:`i` is the shock vector of path :math:`i`. The matrix is
        filled row-major from a single :meth:`generate_normal` call.
        """
        n_paths = _require_count("n_paths", n_paths)
        steps = _require_count("steps", steps)
        return self.generate_normal(n_paths * steps).reshape(n_paths, steps)

    def _inverse_cdf(self, count: int) -> np.ndarray:
        # open interval (0, 1): ndtri(0) is -inf
        u = self.rng.uniform(_TINY, 1.0, size=count)
        return ndtri(u)

    def _box_muller(self, count: int) -> np.ndarray:
        m = (count + 1) // 2
        u1 = 1.0 - self.rng.random(m)  # (0, 1]
        u2 = self.rng.random(m)
        radius = np.sqrt(-2.0 * np.log(u1))
        theta = 2.0 * np.pi * u2
        z = np.empty(2 * m, dtype=float)
        z[0::2] = radius * np.cos(theta)
        z[1::2] = radius * np.sin(theta)
        return z[:count]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(method={self.method!r}, seed_entropy={self.seed_entropy})"
