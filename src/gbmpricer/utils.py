r"""
Critical values for confidence intervals.

:func:`autocrit` picks a Student-:math:`t` value for small samples and a
normal :math:`z` value otherwise.
"""

from __future__ import annotations

from scipy.stats import norm
from scipy.stats import t as student_t

__all__ = ["z_crit", "t_crit", "autocrit"]

# Below this sample size "auto" uses Student-t
_T_THRESHOLD = 30


def z_crit(confidence: float) -> float:
    r"""
    Two-sided normal critical value :math:`z_{1-\alpha/2}`.

    Examples
    --------
    >>> round(z_crit(0.95), 3)
    1.96
    """
    if not 0.0 < confidence < 1.0:
        raise ValueError("confidence must be in the interval (0, 1)")
    return float(norm.ppf(0.5 + confidence / 2.0))


def t_crit(confidence: float, df: int) -> float:
    r"""Two-sided Student-:math:`t` critical value with ``df`` degrees of freedom."""
    if not 0.0 < confidence < 1.0:
        raise ValueError("confidence must be in the interval (0, 1)")
    if df < 1:
        raise ValueError("df must be >= 1")
    return float(student_t.ppf(0.5 + confidence / 2.0, df))


def autocrit(confidence: float, n: int, method: str = "auto") -> tuple[float, str]:
    r"""
    Select a critical value for a mean CI.

    Parameters
    ----------
    confidence : float
        Confidence level in :math:`(0, 1)`.
    n : int
        Effective sample size.
    method : {"auto", "z", "t"}, default ``"auto"``
        ``"auto"`` uses :math:`t_{n-1}` when ``n < 30`` and :math:`z` otherwise.

    Returns
    -------
    tuple[float, str]
        ``(crit, kind)`` where ``kind`` is ``"z"`` or ``"t"``.
    """
    method = str(getattr(method, "value", method))
    if method not in ("auto", "z", "t"):
        raise ValueError(f"method must be one of 'auto', 'z', 't', got '{method}'")
    if method == "z" or (method == "auto" and n >= _T_THRESHOLD):
        return z_crit(confidence), "z"
    return t_crit(confidence, max(1, n - 1)), "t"
