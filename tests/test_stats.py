import math

import numpy as np
import pytest

from gbmpricer.stats import PricingResult, exact_mean, summarize_payoffs
from gbmpricer.utils import autocrit, t_crit, z_crit


class TestCriticalValues:
    """Test z/t critical value helpers"""

    def test_z_crit_95(self):
        """Test the familiar 1.96"""
        assert z_crit(0.95) == pytest.approx(1.959964, abs=1e-6)

    def test_t_crit_95_df10(self):
        """Test a tabulated t value"""
        assert t_crit(0.95, 10) == pytest.approx(2.228139, abs=1e-6)

    def test_autocrit_small_sample_uses_t(self):
        """Test auto picks t below 30 samples"""
        crit, kind = autocrit(0.95, 11)
        assert kind == "t"
        assert crit == pytest.approx(t_crit(0.95, 10))

    def test_autocrit_large_sample_uses_z(self):
        """Test auto picks z at 30 samples and above"""
        crit, kind = autocrit(0.95, 30)
        assert kind == "z"
        assert crit == pytest.approx(z_crit(0.95))

    def test_autocrit_forced_method(self):
        """Test explicit method overrides the sample size rule"""
        assert autocrit(0.95, 5, "z")[1] == "z"
        assert autocrit(0.95, 10_000, "t")[1] == "t"

    def test_autocrit_bad_method(self):
        """Test unknown method raises"""
        with pytest.raises(ValueError, match="method"):
            autocrit(0.95, 100, "bootstrap")

    @pytest.mark.parametrize("confidence", [0.0, 1.0, -0.5, 1.5])
    def test_bad_confidence(self, confidence):
        """Test confidence outside (0, 1) raises"""
        with pytest.raises(ValueError):
            z_crit(confidence)


class TestExactMean:
    """Test exactly-rounded averaging"""

    def test_cancellation(self):
        """Test fsum keeps the small term that naive summation loses"""
        assert exact_mean(np.array([1e16, 1.0, -1e16])) == pytest.approx(1.0 / 3.0)

    def test_order_independent(self):
        """Test the mean is identical under permutation"""
        rng = np.random.default_rng(0)
        x = rng.lognormal(size=10_001)
        assert exact_mean(x) == exact_mean(x[::-1]) == exact_mean(rng.permutation(x))

    def test_empty(self):
        """Test empty input raises"""
        with pytest.raises(ValueError, match="empty"):
            exact_mean(np.array([]))


class TestSummarizePayoffs:
    """Test reduction of payoffs to a PricingResult"""

    def test_basic(self):
        """Test discounted mean and standard error"""
        res = summarize_payoffs(np.array([1.0, 2.0, 3.0]), 0.5)
        assert isinstance(res, PricingResult)
        assert res.price == pytest.approx(1.0)
        assert res.std_error == pytest.approx(0.5 / math.sqrt(3.0))
        assert res.ci_method == "t"
        assert res.n_paths == 3

    def test_ci_symmetric(self):
        """Test CI is centered on the price"""
        res = summarize_payoffs(np.arange(100, dtype=float), 0.9)
        assert res.ci_method == "z"
        assert res.price - res.ci_low == pytest.approx(res.ci_high - res.price)
        assert res.ci == (res.ci_low, res.ci_high)

    def test_constant_payoffs(self):
        """Test zero variance collapses the CI onto the price"""
        res = summarize_payoffs(np.full(50, 2.0), 1.0)
        assert res.std_error == 0.0
        assert res.ci_low == res.ci_high == res.price == 2.0

    def test_single_payoff(self):
        """Test one payoff has a price but no uncertainty"""
        res = summarize_payoffs(np.array([4.0]), 0.5)
        assert res.price == 2.0
        assert math.isnan(res.std_error)
        assert math.isnan(res.ci_low) and math.isnan(res.ci_high)

    def test_bad_confidence(self):
        """Test confidence is validated"""
        with pytest.raises(ValueError, match="confidence"):
            summarize_payoffs(np.ones(10), 1.0, confidence=1.0)
