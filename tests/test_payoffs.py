import numpy as np
import pytest

from gbmpricer import OptionKind, OptionSpec, OptionStyle
from gbmpricer.payoffs import (
    PAYOFFS,
    asian_call,
    asian_put,
    european_call,
    european_put,
    get_payoff,
    path_average,
)


@pytest.fixture
def paths():
    """Two hand-made paths with S0 = 100."""
    return np.array(
        [
            [100.0, 110.0, 120.0],
            [100.0, 90.0, 80.0],
        ]
    )


class TestEuropeanPayoffs:
    """Test terminal-price payoffs"""

    def test_call(self, paths):
        """Test max(S_T - K, 0)"""
        np.testing.assert_array_equal(european_call(paths, 100.0), [20.0, 0.0])

    def test_put(self, paths):
        """Test max(K - S_T, 0)"""
        np.testing.assert_array_equal(european_put(paths, 100.0), [0.0, 20.0])


class TestAsianPayoffs:
    """Test arithmetic-average payoffs"""

    def test_average_excludes_initial_price(self, paths):
        """Test the average runs over S_1..S_n only"""
        np.testing.assert_array_equal(path_average(paths), [115.0, 85.0])
        # including S0 would give 110 and 90
        assert not np.allclose(path_average(paths), paths.mean(axis=1))

    def test_call(self, paths):
        """Test max(A - K, 0)"""
        np.testing.assert_array_equal(asian_call(paths, 100.0), [15.0, 0.0])

    def test_put(self, paths):
        """Test max(K - A, 0)"""
        np.testing.assert_array_equal(asian_put(paths, 100.0), [0.0, 15.0])

    def test_single_step_equals_european(self):
        """Test a one-step Asian average is the terminal price"""
        p = np.array([[100.0, 104.5], [100.0, 97.25]])
        np.testing.assert_array_equal(asian_call(p, 100.0), european_call(p, 100.0))
        np.testing.assert_array_equal(asian_put(p, 100.0), european_put(p, 100.0))


class TestDispatch:
    """Test payoff lookup"""

    def test_four_variants_registered(self):
        """Test every style/kind pair has a payoff"""
        assert len(PAYOFFS) == 4

    @pytest.mark.parametrize(
        "style, kind, fn",
        [
            ("european", "call", european_call),
            ("european", "put", european_put),
            ("asian_arithmetic", "call", asian_call),
            ("asian_arithmetic", "put", asian_put),
        ],
    )
    def test_get_payoff(self, style, kind, fn):
        """Test OptionSpec maps to the right function"""
        assert get_payoff(OptionSpec(100.0, 0.0, kind=kind, style=style)) is fn

    def test_enum_keys(self):
        """Test dispatch keys are enums"""
        assert (OptionStyle.european, OptionKind.call) in PAYOFFS
