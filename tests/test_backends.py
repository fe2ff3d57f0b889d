import numpy as np
import pytest

from gbmpricer import GBMPathSimulator
from gbmpricer.backends import (
    ProcessBackend,
    SequentialBackend,
    ThreadBackend,
    is_windows_platform,
    make_blocks,
    price_block,
)
from gbmpricer.payoffs import asian_put, european_call


class TestMakeBlocks:
    """Test block creation for parallel processing"""

    def test_make_blocks_exact_division(self):
        """Test blocks with exact division"""
        blocks = make_blocks(10000, block_size=1000)
        assert len(blocks) == 10
        assert blocks[0] == (0, 1000)
        assert blocks[-1] == (9000, 10000)

    def test_make_blocks_with_remainder(self):
        """Test blocks with remainder"""
        blocks = make_blocks(10500, block_size=1000)
        assert len(blocks) == 11
        assert blocks[-1] == (10000, 10500)

    def test_make_blocks_small_n(self):
        """Test blocks smaller than block_size"""
        blocks = make_blocks(500, block_size=1000)
        assert blocks == [(0, 500)]

    def test_make_blocks_coverage(self):
        """Test all elements are covered exactly once"""
        n = 12345
        blocks = make_blocks(n, block_size=1000)
        total = sum(j - i for i, j in blocks)
        assert total == n
        assert all(b[1] == nxt[0] for b, nxt in zip(blocks, blocks[1:]))

    def test_make_blocks_invalid_size(self):
        """Test non-positive block size is rejected"""
        with pytest.raises(ValueError):
            make_blocks(10, block_size=0)


class TestPriceBlock:
    """Test the block worker"""

    def test_price_block(self, small_params, small_shocks):
        """Test worker output equals simulate + payoff"""
        sim = GBMPathSimulator(small_params)
        out = price_block(sim, european_call, 100.0, small_shocks[:10])
        expected = european_call(sim.simulate_paths(small_shocks[:10]), 100.0)
        np.testing.assert_array_equal(out, expected)


class TestBackends:
    """Test backends agree on a fixed block layout"""

    def test_sequential_and_thread_identical(self, small_params, small_shocks):
        """Test thread backend reproduces sequential payoffs exactly"""
        sim = GBMPathSimulator(small_params)
        blocks = make_blocks(len(small_shocks), 300)
        seq = SequentialBackend().run(sim, asian_put, 100.0, small_shocks, blocks, None)
        thr = ThreadBackend(n_workers=4).run(sim, asian_put, 100.0, small_shocks, blocks, None)
        assert np.array_equal(seq, thr)

    def test_process_backend_matches(self, small_params, small_shocks):
        """Test process backend reproduces sequential payoffs exactly"""
        sim = GBMPathSimulator(small_params)
        shocks = small_shocks[:1200]
        blocks = make_blocks(len(shocks), 400)
        seq = SequentialBackend().run(sim, european_call, 100.0, shocks, blocks, None)
        proc = ProcessBackend(n_workers=2).run(sim, european_call, 100.0, shocks, blocks, None)
        assert np.array_equal(seq, proc)

    @pytest.mark.parametrize("backend", [SequentialBackend(), ThreadBackend(n_workers=3)])
    def test_progress_callback(self, backend, small_params, small_shocks):
        """Test progress reaches the total"""
        calls = []
        sim = GBMPathSimulator(small_params)
        blocks = make_blocks(len(small_shocks), 1000)
        backend.run(sim, european_call, 100.0, small_shocks, blocks, lambda c, t: calls.append((c, t)))
        assert len(calls) == len(blocks)
        assert calls[-1] == (len(small_shocks), len(small_shocks))

    def test_worker_errors_propagate(self, small_params):
        """Test an exception inside a block reaches the caller"""
        sim = GBMPathSimulator(small_params)

        def broken(paths, strike):
            raise RuntimeError("boom")

        shocks = np.zeros((10, small_params.steps))
        with pytest.raises(RuntimeError, match="boom"):
            ThreadBackend(n_workers=2).run(sim, broken, 100.0, shocks, make_blocks(10, 5), None)

    def test_is_windows_platform_returns_bool(self):
        """Test platform helper"""
        assert isinstance(is_windows_platform(), bool)
