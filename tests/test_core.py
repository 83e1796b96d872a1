"""Tests for binomial coefficients and leaf accounting."""

import math

import pytest

from subsel.core import Progress, binomial


class TestBinomial:

    @pytest.mark.parametrize("n,k,expected", [(5, 2, 10), (10, 0, 1), (10, 10, 1), (6, 3, 20)])
    def test_small_values(self, n, k, expected):
        assert binomial(n, k) == expected

    def test_out_of_range_is_zero(self):
        assert binomial(5, -1) == 0
        assert binomial(5, 6) == 0

    def test_symmetric(self):
        for n in range(12):
            for k in range(n + 1):
                assert binomial(n, k) == binomial(n, n - k)

    def test_large_values_do_not_overflow(self):
        value = binomial(100, 50)
        assert isinstance(value, int)
        assert value == math.comb(100, 50)
        assert value > 2 ** 63


class TestProgress:

    def test_total_is_number_of_subsets(self):
        assert Progress(6, 2).total == 15

    def test_leaf_and_prune_reach_one(self):
        progress = Progress(5, 3)
        seen = []
        progress.subscribe(seen.append)

        progress.prune(4, 2)  # 6 leaves
        for _ in range(4):
            progress.leaf()

        assert progress.complete
        assert progress.fraction == 1.0
        assert seen[-1] == 1.0
        assert seen == sorted(seen)
