import numpy as np
import pytest

from subsel.criteria import CriterionFunction


class SumCriterion(CriterionFunction):
    """Separable score: sum of per-feature weights."""

    def __init__(self, weights):
        self.weights = np.asarray(weights, dtype=np.float64)
        self.n_initialize = 0

    def initialize(self, dimension, X, y=None):
        self.n_initialize += 1
        assert dimension == len(self.weights)

    def score(self, features=None):
        if features is None:
            return float(self.weights.sum())
        return float(self.weights[list(features)].sum())


class CoverageCriterion(CriterionFunction):
    """Weighted set cover: monotone but not separable."""

    def __init__(self, n_features, n_items=30, seed=0):
        rng = np.random.default_rng(seed)
        self.covers = rng.random((n_features, n_items)) < 0.2
        self.item_weights = rng.random(n_items)

    def initialize(self, dimension, X, y=None):
        assert dimension == self.covers.shape[0]

    def score(self, features=None):
        if features is None:
            rows = self.covers
        else:
            rows = self.covers[list(features)]
        if rows.shape[0] == 0:
            return 0.0
        return float(self.item_weights[rows.any(axis=0)].sum())


class ShortSubsetNaN(SumCriterion):
    """Sum criterion that is undefined below ``min_size`` features."""

    def __init__(self, weights, min_size):
        super().__init__(weights)
        self.min_size = min_size

    def score(self, features=None):
        if features is not None and len(list(features)) < self.min_size:
            return float("nan")
        return super().score(features)


@pytest.fixture
def sum_criterion():
    def make(n):
        return SumCriterion(np.arange(1, n + 1))
    return make


@pytest.fixture
def coverage_criterion():
    def make(n, seed=0):
        return CoverageCriterion(n, seed=seed)
    return make


@pytest.fixture
def nan_criterion():
    def make(n, min_size):
        return ShortSubsetNaN(np.arange(1, n + 1), min_size)
    return make


@pytest.fixture
def two_class_data():
    rng = np.random.default_rng(7)
    n, p = 300, 7
    y = np.repeat([0, 1], n // 2)
    X = rng.normal(size=(n, p))
    X[:, 0] += 1.5 * y
    X[:, 3] -= 1.0 * y
    X[:, 5] *= 1.0 + y
    return X, y


@pytest.fixture
def three_class_data():
    rng = np.random.default_rng(3)
    n, p = 300, 6
    y = np.repeat([0, 1, 2], n // 3)
    X = rng.normal(size=(n, p))
    X[:, 1] += 2.0 * y
    X[:, 4] -= 1.0 * y
    return X, y


@pytest.fixture
def weighted_criterion():
    def make(weights):
        return SumCriterion(weights)
    return make
