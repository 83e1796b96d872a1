"""Tests for the Bhattacharyya and Fisher criteria."""

from itertools import combinations

import numpy as np
import pytest

from subsel import BhattacharyyaDistance, FisherCriterion, InvalidConfiguration, NumericFailure
from subsel.criteria import CriterionFunction, evaluate
from subsel.criteria._linalg import downdate_inverse, quadratic_form


@pytest.fixture
def bhattacharyya(two_class_data):
    X, y = two_class_data
    criterion = BhattacharyyaDistance()
    criterion.initialize(X.shape[1], X, y)
    return criterion


class TestBhattacharyya:

    def test_positive_and_informative(self, bhattacharyya):
        assert bhattacharyya.score() > 0
        # features 0, 3, 5 carry the class difference
        assert bhattacharyya.score([0]) > bhattacharyya.score([1])
        assert bhattacharyya.score([5]) > bhattacharyya.score([2])

    def test_monotone(self, bhattacharyya):
        n = bhattacharyya.dimension
        for subset in combinations(range(n), 4):
            value = bhattacharyya.score(subset)
            for f in subset:
                assert bhattacharyya.score([g for g in subset if g != f]) <= value + 1e-10

    def test_root_state_matches_score(self, bhattacharyya):
        state = bhattacharyya.root_state()
        assert state.config == tuple(range(bhattacharyya.dimension))
        assert state.removed_feature == -1
        assert state.value == pytest.approx(bhattacharyya.score())

    def test_derived_states_match_score(self, bhattacharyya):
        state = bhattacharyya.root_state()
        for f in [4, 0, 6, 2]:
            state = bhattacharyya.derive_state(f, state)
            assert state.removed_feature == f
            assert state.value == pytest.approx(bhattacharyya.score(state.config), rel=1e-9)
        assert state.config == (1, 3, 5)

    def test_requires_two_classes(self, three_class_data):
        X, y = three_class_data
        with pytest.raises(InvalidConfiguration, match="2 classes"):
            BhattacharyyaDistance().initialize(X.shape[1], X, y)

    def test_requires_labels(self, two_class_data):
        X, _ = two_class_data
        with pytest.raises(InvalidConfiguration):
            BhattacharyyaDistance().initialize(X.shape[1], X)

    def test_singular_covariance(self, two_class_data):
        X, y = two_class_data
        X = np.column_stack([X, X[:, 0]])
        criterion = BhattacharyyaDistance()
        criterion.initialize(X.shape[1], X, y)

        assert np.isfinite(criterion.score([0, 1, 2]))
        with pytest.raises(NumericFailure):
            criterion.score([0, X.shape[1] - 1])

    def test_accepts_dataframe(self, two_class_data):
        import pandas as pd

        X, y = two_class_data
        df = pd.DataFrame(X, columns=[f"f{i}" for i in range(X.shape[1])])
        criterion = BhattacharyyaDistance()
        criterion.initialize(df.shape[1], df, pd.Series(y))
        assert criterion.score([0]) == pytest.approx(criterion.score(np.array([0])))


class TestFisher:

    def test_informative_features_score_higher(self, three_class_data):
        X, y = three_class_data
        criterion = FisherCriterion()
        criterion.initialize(X.shape[1], X, y)

        assert criterion.score([1]) > criterion.score([0])
        assert criterion.score([4]) > criterion.score([2])
        assert criterion.score() >= criterion.score([1, 4]) - 1e-9

    def test_single_feature_is_variance_ratio(self, two_class_data):
        X, y = two_class_data
        criterion = FisherCriterion()
        criterion.initialize(X.shape[1], X, y)

        x = X[:, 0]
        priors = np.array([np.mean(y == 0), np.mean(y == 1)])
        means = np.array([x[y == 0].mean(), x[y == 1].mean()])
        variances = np.array([x[y == 0].var(), x[y == 1].var()])
        sb = np.sum(priors * (means - priors @ means) ** 2)
        sw = np.sum(priors * variances)

        assert criterion.score([0]) == pytest.approx(sb / sw)

    def test_tolerates_singular_within_scatter(self, three_class_data):
        X, y = three_class_data
        X = np.column_stack([X, X[:, 1]])
        criterion = FisherCriterion()
        criterion.initialize(X.shape[1], X, y)

        assert np.isfinite(criterion.score([1, X.shape[1] - 1]))

    def test_requires_two_classes(self):
        X = np.random.default_rng(0).normal(size=(20, 3))
        with pytest.raises(InvalidConfiguration):
            FisherCriterion().initialize(3, X, np.zeros(20))


class _NaNCriterion(CriterionFunction):
    def initialize(self, dimension, X, y=None):
        pass

    def score(self, features=None):
        return float("nan")


class TestEvaluate:

    def test_nan_raises_numeric_failure(self):
        with pytest.raises(NumericFailure, match="NaN"):
            evaluate(_NaNCriterion(), [0, 1])

    def test_long_subsets_are_abbreviated(self):
        with pytest.raises(NumericFailure, match="total"):
            evaluate(_NaNCriterion(), list(range(20)))


class TestLinalg:

    def test_downdate_matches_direct_inverse(self):
        rng = np.random.default_rng(0)
        a = rng.normal(size=(6, 6))
        cov = a @ a.T + 6 * np.eye(6)
        inverse = np.linalg.inv(cov)

        reduced, pivot = downdate_inverse(inverse, 2)
        keep = [0, 1, 3, 4, 5]
        expected = np.linalg.inv(cov[np.ix_(keep, keep)])

        np.testing.assert_allclose(reduced, expected, rtol=1e-10)
        assert np.log(pivot) == pytest.approx(
            np.linalg.slogdet(cov[np.ix_(keep, keep)])[1] - np.linalg.slogdet(cov)[1]
        )

    def test_quadratic_form(self):
        m = np.array([[2.0, 1.0], [1.0, 3.0]])
        v = np.array([1.0, 2.0])
        assert quadratic_form(m, v) == pytest.approx(v @ m @ v)
