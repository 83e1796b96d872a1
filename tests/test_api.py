"""Tests for select_subset and SubsetSelector."""

import numpy as np
import pandas as pd
import pytest

from subsel import (
    FastBranchAndBound,
    InvalidConfiguration,
    OscillatingSearch,
    RecursiveBranchAndBound,
    SubsetSelector,
    select_subset,
)
from subsel.api import METHODS, resolve_criterion, resolve_method
from subsel.criteria import BhattacharyyaDistance, FisherCriterion


@pytest.fixture
def two_class_frame(two_class_data):
    X, y = two_class_data
    return pd.DataFrame(X, columns=[f"f{i}" for i in range(X.shape[1])]), pd.Series(y)


class TestSelectSubset:

    def test_returns_names_for_dataframe(self, two_class_frame):
        X, y = two_class_frame
        selected = select_subset(X, y, k=3)

        assert isinstance(selected, list)
        assert len(selected) == 3
        assert all(isinstance(f, str) for f in selected)
        assert "f0" in selected

    def test_returns_indices_for_numpy(self, two_class_data):
        X, y = two_class_data
        selected = select_subset(X, y, k=3)

        assert all(isinstance(f, int) for f in selected)
        assert selected == sorted(selected)

    @pytest.mark.parametrize("method", sorted(METHODS))
    def test_every_method_runs(self, two_class_data, method):
        X, y = two_class_data
        selected = select_subset(X, y, k=3, method=method, criterion="bhattacharyya")
        assert len(selected) == 3
        assert len(set(selected)) == 3

    def test_exact_methods_agree(self, two_class_data):
        X, y = two_class_data
        reference = select_subset(X, y, k=3, method="exhaustive")
        for method in ["basic_bnb", "improved_bnb", "fast_bnb", "partial_bnb", "recursive_bnb"]:
            assert select_subset(X, y, k=3, method=method) == reference

    def test_multiclass_uses_fisher(self, three_class_data):
        X, y = three_class_data
        selected = select_subset(X, y, k=2)
        assert sorted(selected) == [1, 4]

    def test_criterion_instance(self, two_class_data):
        X, y = two_class_data
        selected = select_subset(X, y, k=2, method="sffs", criterion=FisherCriterion())
        assert len(selected) == 2

    def test_unknown_method(self, two_class_data):
        X, y = two_class_data
        with pytest.raises(InvalidConfiguration, match="Unknown method"):
            select_subset(X, y, k=3, method="genetic")

    def test_unknown_criterion(self, two_class_data):
        X, y = two_class_data
        with pytest.raises(InvalidConfiguration, match="Unknown criterion"):
            select_subset(X, y, k=3, criterion="mutual_information")

    @pytest.mark.parametrize("k", [0, 8, -2])
    def test_k_out_of_range(self, two_class_data, k):
        X, y = two_class_data
        with pytest.raises(InvalidConfiguration):
            select_subset(X, y, k=k)

    def test_verbose_prints_summary(self, two_class_data, capsys):
        X, y = two_class_data
        select_subset(X, y, k=2, method="forward", verbose=True)
        out = capsys.readouterr().out
        assert "ForwardSelection" in out
        assert "ADD" in out
        assert "Selected 2 / 7 features" in out

    def test_show_progress(self, two_class_data, capsys):
        X, y = two_class_data
        selected = select_subset(X, y, k=2, method="exhaustive", show_progress=True)
        assert len(selected) == 2
        assert "100.0%" in capsys.readouterr().err


class TestAutoChoice:

    def test_two_classes(self, two_class_data):
        _, y = two_class_data
        criterion = resolve_criterion("auto", y)
        assert isinstance(criterion, BhattacharyyaDistance)
        assert isinstance(resolve_method("auto", criterion), RecursiveBranchAndBound)

    def test_many_classes(self, three_class_data):
        _, y = three_class_data
        criterion = resolve_criterion("auto", y)
        assert isinstance(criterion, FisherCriterion)
        assert isinstance(resolve_method("auto", criterion), FastBranchAndBound)

    def test_auto_needs_labels(self):
        with pytest.raises(InvalidConfiguration):
            resolve_criterion("auto", None)


class TestSubsetSelector:

    def test_fit_transform_dataframe(self, two_class_frame):
        X, y = two_class_frame
        selector = SubsetSelector(k=3)
        out = selector.fit_transform(X, y)

        assert list(out.columns) == selector.selected_feature_names_
        assert selector.support_.sum() == 3
        assert selector.n_features_in_ == X.shape[1]
        assert selector.feature_names_in_ == list(X.columns)
        assert isinstance(selector.algorithm_, RecursiveBranchAndBound)
        assert selector.score_ == pytest.approx(
            selector.criterion_.score(selector.selected_features_)
        )

    def test_transform_numpy(self, two_class_data):
        X, y = two_class_data
        selector = SubsetSelector(k=2, method="backward").fit(X, y)
        out = selector.transform(X)

        assert out.shape == (X.shape[0], 2)
        np.testing.assert_array_equal(out, X[:, selector.get_support(indices=True)])
        assert selector.selected_feature_names_ == [f"x{i}" for i in selector.selected_features_]
        assert selector.feature_names_in_ is None

    def test_transform_selects_by_name(self, two_class_frame):
        X, y = two_class_frame
        selector = SubsetSelector(k=2).fit(X, y)
        shuffled = X[list(reversed(X.columns))]
        out = selector.transform(shuffled)
        assert list(out.columns) == selector.selected_feature_names_

    def test_algorithm_instance_is_not_mutated(self, two_class_data):
        X, y = two_class_data
        search = OscillatingSearch()
        selector = SubsetSelector(k=3, method=search).fit(X, y)

        assert selector.algorithm_ is not search
        assert search.candidate == []

    def test_get_params(self):
        params = SubsetSelector(k=4, method="sffs").get_params()
        assert params["k"] == 4
        assert params["method"] == "sffs"

    def test_not_fitted(self):
        from sklearn.exceptions import NotFittedError

        with pytest.raises(NotFittedError):
            SubsetSelector().transform(np.zeros((2, 3)))
