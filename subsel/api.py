"""User-facing API for feature subset search."""

from __future__ import annotations

import copy
from typing import List, Literal, Optional, Tuple, Union

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_is_fitted

from subsel._errors import InvalidConfiguration
from subsel._preprocess import extract_feature_names, resolve_k, to_numpy
from subsel.criteria import (
    BhattacharyyaDistance,
    CriterionFunction,
    FisherCriterion,
    RecursiveCriterionFunction,
)
from subsel.reporting import ProgressBar, SubsetSelectionLogger
from subsel.search import (
    BackwardSelection,
    BasicBranchAndBound,
    ExhaustiveSearch,
    FastBranchAndBound,
    ForwardSelection,
    ImprovedBranchAndBound,
    NestedSubsetAlgorithm,
    OscillatingSearch,
    PartialPredictionBranchAndBound,
    RecursiveBranchAndBound,
    SelectionAlgorithm,
    SequentialBackwardFloatingSearch,
    SequentialForwardFloatingSearch,
)

Method = Literal[
    "auto",
    "exhaustive",
    "basic_bnb",
    "improved_bnb",
    "fast_bnb",
    "partial_bnb",
    "recursive_bnb",
    "forward",
    "backward",
    "sffs",
    "sbfs",
    "oscillating",
]
CriterionName = Literal["auto", "bhattacharyya", "fisher"]

METHODS = {
    "exhaustive": ExhaustiveSearch,
    "basic_bnb": BasicBranchAndBound,
    "improved_bnb": ImprovedBranchAndBound,
    "fast_bnb": FastBranchAndBound,
    "partial_bnb": PartialPredictionBranchAndBound,
    "recursive_bnb": RecursiveBranchAndBound,
    "forward": ForwardSelection,
    "backward": BackwardSelection,
    "sffs": SequentialForwardFloatingSearch,
    "sbfs": SequentialBackwardFloatingSearch,
    "oscillating": OscillatingSearch,
}

CRITERIA = {
    "bhattacharyya": BhattacharyyaDistance,
    "fisher": FisherCriterion,
}


def resolve_criterion(criterion: Union[CriterionName, CriterionFunction], y) -> CriterionFunction:
    """
    Build the criterion to optimize.

    "auto" picks the Bhattacharyya distance for two-class problems and the
    Fisher criterion otherwise.
    """
    if isinstance(criterion, CriterionFunction):
        return criterion
    if criterion == "auto":
        if y is None:
            raise InvalidConfiguration("criterion='auto' requires class labels y.")
        criterion = "bhattacharyya" if len(np.unique(np.asarray(y))) == 2 else "fisher"
    if criterion not in CRITERIA:
        raise InvalidConfiguration(
            f"Unknown criterion: {criterion!r}. Use one of {sorted(CRITERIA)} or a CriterionFunction."
        )
    return CRITERIA[criterion]()


def resolve_method(method: Union[Method, SelectionAlgorithm], criterion: CriterionFunction) -> SelectionAlgorithm:
    """
    Build the search algorithm.

    "auto" uses recursive branch & bound when the criterion supports it and
    fast branch & bound otherwise.
    """
    if isinstance(method, SelectionAlgorithm):
        return method
    if method == "auto":
        method = "recursive_bnb" if isinstance(criterion, RecursiveCriterionFunction) else "fast_bnb"
    if method not in METHODS:
        raise InvalidConfiguration(f"Unknown method: {method!r}. Use one of {sorted(METHODS)}.")
    return METHODS[method]()


def search_score(algorithm: SelectionAlgorithm) -> float:
    """Criterion value of the subset an algorithm settled on."""
    if isinstance(algorithm, NestedSubsetAlgorithm):
        return float(algorithm.candidate_value)
    return float(algorithm.bound)


def run_search(
    X,
    y,
    k: int,
    *,
    method: Union[Method, SelectionAlgorithm] = "auto",
    criterion: Union[CriterionName, CriterionFunction] = "auto",
    show_progress: bool = False,
    verbose: bool = False,
) -> Tuple[SelectionAlgorithm, CriterionFunction, np.ndarray]:
    """Run one search on array data; returns (algorithm, criterion, selected indices)."""
    X_arr = to_numpy(X)
    if X_arr.ndim != 2:
        raise InvalidConfiguration(f"X must be 2D, got shape {X_arr.shape}")
    p = X_arr.shape[1]
    _, n_drop = resolve_k(p, k)

    crit = resolve_criterion(criterion, y)
    algorithm = resolve_method(method, crit)

    if verbose:
        print(
            f"{type(algorithm).__name__} with {type(crit).__name__}: "
            f"selecting {k} features from {p}"
        )

    bar = None
    logger = None
    if isinstance(algorithm, NestedSubsetAlgorithm):
        if verbose:
            logger = SubsetSelectionLogger()
            algorithm.add_observer(logger)
    elif show_progress:
        bar = ProgressBar(desc=type(algorithm).__name__)
        algorithm.add_observer(bar)

    try:
        algorithm.run(X_arr, crit, n_drop, y=None if y is None else np.asarray(y))
    finally:
        if bar is not None:
            algorithm.remove_observer(bar)
            bar.close()
        if logger is not None:
            algorithm.remove_observer(logger)

    selected = algorithm.get_feature_vector()
    if verbose:
        print(f"Selected {len(selected)} / {p} features (score={search_score(algorithm):.6g})")
    return algorithm, crit, selected


def select_subset(
    X: Union[pd.DataFrame, np.ndarray],
    y: Optional[Union[pd.Series, np.ndarray]],
    k: int,
    *,
    method: Union[Method, SelectionAlgorithm] = "auto",
    criterion: Union[CriterionName, CriterionFunction] = "auto",
    show_progress: bool = False,
    verbose: bool = False,
) -> List:
    """
    Select the best ``k`` features under a subset criterion.

    Parameters
    ----------
    X : DataFrame or ndarray of shape (n_samples, n_features)
        Feature matrix.
    y : Series or ndarray of shape (n_samples,), optional
        Class labels. Required by the built-in criteria.
    k : int
        Number of features to keep.
    method : str or SelectionAlgorithm
        - "exhaustive": every subset, exact
        - "basic_bnb", "improved_bnb", "recursive_bnb": branch & bound, exact
          for monotone criteria
        - "fast_bnb", "partial_bnb": branch & bound with predictions
        - "forward", "backward", "sffs", "sbfs", "oscillating": greedy
        - "auto": "recursive_bnb" if the criterion supports it, else "fast_bnb"
    criterion : {"auto", "bhattacharyya", "fisher"} or CriterionFunction
        "auto" uses Bhattacharyya for two classes and Fisher otherwise.
    show_progress : bool
        Show a tqdm progress bar for exhaustive and branch & bound searches.
    verbose : bool
        Print a summary, and every candidate change of greedy searches.

    Returns
    -------
    list
        Selected feature names for DataFrames, else column indices, ascending
        by column position.
    """
    feature_names = extract_feature_names(X)
    _, _, selected = run_search(
        X,
        y,
        k,
        method=method,
        criterion=criterion,
        show_progress=show_progress,
        verbose=verbose,
    )
    if feature_names is not None:
        return [feature_names[i] for i in selected]
    return [int(i) for i in selected]


class SubsetSelector(BaseEstimator, TransformerMixin):
    """
    Keep the ``k`` columns chosen by a subset search.

    Parameters
    ----------
    k : int, default=10
        Number of features to keep.
    method : str or SelectionAlgorithm, default="auto"
        See ``select_subset``.
    criterion : str or CriterionFunction, default="auto"
        See ``select_subset``.
    show_progress : bool, default=False
        Show a tqdm progress bar for exact searches.
    verbose : bool, default=False
        Print progress information.

    Attributes
    ----------
    support_ : ndarray of shape (n_features,)
        Boolean mask of selected columns.
    selected_features_ : ndarray
        Indices of selected columns, ascending.
    selected_feature_names_ : list of str
        Names of selected columns.
    feature_names_in_ : list or None
        Column names seen in fit; None for arrays.
    score_ : float
        Criterion value of the selected subset.
    algorithm_ : SelectionAlgorithm
        The search that was run.
    criterion_ : CriterionFunction
        The initialized criterion.
    """

    def __init__(
        self,
        k: int = 10,
        method: Union[Method, SelectionAlgorithm] = "auto",
        criterion: Union[CriterionName, CriterionFunction] = "auto",
        show_progress: bool = False,
        verbose: bool = False,
    ):
        self.k = k
        self.method = method
        self.criterion = criterion
        self.show_progress = show_progress
        self.verbose = verbose

    def fit(self, X, y=None) -> "SubsetSelector":
        """
        Run the subset search.

        Parameters
        ----------
        X : array-like or DataFrame of shape (n_samples, n_features)
            Training data.
        y : array-like of shape (n_samples,), optional
            Class labels.

        Returns
        -------
        self
        """
        feature_names = extract_feature_names(X)
        method = self.method
        if isinstance(method, SelectionAlgorithm):
            method = copy.deepcopy(method)
        criterion = self.criterion
        if isinstance(criterion, CriterionFunction):
            criterion = copy.deepcopy(criterion)

        algorithm, crit, selected = run_search(
            X,
            y,
            self.k,
            method=method,
            criterion=criterion,
            show_progress=self.show_progress,
            verbose=self.verbose,
        )

        p = to_numpy(X).shape[1]
        self.feature_names_in_ = feature_names
        if feature_names is None:
            feature_names = [f"x{i}" for i in range(p)]
        self.n_features_in_ = p

        support = np.zeros(p, dtype=bool)
        support[selected] = True
        self.support_ = support
        self.selected_features_ = np.asarray(selected, dtype=np.int64)
        self.selected_feature_names_ = [feature_names[i] for i in selected]
        self.score_ = search_score(algorithm)
        self.algorithm_ = algorithm
        self.criterion_ = crit
        return self

    def get_support(self, indices: bool = False) -> np.ndarray:
        check_is_fitted(self, ["support_"])
        return self.selected_features_.copy() if indices else self.support_.copy()

    def transform(self, X):
        check_is_fitted(self, ["support_"])
        keep_idx = self.selected_features_
        if isinstance(X, pd.DataFrame):
            if self.feature_names_in_ is not None:
                return X.loc[:, [self.feature_names_in_[i] for i in keep_idx]]
            return X.iloc[:, keep_idx]
        return np.asarray(X)[:, keep_idx]

    def fit_transform(self, X, y=None, **fit_params):
        return self.fit(X, y, **fit_params).transform(X)
