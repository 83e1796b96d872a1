"""
Base of the nested subset algorithms.

Nested subset methods move one feature at a time between the candidate
and the feature space. Every move is broadcast as an ``Operation``: the
feature space follows it, and observers can log the candidate or track
progress.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Iterable, List, Optional

import numpy as np

from subsel._errors import InvalidConfiguration
from subsel._preprocess import n_features_of
from subsel.criteria.base import CriterionFunction, evaluate
from subsel.search.base import SelectionAlgorithm
from subsel.search.greedy.comparator import DefaultSelectionComparator, SelectionComparator
from subsel.search.greedy.feature_space import DefaultFeatureSpace, FeatureSpace, Operation


class NestedSubsetAlgorithm(SelectionAlgorithm):
    """
    Greedy search that grows or shrinks one candidate subset.

    The working candidate and feature space are rebuilt at the start of every
    run from the initial candidate and feature space set by the caller.

    Attributes
    ----------
    candidate : list of int
        Current working subset.
    candidate_value : float
        Criterion value of the last accepted move.
    feature_space : FeatureSpace
        Features not in the candidate.
    """

    def __init__(self):
        super().__init__()
        self._initial_candidate: Optional[List[int]] = None
        self._initial_space: Optional[FeatureSpace] = None
        self._candidate: Optional[List[int]] = None
        self.candidate_value = -np.inf
        self.feature_space: Optional[FeatureSpace] = None
        self.selection_comparator: Optional[SelectionComparator] = None

    @property
    def candidate(self) -> List[int]:
        return [] if self._candidate is None else list(self._candidate)

    def get_feature_vector(self) -> np.ndarray:
        return np.array(sorted(self.candidate), dtype=np.int64)

    def set_feature_space(self, feature_space: FeatureSpace) -> None:
        """
        Use a custom feature space, e.g. one encoding domain constraints.

        Each run works on its own copy; ``feature_space`` itself is not changed.
        """
        self._initial_space = feature_space

    def set_selection_comparator(self, comparator: SelectionComparator) -> None:
        self.selection_comparator = comparator

    def set_initial_candidate(self, features: Iterable[int]) -> None:
        """
        Start every run from ``features`` instead of the algorithm's default.

        The features are taken out of the run's feature space regardless of
        whether ``set_feature_space`` is called before or after.
        """
        self._initial_candidate = list(dict.fromkeys(int(f) for f in features))

    def run(self, X, criterion: CriterionFunction, n_drop: int, y=None) -> "NestedSubsetAlgorithm":
        if self._initial_candidate is not None:
            n = n_features_of(X)
            bad = [f for f in self._initial_candidate if not 0 <= f < n]
            if bad:
                raise InvalidConfiguration(f"Initial candidate has out-of-range features: {bad}")
        return super().run(X, criterion, n_drop, y)

    def _search(self, criterion: CriterionFunction, dimension: int, target_size: int) -> None:
        self.candidate_value = -np.inf
        if self.selection_comparator is None:
            self.selection_comparator = DefaultSelectionComparator()
        if self._initial_space is not None:
            self.feature_space = self._initial_space.copy()
        else:
            self.feature_space = DefaultFeatureSpace.full(dimension)
        self._candidate = None
        if self._initial_candidate is not None:
            self._start_from(self._initial_candidate)

        self._run_nested(criterion, dimension, target_size)
        if self.candidate_value == -np.inf and self._candidate:
            # no move was needed; report the value of the untouched candidate
            self.candidate_value = evaluate(criterion, self._candidate)

    def _start_from(self, features: Iterable[int]) -> None:
        """Make ``features`` the working candidate without broadcasting."""
        self._candidate = list(features)
        for f in self._candidate:
            self.feature_space.update(Operation(f, False))

    @abstractmethod
    def _run_nested(self, criterion: CriterionFunction, dimension: int, target_size: int) -> None:
        """
        Move features until the candidate has ``target_size`` elements.

        Every candidate change must go through ``_take`` or ``_give_back``.
        """

    def _take(self, feature: int, value: float) -> None:
        """Move ``feature`` from the feature space into the candidate."""
        if self._candidate is None:
            self._candidate = []
        self._candidate.append(feature)
        self.candidate_value = value
        self._broadcast(Operation(feature, False))

    def _give_back(self, feature: int, value: float) -> None:
        """Move ``feature`` from the candidate back to the feature space."""
        self._candidate.remove(feature)
        self.candidate_value = value
        self._broadcast(Operation(feature, True))

    def _broadcast(self, operation: Operation) -> None:
        self.feature_space.update(operation)
        self._notify(operation)
