"""Common contract of all subset search algorithms."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, List

import numpy as np

from subsel._preprocess import check_drop, n_features_of
from subsel.criteria.base import CriterionFunction

Observer = Callable[["SelectionAlgorithm", Any], None]


class SelectionAlgorithm(ABC):
    """
    Search for the best subset of ``n - n_drop`` features.

    Observers are plain callables invoked as ``observer(algorithm, event)``.
    Exact searches emit progress fractions in [0, 1]; nested subset
    algorithms emit one ``Operation`` per candidate mutation.
    """

    def __init__(self):
        self._observers: List[Observer] = []

    def add_observer(self, observer: Observer) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: Observer) -> None:
        self._observers.remove(observer)

    def _notify(self, event) -> None:
        for observer in list(self._observers):
            observer(self, event)

    def run(self, X, criterion: CriterionFunction, n_drop: int, y=None) -> "SelectionAlgorithm":
        """
        Initialize ``criterion`` with the data and search until done.

        Parameters
        ----------
        X : array-like of shape (n_samples, n_features)
            Data handed to ``criterion.initialize``.
        criterion : CriterionFunction
            Subset score, higher is better.
        n_drop : int
            Number of features to get rid of, ``0 <= n_drop < n_features``.
        y : array-like of shape (n_samples,), optional
            Class labels for criteria that need them.

        Returns
        -------
        self
        """
        n = n_features_of(X)
        target = check_drop(n, n_drop)
        self._check_criterion(criterion)

        criterion.initialize(n, X, y)
        self._search(criterion, n, target)
        return self

    def _check_criterion(self, criterion: CriterionFunction) -> None:
        pass

    @abstractmethod
    def _search(self, criterion: CriterionFunction, dimension: int, target_size: int) -> None:
        """Run the algorithm on an initialized criterion."""

    @abstractmethod
    def get_feature_vector(self) -> np.ndarray:
        """Retained feature indices, ascending."""
