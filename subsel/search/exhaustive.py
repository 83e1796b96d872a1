"""Exhaustive search over all subsets of the target size."""

from __future__ import annotations

from itertools import combinations

import numpy as np

from subsel.core.progress import Progress
from subsel.criteria.base import CriterionFunction, evaluate
from subsel.search.base import SelectionAlgorithm


class ExhaustiveSearch(SelectionAlgorithm):
    """
    Evaluate every size-k subset exactly once (C(n, k) evaluations).

    Subsets are generated as strictly increasing index tuples, so each one
    appears once. Only practical for small n; serves as the reference for
    the exact algorithms.
    """

    def __init__(self):
        super().__init__()
        self.bound = -np.inf
        self.n_evaluations = 0
        self.progress = None
        self._best = None

    def _search(self, criterion: CriterionFunction, dimension: int, target_size: int) -> None:
        self.bound = -np.inf
        self.n_evaluations = 0
        self._best = None
        self.progress = Progress(dimension, target_size)
        self.progress.subscribe(self._notify)

        for subset in combinations(range(dimension), target_size):
            value = evaluate(criterion, subset)
            self.n_evaluations += 1
            if self._best is None or value > self.bound:
                self.bound = value
                self._best = subset
            self.progress.leaf()

    def get_feature_vector(self) -> np.ndarray:
        if self._best is None:
            return np.array([], dtype=np.int64)
        return np.array(self._best, dtype=np.int64)
