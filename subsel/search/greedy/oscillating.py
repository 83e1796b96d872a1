"""
Oscillating search around a fixed subset size.

See P. Somol and P. Pudil, "Oscillating Search Algorithms for Feature
Selection", Proc. 15th ICPR, pp. 406-409, 2000.
"""

from __future__ import annotations

import warnings
from enum import Enum
from typing import Dict, Iterable, Type

import numpy as np

from subsel._errors import InvalidConfiguration, NumericFailure
from subsel.criteria.base import CriterionFunction, evaluate
from subsel.search.greedy.feature_space import FeatureSpace
from subsel.search.greedy.floating import (
    SequentialBackwardFloatingSearch,
    SequentialForwardFloatingSearch,
)
from subsel.search.greedy.nested import NestedSubsetAlgorithm
from subsel.search.greedy.sequential import ForwardSelection


class SwingState(Enum):
    DOWNSWING = "downswing"
    DOWNSWING_FAILED = "downswing_failed"
    UPSWING = "upswing"
    UPSWING_FAILED = "upswing_failed"


class OscillatingSearch(NestedSubsetAlgorithm):
    """
    Improve a subset of the target size by repeated swings.

    A down-swing drops ``o`` features with SBFS and adds ``o`` back with
    SFFS; an up-swing adds ``o`` then drops ``o``. A swing succeeds when it
    returns to the target size with a better score; the swing amplitude
    ``o`` then resets to 1. Two consecutive failed swings increase ``o``; the
    search stops once ``o`` exceeds ``delta = int(target_size * delta_ratio)``.

    The search starts from the initial candidate if one is set (it must have
    the target size), else from a forward selection result. It never ends
    with a lower score than its starting subset.

    When ``delta`` is 0, e.g. for a target size of 1 with the default
    ``delta_ratio``, no swing runs and the starting subset is returned as is.

    A ``NumericFailure`` inside a swing fails that swing with a
    ``RuntimeWarning`` instead of aborting the search.

    Parameters
    ----------
    delta_ratio : float, default=0.5
        Largest swing amplitude as a fraction of the target size.
    """

    def __init__(self, delta_ratio: float = 0.5):
        super().__init__()
        if delta_ratio < 0:
            raise InvalidConfiguration(f"delta_ratio must be >= 0, got {delta_ratio}")
        self.delta_ratio = delta_ratio
        self.n_swings = 0
        self._best_at: Dict[int, float] = {}

    def set_initial_candidate(self, features: Iterable[int]) -> None:
        self._initial_candidate = sorted(dict.fromkeys(int(f) for f in features))

    def _run_nested(self, criterion: CriterionFunction, dimension: int, target_size: int) -> None:
        delta = int(target_size * self.delta_ratio)
        self._best_at = {}
        self.n_swings = 0

        if self._candidate is None:
            seed = self._spawn(ForwardSelection, [], self.feature_space)
            seed._search(criterion, dimension, target_size)
            self._best_at[target_size] = seed.candidate_value
            self.candidate_value = seed.candidate_value
            self._candidate = []
            for f in sorted(seed.candidate):
                self._take(f, seed.candidate_value)
        else:
            if len(self._candidate) != target_size:
                raise InvalidConfiguration(
                    f"Initial candidate has {len(self._candidate)} features, "
                    f"target size is {target_size}"
                )
            self.candidate_value = evaluate(criterion, self._candidate)
            self._best_at[target_size] = self.candidate_value

        o = 1
        failures = 0
        state = SwingState.DOWNSWING

        while o <= delta:
            if state in (SwingState.DOWNSWING, SwingState.UPSWING):
                down = state is SwingState.DOWNSWING
                improved = self._swing(criterion, dimension, target_size, o, down)
                self.n_swings += 1
                if improved:
                    failures = 0
                    o = 1
                    state = SwingState.UPSWING if down else SwingState.DOWNSWING
                else:
                    state = SwingState.DOWNSWING_FAILED if down else SwingState.UPSWING_FAILED
            else:
                failures += 1
                if failures == 2:
                    # a down- and an up-swing failed in a row
                    o += 1
                    failures = 0
                if state is SwingState.DOWNSWING_FAILED:
                    state = SwingState.UPSWING
                else:
                    state = SwingState.DOWNSWING

    def _spawn(
        self,
        algorithm: Type[NestedSubsetAlgorithm],
        candidate,
        feature_space: FeatureSpace,
    ) -> NestedSubsetAlgorithm:
        inner = algorithm()
        inner.set_selection_comparator(self.selection_comparator)
        inner.set_feature_space(feature_space)
        if candidate:
            inner.set_initial_candidate(candidate)
        return inner

    def _swing(self, criterion, dimension, target_size, o, down) -> bool:
        """Run one swing; adopt its result and return True if it improved."""
        if down:
            first, second = SequentialBackwardFloatingSearch, SequentialForwardFloatingSearch
            turn = target_size - o
        else:
            first, second = SequentialForwardFloatingSearch, SequentialBackwardFloatingSearch
            turn = target_size + o
        # the pool has to supply every feature an up-swing adds
        if turn < 1 or turn > min(dimension, target_size + len(list(self.feature_space))):
            return False

        try:
            outward = self._spawn(first, self.candidate, self.feature_space)
            outward._search(criterion, dimension, turn)
            if outward.candidate_value < self._best_at.get(turn, -np.inf):
                return False
            self._best_at[turn] = outward.candidate_value

            back = self._spawn(second, outward.candidate, outward.feature_space)
            back._search(criterion, dimension, target_size)
        except NumericFailure as exc:
            warnings.warn(
                f"{'Down' if down else 'Up'}-swing of size {o} failed ({exc}); treating it as unsuccessful.",
                RuntimeWarning,
                stacklevel=2,
            )
            return False

        if back.candidate_value > self._best_at[target_size]:
            self._best_at[target_size] = back.candidate_value
            self._adopt(back.candidate, back.candidate_value)
            return True
        return False

    def _adopt(self, new_candidate, value: float) -> None:
        """Replace the candidate, broadcasting each feature that changes side."""
        new = set(new_candidate)
        old = set(self.candidate)
        for f in sorted(old - new):
            self._give_back(f, value)
        for f in sorted(new - old):
            self._take(f, value)
        self._candidate.sort()
