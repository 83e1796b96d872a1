"""
Sequential forward and backward selection.

See K. Fukunaga, "Introduction to Statistical Pattern Recognition",
2nd ed., Academic Press, 1990, ch. 10.5.
"""

from __future__ import annotations

from subsel._errors import InvalidConfiguration
from subsel.criteria.base import CriterionFunction
from subsel.search.greedy.nested import NestedSubsetAlgorithm
from subsel.search.greedy.selection import best_feature, worst_feature


class ForwardSelection(NestedSubsetAlgorithm):
    """Start empty and add the best feature until the target size is reached."""

    def _run_nested(self, criterion: CriterionFunction, dimension: int, target_size: int) -> None:
        while len(self.candidate) < target_size:
            best = best_feature(criterion, self.feature_space, self.candidate, self.selection_comparator)
            if best.index is None:
                raise InvalidConfiguration(
                    f"Feature space exhausted at {len(self.candidate)} features, target is {target_size}"
                )
            self._take(best.index, best.value)


class BackwardSelection(NestedSubsetAlgorithm):
    """Start with every feature and drop the worst until the target size is reached."""

    def _run_nested(self, criterion: CriterionFunction, dimension: int, target_size: int) -> None:
        if self._candidate is None:
            self._start_from(list(self.feature_space))

        while len(self.candidate) > target_size:
            worst = worst_feature(criterion, self.candidate, self.selection_comparator)
            self._give_back(worst.index, worst.value)
