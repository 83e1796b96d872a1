"""
Sequential floating search.

Each step in the main direction is followed by conditional steps in the
opposite direction, taken only while they beat the best score recorded for
the resulting subset size. This revisits earlier decisions and mitigates
the nesting effect of plain sequential selection at a fraction of the cost
of exhaustive search.

See P. Pudil, J. Novovicova and J. Kittler, "Floating Search Methods in
Feature Selection", Pattern Recognition Letters 15, pp. 1119-1125, 1994.
"""

from __future__ import annotations

import numpy as np

from subsel._errors import InvalidConfiguration
from subsel.criteria.base import CriterionFunction
from subsel.search.greedy.nested import NestedSubsetAlgorithm
from subsel.search.greedy.selection import best_feature, worst_feature


class SequentialForwardFloatingSearch(NestedSubsetAlgorithm):
    """SFFS: add the best feature, then drop the worst while that improves a smaller size."""

    def _run_nested(self, criterion: CriterionFunction, dimension: int, target_size: int) -> None:
        start = len(self.candidate)
        # best value seen per subset size
        record = np.full(max(target_size, start) + 1, -np.inf)
        size = start

        for _ in range(2):
            if size < target_size:
                size = self._add_best(criterion, size, record)

        while size < target_size:
            size = self._add_best(criterion, size, record)

            worst = worst_feature(criterion, self.candidate, self.selection_comparator)
            while size > start + 1 and worst.value > record[size - 1]:
                self._give_back(worst.index, worst.value)
                size -= 1
                record[size] = worst.value
                worst = worst_feature(criterion, self.candidate, self.selection_comparator)

    def _add_best(self, criterion, size, record) -> int:
        best = best_feature(criterion, self.feature_space, self.candidate, self.selection_comparator)
        if best.index is None:
            raise InvalidConfiguration(
                f"Feature space exhausted at {size} features, target is {len(record) - 1}"
            )
        self._take(best.index, best.value)
        size += 1
        record[size] = max(record[size], best.value)
        return size


class SequentialBackwardFloatingSearch(NestedSubsetAlgorithm):
    """SBFS: drop the worst feature, then add the best back while that improves a larger size."""

    def _run_nested(self, criterion: CriterionFunction, dimension: int, target_size: int) -> None:
        if self._candidate is None:
            self._start_from(list(self.feature_space))

        start = len(self.candidate)
        record = np.full(start + 1, -np.inf)
        size = start

        for _ in range(2):
            if size > target_size:
                size = self._drop_worst(criterion, size, record)

        while size > target_size:
            size = self._drop_worst(criterion, size, record)

            best = best_feature(criterion, self.feature_space, self.candidate, self.selection_comparator)
            while size < start - 1 and best.index is not None and best.value > record[size + 1]:
                self._take(best.index, best.value)
                size += 1
                record[size] = best.value
                best = best_feature(criterion, self.feature_space, self.candidate, self.selection_comparator)

    def _drop_worst(self, criterion, size, record) -> int:
        worst = worst_feature(criterion, self.candidate, self.selection_comparator)
        self._give_back(worst.index, worst.value)
        size -= 1
        record[size] = max(record[size], worst.value)
        return size
