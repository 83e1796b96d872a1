"""Single greedy steps: best feature to add, worst feature to drop."""

from __future__ import annotations

from typing import Iterable, NamedTuple, Optional, Sequence

import numpy as np

from subsel.criteria.base import CriterionFunction, evaluate
from subsel.search.greedy.comparator import SelectionComparator


class IndexValue(NamedTuple):
    value: float
    index: Optional[int]


def best_feature(
    criterion: CriterionFunction,
    available: Iterable[int],
    current: Sequence[int],
    comparator: SelectionComparator,
) -> IndexValue:
    """
    Feature of ``available`` whose addition to ``current`` scores highest.

    Returns ``IndexValue(-inf, None)`` when nothing is available.
    """
    best = -np.inf
    best_index = None
    trial = list(current) + [-1]

    for f in list(available):
        trial[-1] = f
        value = evaluate(criterion, trial)
        if best_index is None or comparator.compare(f, value, best_index, best) > 0:
            best = value
            best_index = f

    return IndexValue(best, best_index)


def worst_feature(
    criterion: CriterionFunction,
    current: Sequence[int],
    comparator: SelectionComparator,
) -> IndexValue:
    """
    Feature of ``current`` whose removal leaves the highest score.

    Returns ``IndexValue(-inf, None)`` when ``current`` is empty.
    """
    worst = -np.inf
    worst_index = None
    members = list(current)

    for i, f in enumerate(members):
        value = evaluate(criterion, members[:i] + members[i + 1:])
        if worst_index is None or comparator.compare(f, value, worst_index, worst) > 0:
            worst = value
            worst_index = f

    return IndexValue(worst, worst_index)
