"""Greedy nested subset algorithms."""

from subsel.search.greedy.comparator import DefaultSelectionComparator, SelectionComparator
from subsel.search.greedy.feature_space import DefaultFeatureSpace, FeatureSpace, Operation
from subsel.search.greedy.floating import (
    SequentialBackwardFloatingSearch,
    SequentialForwardFloatingSearch,
)
from subsel.search.greedy.nested import NestedSubsetAlgorithm
from subsel.search.greedy.oscillating import OscillatingSearch, SwingState
from subsel.search.greedy.selection import IndexValue, best_feature, worst_feature
from subsel.search.greedy.sequential import BackwardSelection, ForwardSelection

__all__ = [
    "DefaultSelectionComparator",
    "SelectionComparator",
    "DefaultFeatureSpace",
    "FeatureSpace",
    "Operation",
    "SequentialBackwardFloatingSearch",
    "SequentialForwardFloatingSearch",
    "NestedSubsetAlgorithm",
    "OscillatingSearch",
    "SwingState",
    "IndexValue",
    "best_feature",
    "worst_feature",
    "BackwardSelection",
    "ForwardSelection",
]
