"""Subset search algorithms."""

from subsel.search.base import SelectionAlgorithm
from subsel.search.bnb import (
    BasicBranchAndBound,
    BranchAndBound,
    FastBranchAndBound,
    ImprovedBranchAndBound,
    PartialPredictionBranchAndBound,
    RecursiveBranchAndBound,
)
from subsel.search.exhaustive import ExhaustiveSearch
from subsel.search.greedy import (
    BackwardSelection,
    ForwardSelection,
    NestedSubsetAlgorithm,
    OscillatingSearch,
    SequentialBackwardFloatingSearch,
    SequentialForwardFloatingSearch,
)

__all__ = [
    "SelectionAlgorithm",
    "BranchAndBound",
    "BasicBranchAndBound",
    "ImprovedBranchAndBound",
    "FastBranchAndBound",
    "PartialPredictionBranchAndBound",
    "RecursiveBranchAndBound",
    "ExhaustiveSearch",
    "NestedSubsetAlgorithm",
    "ForwardSelection",
    "BackwardSelection",
    "SequentialForwardFloatingSearch",
    "SequentialBackwardFloatingSearch",
    "OscillatingSearch",
]
