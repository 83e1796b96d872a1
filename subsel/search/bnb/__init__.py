"""Branch & bound family."""

from subsel.search.bnb.base import BranchAndBound
from subsel.search.bnb.basic import BasicBranchAndBound
from subsel.search.bnb.fast import FastBranchAndBound
from subsel.search.bnb.improved import ImprovedBranchAndBound
from subsel.search.bnb.partial import PartialPredictionBranchAndBound
from subsel.search.bnb.recursive import RecursiveBranchAndBound

__all__ = [
    "BranchAndBound",
    "BasicBranchAndBound",
    "ImprovedBranchAndBound",
    "FastBranchAndBound",
    "PartialPredictionBranchAndBound",
    "RecursiveBranchAndBound",
]
