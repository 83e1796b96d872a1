"""Criterion functions scoring feature subsets."""

from subsel.criteria.base import (
    CriterionFunction,
    CriterionState,
    RecursiveCriterionFunction,
    evaluate,
)
from subsel.criteria.bhattacharyya import BhattacharyyaDistance, BhattacharyyaState
from subsel.criteria.fisher import FisherCriterion

__all__ = [
    "CriterionFunction",
    "CriterionState",
    "RecursiveCriterionFunction",
    "evaluate",
    "BhattacharyyaDistance",
    "BhattacharyyaState",
    "FisherCriterion",
]
