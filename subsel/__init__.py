__version__ = "0.1.0"

from subsel._errors import InvalidConfiguration, NumericFailure
from subsel.api import SubsetSelector, select_subset
from subsel.criteria import (
    BhattacharyyaDistance,
    CriterionFunction,
    FisherCriterion,
    RecursiveCriterionFunction,
)
from subsel.reporting import ProgressBar, SubsetSelectionLogger
from subsel.search import (
    BackwardSelection,
    BasicBranchAndBound,
    ExhaustiveSearch,
    FastBranchAndBound,
    ForwardSelection,
    ImprovedBranchAndBound,
    OscillatingSearch,
    PartialPredictionBranchAndBound,
    RecursiveBranchAndBound,
    SequentialBackwardFloatingSearch,
    SequentialForwardFloatingSearch,
)

__all__ = [
    "__version__",
    "select_subset",
    "SubsetSelector",
    "InvalidConfiguration",
    "NumericFailure",
    "CriterionFunction",
    "RecursiveCriterionFunction",
    "BhattacharyyaDistance",
    "FisherCriterion",
    "ProgressBar",
    "SubsetSelectionLogger",
    "ExhaustiveSearch",
    "BasicBranchAndBound",
    "ImprovedBranchAndBound",
    "FastBranchAndBound",
    "PartialPredictionBranchAndBound",
    "RecursiveBranchAndBound",
    "ForwardSelection",
    "BackwardSelection",
    "SequentialForwardFloatingSearch",
    "SequentialBackwardFloatingSearch",
    "OscillatingSearch",
]
