"""Criterion contracts consumed by the search algorithms."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence, Tuple

import numpy as np

from subsel._errors import NumericFailure


class CriterionFunction(ABC):
    """
    Scalar goodness of a feature subset; higher is better.

    Branch & bound search additionally assumes monotonicity: removing a
    feature never increases the score. This is not checked at runtime.
    """

    @abstractmethod
    def initialize(self, dimension: int, X, y=None) -> None:
        """Prepare the criterion for data with ``dimension`` features."""

    @abstractmethod
    def score(self, features: Optional[Sequence[int]] = None) -> float:
        """Score a subset of feature indices, or all features when None."""


class CriterionState(ABC):
    """Snapshot of a recursive criterion at one node of the search tree."""

    @property
    @abstractmethod
    def value(self) -> float:
        """Criterion value of the subset held by this state."""

    @property
    @abstractmethod
    def config(self) -> Tuple[int, ...]:
        """Ascending feature indices present in this state."""

    @property
    @abstractmethod
    def removed_feature(self) -> int:
        """Feature removed from the parent to reach this state; -1 at the root."""


class RecursiveCriterionFunction(CriterionFunction):
    """Criterion whose child scores can be derived from the parent state."""

    @abstractmethod
    def root_state(self) -> CriterionState:
        """State holding every feature the criterion was initialized with."""

    @abstractmethod
    def derive_state(self, feature: int, parent: CriterionState) -> CriterionState:
        """State of ``parent`` with ``feature`` removed."""


def evaluate(criterion: CriterionFunction, features=None) -> float:
    """Score ``features`` and reject undefined values."""
    value = float(criterion.score(features))
    if np.isnan(value):
        raise NumericFailure(f"criterion returned NaN for features {_describe(features)}")
    return value


def _describe(features) -> str:
    if features is None:
        return "<all>"
    features = list(features)
    if len(features) > 10:
        return f"{features[:10]}... ({len(features)} total)"
    return str(features)
