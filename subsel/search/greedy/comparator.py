"""Ordering of (feature, score) pairs during greedy selection."""

from __future__ import annotations

from abc import ABC, abstractmethod


class SelectionComparator(ABC):
    """
    Decide which of two (feature, score) pairs a greedy step prefers.

    Custom comparators can prefer some features over others, e.g. to break
    ties between equally scored features.
    """

    @abstractmethod
    def compare(self, feature1: int, value1: float, feature2: int, value2: float) -> int:
        """Positive if the first pair is better, negative if the second, 0 if equal."""


class DefaultSelectionComparator(SelectionComparator):
    """Compare by score only; features are ignored."""

    def compare(self, feature1: int, value1: float, feature2: int, value2: float) -> int:
        if value1 < value2:
            return -1
        if value2 < value1:
            return 1
        return 0
