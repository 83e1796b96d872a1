"""Pools of features available to nested subset algorithms."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional


@dataclass(frozen=True)
class Operation:
    """
    A single mutation of a candidate subset.

    ``is_add`` is seen from the feature space: True means the feature left
    the candidate and returns to the pool, False means the candidate took it.
    """

    feature: int
    is_add: bool

    @property
    def is_remove(self) -> bool:
        return not self.is_add


class FeatureSpace(ABC):
    """
    Features that may still be added to a candidate.

    A feature space follows the candidate through ``update`` and may encode
    domain constraints by deciding which features it exposes.
    """

    @abstractmethod
    def __iter__(self) -> Iterator[int]:
        ...

    @abstractmethod
    def update(self, operation: Operation) -> None:
        """Apply a candidate mutation."""

    def copy(self) -> "FeatureSpace":
        """Independent deep copy; later updates to either side do not leak."""
        return copy.deepcopy(self)


class DefaultFeatureSpace(FeatureSpace):
    """Unordered list of feature indices."""

    def __init__(self, features: Optional[Iterable[int]] = None):
        self._features: List[int] = [] if features is None else list(features)

    @classmethod
    def full(cls, n_features: int) -> "DefaultFeatureSpace":
        return cls(range(n_features))

    def __iter__(self) -> Iterator[int]:
        return iter(self._features)

    def __len__(self) -> int:
        return len(self._features)

    def __contains__(self, feature) -> bool:
        return feature in self._features

    def update(self, operation: Operation) -> None:
        f = operation.feature
        if operation.is_add:
            if f not in self._features:
                self._features.append(f)
        elif f in self._features:
            self._features.remove(f)

    def copy(self) -> "DefaultFeatureSpace":
        return DefaultFeatureSpace(self._features)

    def __repr__(self) -> str:
        return f"DefaultFeatureSpace({self._features!r})"
