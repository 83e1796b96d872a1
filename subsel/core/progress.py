"""Leaf accounting for exact searches."""

from __future__ import annotations

from typing import Callable, List

from subsel.core.binomial import binomial


class Progress:
    """
    Count leaves of the search tree as they are evaluated or pruned.

    Each accounted leaf (or batch of pruned leaves) notifies every listener
    with the fraction ``processed / total``. A completed exact run accounts
    for exactly ``C(n, k)`` leaves, so the last notification is 1.0.
    """

    def __init__(self, n_features: int, target_size: int):
        self.total = binomial(n_features, target_size)
        self.evaluated = 0
        self.pruned = 0
        self._listeners: List[Callable[[float], None]] = []

    @property
    def processed(self) -> int:
        return self.evaluated + self.pruned

    @property
    def fraction(self) -> float:
        if self.total == 0:
            return 1.0
        return self.processed / self.total

    @property
    def complete(self) -> bool:
        return self.processed == self.total

    def subscribe(self, listener: Callable[[float], None]) -> None:
        self._listeners.append(listener)

    def leaf(self) -> None:
        """Account for one evaluated leaf."""
        self.evaluated += 1
        self._notify()

    def prune(self, available: int, remaining: int) -> None:
        """Account for the leaves below a pruned node.

        ``available`` is the size of the pruned node's pool and ``remaining``
        the number of features it still had to drop.
        """
        self.pruned += binomial(available, remaining)
        self._notify()

    def _notify(self) -> None:
        fraction = self.fraction
        for listener in self._listeners:
            listener(fraction)
