"""
Branch & bound ordered by predicted feature contributions.

See P. Somol, P. Pudil and J. Kittler, "Fast Branch & Bound Algorithms for
Optimal Feature Selection", IEEE TPAMI 26(7), pp. 900-912, 2004.
"""

from __future__ import annotations

from typing import List

import numpy as np

from subsel.search.bnb.base import BranchAndBound, Node, Pool, without


class PartialPredictionBranchAndBound(BranchAndBound):
    """
    Branch & bound that orders children by the mean score decrease observed
    when removing each feature. Predictions only decide the order; every
    visited child is evaluated before it is accepted or pruned.
    """

    def __init__(self):
        super().__init__()
        self.contribution = None
        self.counter = None

    def _prepare(self, dimension: int) -> None:
        self.contribution = np.zeros(dimension, dtype=np.float64)
        self.counter = np.zeros(dimension, dtype=np.int64)

    def _root(self, dimension: int) -> Node:
        return Node(-1, tuple(range(dimension)), self._evaluate(None))

    def _update_contribution(self, feature: int, decrease: float) -> None:
        count = self.counter[feature]
        self.contribution[feature] = (self.contribution[feature] * count + decrease) / (count + 1)
        self.counter[feature] = count + 1

    def _expand(self, parent: Node, level: int, pool: Pool, n_children: int) -> List[Node]:
        # highest predicted contribution first
        ordered = sorted(pool, key=lambda f: -self.contribution[f])
        return [Node(f, without(parent.config, f)) for f in ordered[:n_children]]

    def _admit(self, parent: Node, child: Node) -> float:
        child.value = self._evaluate(child.config)
        self._update_contribution(child.feature, parent.value - child.value)
        return child.value
