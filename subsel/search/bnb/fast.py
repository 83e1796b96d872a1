"""
Fast branch & bound with predicted criterion values.

See P. Somol, P. Pudil and J. Kittler, "Fast Branch & Bound Algorithms for
Optimal Feature Selection", IEEE TPAMI 26(7), pp. 900-912, 2004.
"""

from __future__ import annotations

from typing import List

import numpy as np

from subsel._errors import InvalidConfiguration
from subsel.search.bnb.base import BranchAndBound, Node, Pool, without
from subsel.search.bnb.improved import lowest


class FastBranchAndBound(BranchAndBound):
    """
    Improved branch & bound that predicts inner-node scores.

    For every feature the mean observed score decrease caused by removing it
    (its *contribution*) is tracked. Children that are inner nodes, and whose
    feature contribution has been sampled more than ``min_evaluations`` times,
    get the predicted score ``parent - contribution`` instead of a criterion
    evaluation. A predicted child is only evaluated for real when even the
    optimistic guess ``parent - optimism * contribution`` fails to beat the
    bound. Leaves are always evaluated.

    Parameters
    ----------
    min_evaluations : int, default=1
        Samples of a feature's contribution required before predicting.
    optimism : float, default=1.0
        Scale of the contribution in the prune test; values >= 1 make
        predicted pruning more conservative.
    """

    def __init__(self, min_evaluations: int = 1, optimism: float = 1.0):
        super().__init__()
        if min_evaluations < 0:
            raise InvalidConfiguration(f"min_evaluations must be >= 0, got {min_evaluations}")
        if optimism < 1.0:
            raise InvalidConfiguration(f"optimism must be >= 1, got {optimism}")
        self.min_evaluations = min_evaluations
        self.optimism = optimism
        self.contribution = None
        self.counter = None

    def _prepare(self, dimension: int) -> None:
        self.contribution = np.zeros(dimension, dtype=np.float64)
        self.counter = np.zeros(dimension, dtype=np.int64)

    def _root(self, dimension: int) -> Node:
        config = tuple(range(dimension))
        return Node(-1, config, self._evaluate(None))

    def _update_contribution(self, feature: int, decrease: float) -> None:
        count = self.counter[feature]
        self.contribution[feature] = (self.contribution[feature] * count + decrease) / (count + 1)
        self.counter[feature] = count + 1

    def _expand(self, parent: Node, level: int, pool: Pool, n_children: int) -> List[Node]:
        inner = level + 1 < self._removals
        children = []
        for f in pool:
            config = without(parent.config, f)
            if inner and self.counter[f] > self.min_evaluations:
                children.append(Node(f, config, parent.value - self.contribution[f], predicted=True))
            else:
                value = self._evaluate(config)
                self._update_contribution(f, parent.value - value)
                children.append(Node(f, config, value))
        return lowest(children, n_children)

    def _admit(self, parent: Node, child: Node) -> float:
        if not child.predicted:
            return child.value

        value = parent.value - self.optimism * self.contribution[child.feature]
        if value <= self.bound:
            value = self._evaluate(child.config)
            self._update_contribution(child.feature, parent.value - value)
            child.value = value
            child.predicted = False
        return value
