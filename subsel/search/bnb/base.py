"""
Shared tree walk of the branch & bound family.

The root holds every feature and each edge removes one. A node at depth
``level`` carries a *pool*: the features its subtree may still remove. It
spawns ``len(pool) - remaining + 1`` children ``c_0 .. c_{m-1}``; child
``c_i`` may only remove features from ``pool - {c_0 .. c_i}``. This yields
every size-k subset at exactly one leaf (C(n, k) leaves in total).

Pools are immutable tuples handed down by value, so returning from a child
never has to restore anything.

Pruning assumes the criterion never increases when a feature is removed: a
node scoring ``<= bound`` cannot lead to a better leaf and its whole subtree
is skipped, its leaves counted with a binomial coefficient.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from subsel.core.progress import Progress
from subsel.criteria.base import CriterionFunction, CriterionState, evaluate
from subsel.search.base import SelectionAlgorithm

Pool = Tuple[int, ...]


@dataclass
class Node:
    """One node of the search tree."""

    feature: int
    config: Tuple[int, ...]
    value: Optional[float] = None
    predicted: bool = False
    state: Optional[CriterionState] = None


def without(config: Tuple[int, ...], feature: int) -> Tuple[int, ...]:
    """``config`` with ``feature`` removed, order preserved."""
    return tuple(f for f in config if f != feature)


class BranchAndBound(SelectionAlgorithm):
    """
    Exact subset search for monotone criteria.

    Subclasses choose which children a node spawns and in which order
    (``_expand``) and how a child's score is obtained before the prune
    decision (``_admit``).

    Attributes
    ----------
    bound : float
        Best leaf score found so far; ``-inf`` before the first leaf.
    n_evaluations : int
        Number of criterion evaluations in the last run.
    progress : Progress
        Leaf accounting of the last run.
    """

    # evaluate the single remaining leaf directly instead of walking down to it
    leaf_shortcut = True

    def __init__(self):
        super().__init__()
        self.bound = -np.inf
        self.n_evaluations = 0
        self.progress = None
        self._best = None
        self._criterion = None
        self._removals = 0

    def get_feature_vector(self) -> np.ndarray:
        if self._best is None:
            return np.array([], dtype=np.int64)
        return np.array(sorted(self._best), dtype=np.int64)

    def _search(self, criterion: CriterionFunction, dimension: int, target_size: int) -> None:
        self.bound = -np.inf
        self.n_evaluations = 0
        self._best = None
        self._criterion = criterion
        self._removals = dimension - target_size
        self.progress = Progress(dimension, target_size)
        self.progress.subscribe(self._notify)

        self._prepare(dimension)
        root = self._root(dimension)

        if self._removals == 0:
            value = root.value if root.value is not None else self._evaluate(root.config)
            self.bound = value
            self._best = root.config
            self.progress.leaf()
            return

        self._branch(root, 0, tuple(range(dimension)))

    def _prepare(self, dimension: int) -> None:
        """Reset per-run heuristics."""

    def _root(self, dimension: int) -> Node:
        return Node(-1, tuple(range(dimension)))

    def _evaluate(self, config) -> float:
        self.n_evaluations += 1
        return evaluate(self._criterion, config)

    def _branch(self, parent: Node, level: int, pool: Pool) -> None:
        remaining = self._removals - level

        if self.leaf_shortcut and len(pool) == remaining:
            # every pool feature has to go; only one leaf is left
            dropped = set(pool)
            leaf = tuple(f for f in parent.config if f not in dropped)
            value = self._evaluate(leaf)
            if value > self.bound:
                self.bound = value
                self._best = leaf
            self.progress.leaf()
            return

        n_children = len(pool) - remaining + 1
        children = self._expand(parent, level, pool, n_children)

        excluded = {child.feature for child in children}
        for child in reversed(children):
            child_pool = tuple(f for f in pool if f not in excluded)
            value = self._admit(parent, child)

            if value > self.bound:
                if level + 1 == self._removals:
                    self.bound = child.value
                    self._best = child.config
                    self.progress.leaf()
                else:
                    self._branch(child, level + 1, child_pool)
            else:
                self.progress.prune(len(child_pool), remaining - 1)

            excluded.discard(child.feature)

    @abstractmethod
    def _expand(self, parent: Node, level: int, pool: Pool, n_children: int) -> List[Node]:
        """
        Children of ``parent`` in removal order ``c_0 .. c_{n-1}``.

        Child ``c_i``'s subtree excludes ``c_0 .. c_i`` from its pool.
        """

    def _admit(self, parent: Node, child: Node) -> float:
        """Score compared against the bound before descending into ``child``."""
        return child.value
