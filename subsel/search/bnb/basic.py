"""Unoptimized branch & bound."""

from __future__ import annotations

from typing import List

from subsel.search.bnb.base import BranchAndBound, Node, Pool, without


class BasicBranchAndBound(BranchAndBound):
    """
    Branch & bound with children taken from the pool in ascending order.

    Every child is evaluated right before its prune decision; no ordering
    heuristic is applied.
    """

    def _expand(self, parent: Node, level: int, pool: Pool, n_children: int) -> List[Node]:
        return [Node(f, without(parent.config, f)) for f in pool[:n_children]]

    def _admit(self, parent: Node, child: Node) -> float:
        child.value = self._evaluate(child.config)
        return child.value
