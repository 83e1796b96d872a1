"""
Improved branch & bound.

See P. Somol, P. Pudil and J. Kittler, "Fast Branch & Bound Algorithms for
Optimal Feature Selection", IEEE TPAMI 26(7), pp. 900-912, 2004.
"""

from __future__ import annotations

from typing import List

from subsel.search.bnb.base import BranchAndBound, Node, Pool, without


def lowest(children: List[Node], n_children: int) -> List[Node]:
    """The ``n_children`` lowest-scoring nodes, ascending (stable on ties)."""
    return sorted(children, key=lambda node: node.value)[:n_children]


class ImprovedBranchAndBound(BranchAndBound):
    """
    Branch & bound ordering children by their criterion value.

    All pool features are tried as children and scored up front. Only the
    lowest-scoring ones are branched on; the rest stay in the pools of every
    subtree, so the most important features are removed last.
    """

    def _expand(self, parent: Node, level: int, pool: Pool, n_children: int) -> List[Node]:
        children = []
        for f in pool:
            config = without(parent.config, f)
            children.append(Node(f, config, self._evaluate(config)))
        return lowest(children, n_children)
