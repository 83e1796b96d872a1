"""Branch & bound on incrementally derived criterion states."""

from __future__ import annotations

from typing import List

import numpy as np

from subsel._errors import InvalidConfiguration, NumericFailure
from subsel.criteria.base import CriterionFunction, CriterionState, RecursiveCriterionFunction
from subsel.search.bnb.base import BranchAndBound, Node, Pool
from subsel.search.bnb.improved import lowest


class RecursiveBranchAndBound(BranchAndBound):
    """
    Improved branch & bound for criteria that derive a child's score from
    its parent's state (e.g. rank-one inverse downdates), avoiding a full
    recomputation at every node.

    States live only on the active path of the depth-first walk: the states
    of children that are not branched on are dropped right after sorting.
    """

    leaf_shortcut = False

    def _check_criterion(self, criterion: CriterionFunction) -> None:
        if not isinstance(criterion, RecursiveCriterionFunction):
            raise InvalidConfiguration(
                f"{type(self).__name__} requires a RecursiveCriterionFunction, "
                f"got {type(criterion).__name__}"
            )

    def _root(self, dimension: int) -> Node:
        state = self._criterion.root_state()
        return Node(-1, tuple(state.config), self._state_value(state), state=state)

    def _state_value(self, state: CriterionState) -> float:
        value = float(state.value)
        if np.isnan(value):
            raise NumericFailure(f"criterion state is NaN for features {list(state.config)}")
        return value

    def _expand(self, parent: Node, level: int, pool: Pool, n_children: int) -> List[Node]:
        children = []
        for f in pool:
            state = self._criterion.derive_state(f, parent.state)
            self.n_evaluations += 1
            children.append(Node(f, tuple(state.config), self._state_value(state), state=state))
        return lowest(children, n_children)
