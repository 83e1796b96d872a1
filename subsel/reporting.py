"""Observers reporting search progress."""

from __future__ import annotations

from tqdm import tqdm


class ProgressBar:
    """
    tqdm bar fed with progress fractions of an exact search.

    Register with ``algorithm.add_observer(ProgressBar())``. Redraws only
    when the fraction advanced by more than ``min_step``, as exact searches
    can notify millions of times.
    """

    def __init__(self, desc=None, min_step: float = 0.0005, **tqdm_kwargs):
        self.min_step = min_step
        self.status = 0.0
        tqdm_kwargs.setdefault("bar_format", "{l_bar}{bar}| {n:.1f}% [{elapsed}<{remaining}]")
        self._bar = tqdm(total=100.0, desc=desc, **tqdm_kwargs)

    def __call__(self, algorithm, fraction) -> None:
        fraction = float(fraction)
        if fraction - self.status > self.min_step or (fraction >= 1.0 > self.status):
            self.status = fraction
            self._bar.n = round(100.0 * fraction, 4)
            self._bar.refresh()
            if fraction >= 1.0:
                self.close()

    def close(self) -> None:
        self._bar.close()


class SubsetSelectionLogger:
    """
    Print every candidate mutation of a nested subset algorithm.

    A feature entering the candidate leaves the feature space, so the line
    reads ``ADD`` for a remove operation and ``REMOVE`` for an add operation.
    """

    def __call__(self, algorithm, operation) -> None:
        action = "REMOVE" if operation.is_add else "ADD   "
        members = " ".join(str(f) for f in algorithm.candidate)
        print(f"{action} {operation.feature}: [ {members} ]: {algorithm.candidate_value}")
