"""Fisher class-separability criterion J = trace(Sw^-1 Sb)."""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
from scipy.linalg import eigh

from subsel._errors import InvalidConfiguration
from subsel._preprocess import class_partition, to_numpy
from subsel.criteria.base import CriterionFunction


def within_class_scatter(covariances, priors) -> np.ndarray:
    return np.einsum("k,kij->ij", priors, covariances)


def between_class_scatter(means, priors) -> np.ndarray:
    centered = means - priors @ means
    return (centered * priors[:, None]).T @ centered


class FisherCriterion(CriterionFunction):
    """
    Ratio of between-class to within-class scatter for any number of classes.

    Uses the form of Martinez & Zhu (TPAMI 27(12), 2005, Theorem 2)

        J = sum_i sum_j (w_j^T b_i)^2 * lb_i / lw_j

    over the eigenpairs (lw_j, w_j) of Sw and (lb_i, b_i) of Sb, skipping
    within-class eigenvalues below ``eig_floor``. This never inverts Sw, so a
    singular within-class scatter is tolerated.

    Parameters
    ----------
    eig_floor : float, default=1e-9
        Within-class eigenvalues below this are treated as zero.
    """

    def __init__(self, eig_floor: float = 1e-9):
        self.eig_floor = eig_floor
        self.dimension = 0
        self.classes_ = None
        self.scatter_within_ = None
        self.scatter_between_ = None

    def initialize(self, dimension: int, X, y=None) -> None:
        X_arr = to_numpy(X)
        if X_arr.shape[1] != dimension:
            raise InvalidConfiguration(
                f"X has {X_arr.shape[1]} features, expected {dimension}"
            )
        classes, blocks = class_partition(X_arr, y)
        if len(classes) < 2:
            raise InvalidConfiguration("Fisher criterion needs at least 2 classes.")

        priors = np.array([len(b) for b in blocks], dtype=np.float64) / X_arr.shape[0]
        means = np.vstack([b.mean(axis=0) for b in blocks])
        covariances = np.stack(
            [np.atleast_2d(np.cov(b, rowvar=False, bias=True)) for b in blocks]
        )

        self.dimension = dimension
        self.classes_ = classes
        self.scatter_within_ = within_class_scatter(covariances, priors)
        self.scatter_between_ = between_class_scatter(means, priors)

    def score(self, features: Optional[Sequence[int]] = None) -> float:
        if features is None:
            sw = self.scatter_within_
            sb = self.scatter_between_
        else:
            grid = np.ix_(np.asarray(features, dtype=np.int64), np.asarray(features, dtype=np.int64))
            sw = self.scatter_within_[grid]
            sb = self.scatter_between_[grid]

        lw, vw = eigh(sw)
        lb, vb = eigh(sb)

        keep = lw >= self.eig_floor
        if not keep.any():
            return 0.0
        overlap = (vw[:, keep].T @ vb) ** 2
        return float(np.sum(overlap * lb[None, :] / lw[keep][:, None]))
