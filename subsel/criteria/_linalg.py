"""Dense kernels shared by the Gaussian criteria."""

from __future__ import annotations

import numpy as np
from numba import njit


@njit(cache=True)
def downdate_inverse(inverse: np.ndarray, pos: int):
    """
    Inverse of a symmetric matrix with row/column ``pos`` deleted.

    Given P = A^-1, the inverse of A without index ``pos`` is

        P[-p, -p] - P[-p, p] P[p, -p] / P[p, p]

    and det(A without p) = det(A) * P[p, p]. Returns the reduced inverse and
    the pivot P[p, p].
    """
    n = inverse.shape[0]
    pivot = inverse[pos, pos]
    out = np.empty((n - 1, n - 1), dtype=np.float64)

    ii = 0
    for i in range(n):
        if i == pos:
            continue
        a = inverse[i, pos] / pivot
        jj = 0
        for j in range(n):
            if j == pos:
                continue
            out[ii, jj] = inverse[i, j] - a * inverse[pos, j]
            jj += 1
        ii += 1
    return out, pivot


@njit(cache=True)
def quadratic_form(matrix: np.ndarray, v: np.ndarray) -> float:
    """v^T M v for a symmetric M."""
    n = v.shape[0]
    total = 0.0
    for i in range(n):
        total += v[i] * v[i] * matrix[i, i]
        for j in range(i + 1, n):
            total += 2.0 * v[i] * v[j] * matrix[i, j]
    return total
