"""Input conversion and validation."""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from subsel._errors import InvalidConfiguration


def to_numpy(data, dtype=np.float64) -> np.ndarray:
    """Convert Pandas/Polars/list to numpy array."""
    if hasattr(data, "to_pandas"):
        data = data.to_pandas()
    if isinstance(data, (pd.DataFrame, pd.Series)):
        try:
            return data.to_numpy(dtype=dtype, na_value=np.nan)
        except TypeError:
            arr = data.to_numpy()
            if arr.dtype == object:
                arr = np.where(pd.isna(arr), np.nan, arr)
            return arr.astype(dtype)
    if hasattr(data, "values"):
        return np.asarray(data.values, dtype=dtype)
    return np.asarray(data, dtype=dtype)


def extract_feature_names(X) -> Optional[List[str]]:
    """Extract column names from DataFrame, or None for ndarray."""
    if hasattr(X, "columns"):
        return list(X.columns)
    return None


def n_features_of(X) -> int:
    """Number of columns of a 2D feature matrix."""
    shape = getattr(X, "shape", None)
    if shape is None:
        shape = np.shape(X)
    if len(shape) != 2:
        raise InvalidConfiguration(f"X must be 2D (n_samples, n_features), got shape {tuple(shape)}")
    return int(shape[1])


def check_drop(n_features: int, n_drop: int) -> int:
    """Validate the number of features to drop and return the target size."""
    if n_features <= 0:
        raise InvalidConfiguration("X has no features.")
    if not 0 <= n_drop < n_features:
        raise InvalidConfiguration(
            f"n_drop must be in [0, {n_features}), got {n_drop}"
        )
    return n_features - n_drop


def resolve_k(n_features: int, k: int) -> Tuple[int, int]:
    """Translate a number of features to keep into (target size, n_drop)."""
    if not 0 < k <= n_features:
        raise InvalidConfiguration(f"k must be in [1, {n_features}], got {k}")
    return k, n_features - k


def class_partition(X: np.ndarray, y) -> Tuple[np.ndarray, List[np.ndarray]]:
    """Split rows of X by label; returns (classes, per-class row blocks)."""
    if y is None:
        raise InvalidConfiguration("This criterion requires class labels y.")
    y_arr = np.asarray(y)
    if y_arr.shape[0] != X.shape[0]:
        raise InvalidConfiguration(
            f"y has {y_arr.shape[0]} rows but X has {X.shape[0]}"
        )
    if pd.isna(y_arr).any():
        raise InvalidConfiguration("Missing labels are not allowed.")
    classes = np.unique(y_arr)
    return classes, [X[y_arr == c] for c in classes]
