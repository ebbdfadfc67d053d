# -*- coding: utf-8 -*-
"""
numlpy.preprocessing
====================

Feature scaling and polynomial expansion used by the regression generators.
"""
from __future__ import annotations

import numpy as np


def column_stats(X) -> tuple[np.ndarray, np.ndarray]:
    """Per-column mean and population standard deviation.

    Constant columns get a standard deviation of 1 so scaling maps them to 0
    instead of dividing by zero.
    """
    X = np.atleast_2d(np.asarray(X, dtype=float))
    mean = X.mean(axis=0)
    std = X.std(axis=0)
    std[std == 0] = 1.0
    return mean, std


def feature_scale(values, mean=None, std=None) -> np.ndarray:
    """Standardise ``values``; statistics are computed from them when omitted."""
    values = np.asarray(values, dtype=float)
    if mean is None or std is None:
        if values.ndim == 1:
            m, s = column_stats(values.reshape(-1, 1))
            mean, std = m[0], s[0]
        else:
            mean, std = column_stats(values)
    return (values - mean) / std


def increase_dimensions(x, degree: int) -> np.ndarray:
    """Append polynomial terms built from neighbouring feature pairs.

    For each pair of adjacent columns ``(a, b)`` the terms ``a**(k-m) * b**m``
    for ``2 <= k <= degree`` and ``0 <= m <= k`` are appended after the
    original columns.  A single-column input gets ``a**k`` for
    ``2 <= k <= degree``.  Works on a matrix or a single feature vector.

    This is not the expansion of numl's ``IncreaseDimensions``.  That one
    starts ``k`` at 0, so constant and linear terms are added again.  It
    inserts each new column before the last existing one, and it leaves
    single-column input unchanged.  Here the input columns stay first and in
    order, and only terms of degree 2 and above are appended.
    """
    arr = np.asarray(x, dtype=float)
    single = arr.ndim == 1
    X = arr.reshape(1, -1) if single else arr
    if degree < 2:
        return arr.copy()

    extra = []
    n_cols = X.shape[1]
    if n_cols == 1:
        a = X[:, 0]
        extra = [a ** k for k in range(2, degree + 1)]
    else:
        for j in range(n_cols - 1):
            a, b = X[:, j], X[:, j + 1]
            for k in range(2, degree + 1):
                for m in range(k + 1):
                    extra.append(a ** (k - m) * b ** m)

    out = np.column_stack([X] + extra) if extra else X.copy()
    return out[0] if single else out
