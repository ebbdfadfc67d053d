# -*- coding: utf-8 -*-
"""
numlpy.metrics
==============

Distance and similarity functions between two feature vectors.

All metrics are symmetric and side-effect free.  Vectors of unequal length
raise :class:`~numlpy.exceptions.DimensionMismatchError`.
"""
from __future__ import annotations

import numpy as np

from .exceptions import check_same_length


def _pair(x, y) -> tuple[np.ndarray, np.ndarray]:
    x = np.asarray(x, dtype=float).ravel()
    y = np.asarray(y, dtype=float).ravel()
    check_same_length(x, y)
    return x, y


class Distance:
    """Smaller means closer."""

    def compute(self, x, y) -> float:
        raise NotImplementedError

    def __call__(self, x, y) -> float:
        return self.compute(x, y)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Similarity:
    """Larger means closer."""

    def compute(self, x, y) -> float:
        raise NotImplementedError

    def __call__(self, x, y) -> float:
        return self.compute(x, y)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


# ----------------------------- Distances -----------------------------

class CosineDistance(Distance):
    """``1 - cos(x, y)``.  ``nan`` when either vector is all zeros."""

    def compute(self, x, y) -> float:
        x, y = _pair(x, y)
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(1.0 - x.dot(y) / (np.linalg.norm(x) * np.linalg.norm(y)))


class EuclideanDistance(Distance):
    def compute(self, x, y) -> float:
        x, y = _pair(x, y)
        return float(np.linalg.norm(x - y))


class HammingDistance(Distance):
    """Number of positions at which the components differ."""

    def compute(self, x, y) -> float:
        x, y = _pair(x, y)
        return float(np.count_nonzero(x != y))


# ---------------------------- Similarities ---------------------------

class EuclideanSimilarity(Similarity):
    """``1 / (1 + ||x - y||)``, in ``(0, 1]``."""

    def compute(self, x, y) -> float:
        x, y = _pair(x, y)
        return float(1.0 / (1.0 + np.linalg.norm(x - y)))


class PearsonCorrelation(Similarity):
    def compute(self, x, y) -> float:
        x, y = _pair(x, y)
        n = x.size
        sx, sy = x.sum(), y.sum()
        x_elem = (x ** 2).sum() - (sx * sx) / n
        y_elem = (y ** 2).sum() - (sy * sy) / n
        with np.errstate(divide="ignore", invalid="ignore"):
            return float((x.dot(y) - (sx * sy) / n) / np.sqrt(x_elem * y_elem))


class TanimotoCoefficient(Similarity):
    """``x.y / (||x||^2 + ||y||^2 - x.y)``."""

    def compute(self, x, y) -> float:
        x, y = _pair(x, y)
        dot = x.dot(y)
        with np.errstate(divide="ignore", invalid="ignore"):
            return float(dot / (x.dot(x) + y.dot(y) - dot))
