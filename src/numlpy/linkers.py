# -*- coding: utf-8 -*-
"""
numlpy.linkers
==============

Aggregate distances between two groups of vectors.

Used by hierarchical clustering style algorithms: each linker reduces the
pairwise distances between the rows of ``x`` and the rows of ``y`` with an
injected :class:`~numlpy.metrics.Distance`.
"""
from __future__ import annotations

import numpy as np

from .metrics import Distance, EuclideanDistance


def _rows(group) -> np.ndarray:
    return np.atleast_2d(np.asarray(group, dtype=float))


class Linker:
    def __init__(self, metric: Distance | None = None):
        self.metric = metric if metric is not None else EuclideanDistance()

    def distance(self, x, y) -> float:
        raise NotImplementedError

    def __call__(self, x, y) -> float:
        return self.distance(x, y)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(metric={self.metric!r})"


class SingleLinker(Linker):
    """Minimum pairwise distance."""

    def distance(self, x, y) -> float:
        x, y = _rows(x), _rows(y)
        return float(min(self.metric.compute(a, b) for a in x for b in y))


class CompleteLinker(Linker):
    """Maximum pairwise distance."""

    def distance(self, x, y) -> float:
        x, y = _rows(x), _rows(y)
        return float(max(self.metric.compute(a, b) for a in x for b in y))


class AverageLinker(Linker):
    """Approximate average pairwise distance.

    Only pairs ``(x[i], y[j])`` with ``j > i`` are summed, but the sum is
    divided by ``len(x) * len(y)``; the result is therefore smaller than the
    true all-pairs mean.  Existing linkage thresholds depend on this value.
    """

    def distance(self, x, y) -> float:
        x, y = _rows(x), _rows(y)
        total = 0.0
        for i in range(len(x)):
            for j in range(i + 1, len(y)):
                total += self.metric.compute(x[i], y[j])
        return total / float(len(x) * len(y))


class CentroidLinker(Linker):
    """Distance between the mean vectors of the two groups."""

    def distance(self, x, y) -> float:
        x, y = _rows(x), _rows(y)
        return float(self.metric.compute(x.mean(axis=0), y.mean(axis=0)))
