# -*- coding: utf-8 -*-
"""
numlpy.information
==================

Impurity measures used to score how well a feature separates a label vector.

Every measure implements :meth:`Impurity.calculate`; the conditional and
gain helpers on the base class are shared.  A conditional computation reports
the partition it used through an :class:`ImpurityResult` instead of storing it
on the measure, so one measure instance can be shared between threads.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from .exceptions import DimensionMismatchError

# -----------------------------------------------------------------------------
# Ranges
# -----------------------------------------------------------------------------
@dataclass(frozen=True, order=True)
class Range:
    """Half-open interval ``[min, max)``.  Ordering is by ``min`` first."""

    min: float
    max: float

    @classmethod
    def make(cls, min: float, max: float | None = None) -> "Range":
        if max is None:
            max = min + 0.00001
        return cls(float(min), float(max))

    def test(self, value: float) -> bool:
        return self.min <= value < self.max

    def mask(self, x: np.ndarray) -> np.ndarray:
        return (x >= self.min) & (x < self.max)

    def __str__(self) -> str:
        return f"[{self.min}, {self.max})"


def segment(x, segments: int) -> list[Range]:
    """Split the span of ``x`` into ``segments`` equal-width ranges.

    The last range is widened by one ulp so that ``max(x)`` falls inside it.
    """
    if segments < 1:
        raise ValueError("segments must be >= 1")
    x = np.asarray(x, dtype=float)
    if x.size == 0:
        raise ValueError("Cannot segment an empty vector")
    lo, hi = float(x.min()), float(x.max())
    if lo == hi:
        return [Range.make(lo)]
    width = (hi - lo) / segments
    ranges = [Range(lo + i * width, lo + (i + 1) * width) for i in range(segments)]
    ranges[-1] = Range(ranges[-1].min, float(np.nextafter(hi, np.inf)))
    return ranges


@dataclass(frozen=True)
class ImpurityResult:
    """Outcome of a conditional impurity computation.

    Attributes
    ----------
    value : float
        The conditional impurity ``sum_s P(x in s) * H(y | x in s)``.
    segments : tuple[Range, ...]
        Partition of ``x`` that was used, ordered by ``Range.min``.  Discrete
        partitions are stored as degenerate ranges ``[v, v]``.
    discrete : bool
        True when ``x`` was split on its distinct values.
    """

    value: float
    segments: tuple
    discrete: bool


# -----------------------------------------------------------------------------
# Base measure
# -----------------------------------------------------------------------------
class Impurity:
    """Base class for label impurity measures."""

    def calculate(self, y) -> float:
        """Return the impurity of label vector ``y`` (always >= 0)."""
        raise NotImplementedError

    @staticmethod
    def _proportions(y) -> np.ndarray:
        y = np.asarray(y, dtype=float).ravel()
        if y.size == 0:
            raise ValueError("Cannot compute impurity of an empty vector")
        # np.unique sorts, so equally frequent labels keep ascending order
        _, counts = np.unique(y, return_counts=True)
        return counts / float(y.size)

    # -- conditional -------------------------------------------------------
    def conditional_result(self, y, x) -> ImpurityResult:
        """Conditional impurity of ``y`` given each distinct value of ``x``."""
        y, x = _check_pair(y, x)
        values = np.unique(x)
        total = float(x.size)
        result = 0.0
        for v in values:
            idx = np.flatnonzero(x == v)
            result += (idx.size / total) * self.calculate(y[idx])
        segments = tuple(Range(float(v), float(v)) for v in values)
        return ImpurityResult(result, segments, True)

    def conditional(self, y, x) -> float:
        return self.conditional_result(y, x).value

    def gain(self, y, x) -> float:
        return self.calculate(y) - self.conditional(y, x)

    def relative_gain(self, y, x) -> float:
        """Gain normalised by ``H(y)``; ``nan`` when ``H(y) == 0``."""
        h_yx = self.conditional(y, x)
        h_y = self.calculate(y)
        return _ratio(h_y - h_yx, h_y)

    # -- segmented ---------------------------------------------------------
    def segmented_conditional_result(
        self, y, x, segments: int | Iterable[Range]
    ) -> ImpurityResult:
        """Conditional impurity of ``y`` over ranges of ``x``.

        ``segments`` is either a number of equal-width ranges (see
        :func:`segment`) or an explicit collection of :class:`Range`.
        Ranges containing no samples contribute nothing.
        """
        y, x = _check_pair(y, x)
        if isinstance(segments, (int, np.integer)):
            ranges = segment(x, int(segments))
        else:
            ranges = list(segments)
        ranges = tuple(sorted(ranges, key=lambda r: r.min))
        total = float(x.size)
        result = 0.0
        for r in ranges:
            idx = np.flatnonzero(r.mask(x))
            if idx.size == 0:
                continue
            result += (idx.size / total) * self.calculate(y[idx])
        return ImpurityResult(result, ranges, False)

    def segmented_conditional(self, y, x, segments) -> float:
        return self.segmented_conditional_result(y, x, segments).value

    def segmented_gain(self, y, x, segments) -> float:
        return self.calculate(y) - self.segmented_conditional(y, x, segments)

    def segmented_relative_gain(self, y, x, segments) -> float:
        h_yx = self.segmented_conditional(y, x, segments)
        h_y = self.calculate(y)
        return _ratio(h_y - h_yx, h_y)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


# -----------------------------------------------------------------------------
# Measures
# -----------------------------------------------------------------------------
class ClassificationError(Impurity):
    """``1 - max_k p_k``: the error of always predicting the majority label."""

    def calculate(self, y) -> float:
        p = self._proportions(y)
        return float(1.0 - p.max())


class Entropy(Impurity):
    """Shannon entropy in bits."""

    def calculate(self, y) -> float:
        p = self._proportions(y)
        return float(max(0.0, -np.sum(p * np.log2(p))))


class Gini(Impurity):
    """Gini index ``1 - sum_k p_k^2``."""

    def calculate(self, y) -> float:
        p = self._proportions(y)
        return float(1.0 - np.sum(p * p))


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def _check_pair(y, x) -> tuple[np.ndarray, np.ndarray]:
    if y is None or x is None:
        raise ValueError("x and y must both be provided")
    y = np.asarray(y, dtype=float).ravel()
    x = np.asarray(x, dtype=float).ravel()
    if x.size != y.size:
        raise DimensionMismatchError(f"x and y differ in length ({x.size} != {y.size})")
    if x.size == 0:
        raise ValueError("Cannot condition on an empty vector")
    return y, x


def _ratio(num: float, den: float) -> float:
    if den == 0.0:
        return math.nan
    return float(num / den)


__all__: Sequence[str] = [
    "Range", "segment", "ImpurityResult", "Impurity",
    "ClassificationError", "Entropy", "Gini",
]
