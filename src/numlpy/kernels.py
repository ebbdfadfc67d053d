# -*- coding: utf-8 -*-
"""
numlpy.kernels
==============

Kernels projecting feature rows into an inner-product space.
"""
from __future__ import annotations

import numpy as np

from .exceptions import DimensionMismatchError


class Kernel:
    """Base kernel.  Subclasses implement the symmetric function :meth:`k`."""

    def k(self, a: np.ndarray, b: np.ndarray) -> float:
        raise NotImplementedError

    def compute(self, m) -> np.ndarray:
        """Gram matrix of the rows of ``m``.

        Only the upper triangle (with the diagonal) is evaluated; the lower
        triangle is mirrored from it.
        """
        m = np.atleast_2d(np.asarray(m, dtype=float))
        n = m.shape[0]
        K = np.zeros((n, n), dtype=float)
        for i in range(n):
            for j in range(i, n):
                K[i, j] = K[j, i] = self.k(m[i], m[j])
        return K

    def project(self, m, x) -> np.ndarray:
        """Kernel value between every row of ``m`` and the vector ``x``."""
        m = np.atleast_2d(np.asarray(m, dtype=float))
        x = np.asarray(x, dtype=float).ravel()
        if m.shape[1] != x.size:
            raise DimensionMismatchError(
                f"Cannot project a vector of length {x.size} onto rows of width {m.shape[1]}"
            )
        return np.array([self.k(row, x) for row in m], dtype=float)


class PolyKernel(Kernel):
    """Polynomial kernel ``(1 + x.y) ** dimension``."""

    def __init__(self, dimension: float = 2.0):
        self.dimension = float(dimension)

    def k(self, a, b) -> float:
        return float((1.0 + a.dot(b)) ** self.dimension)

    def __repr__(self) -> str:
        return f"PolyKernel(dimension={self.dimension})"


class RBFKernel(Kernel):
    """Gaussian kernel ``exp(-||x - x'||^2 / (2 sigma^2))``."""

    def __init__(self, sigma: float = 1.0):
        if sigma == 0:
            raise ValueError("sigma must be non-zero")
        self.sigma = float(sigma)

    def k(self, a, b) -> float:
        p = a - b
        return float(np.exp(-p.dot(p) / (2.0 * self.sigma ** 2)))

    def __repr__(self) -> str:
        return f"RBFKernel(sigma={self.sigma})"
