# -*- coding: utf-8 -*-
"""
numlpy.functions
================

Scalar activation functions with their derivatives.

Each function works on scalars and, elementwise, on numpy arrays.
"""
from __future__ import annotations

import numpy as np


class Function:
    def compute(self, x):
        raise NotImplementedError

    def derivative(self, x):
        raise NotImplementedError

    def __call__(self, x):
        return self.compute(x)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Ident(Function):
    def compute(self, x):
        return x

    def derivative(self, x):
        return np.ones_like(np.asarray(x, dtype=float)) if np.ndim(x) else 1.0


class Logistic(Function):
    """Sigmoid ``1 / (1 + exp(-x))``."""

    def compute(self, x):
        with np.errstate(over="ignore"):
            out = 1.0 / (1.0 + np.exp(-np.asarray(x, dtype=float)))
        return float(out) if np.ndim(out) == 0 else out

    def derivative(self, x):
        s = self.compute(x)
        return s * (1.0 - s)


class Tanh(Function):
    def compute(self, x):
        out = np.tanh(np.asarray(x, dtype=float))
        return float(out) if np.ndim(out) == 0 else out

    def derivative(self, x):
        t = self.compute(x)
        return 1.0 - t ** 2
