# -*- coding: utf-8 -*-
"""
numlpy.optimization
===================

Cost functions, L2 regularization and the gradient descent routine used by the
parametric generators.

``gradient_descent`` is a hill-climbing variant: the cost and gradient are
always evaluated at the best parameters found so far.  A step is taken only
while the cost keeps strictly decreasing; otherwise the learning rate is
multiplied by 0.99 and the same point is evaluated again.  There is no
convergence threshold, the loop runs ``max_iterations + 1`` times.
"""

from __future__ import annotations

import numpy as np
from loguru import logger

from .exceptions import DimensionMismatchError
from .functions import Logistic


# -----------------------------------------------------------------------------
# Regularization
# -----------------------------------------------------------------------------
class Regularizer:
    def regularize_cost(self, cost: float, theta, m: int, lambda_: float) -> float:
        raise NotImplementedError

    def regularize_gradient(self, theta, gradient, m: int, lambda_: float) -> np.ndarray:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class L2Regularizer(Regularizer):
    """Squared-norm penalty.  The bias term ``theta[0]`` is never penalised."""

    def regularize_cost(self, cost, theta, m, lambda_):
        if lambda_ == 0:
            return cost
        theta = np.asarray(theta, dtype=float)
        return float(cost + (lambda_ / (2.0 * m)) * np.sum(theta[1:] ** 2))

    def regularize_gradient(self, theta, gradient, m, lambda_):
        theta = np.asarray(theta, dtype=float)
        gradient = np.array(gradient, dtype=float)
        if theta.shape != gradient.shape:
            raise DimensionMismatchError(
                f"theta and gradient differ in shape ({theta.shape} != {gradient.shape})"
            )
        if lambda_ != 0:
            gradient[1:] += (lambda_ / m) * theta[1:]
        return gradient


# -----------------------------------------------------------------------------
# Cost functions
# -----------------------------------------------------------------------------
class CostFunction:
    """Cost ``J(theta)`` and its gradient over a design matrix ``X``."""

    def hypothesis(self, theta, X) -> np.ndarray:
        return X @ theta

    def compute_cost(self, theta, X, y, lambda_: float = 0.0,
                     regularizer: Regularizer | None = None) -> float:
        raise NotImplementedError

    def compute_gradient(self, theta, X, y, lambda_: float = 0.0,
                         regularizer: Regularizer | None = None) -> np.ndarray:
        theta, X, y = _check_shapes(theta, X, y)
        m = X.shape[0]
        gradient = (X.T @ (self.hypothesis(theta, X) - y)) / m
        if lambda_ != 0:
            gradient = _regularizer(regularizer).regularize_gradient(theta, gradient, m, lambda_)
        return gradient

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class LinearCostFunction(CostFunction):
    """Half mean squared residual ``1/(2m) * sum((X theta - y)^2)``."""

    def compute_cost(self, theta, X, y, lambda_=0.0, regularizer=None):
        theta, X, y = _check_shapes(theta, X, y)
        m = X.shape[0]
        j = float(np.sum((self.hypothesis(theta, X) - y) ** 2) / (2.0 * m))
        if lambda_ != 0:
            j = _regularizer(regularizer).regularize_cost(j, theta, m, lambda_)
        return j


class LogisticCostFunction(CostFunction):
    """Mean negative log-likelihood of the logistic model.

    ``log(1 - p)`` is taken as ``log(|1 - p|)`` so rounding that pushes ``p``
    marginally above 1 does not produce a complex logarithm.
    """

    def __init__(self):
        self.logistic = Logistic()

    def hypothesis(self, theta, X):
        return self.logistic.compute(X @ theta)

    def compute_cost(self, theta, X, y, lambda_=0.0, regularizer=None):
        theta, X, y = _check_shapes(theta, X, y)
        m = X.shape[0]
        s = np.atleast_1d(self.hypothesis(theta, X))
        with np.errstate(divide="ignore", invalid="ignore"):
            log_p = np.log(s)
            log_q = np.log(np.abs(1.0 - s))
            j = float((-1.0 / m) * (y.dot(log_p) + (1.0 - y).dot(log_q)))
        if lambda_ != 0:
            j = _regularizer(regularizer).regularize_cost(j, theta, m, lambda_)
        return j


# -----------------------------------------------------------------------------
# Gradient descent
# -----------------------------------------------------------------------------
def gradient_descent(theta, X, y, max_iterations: int, alpha: float,
                     cost_function: CostFunction, lambda_: float = 0.0,
                     regularizer: Regularizer | None = None) -> tuple[float, np.ndarray]:
    """Minimise ``cost_function`` starting from ``theta``.

    Parameters
    ----------
    theta : array-like of shape (n_params,)
        Initial parameters.  Not modified.
    X : array-like of shape (m, n_params)
        Design matrix (including any intercept column).
    y : array-like of shape (m,)
        Targets.
    max_iterations : int
        The loop runs ``max_iterations + 1`` times.
    alpha : float
        Initial learning rate; shrunk by 1% after each rejected step.
    cost_function : CostFunction
    lambda_ : float, default=0.0
        Regularization strength; 0 disables regularization.
    regularizer : Regularizer, optional
        Defaults to :class:`L2Regularizer`.

    Returns
    -------
    (float, ndarray)
        The best cost observed and the corresponding parameters.
    """
    best_theta = np.array(theta, dtype=float, copy=True)
    best_cost = np.inf
    accepted = rejected = 0

    for _ in range(int(max_iterations) + 1):
        cost = cost_function.compute_cost(best_theta, X, y, lambda_, regularizer)
        gradient = cost_function.compute_gradient(best_theta, X, y, lambda_, regularizer)
        if cost < best_cost:
            best_theta = best_theta - alpha * gradient
            best_cost = cost
            accepted += 1
        else:
            alpha *= 0.99
            rejected += 1

    logger.debug(
        "gradient descent: {} accepted, {} rejected, cost={:.6g}, alpha={:.4g}",
        accepted, rejected, best_cost, alpha,
    )
    return float(best_cost), best_theta


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def _regularizer(regularizer: Regularizer | None) -> Regularizer:
    return regularizer if regularizer is not None else L2Regularizer()


def _check_shapes(theta, X, y):
    theta = np.asarray(theta, dtype=float).ravel()
    X = np.atleast_2d(np.asarray(X, dtype=float))
    y = np.asarray(y, dtype=float).ravel()
    if X.shape[1] != theta.size:
        raise DimensionMismatchError(
            f"X has {X.shape[1]} columns but theta has {theta.size} entries"
        )
    if X.shape[0] != y.size:
        raise DimensionMismatchError(f"X has {X.shape[0]} rows but y has {y.size} entries")
    return theta, X, y
