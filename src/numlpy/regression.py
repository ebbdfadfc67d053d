# -*- coding: utf-8 -*-
"""
numlpy.regression
=================

Linear and logistic regression trained with :func:`gradient_descent`.

Both generators prepend an intercept column, start from a theta of ones and
run the hill-climbing gradient descent with an L2 penalty that leaves the
intercept alone.
"""
from __future__ import annotations

import numpy as np
from sklearn.base import ClassifierMixin, RegressorMixin

from .base import Generator, Model
from .descriptor import Descriptor
from .functions import Logistic
from .optimization import (
    L2Regularizer,
    LinearCostFunction,
    LogisticCostFunction,
    gradient_descent,
)
from .preprocessing import column_stats, feature_scale, increase_dimensions


def _with_intercept(X: np.ndarray) -> np.ndarray:
    return np.column_stack([np.ones(X.shape[0]), X])


# ----------------------------- Linear -----------------------------

class LinearRegressionModel(RegressorMixin, Model):
    """``theta . [1, standardised x]``.

    The query is standardised with the training means and standard
    deviations; the caller's vector is left untouched.
    """

    def __init__(self, theta=None, feature_means=None, feature_stds=None,
                 descriptor: Descriptor | None = None):
        self.theta = theta
        self.feature_means = feature_means
        self.feature_stds = feature_stds
        self.descriptor = descriptor

    @property
    def n_features(self):
        return None if self.theta is None else self.theta.size - 1

    def _predict_one(self, x):
        if self.theta is None:
            raise ValueError("Model not trained.")
        z = feature_scale(x, self.feature_means, self.feature_stds)
        return float(np.dot(np.concatenate(([1.0], z)), self.theta))


class LinearRegressionGenerator(Generator):
    """
    Parameters
    ----------
    learning_rate : float, default=0.01
    max_iterations : int, default=500
    lambda_ : float, default=0.0
        L2 regularization strength.
    descriptor : Descriptor, optional
    """

    def __init__(self, learning_rate: float = 0.01, max_iterations: int = 500,
                 lambda_: float = 0.0, descriptor: Descriptor | None = None):
        self.learning_rate = learning_rate
        self.max_iterations = max_iterations
        self.lambda_ = lambda_
        self.descriptor = descriptor

    def generate(self, X, y) -> LinearRegressionModel:
        X, y = self._check_training_data(X, y)
        means, stds = column_stats(X) if X.shape[0] else (np.zeros(X.shape[1]), np.ones(X.shape[1]))
        design = _with_intercept(feature_scale(X, means, stds))
        theta = np.ones(design.shape[1])

        _, theta = gradient_descent(
            theta, design, y, self.max_iterations, self.learning_rate,
            LinearCostFunction(), self.lambda_, L2Regularizer(),
        )
        return LinearRegressionModel(theta=theta, feature_means=means, feature_stds=stds,
                                     descriptor=self.descriptor)


# ----------------------------- Logistic -----------------------------

class LogisticRegressionModel(ClassifierMixin, Model):
    """Binary classifier returning 1.0 when ``logistic(theta . x) >= 0.5``."""

    def __init__(self, theta=None, polynomial_features: int = 0, n_features_in=None,
                 descriptor: Descriptor | None = None):
        self.theta = theta
        self.polynomial_features = polynomial_features
        self.n_features_in = n_features_in
        self.descriptor = descriptor

    @property
    def n_features(self):
        # width before polynomial expansion
        return self.n_features_in

    def _expand(self, x):
        if self.polynomial_features > 0:
            x = increase_dimensions(x, self.polynomial_features)
        return np.concatenate(([1.0], x))

    def predict_proba_one(self, x) -> float:
        if self.theta is None:
            raise ValueError("Model not trained.")
        return float(Logistic().compute(np.dot(self._expand(np.asarray(x, dtype=float)), self.theta)))

    def _predict_one(self, x):
        return 1.0 if self.predict_proba_one(x) >= 0.5 else 0.0


class LogisticRegressionGenerator(Generator):
    """
    Parameters
    ----------
    learning_rate : float, default=0.3
    max_iterations : int, default=500
    lambda_ : float, default=1.0
    polynomial_features : int, default=5
        Degree of the polynomial expansion applied before fitting; 0 or 1
        disables it.
    descriptor : Descriptor, optional
    """

    def __init__(self, learning_rate: float = 0.3, max_iterations: int = 500,
                 lambda_: float = 1.0, polynomial_features: int = 5,
                 descriptor: Descriptor | None = None):
        self.learning_rate = learning_rate
        self.max_iterations = max_iterations
        self.lambda_ = lambda_
        self.polynomial_features = polynomial_features
        self.descriptor = descriptor

    def generate(self, X, y) -> LogisticRegressionModel:
        X, y = self._check_training_data(X, y)
        n_features_in = X.shape[1]
        if self.polynomial_features > 0:
            X = increase_dimensions(X, self.polynomial_features)
        design = _with_intercept(X)
        theta = np.ones(design.shape[1])

        _, theta = gradient_descent(
            theta, design, y, self.max_iterations, self.learning_rate,
            LogisticCostFunction(), self.lambda_, L2Regularizer(),
        )
        return LogisticRegressionModel(theta=theta, polynomial_features=self.polynomial_features,
                                       n_features_in=n_features_in,
                                       descriptor=self.descriptor)
