# -*- coding: utf-8 -*-
"""
numlpy.knn
==========

k-nearest-neighbour generator and model.

The generator is lazy: training only stores the data.  Prediction ranks every
stored row by Euclidean distance to the query and returns the most frequent
label among the ``k`` closest.
"""
from __future__ import annotations

import numpy as np
from sklearn.base import ClassifierMixin

from .base import Generator, Model, mode
from .descriptor import Descriptor
from .exceptions import InvalidConfigurationError


class KNNModel(ClassifierMixin, Model):
    """
    Parameters
    ----------
    X : ndarray of shape (n_samples, n_features)
        Stored training rows.
    y : ndarray of shape (n_samples,)
        Stored training labels.
    k : int, default=5
    descriptor : Descriptor, optional
    """

    def __init__(self, X=None, y=None, k: int = 5, descriptor: Descriptor | None = None):
        self.X = X
        self.y = y
        self.k = k
        self.descriptor = descriptor

    @property
    def n_features(self):
        return None if self.X is None else self.X.shape[1]

    def _predict_one(self, x):
        if self.X is None:
            raise ValueError("Model has no training data.")
        if self.X.shape[0] == 0:
            return np.nan
        # one slot per stored row, no shared accumulator
        distances = np.linalg.norm(self.X - x, axis=1)
        # stable sort: equal distances keep training order
        nearest = np.argsort(distances, kind="stable")[: self.k]
        return mode(self.y[nearest])


class KNNGenerator(Generator):
    """
    Parameters
    ----------
    k : int, default=5
        Number of neighbours consulted by the produced models.
    descriptor : Descriptor, optional
        Stamped onto every produced model.
    """

    def __init__(self, k: int = 5, descriptor: Descriptor | None = None):
        self.k = k
        self.descriptor = descriptor

    def generate(self, X, y) -> KNNModel:
        if int(self.k) < 1:
            raise InvalidConfigurationError("k must be >= 1")
        X, y = self._check_training_data(X, y)
        # private copies: models never alias the caller's arrays or each other
        return KNNModel(X=X.copy(), y=y.copy(), k=int(self.k), descriptor=self.descriptor)
