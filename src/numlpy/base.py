# -*- coding: utf-8 -*-
"""
numlpy.base
===========

Abstract generator and model types.

A *generator* is configuration plus an algorithm: ``generate(X, y)`` turns a
training matrix and label vector into a trained *model* and keeps no state
about the data.  A model is read-only once created and exposes ``predict``.
Both follow the scikit-learn estimator conventions (keyword constructor
arguments stored verbatim, ``get_params``/``set_params``).
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Iterable

import joblib
import numpy as np
from sklearn.base import BaseEstimator

from .descriptor import Descriptor
from .exceptions import DimensionMismatchError, InvalidConfigurationError


def mode(values) -> float:
    """Most frequent value; ties go to the value encountered first."""
    values = list(np.asarray(values, dtype=float).ravel())
    if not values:
        return np.nan
    return float(Counter(values).most_common(1)[0][0])


# -----------------------------------------------------------------------------
# Model
# -----------------------------------------------------------------------------
class Model(BaseEstimator):
    """Base class for trained models.

    Subclasses implement :meth:`_predict_one` for a single feature vector.
    """

    descriptor: Descriptor | None = None

    def _predict_one(self, x: np.ndarray) -> float:
        raise NotImplementedError

    @property
    def n_features(self) -> int | None:
        return None

    def predict(self, X):
        """
        Predict the numeric label of one feature vector or of each row of a matrix.

        Parameters
        ----------
        X : array-like of shape (n_features,) or (n_samples, n_features)

        Returns
        -------
        float or ndarray of shape (n_samples,)
            A float for a single vector, an array for a matrix.
        """
        X = np.asarray(X, dtype=float)
        if X.ndim == 1:
            self._check_width(X.shape[0])
            return float(self._predict_one(X))
        self._check_width(X.shape[1])
        return np.array([self._predict_one(x) for x in X], dtype=float)

    def predict_example(self, record: Any) -> Any:
        """Predict the native label value of a raw record via the descriptor."""
        if self.descriptor is None or self.descriptor.label is None:
            raise ValueError("Empty label precludes prediction")
        x = self.descriptor.convert_one(record, with_label=False)
        return self.descriptor.label.decode(self.predict(x))

    def _check_width(self, width: int) -> None:
        n = self.n_features
        if n is not None and width != n:
            raise DimensionMismatchError(f"Model expects {n} features, got {width}")

    # -- persistence -------------------------------------------------------
    def save(self, path) -> str:
        """Write the model (parameters, descriptor and stored arrays) to ``path``."""
        joblib.dump(self, path)
        return str(path)

    @classmethod
    def load(cls, path) -> "Model":
        model = joblib.load(path)
        if not isinstance(model, cls):
            raise TypeError(f"{path} holds a {type(model).__name__}, not a {cls.__name__}")
        return model


# -----------------------------------------------------------------------------
# Generator
# -----------------------------------------------------------------------------
class Generator(BaseEstimator):
    """Base class for model generators.

    Subclasses take a ``descriptor`` keyword and implement :meth:`generate`.
    """

    descriptor: Descriptor | None = None

    def generate(self, X, y) -> Model:
        raise NotImplementedError

    def generate_examples(self, examples: Iterable[Any],
                          descriptor: Descriptor | None = None) -> Model:
        """Convert raw records with the descriptor, then :meth:`generate`."""
        examples = list(examples)
        if not examples:
            raise InvalidConfigurationError("Empty example set")
        if descriptor is not None:
            self.descriptor = descriptor
        if self.descriptor is None:
            raise InvalidConfigurationError("Generator has no descriptor")
        X, y = self.descriptor.convert(examples)
        return self.generate(X, y)

    def _check_training_data(self, X, y) -> tuple[np.ndarray, np.ndarray]:
        X = np.asarray(X, dtype=float)
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        y = np.asarray(y, dtype=float).ravel()
        if X.shape[0] != y.shape[0]:
            raise DimensionMismatchError(
                f"X has {X.shape[0]} rows but y has {y.shape[0]} labels"
            )
        return X, y


__all__ = ["Generator", "Model", "mode"]
