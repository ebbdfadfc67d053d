# -*- coding: utf-8 -*-
"""
numlpy.learner
==============

Train-many, keep-the-best orchestration.

:func:`learn` converts the examples once, then runs ``repeat`` independent
trials of a generator.  Each trial draws a fresh random test sample, trains on
the remaining rows, measures held-out accuracy by predicting the raw test
records through the descriptor, and the most accurate trial wins.  Trials run
on a joblib worker pool; they only read the shared ``X``/``y`` and each writes
a single result slot, so no locking is involved.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import numpy as np
import pandas as pd
from joblib import Parallel, delayed
from loguru import logger
from sklearn.base import BaseEstimator

from .base import Generator, Model
from .descriptor import Descriptor, get_value
from .exceptions import InvalidConfigurationError
from .probability import check_random_source, uniform_index


# -----------------------------------------------------------------------------
# Result record
# -----------------------------------------------------------------------------
@dataclass
class LearningModel:
    """The generator, the model it produced and the model's held-out accuracy."""

    generator: Generator
    model: Model
    accuracy: float

    def __str__(self) -> str:
        return (
            "Learning Model:\n"
            f"  Generator {self.generator!r}\n"
            f"  Model:\n{self.model!r}\n"
            f"  Accuracy: {self.accuracy:.2%}\n"
        )


def best(models: Iterable[LearningModel]) -> LearningModel | None:
    """Return the most accurate model, or ``None`` for an empty input.

    Ties go to the first model; ``nan`` accuracies never win unless every
    accuracy is ``nan``, in which case the first model is returned.
    """
    models = list(models)
    if not models:
        return None
    idx = _max_index([m.accuracy for m in models])
    return models[idx]


def _max_index(values: Sequence[float]) -> int:
    acc = np.asarray(values, dtype=float)
    valid = ~np.isnan(acc)
    if not valid.any():
        return 0
    # argmax returns the first occurrence of the maximum
    return int(np.argmax(np.where(valid, acc, -np.inf)))


# -----------------------------------------------------------------------------
# Splitting
# -----------------------------------------------------------------------------
def split_indices(total: int, training_percentage: float,
                  random_state=None) -> tuple[np.ndarray, np.ndarray]:
    """
    Partition ``range(total)`` into training and test indices.

    ``floor(total * training_percentage)`` rows are used for training; the
    test rows are drawn uniformly without replacement by rejection sampling
    (draw an index, redraw if already taken).  Rejection sampling slows down
    as the test share approaches the whole set.

    Parameters
    ----------
    total : int
        Number of examples.
    training_percentage : float
        Fraction in ``(0, 1)`` used for training.
    random_state : None, int or RandomState
        ``None`` uses the process-wide source.

    Returns
    -------
    (ndarray, ndarray)
        Training and test indices, both ascending and disjoint; together
        they cover ``range(total)``.
    """
    source = check_random_source(random_state)
    training_count = int(math.floor(total * training_percentage))
    test_count = total - training_count

    taken: set[int] = set()
    while len(taken) < test_count:
        taken.add(uniform_index(source, total))

    test = np.array(sorted(taken), dtype=int)
    mask = np.ones(total, dtype=bool)
    mask[test] = False
    train = np.flatnonzero(mask)
    return train, test


# -----------------------------------------------------------------------------
# Trials
# -----------------------------------------------------------------------------
def _evaluate(model: Model, descriptor: Descriptor, records: Sequence[Any],
              test: np.ndarray) -> float:
    """Fraction of test records whose decoded prediction equals the record's label."""
    if test.size == 0:
        return math.nan
    label = descriptor.label
    hits = 0
    for i in test:
        record = records[i]
        truth = label.normalize(get_value(record, label.name))
        features = descriptor.convert_one(record, with_label=False)
        prediction = label.decode(model.predict(features))
        if truth == prediction:
            hits += 1
    return hits / float(test.size)


def _run_trial(generator: Generator, descriptor: Descriptor, X: np.ndarray, y: np.ndarray,
               records: Sequence[Any], train: np.ndarray, test: np.ndarray) -> LearningModel:
    # fancy indexing copies, the shared X/y are never written
    model = generator.generate(X[train], y[train])
    model.descriptor = descriptor
    accuracy = _evaluate(model, descriptor, records, test)
    return LearningModel(generator=generator, model=model, accuracy=accuracy)


# -----------------------------------------------------------------------------
# Learner
# -----------------------------------------------------------------------------
class Learner(BaseEstimator):
    """
    Run generators repeatedly on random train/test splits and keep the best models.

    Parameters
    ----------
    training_percentage : float, default=0.8
        Fraction of the examples used for training, in ``(0, 1)``.  The
        remaining ``total - floor(total * training_percentage)`` examples
        form the test set.
    repeat : int, default=1
        Number of trials per generator.
    n_jobs : int or None, default=None
        Number of joblib workers running trials (``-1`` = all cores).
        Trials share the converted data, so a thread pool is used.
    random_state : None, int or RandomState, default=None
        Source for the test samples.  ``None`` uses the process-wide source
        seeded from the clock.  Splits for all trials are drawn up front, so
        a fixed seed reproduces every trial regardless of ``n_jobs``.
    verbose : int, default=0
        Passed to ``joblib.Parallel``.
    """

    def __init__(self, *, training_percentage: float = 0.8, repeat: int = 1,
                 n_jobs: int | None = None, random_state=None, verbose: int = 0):
        self.training_percentage = training_percentage
        self.repeat = repeat
        self.n_jobs = n_jobs
        self.random_state = random_state
        self.verbose = verbose

    def _validate(self) -> None:
        pct = self.training_percentage
        if not isinstance(pct, (int, float)) or not (0.0 < float(pct) < 1.0):
            raise InvalidConfigurationError(
                f"training_percentage must be in (0, 1), got {pct!r}"
            )
        if isinstance(self.repeat, bool) or not isinstance(self.repeat, (int, np.integer)) \
                or self.repeat < 1:
            raise InvalidConfigurationError(f"repeat must be an integer >= 1, got {self.repeat!r}")

    def learn(self, examples: Iterable[Any], generator: Generator) -> LearningModel:
        """Best of ``repeat`` trials of a single generator."""
        if generator is None:
            raise InvalidConfigurationError("Need to have at least one generator!")
        self._validate()
        records = list(examples)
        self._check_inputs(records, [generator])
        return self._learn(records, generator, check_random_source(self.random_state))

    def learn_all(self, examples: Iterable[Any],
                  generators: Sequence[Generator]) -> list[LearningModel]:
        """Best model for each generator, in the order given."""
        generators = list(generators or [])
        if not generators or any(g is None for g in generators):
            raise InvalidConfigurationError("Need to have at least one generator!")
        self._validate()
        records = list(examples)
        # every generator is checked before the first one starts training
        self._check_inputs(records, generators)
        source = check_random_source(self.random_state)
        return [self._learn(records, g, source) for g in generators]

    def learn_frame(self, frame: pd.DataFrame, generator: Generator) -> LearningModel:
        """Tabular adapter: each DataFrame row becomes a record dict."""
        return self.learn(frame.to_dict(orient="records"), generator)

    @staticmethod
    def _check_inputs(records: list, generators: Sequence[Generator]) -> None:
        for g in generators:
            if g.descriptor is None:
                raise InvalidConfigurationError(f"{type(g).__name__} has no descriptor")
            g.descriptor.validate()
        if not records:
            raise InvalidConfigurationError("Empty example set")

    def _learn(self, records: list, generator: Generator,
               source: np.random.RandomState) -> LearningModel:
        descriptor = generator.descriptor
        total = len(records)

        # converted once, shared read-only by every trial
        X, y = descriptor.convert(records)
        splits = [split_indices(total, self.training_percentage, source)
                  for _ in range(int(self.repeat))]
        logger.info(
            "learning {} on {} examples ({} train / {} test), {} trial(s)",
            type(generator).__name__, total, splits[0][0].size, splits[0][1].size, self.repeat,
        )

        results = Parallel(n_jobs=self.n_jobs, prefer="threads", verbose=self.verbose)(
            delayed(_run_trial)(generator, descriptor, X, y, records, train, test)
            for train, test in splits
        )

        accuracies = [r.accuracy for r in results]
        for i, acc in enumerate(accuracies):
            if math.isnan(acc):
                logger.warning("trial {} of {} produced an undefined accuracy",
                               i, type(generator).__name__)
            else:
                logger.debug("trial {} of {}: accuracy {:.4f}", i, type(generator).__name__, acc)

        winner = results[_max_index(accuracies)]
        logger.info("best {} accuracy: {:.4f}", type(generator).__name__, winner.accuracy)
        return winner


# -----------------------------------------------------------------------------
# Functional interface
# -----------------------------------------------------------------------------
def learn(examples: Iterable[Any], training_percentage: float, repeat: int,
          generator: Generator, **kwargs) -> LearningModel:
    """Shortcut for ``Learner(...).learn(examples, generator)``.

    Extra keyword arguments (``n_jobs``, ``random_state``, ``verbose``) are
    passed to :class:`Learner`.
    """
    learner = Learner(training_percentage=training_percentage, repeat=repeat, **kwargs)
    return learner.learn(examples, generator)


def learn_all(examples: Iterable[Any], training_percentage: float, repeat: int,
              generators: Sequence[Generator], **kwargs) -> list[LearningModel]:
    learner = Learner(training_percentage=training_percentage, repeat=repeat, **kwargs)
    return learner.learn_all(examples, generators)


def learn_frame(frame: pd.DataFrame, training_percentage: float, repeat: int,
                generator: Generator, **kwargs) -> LearningModel:
    learner = Learner(training_percentage=training_percentage, repeat=repeat, **kwargs)
    return learner.learn_frame(frame, generator)
