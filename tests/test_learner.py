import math

import numpy as np
import pandas as pd
import pytest

from numlpy import (
    Descriptor,
    KNNGenerator,
    Learner,
    LearningModel,
    LogisticRegressionGenerator,
    Property,
    StringProperty,
    best,
    disable_logging,
    enable_logging,
    learn,
    learn_all,
    learn_frame,
    split_indices,
)
from numlpy.exceptions import InvalidConfigurationError
from numlpy.probability import process_random_source, reseed_process_source


def _records(n=10):
    """Two well separated clusters; the labels carry stray case and whitespace."""
    rows = []
    for i in range(n):
        rows.append({"x1": i * 0.1, "x2": i * 0.05, "kind": "a"})
        rows.append({"x1": 10.0 + i * 0.1, "x2": 10.0, "kind": " B "})
    return rows


def _descriptor():
    return Descriptor([Property("x1"), Property("x2")], StringProperty("kind"))


class CountingDescriptor(Descriptor):
    calls = 0

    def convert(self, records):
        self.calls += 1
        return super().convert(records)


class CountingKNN(KNNGenerator):
    calls = 0

    def generate(self, X, y):
        self.calls += 1
        return super().generate(X, y)


def _numeric_records():
    """One feature; integer label 1 for positive x, 0 for negative x."""
    rows = []
    for i in range(10):
        rows.append({"x": 2.0 + i * 0.4, "label": 1})
        rows.append({"x": -(2.0 + i * 0.4), "label": 0})
    return rows


# -----------------------------------------------------------------------------
# Splitting
# -----------------------------------------------------------------------------
@pytest.mark.parametrize("total,pct", [(10, 0.8), (7, 0.5), (1, 0.5), (50, 0.1)])
def test_split_is_a_partition(total, pct):
    train, test = split_indices(total, pct, random_state=0)
    assert train.size == math.floor(total * pct)
    assert test.size == total - train.size
    assert not set(train) & set(test)
    assert sorted(set(train) | set(test)) == list(range(total))
    assert np.all(np.diff(test) > 0)


def test_split_is_reproducible_with_seed():
    a = split_indices(20, 0.7, random_state=3)
    b = split_indices(20, 0.7, random_state=3)
    assert np.array_equal(a[1], b[1])


# -----------------------------------------------------------------------------
# best
# -----------------------------------------------------------------------------
def _lm(acc):
    return LearningModel(generator=None, model=None, accuracy=acc)


def test_best_of_nothing_is_none():
    assert best([]) is None


def test_best_picks_first_maximum():
    models = [_lm(0.5), _lm(0.9), _lm(0.9), _lm(0.1)]
    assert best(models) is models[1]


def test_best_ignores_nan():
    models = [_lm(float("nan")), _lm(0.2)]
    assert best(models) is models[1]
    only_nan = [_lm(float("nan")), _lm(float("nan"))]
    assert best(only_nan) is only_nan[0]


def test_learning_model_str():
    assert "Accuracy: 75.00%" in str(_lm(0.75))


# -----------------------------------------------------------------------------
# learn
# -----------------------------------------------------------------------------
def test_learn_separable_clusters():
    lm = learn(_records(), 0.8, 3, KNNGenerator(k=1, descriptor=_descriptor()), random_state=0)
    assert isinstance(lm, LearningModel)
    assert lm.accuracy == pytest.approx(1.0)
    assert lm.model.descriptor is lm.generator.descriptor
    # training rows only
    assert lm.model.X.shape == (16, 2)
    assert lm.model.predict_example({"x1": 10.2, "x2": 10.0}) == "B"


def test_learn_is_reproducible_with_seed():
    gen = KNNGenerator(k=3, descriptor=_descriptor())
    first = learn(_records(), 0.6, 1, gen, random_state=11)
    second = learn(_records(), 0.6, 1, gen, random_state=11)
    assert first.accuracy == second.accuracy
    assert np.array_equal(first.model.X, second.model.X)


def test_learn_parallel_matches_sequential():
    gen = KNNGenerator(k=1, descriptor=_descriptor())
    seq = Learner(repeat=4, n_jobs=1, random_state=5).learn(_records(), gen)
    par = Learner(repeat=4, n_jobs=2, random_state=5).learn(_records(), gen)
    assert seq.accuracy == par.accuracy
    assert np.array_equal(seq.model.X, par.model.X)


def test_examples_are_converted_once():
    descriptor = CountingDescriptor([Property("x1"), Property("x2")], StringProperty("kind"))
    learn(_records(), 0.8, 5, KNNGenerator(k=1, descriptor=descriptor), random_state=0)
    assert descriptor.calls == 1


def test_learn_all_keeps_generator_order():
    d = _descriptor()
    gens = [KNNGenerator(k=1, descriptor=d), KNNGenerator(k=3, descriptor=d)]
    results = learn_all(_records(), 0.8, 2, gens, random_state=1)
    assert len(results) == 2
    assert [r.generator for r in results] == gens
    assert [r.model.k for r in results] == [1, 3]


def test_learn_frame():
    frame = pd.DataFrame(_records())
    lm = learn_frame(frame, 0.75, 2, KNNGenerator(k=1, descriptor=_descriptor()), random_state=2)
    assert lm.accuracy == pytest.approx(1.0)


@pytest.mark.parametrize("pct,repeat", [(0.0, 1), (1.0, 1), (1.5, 1), (0.8, 0), (0.8, True)])
def test_learn_rejects_bad_configuration(pct, repeat):
    with pytest.raises(InvalidConfigurationError):
        learn(_records(), pct, repeat, KNNGenerator(descriptor=_descriptor()))


def test_learn_requires_generator_and_descriptor():
    with pytest.raises(InvalidConfigurationError):
        learn(_records(), 0.8, 1, None)
    with pytest.raises(InvalidConfigurationError):
        learn(_records(), 0.8, 1, KNNGenerator())
    with pytest.raises(InvalidConfigurationError):
        learn_all(_records(), 0.8, 1, [])
    with pytest.raises(InvalidConfigurationError):
        learn([], 0.8, 1, KNNGenerator(descriptor=_descriptor()))


def test_learner_params():
    learner = Learner(training_percentage=0.7, repeat=3)
    params = learner.get_params()
    assert params["training_percentage"] == 0.7
    assert params["repeat"] == 3
    assert params["n_jobs"] is None


def test_learn_logs_when_enabled():
    messages = []
    enable_logging("INFO", sink=messages.append)
    try:
        learn(_records(), 0.8, 1, KNNGenerator(k=1, descriptor=_descriptor()), random_state=0)
    finally:
        disable_logging()
    assert any("best KNNGenerator accuracy" in m for m in messages)


def test_process_source_is_shared_and_reseedable():
    reseed_process_source(123)
    first = split_indices(30, 0.5)
    reseed_process_source(123)
    second = split_indices(30, 0.5)
    assert np.array_equal(first[1], second[1])
    assert process_random_source() is process_random_source()
    reseed_process_source()


def test_learn_all_checks_every_generator_before_training():
    counting = CountingKNN(k=1, descriptor=_descriptor())
    with pytest.raises(InvalidConfigurationError):
        learn_all(_records(), 0.8, 3, [counting, KNNGenerator(k=1)], random_state=0)
    assert counting.calls == 0

    bad_label = KNNGenerator(k=1, descriptor=Descriptor([Property("x1")]))
    with pytest.raises(InvalidConfigurationError):
        learn_all(_records(), 0.8, 3, [counting, bad_label], random_state=0)
    assert counting.calls == 0


def test_learn_all_empty_examples_fail_before_conversion():
    descriptor = CountingDescriptor([Property("x1"), Property("x2")], StringProperty("kind"))
    with pytest.raises(InvalidConfigurationError):
        learn_all([], 0.8, 2, [KNNGenerator(k=1, descriptor=descriptor)])
    assert descriptor.calls == 0


def test_learn_with_integer_label_and_logistic_regression():
    descriptor = Descriptor([Property("x")], Property("label", int))
    gen = LogisticRegressionGenerator(lambda_=0.0, polynomial_features=0, descriptor=descriptor)
    lm = learn(_numeric_records(), 0.8, 2, gen, random_state=4)
    assert lm.accuracy == pytest.approx(1.0)

    prediction = lm.model.predict_example({"x": 4.0})
    assert isinstance(prediction, int)
    assert prediction == 1
    assert lm.model.predict_example({"x": -4.0}) == 0
