import numpy as np
import pytest

from numlpy.exceptions import DimensionMismatchError
from numlpy.functions import Ident, Logistic, Tanh
from numlpy.optimization import (
    L2Regularizer,
    LinearCostFunction,
    LogisticCostFunction,
    gradient_descent,
)
from numlpy.preprocessing import column_stats, feature_scale, increase_dimensions


def _line():
    """y = 2x sampled at x = 1..3, with an intercept column."""
    X = np.array([[1.0, 1.0], [1.0, 2.0], [1.0, 3.0]])
    y = np.array([2.0, 4.0, 6.0])
    return X, y


def test_linear_cost_and_gradient_at_optimum():
    X, y = _line()
    cost = LinearCostFunction()
    assert cost.compute_cost([0.0, 2.0], X, y) == pytest.approx(0.0)
    assert np.allclose(cost.compute_gradient([0.0, 2.0], X, y), 0.0)
    assert cost.compute_cost([0.0, 0.0], X, y) == pytest.approx(56.0 / 6.0)


def test_zero_lambda_matches_unregularized():
    X, y = _line()
    theta = np.array([5.0, -1.0])
    for cost in (LinearCostFunction(), LogisticCostFunction()):
        assert cost.compute_cost(theta, X, y, 0.0, L2Regularizer()) == cost.compute_cost(theta, X, y)
        assert np.array_equal(
            cost.compute_gradient(theta, X, y, 0.0, L2Regularizer()),
            cost.compute_gradient(theta, X, y),
        )


def test_l2_penalty_skips_bias_term():
    X, y = _line()
    cost = LinearCostFunction()
    reg = L2Regularizer()

    # only theta[0] is non-zero: nothing to penalise
    bias_only = np.array([5.0, 0.0])
    assert cost.compute_cost(bias_only, X, y, 1.0, reg) == pytest.approx(cost.compute_cost(bias_only, X, y))

    theta = np.array([5.0, 2.0])
    diff = cost.compute_cost(theta, X, y, 1.0, reg) - cost.compute_cost(theta, X, y)
    assert diff == pytest.approx(1.0 / (2 * 3) * 4.0)

    g_diff = cost.compute_gradient(theta, X, y, 1.0, reg) - cost.compute_gradient(theta, X, y)
    assert g_diff[0] == 0.0
    assert g_diff[1] == pytest.approx(2.0 / 3.0)


def test_regularize_gradient_shape_mismatch():
    with pytest.raises(DimensionMismatchError):
        L2Regularizer().regularize_gradient([1.0, 2.0], [0.1, 0.2, 0.3], 3, 1.0)


def test_cost_shape_mismatch():
    X, y = _line()
    with pytest.raises(DimensionMismatchError):
        LinearCostFunction().compute_cost([0.0, 1.0, 2.0], X, y)


def test_gradient_descent_fits_a_line():
    x = np.arange(1.0, 6.0)
    X = np.column_stack([np.ones_like(x), x])
    y = 2.0 * x
    theta0 = np.zeros(2)
    cost, theta = gradient_descent(theta0, X, y, 5000, 0.05, LinearCostFunction())
    assert np.allclose(theta, [0.0, 2.0], atol=1e-3)
    assert cost < 1e-6
    # the starting point is left untouched
    assert np.array_equal(theta0, np.zeros(2))


def test_gradient_descent_rejects_diverging_steps():
    X = np.array([[1.0, 1.0], [1.0, 2.0]])
    y = np.array([2.0, 4.0])
    # the first step overshoots; every later evaluation is at the overshot
    # point, so the best cost stays the one seen at the start
    cost, theta = gradient_descent(np.zeros(2), X, y, 10, 100.0, LinearCostFunction())
    assert cost == pytest.approx(5.0)
    assert np.allclose(theta, [300.0, 500.0])


def test_logistic_cost_is_finite():
    X = np.array([[1.0, -2.0], [1.0, -1.0], [1.0, 1.0], [1.0, 2.0]])
    y = np.array([0.0, 0.0, 1.0, 1.0])
    cost = LogisticCostFunction()
    assert cost.compute_cost([0.0, 0.0], X, y) == pytest.approx(np.log(2.0))
    assert cost.compute_gradient([0.0, 0.0], X, y).shape == (2,)


def test_activation_functions():
    assert Ident().compute(3.0) == 3.0
    assert Ident().derivative(3.0) == 1.0
    assert Logistic().compute(0.0) == pytest.approx(0.5)
    assert Logistic().derivative(0.0) == pytest.approx(0.25)
    assert Tanh().compute(0.0) == pytest.approx(0.0)
    assert Tanh().derivative(0.0) == pytest.approx(1.0)
    assert np.allclose(Logistic()(np.array([-1000.0, 1000.0])), [0.0, 1.0])


def test_feature_scale_constant_column():
    X = np.array([[1.0, 5.0], [3.0, 5.0]])
    mean, std = column_stats(X)
    assert np.allclose(mean, [2.0, 5.0])
    assert np.allclose(std, [1.0, 1.0])
    assert np.allclose(feature_scale(X), [[-1.0, 0.0], [1.0, 0.0]])


def test_increase_dimensions():
    X = np.array([[2.0, 3.0]])
    out = increase_dimensions(X, 2)
    assert np.allclose(out, [[2.0, 3.0, 4.0, 6.0, 9.0]])
    assert np.allclose(increase_dimensions(np.array([2.0]), 3), [2.0, 4.0, 8.0])
    assert np.allclose(increase_dimensions(np.array([2.0, 3.0]), 1), [2.0, 3.0])
