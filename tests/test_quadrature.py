import numpy as np
import pytest

from tetfem.quadrature import QuadratureRule


def test_order_one_is_centroid_rule():
    points, weights = QuadratureRule(1).points_and_weights()
    assert points.shape == (1, 3)
    np.testing.assert_allclose(points[0], [0.25, 0.25, 0.25])
    np.testing.assert_allclose(weights, [1.0 / 6.0])


def test_default_order_is_one():
    points, weights = QuadratureRule().points_and_weights()
    assert len(weights) == 1
    np.testing.assert_allclose(points[0], [0.25, 0.25, 0.25])


@pytest.mark.parametrize("order", [2, 3, 5])
def test_higher_orders_use_four_points(order):
    points, weights = QuadratureRule(order).points_and_weights()
    assert points.shape == (4, 3)
    np.testing.assert_allclose(weights, np.full(4, 1.0 / 24.0))


@pytest.mark.parametrize("order", [1, 2])
def test_weights_sum_to_reference_volume(order):
    _, weights = QuadratureRule(order).points_and_weights()
    assert weights.sum() == pytest.approx(1.0 / 6.0)


def test_four_point_rule_is_centred_and_inside():
    points, _ = QuadratureRule(2).points_and_weights()
    np.testing.assert_allclose(points.mean(axis=0), [0.25, 0.25, 0.25])
    assert np.all(points > 0)
    assert np.all(points.sum(axis=1) < 1)


def test_both_rules_agree_on_linear_integrand():
    def integrate(order):
        points, weights = QuadratureRule(order).points_and_weights()
        return float(weights @ (1.0 + 2.0 * points[:, 0] - points[:, 2]))

    assert integrate(1) == pytest.approx(integrate(2))


def test_returned_arrays_are_copies():
    rule = QuadratureRule(2)
    points, weights = rule.points_and_weights()
    points[:] = 0.0
    weights[:] = 0.0
    points_again, weights_again = rule.points_and_weights()
    assert weights_again.sum() == pytest.approx(1.0 / 6.0)
    assert np.all(points_again > 0)
    assert len(rule) == 4