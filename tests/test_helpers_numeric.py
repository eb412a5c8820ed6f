import math

import pytest

from geotech.helpers import (
    find_x_for_y,
    frange,
    linear_interpolate,
    log_interpolate,
    log_linear_regression,
    quadratic_regression,
    r_squared,
    tangent_correct,
)


def test_quadratic_regression_recovers_exact_parabola():
    x = [1.0, 2.0, 3.0, 4.0]
    y = [2.0 + 3.0 * v - 0.5 * v * v for v in x]
    fit = quadratic_regression(x, y)
    assert fit.degree == 2
    assert fit.a == pytest.approx(2.0, abs=1e-9)
    assert fit.b == pytest.approx(3.0, abs=1e-9)
    assert fit.c == pytest.approx(-0.5, abs=1e-9)
    assert r_squared(x, y, fit) == pytest.approx(1.0)


def test_quadratic_regression_falls_back_to_linear_for_two_points():
    # Two abscissas => singular 3x3 system
    fit = quadratic_regression([1.0, 2.0], [1.0, 3.0])
    assert fit.degree == 1
    assert fit.c == 0.0
    assert fit.b == pytest.approx(2.0)
    assert fit.a == pytest.approx(-1.0)


def test_quadratic_regression_all_x_equal_gives_mean():
    fit = quadratic_regression([2.0, 2.0, 2.0], [1.0, 2.0, 3.0])
    assert fit.degree == 1
    assert fit.b == 0.0
    assert fit.a == pytest.approx(2.0)


def test_r_squared_constant_data():
    fit = quadratic_regression([1.0, 2.0, 3.0], [5.0, 5.0, 5.0])
    assert r_squared([1.0, 2.0, 3.0], [5.0, 5.0, 5.0], fit) == 1.0


def test_log_linear_regression():
    x = [1.0, 10.0, 100.0]
    y = [10.0 + 5.0 * math.log10(v) for v in x]
    a, b = log_linear_regression(x, y)
    assert a == pytest.approx(10.0)
    assert b == pytest.approx(5.0)


@pytest.mark.parametrize(
    "x,expected",
    [
        (100.0, 100.0),  # coarser than the series -> clamp
        (10.0, 100.0),
        (math.sqrt(10.0), 75.0),
        (0.1, 10.0),
        (0.01, 10.0),  # finer than the series -> clamp
    ],
)
def test_log_interpolate_clamps_outside_series(x, expected):
    xs = [10.0, 1.0, 0.1]
    ys = [100.0, 50.0, 10.0]
    assert log_interpolate(xs, ys, x) == pytest.approx(expected)


def test_find_x_for_y_inside_and_clamped():
    xs = [10.0, 1.0, 0.1]
    ys = [100.0, 50.0, 10.0]

    x, clamped = find_x_for_y(xs, ys, 75.0)
    assert x == pytest.approx(math.sqrt(10.0))
    assert not clamped

    assert find_x_for_y(xs, ys, 5.0) == (0.1, True)
    assert find_x_for_y(xs, ys, 120.0) == (10.0, True)


def test_linear_interpolate_clamped():
    assert linear_interpolate([0.0, 2.0], [0.0, 4.0], 1.0) == pytest.approx(2.0)
    assert linear_interpolate([0.0, 2.0], [0.0, 4.0], 3.0) == pytest.approx(4.0)


def test_tangent_correct_removes_concave_toe():
    x = [0.0, 1.0, 2.0, 3.0, 4.0]
    y = [0.0, 1.0, 4.0, 7.0, 8.0]
    # Steepest slope at x=2 -> tangent through origin with slope 2
    assert tangent_correct(x, y) == [0.0, 0.0, 4.0, 7.0, 8.0]


def test_tangent_correct_short_series_unchanged():
    assert tangent_correct([0.0, 1.0], [0.0, 2.0]) == [0.0, 2.0]


def test_frange_includes_stop():
    assert frange(0.0, 1.0, 0.5) == pytest.approx([0.0, 0.5, 1.0])
