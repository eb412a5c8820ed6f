"""Общие численные функции для всех расчётных модулей.

Не зависят от предметной области: регрессии, интерполяция в логарифмическом
масштабе, коррекция кривой касательной.
"""

from dataclasses import dataclass

import numpy as np

DET_EPS = 1e-10  # Порог вырожденности системы нормальных уравнений


@dataclass(frozen=True)
class PolyFit:
    """Результат полиномиальной регрессии y = a + b·x + c·x²."""

    a: float
    b: float
    c: float = 0.0
    degree: int = 2

    def __call__(self, x: float) -> float:
        return self.a + self.b * x + self.c * x * x


# =============================================================================
# Регрессии
# =============================================================================


def linear_regression(x: list[float], y: list[float]) -> PolyFit:
    """МНК-прямая y = a + b·x.

    При совпадающих абсциссах наклон принимается равным нулю,
    а свободный член — среднему y.
    """
    xs = np.asarray(x, dtype=float)
    ys = np.asarray(y, dtype=float)
    n = len(xs)
    if n == 0:
        return PolyFit(a=0.0, b=0.0, degree=1)

    sum_x = xs.sum()
    sum_y = ys.sum()
    denom = n * np.dot(xs, xs) - sum_x * sum_x
    if abs(denom) < DET_EPS:
        return PolyFit(a=float(sum_y / n), b=0.0, degree=1)

    slope = (n * np.dot(xs, ys) - sum_x * sum_y) / denom
    intercept = (sum_y - slope * sum_x) / n
    return PolyFit(a=float(intercept), b=float(slope), degree=1)


def log_linear_regression(x: list[float], y: list[float]) -> tuple[float, float]:
    """МНК-аппроксимация y = a + b·log10(x).

    Используется для кривой текучести (число ударов — влажность).

    Returns:
        (a, b)
    """
    fit = linear_regression(list(np.log10(np.asarray(x, dtype=float))), y)
    return fit.a, fit.b


def quadratic_regression(x: list[float], y: list[float]) -> PolyFit:
    """МНК-парабола y = a + b·x + c·x² по правилу Крамера.

    Система нормальных уравнений 3×3 решается в замкнутом виде.
    При |det| < 1e-10 выполняется откат к линейной регрессии по тем же
    данным (degree=1, c=0). Функция не бросает исключений.
    """
    xs = np.asarray(x, dtype=float)
    ys = np.asarray(y, dtype=float)

    # Суммы степеней: s[k] = Σx^k, t[k] = Σy·x^k
    s = [float(np.sum(xs**k)) for k in range(5)]
    t = [float(np.sum(ys * xs**k)) for k in range(3)]

    m = (
        (s[0], s[1], s[2]),
        (s[1], s[2], s[3]),
        (s[2], s[3], s[4]),
    )
    det = _det3(m)
    if not np.isfinite(det) or abs(det) < DET_EPS:
        return linear_regression(x, y)

    a = _det3(_replace_column(m, 0, t)) / det
    b = _det3(_replace_column(m, 1, t)) / det
    c = _det3(_replace_column(m, 2, t)) / det
    return PolyFit(a=a, b=b, c=c, degree=2)


def r_squared(x: list[float], y: list[float], fit: PolyFit) -> float:
    """Коэффициент детерминации по остаткам (не меньше 0)."""
    ys = np.asarray(y, dtype=float)
    if len(ys) == 0:
        return 0.0
    predicted = np.array([fit(v) for v in x], dtype=float)
    ss_res = float(np.sum((ys - predicted) ** 2))
    ss_tot = float(np.sum((ys - ys.mean()) ** 2))
    if ss_tot <= 0.0:
        return 1.0 if ss_res <= DET_EPS else 0.0
    return max(0.0, 1.0 - ss_res / ss_tot)


def _det3(m) -> float:
    return (
        m[0][0] * (m[1][1] * m[2][2] - m[1][2] * m[2][1])
        - m[0][1] * (m[1][0] * m[2][2] - m[1][2] * m[2][0])
        + m[0][2] * (m[1][0] * m[2][1] - m[1][1] * m[2][0])
    )


def _replace_column(m, col: int, values: list[float]):
    return tuple(
        tuple(values[i] if j == col else m[i][j] for j in range(3))
        for i in range(3)
    )


# =============================================================================
# Интерполяция
# =============================================================================


def log_interpolate(xs_desc: list[float], ys: list[float], x: float) -> float:
    """Значение y при заданном x, линейно по log10(x).

    Ряд упорядочен по убыванию x. За пределами ряда возвращается
    ближайшее граничное значение (без экстраполяции).
    """
    if not xs_desc:
        return 0.0
    if x >= xs_desc[0]:
        return float(ys[0])
    if x <= xs_desc[-1]:
        return float(ys[-1])

    lx = np.log10(x)
    for (x0, y0), (x1, y1) in zip(zip(xs_desc, ys), zip(xs_desc[1:], ys[1:])):
        if x1 <= x <= x0:
            l0, l1 = np.log10(x0), np.log10(x1)
            if l0 == l1:
                return float(y0)
            return float(y1 + (y0 - y1) * (lx - l1) / (l0 - l1))

    return float(ys[-1])


def find_x_for_y(xs_desc: list[float], ys: list[float], y: float) -> tuple[float, bool]:
    """Обратная интерполяция: x при заданном y (линейно по log10(x)).

    Ряд упорядочен по убыванию x, значения y не возрастают.
    Если y лежит вне диапазона ряда, возвращается ближайшая граница по x.

    Returns:
        (x, clamped) — clamped=True, если значение взято с границы ряда.
    """
    if not xs_desc:
        return 0.0, True

    for (x0, y0), (x1, y1) in zip(zip(xs_desc, ys), zip(xs_desc[1:], ys[1:])):
        if y1 <= y <= y0:
            if y0 == y1:
                return float(x0), False
            l0, l1 = np.log10(x0), np.log10(x1)
            lx = l1 + (l0 - l1) * (y - y1) / (y0 - y1)
            return float(10.0**lx), False

    if len(ys) == 1 and y == ys[0]:
        return float(xs_desc[0]), False
    if y > ys[0]:
        return float(xs_desc[0]), True
    return float(xs_desc[-1]), True


def linear_interpolate(xs: list[float], ys: list[float], x: float) -> float:
    """Линейная интерполяция по возрастающему ряду x (с ограничением по краям)."""
    if not xs:
        return 0.0
    return float(np.interp(x, xs, ys))


# =============================================================================
# Коррекция кривой
# =============================================================================


def tangent_correct(x: list[float], y: list[float]) -> list[float]:
    """Коррекция начального участка кривой касательной из начала координат.

    1. Находится точка с максимальным наклоном (центральная разность).
    2. Из начала координат через неё проводится касательная.
    3. Для всех точек левее этой точки вычитается смещение
       (касательная − кривая), результат не меньше нуля.

    Кривые короче трёх точек возвращаются без изменений.
    """
    corrected = [float(v) for v in y]
    if len(x) < 3:
        return corrected

    max_slope = 0.0
    idx = 1
    for i in range(1, len(x) - 1):
        dx = x[i + 1] - x[i - 1]
        if dx <= 0:
            continue
        slope = (y[i + 1] - y[i - 1]) / dx
        if slope > max_slope:
            max_slope = slope
            idx = i

    if x[idx] <= 0:
        return corrected

    tangent = y[idx] / x[idx]
    for i in range(len(x)):
        if x[i] < x[idx]:
            corrected[i] = max(0.0, y[i] - (tangent * x[i] - y[i]))

    return corrected


def frange(start: float, stop: float, step: float) -> list[float]:
    """Равномерная сетка [start, stop] с шагом step (stop включается)."""
    if step <= 0 or stop < start:
        return [start]
    return [float(v) for v in np.arange(start, stop + step / 2, step)]
