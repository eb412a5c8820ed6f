"""Подготовка данных для графиков: массивы точек {x, y}."""

from collections.abc import Callable, Sequence

from geotech.helpers import frange


def xy(xs: Sequence[float], ys: Sequence[float]) -> list[dict]:
    """Точки [{"x": .., "y": ..}, ...]."""
    return [{"x": x, "y": y} for x, y in zip(xs, ys)]


def labelled(xs: Sequence[float], ys: Sequence[float], labels: Sequence[str], key: str = "type") -> list[dict]:
    """Точки с подписью (тип грунта и т.п.)."""
    return [{"x": x, "y": y, key: label} for x, y, label in zip(xs, ys, labels)]


def depth_profile(values: Sequence[float | None], depths: Sequence[float]) -> list[dict]:
    """Профиль по глубине: x — величина, y — глубина. Пустые значения пропускаются."""
    return [{"x": v, "y": d} for v, d in zip(values, depths) if v is not None]


def sample_curve(fn: Callable[[float], float], start: float, stop: float, step: float) -> list[dict]:
    """Кривая fn(x) на равномерной сетке [start, stop]."""
    return [{"x": x, "y": fn(x)} for x in frange(start, stop, step)]
