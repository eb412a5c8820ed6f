"""Визуализация chart_data результатов расчёта (plotly)."""

import plotly.graph_objects as go

from .base import BasePlotter, group_panels
from .styles import DEPTH_CHARTS, LINE_WIDTH, LOG_X_CHARTS, MARKER_CHARTS, MARKER_SIZE, SERIES_COLORS

_LABEL_KEYS = ("type", "classification", "label")


def _point_labels(points: list[dict]) -> list[str] | None:
    for key in _LABEL_KEYS:
        if points and key in points[0]:
            return [str(p[key]) for p in points]
    return None


class ChartPlotter(BasePlotter):
    """Все ряды chart_data на сетке панелей."""

    def __init__(self, chart_data: dict[str, list[dict]], title: str = "", theme: str = "light"):
        self.chart_data = {k: v for k, v in chart_data.items() if v}
        super().__init__(group_panels(list(self.chart_data)), title=title, theme=theme)

    def plot(self):
        for index, keys in enumerate(self.panels):
            row, col = self.position(index)
            for n, key in enumerate(keys):
                self.add_series(key, self.chart_data[key], row, col, SERIES_COLORS[n % len(SERIES_COLORS)])

            max_depth = None
            if keys[0] in DEPTH_CHARTS:
                max_depth = max(p["y"] for key in keys for p in self.chart_data[key])
            self.update_axes(index, keys[0], max_depth=max_depth, log_x=keys[0] in LOG_X_CHARTS)
        return self

    def add_series(self, key: str, points: list[dict], row: int, col: int, color: str):
        xs = [p["x"] for p in points]
        ys = [p["y"] for p in points]
        labels = _point_labels(points)

        if isinstance(xs[0], str):
            trace = go.Bar(x=xs, y=ys, name=key, marker_color=color)
        elif key in MARKER_CHARTS:
            trace = go.Scatter(
                x=xs,
                y=ys,
                name=key,
                mode="markers+text" if labels else "markers",
                text=labels,
                textposition="top center",
                marker=dict(size=MARKER_SIZE, color=color),
            )
        else:
            trace = go.Scatter(x=xs, y=ys, name=key, mode="lines+markers", line=dict(width=LINE_WIDTH, color=color))
        self.fig.add_trace(trace, row=row, col=col)


__all__ = ["ChartPlotter", "BasePlotter"]
