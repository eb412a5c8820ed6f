"""Базовый класс для построения графиков по chart_data."""

from plotly.subplots import make_subplots

from .styles import COLORS_DARK, COLORS_LIGHT, FONT_FAMILY, FONT_SIZE, LABELS


def _auto_dtick(max_val: float, thresholds: list[tuple[float, float]]) -> float:
    """Автоматический выбор шага делений оси."""
    for threshold, dtick in thresholds:
        if max_val < threshold:
            return dtick
    return thresholds[-1][1]


# Пороги для оси глубины
_DEPTH_THRESHOLDS = [(10, 0.5), (25, 1.0), (50, 2.0), (float("inf"), 5.0)]


def group_panels(chart_keys: list[str]) -> list[list[str]]:
    """Объединение рядов с общим заголовком в одну панель (порядок сохраняется)."""
    panels: dict[str, list[str]] = {}
    for key in chart_keys:
        title = LABELS.get(key, (key,))[0]
        panels.setdefault(title, []).append(key)
    return list(panels.values())


class BasePlotter:
    """Базовый класс: сетка панелей, макет и оси."""

    COLS = 2

    def __init__(self, panels: list[list[str]], title: str = "", theme: str = "light"):
        self.theme = theme
        self.colors = COLORS_DARK if theme == "dark" else COLORS_LIGHT
        self.panels = panels
        self.rows = max(1, (len(panels) + self.COLS - 1) // self.COLS)
        titles = [LABELS.get(keys[0], (keys[0],))[0] for keys in panels]
        self.fig = make_subplots(
            rows=self.rows,
            cols=self.COLS,
            subplot_titles=titles,
            horizontal_spacing=0.12,
            vertical_spacing=0.12 if self.rows > 1 else 0.0,
        )
        self._setup_layout(title)

    def position(self, index: int) -> tuple[int, int]:
        """(row, col) панели по её номеру."""
        return index // self.COLS + 1, index % self.COLS + 1

    def _setup_layout(self, title: str):
        """Базовые настройки макета."""
        self.fig.update_layout(
            title=dict(text=title, x=0.5, xanchor="center"),
            font=dict(family=FONT_FAMILY, size=FONT_SIZE, color=self.colors["text"]),
            template=self.colors["template"],
            height=max(450, 420 * self.rows),
            width=1300,
            showlegend=True,
            legend=dict(
                bgcolor=self.colors["legend_bg"],
                bordercolor=self.colors["legend_border"],
                borderwidth=1,
            ),
            plot_bgcolor=self.colors["plot_bg"],
            paper_bgcolor=self.colors["paper_bg"],
        )

    def update_axes(self, index: int, key: str, max_depth: float | None = None, log_x: bool = False):
        """Подписи и масштаб осей панели."""
        row, col = self.position(index)
        _, x_label, y_label = LABELS.get(key, (key, "x", "y"))
        axis = dict(showgrid=True, gridcolor=self.colors["grid"], linecolor=self.colors["axis_line"], mirror=True)

        self.fig.update_xaxes(title_text=x_label, type="log" if log_x else "linear", row=row, col=col, **axis)
        if max_depth is not None:
            self.fig.update_yaxes(
                title_text=y_label,
                range=[max_depth * 1.05, 0],
                dtick=_auto_dtick(max_depth, _DEPTH_THRESHOLDS),
                row=row,
                col=col,
                **axis,
            )
        else:
            self.fig.update_yaxes(title_text=y_label, row=row, col=col, **axis)

    def get_figure(self):
        return self.fig
