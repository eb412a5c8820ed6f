"""Стили и константы для графиков."""

# Шрифты
FONT_FAMILY = "Inter, -apple-system, system-ui, Arial, sans-serif"
FONT_SIZE = 14

# Цвета рядов данных (одинаковые для обеих тем)
SERIES_COLORS = (
    "#1f77b4",  # синий
    "#d62728",  # красный
    "#2ca02c",  # зелёный
    "#9467bd",  # фиолетовый
    "#ff7f0e",  # оранжевый
    "#8c564b",  # коричневый
)

# Светлая тема
COLORS_LIGHT = {
    "template": "plotly_white",
    "plot_bg": "white",
    "paper_bg": "white",
    "text": "black",
    "grid": "rgba(0,0,0,0.1)",
    "axis_line": "black",
    "legend_bg": "rgba(255,255,255,0.9)",
    "legend_border": "black",
}

# Тёмная тема
COLORS_DARK = {
    "template": "plotly_dark",
    "plot_bg": "rgba(14, 17, 23, 0)",
    "paper_bg": "rgba(14, 17, 23, 0)",
    "text": "#fafafa",
    "grid": "rgba(255,255,255,0.1)",
    "axis_line": "#fafafa",
    "legend_bg": "rgba(38, 39, 48, 0.9)",
    "legend_border": "#fafafa",
}

LINE_WIDTH = 2
MARKER_SIZE = 8

# Подписи графиков: ключ chart_data → (заголовок, ось x, ось y)
LABELS = {
    "depth_vs_n60": ("N60 по глубине", "N60", "Глубина, м"),
    "depth_vs_relative_density": ("Относительная плотность", "Dr, %", "Глубина, м"),
    "depth_vs_friction_angle": ("Угол трения", "φ, °", "Глубина, м"),
    "depth_vs_qc": ("Сопротивление конуса", "qc, МПа", "Глубина, м"),
    "depth_vs_friction_ratio": ("Отношение трения", "Rf, %", "Глубина, м"),
    "qc_vs_friction_ratio": ("qc — Rf", "qc, МПа", "Rf, %"),
    "depth_vs_ic": ("Индекс Ic", "Ic", "Глубина, м"),
    "plasticity_chart": ("Диаграмма пластичности", "LL, %", "PI, %"),
    "a_line": ("Диаграмма пластичности", "LL, %", "PI, %"),
    "u_line": ("Диаграмма пластичности", "LL, %", "PI, %"),
    "liquid_limit_flow_curve": ("Кривая текучести", "Число ударов N", "w, %"),
    "flow_curve_fit": ("Кривая текучести", "Число ударов N", "w, %"),
    "grain_size_curve": ("Гранулометрическая кривая", "Размер частиц, мм", "Проход, %"),
    "characteristic_diameters": ("Гранулометрическая кривая", "Размер частиц, мм", "Проход, %"),
    "compaction_curve": ("Кривая уплотнения", "w, %", "ρd, г/см³"),
    "fitted_curve": ("Кривая уплотнения", "w, %", "ρd, г/см³"),
    "zero_air_voids": ("Кривая уплотнения", "w, %", "ρd, г/см³"),
    "load_penetration_curve": ("Нагрузка — вдавливание", "Вдавливание, мм", "Нагрузка, кН"),
    "corrected_curve": ("Нагрузка — вдавливание", "Вдавливание, мм", "Нагрузка, кН"),
    "capacity_depth": ("Несущая способность по глубине", "Q, кН", "Глубина, м"),
    "load_settlement": ("Нагрузка — осадка", "Нагрузка, кН", "Осадка, мм"),
    "capacity_components": ("Составляющие q_ult", "", "кПа"),
    "shaft_distribution": ("Удельное боковое сопротивление", "f_s, кПа", "Глубина, м"),
}

# Графики с глубиной по оси y (направлена вниз)
DEPTH_CHARTS = {
    "depth_vs_n60",
    "depth_vs_relative_density",
    "depth_vs_friction_angle",
    "depth_vs_qc",
    "depth_vs_friction_ratio",
    "depth_vs_ic",
    "capacity_depth",
    "shaft_distribution",
}

# Графики в логарифмическом масштабе по x
LOG_X_CHARTS = {"grain_size_curve", "characteristic_diameters", "liquid_limit_flow_curve", "flow_curve_fit"}

# Точечные ряды (без линий)
MARKER_CHARTS = {"plasticity_chart", "qc_vs_friction_ratio", "characteristic_diameters", "liquid_limit_flow_curve"}
