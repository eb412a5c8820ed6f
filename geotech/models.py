"""Модели данных для интерпретации испытаний и расчёта фундаментов."""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field


class TestType(str, Enum):
    """Вид испытания / расчёта."""

    __test__ = False  # не тестовый класс для pytest

    SPT = "SPT"
    CPT = "CPT"
    ATTERBERG = "Atterberg"
    PSD = "PSD"
    COMPACTION = "Compaction"
    CBR = "CBR"
    SHALLOW_FOUNDATION = "ShallowFoundation"
    PILE_FOUNDATION = "PileFoundation"

    @property
    def is_foundation(self) -> bool:
        return self in (TestType.SHALLOW_FOUNDATION, TestType.PILE_FOUNDATION)


# --- Запрос ---


class TestRequest(BaseModel):
    """Конверт запроса на интерпретацию испытания.

    Полезная нагрузка передаётся в `data`; `raw_data` — устаревший синоним.
    """

    __test__ = False

    test_id: str | None = None
    data: Any = None
    raw_data: Any = None
    corrections: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None
    units: Literal["metric", "imperial"] | None = None
    store: bool = False

    @property
    def payload(self) -> Any:
        return self.data if self.data is not None else self.raw_data


class FoundationRequest(BaseModel):
    """Конверт запроса на расчёт фундамента."""

    project_id: str | None = None
    test_id: str | None = None
    parameters: dict[str, Any] | None = None
    units: Literal["metric", "imperial"] | None = None
    store: bool = False

    @property
    def record_id(self) -> str | None:
        return self.test_id or self.project_id


# --- Полезная нагрузка испытаний (по одной модели на вид) ---


class SPTReading(BaseModel):
    """Отсчёт SPT на одной глубине."""

    depth: float | None = Field(default=None, description="Глубина, м")
    N1: float | None = Field(default=None, ge=0, description="Удары на 1-м интервале 15 см")
    N2: float | None = Field(default=None, ge=0, description="Удары на 2-м интервале 15 см")
    N3: float | None = Field(default=None, ge=0, description="Удары на 3-м интервале 15 см")
    blow_counts: list[float] | None = Field(default=None, description="Последовательность ударов")


class SPTCorrections(BaseModel):
    """Поправочные коэффициенты SPT (по умолчанию 0.6 / 1.0 / 1.0)."""

    hammer_efficiency: float | None = Field(default=None, gt=0)
    borehole_diameter: float | None = Field(default=None, gt=0)
    rod_length: float | None = Field(default=None, gt=0)
    CN: float | None = Field(default=None, gt=0)


class CPTReading(BaseModel):
    """Отсчёт CPT на одной глубине."""

    depth: float = Field(description="Глубина, м")
    qc: float = Field(description="Сопротивление конуса, МПа")
    fs: float = Field(ge=0, description="Трение по муфте, кПа")
    u2: float | None = Field(default=None, description="Поровое давление, кПа")


class AtterbergData(BaseModel):
    """Результаты определения границ Аттерберга."""

    liquid_limit: float | None = Field(default=None, ge=0, description="Граница текучести, %")
    plastic_limit: float | None = Field(default=None, ge=0, description="Граница раскатывания, %")
    shrinkage_limit: float | None = Field(default=None, ge=0, description="Граница усадки, %")
    natural_moisture_content: float | None = Field(default=None, ge=0, description="Природная влажность, %")
    clay_content: float | None = Field(default=None, gt=0, description="Содержание глинистых частиц (< 2 мкм), %")
    blow_counts: list[float] | None = Field(default=None, description="Число ударов (прибор Касагранде)")
    moisture_contents: list[float] | None = Field(default=None, description="Влажность при числе ударов, %")


class SievePoint(BaseModel):
    """Точка гранулометрической кривой."""

    sieve_size: float = Field(description="Размер сита, мм")
    percent_passing: float = Field(description="Проход через сито, %")


class CompactionPoint(BaseModel):
    """Точка кривой уплотнения (Проктор)."""

    moisture_content: float = Field(description="Влажность, %")
    dry_density: float = Field(description="Плотность сухого грунта, г/см³")


class CBRData(BaseModel):
    """Кривая нагрузка — вдавливание штампа CBR."""

    penetration: list[float] = Field(description="Вдавливание, мм")
    load: list[float] = Field(description="Нагрузка, кН")


# --- Грунт и фундамент ---


class SoilLayer(BaseModel):
    """Слой грунта для расчёта фундамента (только чтение)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    from_depth: float = Field(alias="fromDepth", ge=0, description="Кровля слоя, м")
    to_depth: float = Field(alias="toDepth", gt=0, description="Подошва слоя, м")
    soil_type: str = Field(alias="soilType", description="Наименование грунта")
    unit_weight: float = Field(alias="unitWeight", gt=0, description="Удельный вес, кН/м³")
    cohesion: float = Field(ge=0, default=0.0, description="Удельное сцепление, кПа")
    friction_angle: float = Field(alias="frictionAngle", ge=0, le=50, default=0.0, description="Угол внутреннего трения, °")

    @computed_field
    @property
    def thickness(self) -> float:
        return self.to_depth - self.from_depth

    @property
    def label(self) -> str:
        return f"{self.soil_type} ({self.from_depth}m - {self.to_depth}m)"


class FoundationParameters(BaseModel):
    """Параметры фундамента и выбранные слои."""

    model_config = ConfigDict(populate_by_name=True)

    foundation_type: Literal["shallow", "deep"] = Field(alias="foundationType")
    sub_type: str = Field(alias="subType")
    design_standard: str = Field(alias="designStandard", default="eurocode7")
    factor_of_safety: float = Field(alias="factorOfSafety", gt=0)
    groundwater_level: float | None = Field(alias="groundwaterLevel", default=None, ge=0, description="Уровень грунтовых вод, м")

    # Мелкое заложение
    footing_width: float | None = Field(alias="footingWidth", default=None, gt=0, description="Ширина подошвы B, м")
    embedment_depth: float | None = Field(alias="embedmentDepth", default=None, ge=0, description="Глубина заложения D, м")
    compression_index: float = Field(alias="compressionIndex", default=0.01, gt=0, description="Индекс компрессии Cc")
    void_ratio: float = Field(alias="voidRatio", default=0.8, gt=0, description="Начальный коэффициент пористости e0")
    poisson_ratio: float = Field(alias="poissonRatio", default=0.3, ge=0, lt=0.5, description="Коэффициент Пуассона")

    # Сваи
    pile_length: float | None = Field(alias="pileLength", default=None, gt=0, description="Длина сваи L, м")
    pile_diameter: float | None = Field(alias="pileDiameter", default=None, gt=0, description="Диаметр сваи d, м")
    pile_count: int = Field(alias="pileCount", default=4, ge=1, description="Число свай в кусте")
    pile_spacing: float | None = Field(alias="pileSpacing", default=None, gt=0, description="Шаг свай s, м (по умолчанию 2.5·d)")
    base_method: Literal["SPT", "CPT"] = Field(alias="baseMethod", default="SPT")

    selected_layers: list[SoilLayer] = Field(alias="selectedLayers", default_factory=list)


# --- Результаты испытаний ---


class SPTPoint(BaseModel):
    depth: float
    n_raw: float
    n60: float
    n1_60: float
    overburden_correction: float
    relative_density: float
    soil_classification: str
    friction_angle: float
    unit_weight: float


class CPTPoint(BaseModel):
    depth: float
    qc: float
    fs: float
    friction_ratio: float
    qt: float
    ic: float
    soil_behavior_type: str
    friction_angle: float | None = None
    undrained_shear_strength: float | None = Field(default=None, description="кПа")
    relative_density: float | None = None


class AtterbergResult(BaseModel):
    liquid_limit: float
    plastic_limit: float
    plasticity_index: float
    a_line_pi: float
    liquidity_index: float | None = None
    consistency_index: float | None = None
    shrinkage_limit: float | None = None
    activity: float | None = None
    liquid_limit_method: Literal["direct", "flow_curve"]
    uscs_classification: str
    aashto_classification: str
    soil_description: str


class PSDResult(BaseModel):
    d10: float
    d30: float
    d60: float
    d85: float
    coefficient_of_uniformity: float
    coefficient_of_curvature: float
    gravel_percent: float
    sand_percent: float
    fines_percent: float
    uscs_classification: str
    aashto_classification: str
    soil_description: str
    gradation: str
    effective_size: float


class CompactionResult(BaseModel):
    mdd: float = Field(description="Максимальная плотность сухого грунта, г/см³")
    omc: float = Field(description="Оптимальная влажность, %")
    compaction_curve_equation: str
    r_squared: float
    fit_method: Literal["quadratic_vertex", "max_observed"]
    compaction_efficiency: float | None = None
    test_method: str


class CBRResult(BaseModel):
    cbr_at_2_5mm: float
    cbr_at_5mm: float
    design_cbr: float
    load_2_5mm: float
    load_5mm: float
    unit_pressure_2_5mm: float = Field(description="кПа")
    unit_pressure_5mm: float = Field(description="кПа")
    bearing_capacity_classification: str
    subgrade_classification: str
    recommended_uses: list[str]


# --- Результаты расчёта фундаментов ---


class LayerAnalysis(BaseModel):
    from_depth: float
    to_depth: float
    soil_type: str
    contribution: float = Field(description="Вклад слоя, кН")
    is_critical: bool = False


class ShallowFoundationResult(BaseModel):
    ultimate_capacity: float = Field(description="Предельная нагрузка, кН")
    allowable_load: float = Field(description="Допустимая нагрузка, кН")
    allowable_pressure: float = Field(description="Допустимое давление, кПа")
    terzaghi_capacity: float = Field(description="q_ult по Терцаги, кПа")
    meyerhof_capacity: float = Field(description="q_ult по Мейергофу, кПа")
    immediate_settlement: float = Field(description="мм")
    consolidation_settlement: float = Field(description="мм")
    total_settlement: float = Field(description="мм")
    controlling_limit_state: str
    method_used: str
    critical_layer: str
    layer_analysis: list[LayerAnalysis]
    recommendations: list[str]
    calculation_details: dict[str, Any]


class PileFoundationResult(BaseModel):
    ultimate_capacity: float = Field(description="кН")
    allowable_load: float = Field(description="кН")
    shaft_capacity: float = Field(description="кН")
    base_capacity: float = Field(description="кН")
    group_efficiency: float | None = None
    total_settlement: float = Field(description="мм")
    negative_skin_friction: float | None = Field(default=None, description="кН")
    controlling_limit_state: str
    method_used: str
    critical_layer: str
    layer_analysis: list[LayerAnalysis]
    recommendations: list[str]
    calculation_details: dict[str, Any]


class ComputedResult(BaseModel):
    """Итог одного вызова калькулятора (не изменяется после создания)."""

    model_config = ConfigDict(frozen=True)

    test_type: TestType
    computed_data: Any
    chart_data: dict[str, Any]
    interpretation: str
    standard: str
    classifications: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    def to_response(self) -> dict[str, Any]:
        """Тело успешного ответа."""
        return {
            "status": "success",
            "computed_data": self.computed_data,
            "chart_data": self.chart_data,
            "interpretation": self.interpretation,
            "standard": self.standard,
            "classifications": list(self.classifications),
            "warnings": list(self.warnings),
        }
