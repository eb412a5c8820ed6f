"""Свайный фундамент: несущая способность по α-β методу и осадка."""

import logging

import numpy as np

from geotech import charts, classification
from geotech.diagnostics import Diagnostics
from geotech.foundation import tables
from geotech.models import (
    ComputedResult,
    FoundationParameters,
    LayerAnalysis,
    PileFoundationResult,
    SoilLayer,
    TestType,
)

logger = logging.getLogger(__name__)

SETTLEMENT_LIMIT = 25.0  # мм
MIN_GROUP_EFFICIENCY = 0.8
NSF_FACTOR = 0.1  # доля сопротивления по боковой поверхности
NSF_LIMIT = 0.2  # доля предельной нагрузки
DEFAULT_SPACING_RATIO = 2.5  # s = 2.5·d
PROFILE_POINTS = 10
LOAD_STEPS = 10


def pile_area(d: float) -> float:
    return float(np.pi * d * d / 4.0)


def shaft_resistance(layers: list[SoilLayer], d: float, length: float) -> tuple[list[tuple[SoilLayer, float]], float]:
    """Сопротивление по боковой поверхности сваи длиной length.

    Глинистые слои (c > 0) — α-метод, несвязные — β-метод от половины
    накопленного вертикального напряжения.

    Returns:
        ([(слой, вклад, кН), ...], σv на отметке острия, кПа)
    """
    perimeter = np.pi * d
    sigma_v = 0.0
    contributions: list[tuple[SoilLayer, float]] = []
    for layer in layers:
        segment = min(length, layer.to_depth) - layer.from_depth
        if segment <= 0:
            continue
        sigma_v += layer.unit_weight * segment
        if layer.cohesion > 0:
            q = tables.alpha_factor(layer.cohesion) * layer.cohesion * perimeter * segment
        else:
            q = tables.beta_factor(layer.friction_angle) * (sigma_v / 2.0) * perimeter * segment
        contributions.append((layer, float(q)))
    return contributions, sigma_v


def bearing_layer(layers: list[SoilLayer], length: float) -> SoilLayer:
    """Первый слой, достигающий острия, иначе последний."""
    for layer in layers:
        if layer.to_depth >= length:
            return layer
    return layers[-1]


def base_resistance(layer: SoilLayer, sigma_v: float, d: float, method: str) -> float:
    """Сопротивление под острием, кН."""
    area = pile_area(d)
    if layer.cohesion > 0:
        return tables.NC_PILE * layer.cohesion * area
    nq = tables.terzaghi_factors(layer.friction_angle).nq
    return float(sigma_v * nq * area * tables.BASE_REDUCTION[method])


def pile_settlement(load: float, length: float, d: float, layers: list[SoilLayer]) -> float:
    """Осадка: упругое укорочение сваи + упрощённая осадка грунта, мм."""
    area = pile_area(d)
    shortening = load * length / (tables.PILE_MODULUS * area)
    e_soil = float(np.mean([tables.young_modulus(layer.friction_angle) for layer in layers]))
    soil = load * d / (4.0 * e_soil * area)
    return (shortening + soil) * 1000.0


def analyse(params: FoundationParameters) -> ComputedResult:
    diag = Diagnostics("pile")
    L, d = params.pile_length, params.pile_diameter
    layers = params.selected_layers

    contributions, tip_stress = shaft_resistance(layers, d, L)
    shaft = float(sum(q for _, q in contributions))
    tip_layer = bearing_layer(layers, L)
    base = base_resistance(tip_layer, tip_stress, d, params.base_method)

    is_group = params.sub_type == "pile_group"
    efficiency = None
    spacing = None
    if is_group:
        spacing = params.pile_spacing if params.pile_spacing is not None else DEFAULT_SPACING_RATIO * d
        efficiency = tables.group_efficiency(params.pile_count, spacing, d)
        ultimate = (shaft + base) * efficiency
    else:
        ultimate = shaft + base
    allowable = ultimate / params.factor_of_safety

    settlement = pile_settlement(allowable, L, d, layers)

    nsf = None
    if params.groundwater_level is not None and params.groundwater_level > 0:
        nsf = NSF_FACTOR * shaft * min(params.groundwater_level, L) / L

    critical, _ = max(contributions, key=lambda item: item[1])
    limit_state = "Settlement" if settlement > SETTLEMENT_LIMIT else "Capacity"
    logger.debug("Pile L=%.1f d=%.2f: shaft=%.1f base=%.1f kN", L, d, shaft, base)

    if settlement > SETTLEMENT_LIMIT:
        diag.warn("Settlement exceeds typical limits - consider larger diameter or longer piles")
    if efficiency is not None and efficiency < MIN_GROUP_EFFICIENCY:
        diag.warn("Low group efficiency - consider increasing pile spacing")
    if nsf is not None and nsf > ultimate * NSF_LIMIT:
        diag.warn("Significant negative skin friction expected - account for in design")

    recommendations = [
        f"Use {params.design_standard.upper()} standards for detailed design",
        "Perform pile load test to verify capacity assumptions",
        "Monitor settlement during construction",
    ]
    if is_group:
        recommendations.append("Consider cap thickness and connection details for group action")

    layer_analysis = [
        LayerAnalysis(
            from_depth=layer.from_depth,
            to_depth=layer.to_depth,
            soil_type=layer.soil_type,
            contribution=q,
            is_critical=layer is critical,
        )
        for layer, q in contributions
    ]

    result = PileFoundationResult(
        ultimate_capacity=ultimate,
        allowable_load=allowable,
        shaft_capacity=shaft,
        base_capacity=base,
        group_efficiency=efficiency,
        total_settlement=settlement,
        negative_skin_friction=nsf,
        controlling_limit_state=limit_state,
        method_used="Combined α-β method",
        critical_layer=critical.label,
        layer_analysis=layer_analysis,
        recommendations=recommendations,
        calculation_details={
            "shaft_method": "alpha-beta",
            "base_method": params.base_method,
            "base_reduction": tables.BASE_REDUCTION[params.base_method] if tip_layer.cohesion <= 0 else None,
            "group_efficiency_method": "converse_labarre" if is_group else None,
            "pile_count": params.pile_count if is_group else 1,
            "pile_spacing": spacing,
            "tip_stress": tip_stress,
            "bottom_layer": tip_layer.model_dump(by_alias=True),
        },
    )

    return ComputedResult(
        test_type=TestType.PILE_FOUNDATION,
        computed_data=result.model_dump(),
        chart_data=_chart_data(params, ultimate),
        interpretation=classification.foundation_interpretation(allowable, settlement, limit_state),
        standard=params.design_standard.upper(),
        classifications=(limit_state, "Combined α-β method"),
        warnings=diag.warnings,
    )


def _chart_data(params: FoundationParameters, ultimate: float) -> dict:
    L, d = params.pile_length, params.pile_diameter
    layers = params.selected_layers

    depths = [L * i / PROFILE_POINTS for i in range(1, PROFILE_POINTS + 1)]
    capacities = [sum(q for _, q in shaft_resistance(layers, d, z)[0]) for z in depths]

    loads = [ultimate * i / LOAD_STEPS for i in range(LOAD_STEPS + 1)]
    settlements = [pile_settlement(load, L, d, layers) for load in loads]

    # Удельное сопротивление по боковой поверхности в середине слоя
    mid_depths, unit_shaft = [], []
    sigma_v = 0.0
    for layer in layers:
        sigma_v += layer.unit_weight * layer.thickness
        if layer.cohesion > 0:
            f = tables.alpha_factor(layer.cohesion) * layer.cohesion
        else:
            f = tables.beta_factor(layer.friction_angle) * sigma_v
        mid_depths.append((layer.from_depth + layer.to_depth) / 2.0)
        unit_shaft.append(f)

    return {
        "capacity_depth": charts.depth_profile(capacities, depths),
        "load_settlement": charts.xy(loads, settlements),
        "shaft_distribution": charts.depth_profile(unit_shaft, mid_depths),
    }
