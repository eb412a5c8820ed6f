"""Фундамент мелкого заложения: несущая способность и осадка.

Расчётный слой — слой с минимальной предельной нагрузкой по Терцаги.
Для него независимо считаются q_ult по Терцаги и Мейергофу, в расчёт
принимается меньшее значение.
"""

import logging
from dataclasses import asdict

import numpy as np

from geotech import charts, classification
from geotech.diagnostics import Diagnostics
from geotech.foundation import tables
from geotech.helpers import frange
from geotech.models import (
    ComputedResult,
    FoundationParameters,
    LayerAnalysis,
    ShallowFoundationResult,
    SoilLayer,
    TestType,
)

logger = logging.getLogger(__name__)

SETTLEMENT_LIMIT = 25.0  # мм
MIN_ALLOWABLE_PRESSURE = 100.0  # кПа
GROUNDWATER_CLEARANCE = 1.0  # м ниже подошвы

# Параметры упрощённого расчёта консолидационной осадки
INITIAL_STRESS = 100.0  # кПа, σ0
COMPRESSIBLE_THICKNESS = 10.0  # м, H

CAPACITY_DEPTHS = (0.5, 5.0, 0.5)  # м: начало, конец, шаг
LOAD_STEPS = 10


def terzaghi_components(layer: SoilLayer, B: float, D: float, shape: str) -> tuple[float, float, float]:
    """Слагаемые q_ult по Терцаги: (сцепление, пригрузка, собственный вес), кПа."""
    f = tables.terzaghi_factors(layer.friction_angle)
    sc, sq, sg = tables.TERZAGHI_SHAPE[shape]
    gamma = layer.unit_weight
    return (
        layer.cohesion * f.nc * sc,
        gamma * D * f.nq * sq,
        0.5 * gamma * B * f.ng * sg,
    )


def terzaghi_capacity(layer: SoilLayer, B: float, D: float, shape: str) -> float:
    """q_ult = c·Nc·sc + γ·D·Nq·sq + 0.5·γ·B·Nγ·sγ, кПа."""
    return float(sum(terzaghi_components(layer, B, D, shape)))


def meyerhof_capacity(layer: SoilLayer, B: float, D: float, shape: str) -> float:
    """q_ult по Мейергофу с коэффициентами формы и заглубления, кПа."""
    f = tables.meyerhof_factors(layer.friction_angle)
    sc, sq, sg = tables.MEYERHOF_SHAPE[shape]
    dc, dq, dg = tables.meyerhof_depth_factors(f.nq, D, B)
    gamma = layer.unit_weight
    return float(
        layer.cohesion * f.nc * sc * dc
        + gamma * D * f.nq * sq * dq
        + 0.5 * gamma * B * f.ng * sg * dg
    )


def immediate_settlement(q: float, B: float, E: float, nu: float, shape: str) -> float:
    """Упругая осадка s = q·B·(1 − ν²)·I/E, мм."""
    return q * B * (1.0 - nu * nu) * tables.RIGID_INFLUENCE[shape] / E * 1000.0


def consolidation_settlement(delta_sigma: float, cc: float, e0: float) -> float:
    """Консолидационная осадка Cc·H·lg((σ0 + Δσ)/σ0)/(1 + e0), мм.

    Приближение до получения компрессионных испытаний.
    """
    ratio = (INITIAL_STRESS + delta_sigma) / INITIAL_STRESS
    return float(cc * COMPRESSIBLE_THICKNESS * np.log10(ratio) / (1.0 + e0) * 1000.0)


def critical_layer(params: FoundationParameters) -> SoilLayer:
    """Первый слой с минимальной q_ult по Терцаги."""
    B, D, shape = params.footing_width, params.embedment_depth, params.sub_type
    return min(params.selected_layers, key=lambda layer: terzaghi_capacity(layer, B, D, shape))


def _layer_at(layers: list[SoilLayer], depth: float) -> SoilLayer:
    for layer in layers:
        if layer.from_depth <= depth <= layer.to_depth:
            return layer
    return layers[0]


def analyse(params: FoundationParameters) -> ComputedResult:
    diag = Diagnostics("shallow")
    B, D, shape = params.footing_width, params.embedment_depth, params.sub_type
    area = B * B

    layer = critical_layer(params)
    components = terzaghi_components(layer, B, D, shape)
    q_terzaghi = float(sum(components))
    q_meyerhof = meyerhof_capacity(layer, B, D, shape)

    ultimate = min(q_terzaghi, q_meyerhof) * area
    allowable = ultimate / params.factor_of_safety
    allowable_pressure = allowable / area

    E = tables.young_modulus(layer.friction_angle)
    s_immediate = immediate_settlement(allowable_pressure, B, E, params.poisson_ratio, shape)
    s_consolidation = consolidation_settlement(allowable_pressure, params.compression_index, params.void_ratio)
    s_total = s_immediate + s_consolidation

    limit_state = "Settlement" if s_total > SETTLEMENT_LIMIT else "Bearing capacity"
    method = "Terzaghi" if q_terzaghi <= q_meyerhof else "Meyerhof"
    logger.debug("Shallow %s B=%.2f D=%.2f: q_T=%.1f q_M=%.1f kPa", shape, B, D, q_terzaghi, q_meyerhof)

    if allowable_pressure < MIN_ALLOWABLE_PRESSURE:
        diag.warn("Very low bearing capacity - consider soil improvement")
    if s_total > SETTLEMENT_LIMIT:
        diag.warn("Excessive settlement predicted - consider reducing load or increasing footing size")
    if params.groundwater_level is not None and params.groundwater_level < D + GROUNDWATER_CLEARANCE:
        diag.warn("Groundwater level is close to foundation - consider dewatering or waterproofing")

    recommendations = [
        f"Use {params.design_standard.upper()} standards for final design",
        "Verify soil parameters with additional testing if necessary",
        "Consider construction sequence effects on bearing capacity",
    ]
    if s_consolidation > 0:
        recommendations.append("Confirm consolidation parameters with oedometer testing")

    layer_analysis = [
        LayerAnalysis(
            from_depth=item.from_depth,
            to_depth=item.to_depth,
            soil_type=item.soil_type,
            contribution=terzaghi_capacity(item, B, D, shape) * area,
            is_critical=item is layer,
        )
        for item in params.selected_layers
    ]

    result = ShallowFoundationResult(
        ultimate_capacity=ultimate,
        allowable_load=allowable,
        allowable_pressure=allowable_pressure,
        terzaghi_capacity=q_terzaghi,
        meyerhof_capacity=q_meyerhof,
        immediate_settlement=s_immediate,
        consolidation_settlement=s_consolidation,
        total_settlement=s_total,
        controlling_limit_state=limit_state,
        method_used=method,
        critical_layer=layer.label,
        layer_analysis=layer_analysis,
        recommendations=recommendations,
        calculation_details={
            "terzaghi_factors": asdict(tables.terzaghi_factors(layer.friction_angle)),
            "meyerhof_factors": asdict(tables.meyerhof_factors(layer.friction_angle)),
            "modulus_used": E,
            "influence_factor": tables.RIGID_INFLUENCE[shape],
            "compression_index": params.compression_index,
            "void_ratio": params.void_ratio,
            "critical_layer": layer.model_dump(by_alias=True),
        },
    )

    return ComputedResult(
        test_type=TestType.SHALLOW_FOUNDATION,
        computed_data=result.model_dump(),
        chart_data=_chart_data(params, ultimate, s_total, components),
        interpretation=classification.foundation_interpretation(allowable, s_total, limit_state),
        standard=params.design_standard.upper(),
        classifications=(limit_state, method),
        warnings=diag.warnings,
    )


def _chart_data(params: FoundationParameters, ultimate: float, s_total: float, components) -> dict:
    B, shape = params.footing_width, params.sub_type

    depths = frange(*CAPACITY_DEPTHS)
    capacities = [
        terzaghi_capacity(_layer_at(params.selected_layers, d), B, d, shape) * B * B for d in depths
    ]

    loads = [ultimate * i / LOAD_STEPS for i in range(LOAD_STEPS + 1)]
    if ultimate > 0:
        settlements = [load / ultimate * s_total for load in loads]
    else:
        settlements = [0.0 for _ in loads]

    return {
        "capacity_depth": charts.depth_profile(capacities, depths),
        "load_settlement": charts.xy(loads, settlements),
        "capacity_components": charts.xy(["Cohesion", "Surcharge", "Unit Weight"], list(components)),
    }
