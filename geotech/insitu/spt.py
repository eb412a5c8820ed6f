"""Интерпретация стандартного пенетрационного испытания (SPT, ASTM D1586)."""

import numpy as np

from geotech import charts, classification
from geotech.diagnostics import Diagnostics
from geotech.models import ComputedResult, SPTCorrections, SPTPoint, SPTReading, TestType

STANDARD = "ASTM D1586"

DEFAULT_HAMMER_EFFICIENCY = 0.6
DEFAULT_BOREHOLE_CORRECTION = 1.0
DEFAULT_ROD_CORRECTION = 1.0

CN_MAX = 1.7
UNIT_WEIGHT_OVERBURDEN = 19.6  # кН/м³, для поправки на бытовое давление


def raw_blow_count(reading: SPTReading) -> float:
    """N = сумма ударов на двух последних интервалах по 15 см."""
    if reading.blow_counts is not None and len(reading.blow_counts) >= 2:
        return float(reading.blow_counts[-2] + reading.blow_counts[-1])
    return float(reading.N2 + reading.N3)


def overburden_correction(depth: float) -> float:
    """CN = min(1.7, √(100 / (z·19.6)))."""
    return float(min(CN_MAX, np.sqrt(100.0 / (depth * UNIT_WEIGHT_OVERBURDEN))))


def interpret_point(reading: SPTReading, corrections: SPTCorrections, diag: Diagnostics) -> SPTPoint:
    """Поправки и производные параметры на одной глубине."""
    hammer = corrections.hammer_efficiency if corrections.hammer_efficiency is not None else DEFAULT_HAMMER_EFFICIENCY
    borehole = corrections.borehole_diameter if corrections.borehole_diameter is not None else DEFAULT_BOREHOLE_CORRECTION
    rod = corrections.rod_length if corrections.rod_length is not None else DEFAULT_ROD_CORRECTION

    depth = reading.depth
    n_raw = raw_blow_count(reading)
    n60 = n_raw * hammer * borehole * rod
    cn = corrections.CN if corrections.CN is not None else overburden_correction(depth)
    n1_60 = n60 * cn

    # Dr не ограничивается сверху, значения > 100 % только помечаются
    relative_density = float(np.sqrt(n1_60 / 60.0) * 100.0)
    friction_angle = float(np.sqrt(20.0 * n1_60) + 20.0)
    unit_weight = 14.0 + relative_density / 100.0 * 6.0

    if n60 < 4:
        diag.warn(f"Very loose conditions at {depth}m depth - consider densification")
    if relative_density > 100:
        diag.warn(f"Relative density exceeds 100% at {depth}m - check calculations")

    return SPTPoint(
        depth=depth,
        n_raw=n_raw,
        n60=n60,
        n1_60=n1_60,
        overburden_correction=cn,
        relative_density=relative_density,
        soil_classification=classification.spt_density_class(n60),
        friction_angle=friction_angle,
        unit_weight=unit_weight,
    )


def interpret(readings: list[SPTReading], corrections: SPTCorrections | None = None) -> ComputedResult:
    diag = Diagnostics("spt")
    corrections = corrections or SPTCorrections()
    points = [interpret_point(r, corrections, diag) for r in readings]

    depths = [p.depth for p in points]
    avg_n60 = float(np.mean([p.n60 for p in points]))

    classifications: list[str] = []
    for p in points:
        if p.soil_classification not in classifications:
            classifications.append(p.soil_classification)

    return ComputedResult(
        test_type=TestType.SPT,
        computed_data=[p.model_dump() for p in points],
        chart_data={
            "depth_vs_n60": charts.depth_profile([p.n60 for p in points], depths),
            "depth_vs_relative_density": charts.depth_profile([p.relative_density for p in points], depths),
            "depth_vs_friction_angle": charts.depth_profile([p.friction_angle for p in points], depths),
        },
        interpretation=classification.spt_interpretation(avg_n60),
        standard=STANDARD,
        classifications=tuple(classifications),
        warnings=diag.warnings,
    )
