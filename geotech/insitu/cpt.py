"""Интерпретация статического зондирования (CPT/CPTu, ASTM D5778).

Методика: индекс типа поведения Ic по Robertson & Wride (1998).
Угол трения и Dr считаются только для дренированного режима (Ic < 2.6),
недренированная прочность su — только для глинистого (Ic > 2.6).
"""

import numpy as np

from geotech import charts, classification
from geotech.diagnostics import Diagnostics
from geotech.models import ComputedResult, CPTPoint, CPTReading, TestType

STANDARD = "ASTM D5778"

NET_AREA_RATIO = 0.8  # a, отношение площадей конуса
IC_GRANULAR_LIMIT = 2.6


def corrected_resistance(qc: float, u2: float | None) -> float:
    """qt = qc + u2·(1 − a), МПа (u2 в кПа)."""
    if u2 is None:
        return qc
    return qc + u2 * (1.0 - NET_AREA_RATIO) / 1000.0


def behavior_index(qt: float, friction_ratio: float) -> float:
    """Ic = √((3.47 − lg qt)² + (1.22 + lg(Rf + 0.1))²)."""
    return float(np.sqrt((3.47 - np.log10(qt)) ** 2 + (1.22 + np.log10(friction_ratio + 0.1)) ** 2))


def friction_angle(qt: float) -> float:
    """φ = atan((lg qt + 0.29) / 2.68) + 17.6°."""
    return float(np.degrees(np.arctan((np.log10(qt) + 0.29) / 2.68)) + 17.6)


def interpret_point(reading: CPTReading, diag: Diagnostics) -> CPTPoint:
    depth, qc, fs = reading.depth, reading.qc, reading.fs

    rf = fs / (qc * 1000.0) * 100.0
    qt = corrected_resistance(qc, reading.u2)
    ic = behavior_index(qt, rf)

    phi = su = dr = None
    if ic < IC_GRANULAR_LIMIT:
        phi = friction_angle(qt)
        qc1n = qt / np.sqrt(depth * 20.0)
        dr = float(np.clip(-98.0 + 66.0 * np.log10(qc1n), 0.0, 100.0))
    elif ic > IC_GRANULAR_LIMIT:
        # Коэффициент конуса зависит от угла трения, определённого по qt
        nkt = 10.0 + 7.0 * np.sin(np.radians(friction_angle(qt)))
        su = float(qt * 1000.0 / nkt)

    if rf > 8:
        diag.warn(f"High friction ratio ({rf:.1f}%) at {depth}m - check equipment calibration")
    if qc < 0.5:
        diag.warn(f"Very low cone resistance at {depth}m - possible equipment issues")

    return CPTPoint(
        depth=depth,
        qc=qc,
        fs=fs,
        friction_ratio=rf,
        qt=qt,
        ic=ic,
        soil_behavior_type=classification.cpt_behavior_type(ic),
        friction_angle=phi,
        undrained_shear_strength=su,
        relative_density=dr,
    )


def interpret(readings: list[CPTReading]) -> ComputedResult:
    diag = Diagnostics("cpt")
    points = [interpret_point(r, diag) for r in readings]

    depths = [p.depth for p in points]
    types = [p.soil_behavior_type for p in points]

    return ComputedResult(
        test_type=TestType.CPT,
        computed_data=[p.model_dump() for p in points],
        chart_data={
            "depth_vs_qc": charts.depth_profile([p.qc for p in points], depths),
            "depth_vs_friction_ratio": charts.depth_profile([p.friction_ratio for p in points], depths),
            "qc_vs_friction_ratio": charts.labelled(
                [p.qc for p in points], [p.friction_ratio for p in points], types
            ),
            "depth_vs_ic": charts.depth_profile([p.ic for p in points], depths),
        },
        interpretation=classification.cpt_interpretation(types),
        standard=STANDARD,
        classifications=tuple(dict.fromkeys(types)),
        warnings=diag.warnings,
    )
