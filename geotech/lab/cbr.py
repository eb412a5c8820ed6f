"""Калифорнийское число несущей способности (CBR, ASTM D1883)."""

import numpy as np

from geotech import charts, classification
from geotech.diagnostics import Diagnostics
from geotech.helpers import linear_interpolate, tangent_correct
from geotech.models import CBRData, CBRResult, ComputedResult, TestType

STANDARD = "ASTM D1883"

# Эталонные нагрузки для щебня, кН
STANDARD_LOAD_2_5MM = 13.24
STANDARD_LOAD_5MM = 19.96

PISTON_DIAMETER = 49.63  # мм, площадь штампа ≈ 1935 мм²
PISTON_AREA = np.pi * (PISTON_DIAMETER / 1000.0) ** 2 / 4.0  # м²


def unit_pressure(load_kn: float) -> float:
    """Удельное давление под штампом, кПа."""
    return float(load_kn / PISTON_AREA)


def interpret(data: CBRData, test_condition: str | None = None) -> ComputedResult:
    diag = Diagnostics("cbr")
    penetration = [float(p) for p in data.penetration]
    corrected = tangent_correct(penetration, data.load)

    load_2_5 = linear_interpolate(penetration, corrected, 2.5)
    load_5 = linear_interpolate(penetration, corrected, 5.0)

    cbr_2_5 = load_2_5 / STANDARD_LOAD_2_5MM * 100.0
    cbr_5 = load_5 / STANDARD_LOAD_5MM * 100.0
    design = max(cbr_2_5, cbr_5)

    bearing = classification.cbr_bearing_class(design)
    subgrade = classification.cbr_subgrade_class(design)

    if cbr_5 > cbr_2_5 * 1.2:
        diag.warn("CBR at 5mm exceeds 2.5mm value significantly - check curve correction")
    if design > 100:
        diag.warn("CBR exceeds 100% - verify test procedure and calculations")

    result = CBRResult(
        cbr_at_2_5mm=cbr_2_5,
        cbr_at_5mm=cbr_5,
        design_cbr=design,
        load_2_5mm=load_2_5,
        load_5mm=load_5,
        unit_pressure_2_5mm=unit_pressure(load_2_5),
        unit_pressure_5mm=unit_pressure(load_5),
        bearing_capacity_classification=bearing,
        subgrade_classification=subgrade,
        recommended_uses=classification.cbr_recommended_uses(design),
    )

    interpretation = classification.cbr_interpretation(design, bearing, subgrade)
    if test_condition:
        interpretation += f" ({test_condition})"

    return ComputedResult(
        test_type=TestType.CBR,
        computed_data=result.model_dump(),
        chart_data={
            "load_penetration_curve": charts.xy(penetration, data.load),
            "corrected_curve": charts.xy(penetration, corrected),
        },
        interpretation=interpretation,
        standard=STANDARD,
        classifications=(bearing, subgrade),
        warnings=diag.warnings,
    )
