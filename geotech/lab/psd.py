"""Гранулометрический состав по ситовому анализу (ASTM D6913)."""

from geotech import charts, classification
from geotech.diagnostics import Diagnostics
from geotech.helpers import find_x_for_y, log_interpolate
from geotech.models import ComputedResult, PSDResult, SievePoint, TestType

STANDARD = "ASTM D6913"

GRAVEL_SAND_BOUNDARY = 4.75  # мм, сито №4
SAND_FINES_BOUNDARY = 0.075  # мм, сито №200


def characteristic_diameter(sizes: list[float], passing: list[float], percent: float) -> tuple[float, bool]:
    """D_p — размер, при котором проход равен percent (лог-интерполяция)."""
    return find_x_for_y(sizes, passing, percent)


def interpret(points: list[SievePoint]) -> ComputedResult:
    """Points упорядочены по убыванию размера сита."""
    diag = Diagnostics("psd")
    sizes = [p.sieve_size for p in points]
    passing = [p.percent_passing for p in points]

    d10, d10_clamped = characteristic_diameter(sizes, passing, 10.0)
    d30, _ = characteristic_diameter(sizes, passing, 30.0)
    d60, _ = characteristic_diameter(sizes, passing, 60.0)
    d85, _ = characteristic_diameter(sizes, passing, 85.0)

    if d10_clamped:
        diag.warn("D10 could not be determined - possibly gap-graded soil; finest sieve size used")

    cu = d60 / d10
    cc = d30 * d30 / (d60 * d10)

    p_gravel = log_interpolate(sizes, passing, GRAVEL_SAND_BOUNDARY)
    p_fines = log_interpolate(sizes, passing, SAND_FINES_BOUNDARY)
    gravel = 100.0 - p_gravel
    sand = p_gravel - p_fines
    fines = p_fines

    uscs = classification.uscs_coarse_grained(gravel, sand, fines, cu, cc)
    aashto = classification.aashto_coarse_grained(gravel, sand, fines)
    grading = classification.gradation(cu, cc)

    if cu > 100:
        diag.warn("Very high coefficient of uniformity - check gradation curve")
    if 12 < fines < 50:
        diag.warn("Intermediate fines content - dual classification may apply")

    result = PSDResult(
        d10=d10,
        d30=d30,
        d60=d60,
        d85=d85,
        coefficient_of_uniformity=cu,
        coefficient_of_curvature=cc,
        gravel_percent=gravel,
        sand_percent=sand,
        fines_percent=fines,
        uscs_classification=uscs,
        aashto_classification=aashto,
        soil_description=classification.psd_description(gravel, sand, fines, grading),
        gradation=grading,
        effective_size=d10,
    )

    return ComputedResult(
        test_type=TestType.PSD,
        computed_data=result.model_dump(),
        chart_data={
            "grain_size_curve": charts.xy(sizes, passing),
            "characteristic_diameters": charts.labelled(
                [d10, d30, d60, d85], [10.0, 30.0, 60.0, 85.0], ["D10", "D30", "D60", "D85"], key="label"
            ),
        },
        interpretation=classification.psd_interpretation(fines),
        standard=STANDARD,
        classifications=(uscs, aashto),
        warnings=diag.warnings,
    )
