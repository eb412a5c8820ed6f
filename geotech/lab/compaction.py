"""Испытание на уплотнение по Проктору (ASTM D698 / D1557).

Кривая плотность — влажность аппроксимируется параболой. Вершина параболы
принимается за (OMC, MDD) только если парабола направлена вниз и вершина
лежит в испытанном диапазоне влажности; иначе берётся точка с наибольшей
измеренной плотностью.
"""

from geotech import charts, classification
from geotech.diagnostics import Diagnostics
from geotech.helpers import quadratic_regression, r_squared
from geotech.models import CompactionPoint, CompactionResult, ComputedResult, TestType

STANDARDS = {
    "standard": "ASTM D698",
    "modified": "ASTM D1557",
}

SPECIFIC_GRAVITY = 2.65  # Gs, принимается для линии нулевой пористости
WATER_DENSITY = 1.0  # г/см³
MIN_EFFICIENCY = 95.0  # %
MIN_R2 = 0.8
RECOMMENDED_POINTS = 5
CURVE_STEP = 0.5  # %, шаг аппроксимирующей кривой


def zero_air_voids_density(moisture: float, gs: float = SPECIFIC_GRAVITY) -> float:
    """ρd при полном водонасыщении: Gs·ρw / (1 + w·Gs)."""
    return gs * WATER_DENSITY / (1.0 + moisture / 100.0 * gs)


def interpret(
    points: list[CompactionPoint],
    field_density: float | None = None,
    test_method: str = "standard",
) -> ComputedResult:
    """Points упорядочены по возрастанию влажности."""
    diag = Diagnostics("compaction")
    w = [p.moisture_content for p in points]
    rho = [p.dry_density for p in points]

    fit = quadratic_regression(w, rho)
    r2 = r_squared(w, rho, fit)

    peak = max(points, key=lambda p: p.dry_density)
    vertex_ok = False
    if fit.degree == 2 and fit.c < 0:
        omc = -fit.b / (2.0 * fit.c)
        vertex_ok = w[0] <= omc <= w[-1]

    if vertex_ok:
        mdd = fit.a + fit.b * omc + fit.c * omc * omc
        fit_method = "quadratic_vertex"
        equation = f"ρd = {fit.a:.4f} + {fit.b:.4f}w + {fit.c:.4f}w²"
    else:
        omc, mdd = peak.moisture_content, peak.dry_density
        fit_method = "max_observed"
        equation = "Peak from data points (curve fitting failed)"
        diag.warn("Compaction curve has no valid peak - maximum observed density used")

    if field_density is None:
        field_density = peak.dry_density
    efficiency = field_density / mdd * 100.0

    if efficiency < MIN_EFFICIENCY:
        diag.warn(f"Compaction efficiency {efficiency:.1f}% is below the recommended 95% minimum")
    if r2 < MIN_R2:
        diag.warn("Low R² value suggests poor curve fit - consider additional data points")
    if len(points) < RECOMMENDED_POINTS:
        diag.warn("Minimum 5 data points recommended for reliable compaction curve")

    standard = STANDARDS[test_method]
    result = CompactionResult(
        mdd=mdd,
        omc=omc,
        compaction_curve_equation=equation,
        r_squared=r2,
        fit_method=fit_method,
        compaction_efficiency=efficiency,
        test_method=test_method,
    )

    return ComputedResult(
        test_type=TestType.COMPACTION,
        computed_data=result.model_dump(),
        chart_data={
            "compaction_curve": charts.xy(w, rho),
            "fitted_curve": charts.sample_curve(fit, w[0], w[-1], CURVE_STEP),
            "zero_air_voids": charts.sample_curve(zero_air_voids_density, w[0], w[-1], CURVE_STEP),
        },
        interpretation=classification.compaction_interpretation(mdd, omc, efficiency),
        standard=standard,
        classifications=(f"MDD {mdd:.3f} g/cm³", f"OMC {omc:.1f}%"),
        warnings=diag.warnings,
    )
