"""Границы Аттерберга (ASTM D4318)."""

import numpy as np

from geotech import charts, classification
from geotech.diagnostics import Diagnostics
from geotech.helpers import log_linear_regression
from geotech.models import AtterbergData, AtterbergResult, ComputedResult, TestType

STANDARD = "ASTM D4318"

LL_BLOWS = 25.0  # Число ударов, соответствующее границе текучести


def liquid_limit_from_flow_curve(blow_counts: list[float], moisture_contents: list[float]) -> float:
    """Граница текучести по кривой текучести w = a + b·lg N при N = 25."""
    a, b = log_linear_regression(blow_counts, moisture_contents)
    return float(a + b * np.log10(LL_BLOWS))


def interpret(data: AtterbergData) -> ComputedResult:
    diag = Diagnostics("atterberg")

    has_flow = data.blow_counts is not None and data.moisture_contents is not None
    if data.liquid_limit is not None:
        ll = float(data.liquid_limit)
        method = "direct"
    else:
        ll = liquid_limit_from_flow_curve(data.blow_counts, data.moisture_contents)
        method = "flow_curve"

    pl = float(data.plastic_limit)
    pi = ll - pl

    li = ci = None
    w = data.natural_moisture_content
    if w is not None and pi != 0:
        li = (w - pl) / pi
        ci = (ll - w) / pi

    activity = pi / data.clay_content if data.clay_content is not None else None

    uscs = classification.uscs_fine_grained(ll, pi)
    aashto = classification.aashto_fine_grained(ll, pi)
    description = classification.plasticity_description(uscs, pi)

    if pi < 0:
        diag.warn("Plasticity index is negative - check test procedure")
    if ll > 100:
        diag.warn("Liquid limit exceeds 100% - verify test results")
    if li is not None and not 0 <= li <= 1.5:
        diag.warn("Liquidity index outside normal range - check natural moisture content")

    result = AtterbergResult(
        liquid_limit=ll,
        plastic_limit=pl,
        plasticity_index=pi,
        a_line_pi=classification.a_line(ll),
        liquidity_index=li,
        consistency_index=ci,
        shrinkage_limit=data.shrinkage_limit,
        activity=activity,
        liquid_limit_method=method,
        uscs_classification=uscs,
        aashto_classification=aashto,
        soil_description=description,
    )

    chart_data = {
        "plasticity_chart": [{"x": ll, "y": pi, "classification": uscs}],
        "a_line": charts.sample_curve(classification.a_line, 20.0, 100.0, 5.0),
        "u_line": charts.sample_curve(classification.u_line, 16.0, 100.0, 4.0),
    }
    if has_flow:
        chart_data["liquid_limit_flow_curve"] = charts.xy(data.blow_counts, data.moisture_contents)
        if len(data.blow_counts) >= 2:
            a, b = log_linear_regression(data.blow_counts, data.moisture_contents)
            n_min, n_max = min(data.blow_counts), max(data.blow_counts)
            fitted = [n_min, LL_BLOWS, n_max] if n_min < LL_BLOWS < n_max else [n_min, n_max]
            chart_data["flow_curve_fit"] = charts.xy(fitted, [float(a + b * np.log10(n)) for n in fitted])

    return ComputedResult(
        test_type=TestType.ATTERBERG,
        computed_data=result.model_dump(),
        chart_data=chart_data,
        interpretation=classification.atterberg_interpretation(description, ll, pi),
        standard=STANDARD,
        classifications=(uscs, aashto),
        warnings=diag.warnings,
    )
