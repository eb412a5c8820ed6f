import math

import pytest

from geotech import calculator
from geotech.insitu import spt
from geotech.models import SPTCorrections, SPTReading


def test_spt_three_metre_example():
    result = spt.interpret([SPTReading(depth=3.0, N1=5, N2=7, N3=8)])
    point = result.computed_data[0]

    assert point["n_raw"] == 15
    assert point["n60"] == pytest.approx(9.0)
    assert point["overburden_correction"] == pytest.approx(math.sqrt(100 / (3 * 19.6)))
    assert point["overburden_correction"] == pytest.approx(1.304, abs=1e-3)
    assert point["n1_60"] == pytest.approx(11.74, abs=1e-2)
    assert point["soil_classification"] == "Loose Sand"
    assert result.interpretation.startswith("Loose Sand")
    assert result.standard == "ASTM D1586"
    assert result.warnings == ()


def test_spt_blow_counts_sum_last_two():
    reading = SPTReading(depth=4.5, blow_counts=[8, 11, 14])
    assert spt.raw_blow_count(reading) == 25


def test_spt_cn_override():
    result = spt.interpret([SPTReading(depth=2.0, N1=5, N2=10, N3=10)], SPTCorrections(CN=1.0))
    point = result.computed_data[0]
    assert point["n1_60"] == point["n60"]


def test_spt_cn_capped():
    assert spt.overburden_correction(0.5) == 1.7


def test_spt_very_loose_warning():
    result = spt.interpret([SPTReading(depth=2.0, N1=1, N2=1, N3=2)])
    assert result.computed_data[0]["soil_classification"] == "Very Loose Sand"
    assert any("consider densification" in w for w in result.warnings)


def test_spt_relative_density_flagged_not_clamped():
    result = spt.interpret([SPTReading(depth=1.0, N1=30, N2=50, N3=50)])
    point = result.computed_data[0]
    # n60 = 60, CN = 1.7 -> n1_60 = 102
    assert point["relative_density"] == pytest.approx(math.sqrt(102 / 60) * 100)
    assert point["relative_density"] > 100
    assert any("Relative density exceeds 100%" in w for w in result.warnings)


def test_spt_chart_series_depth_on_y():
    result = spt.interpret([SPTReading(depth=1.5, N1=3, N2=4, N3=5), SPTReading(depth=3.0, N1=5, N2=7, N3=8)])
    assert set(result.chart_data) == {"depth_vs_n60", "depth_vs_relative_density", "depth_vs_friction_angle"}
    assert [p["y"] for p in result.chart_data["depth_vs_n60"]] == [1.5, 3.0]


@pytest.mark.parametrize(
    "data,message",
    [
        ([], "Data array is required and cannot be empty"),
        ([{"depth": 0, "N1": 1, "N2": 2, "N3": 3}], "Depth is required and must be greater than 0"),
        ([{"depth": 1.0, "N2": 2, "N3": 3}], "Each data point must have either blow_counts array or N1, N2, N3 values"),
        ([{"depth": 1.0, "blow_counts": [4]}], "Each data point must have either blow_counts array or N1, N2, N3 values"),
    ],
)
def test_spt_validation_rejects(data, message):
    status, response = calculator.run("SPT", {"test_id": "t", "data": data})
    assert status == 400
    assert response == {"status": "error", "message": message}
