import math

import pytest

from geotech import calculator
from geotech.lab import cbr
from geotech.models import CBRData

PENETRATION = [0.0, 1.0, 2.0, 2.5, 3.0, 4.0, 5.0, 6.0]


def _linear_data(k=0.5296):
    return CBRData(penetration=PENETRATION, load=[k * p for p in PENETRATION])


def test_cbr_linear_curve():
    result = cbr.interpret(_linear_data())
    data = result.computed_data

    assert data["load_2_5mm"] == pytest.approx(1.324)
    assert data["cbr_at_2_5mm"] == pytest.approx(10.0)
    assert data["cbr_at_5mm"] == pytest.approx(2.648 / 19.96 * 100)
    assert data["design_cbr"] == max(data["cbr_at_2_5mm"], data["cbr_at_5mm"])
    assert data["bearing_capacity_classification"] == "Good"
    assert data["subgrade_classification"] == "Medium Subgrade"
    assert any(w.startswith("CBR at 5mm exceeds 2.5mm value") for w in result.warnings)
    assert result.standard == "ASTM D1883"


def test_cbr_unit_pressure_uses_piston_area():
    data = cbr.interpret(_linear_data()).computed_data
    area = math.pi * 0.04963**2 / 4
    assert data["unit_pressure_2_5mm"] == pytest.approx(data["load_2_5mm"] / area)


def test_cbr_toe_correction_shifts_curve():
    data = CBRData(penetration=[0.0, 1.0, 2.0, 3.0, 4.0, 5.0], load=[0.0, 0.1, 0.8, 1.6, 2.2, 2.6])
    result = cbr.interpret(data)
    corrected = [p["y"] for p in result.chart_data["corrected_curve"]]
    raw = [p["y"] for p in result.chart_data["load_penetration_curve"]]

    assert corrected[1] < raw[1]
    assert corrected[3:] == raw[3:]


def test_cbr_test_condition_in_interpretation():
    result = cbr.interpret(_linear_data(), "soaked")
    assert result.interpretation.endswith("(soaked)")


@pytest.mark.parametrize(
    "cbr_value,expected",
    [
        (1.0, "Very Poor"),
        (3.0, "Poor"),
        (6.0, "Fair"),
        (10.0, "Good"),
        (20.0, "Very Good"),
        (40.0, "Excellent"),
    ],
)
def test_cbr_bearing_classes(cbr_value, expected):
    from geotech.classification import cbr_bearing_class

    assert cbr_bearing_class(cbr_value) == expected


@pytest.mark.parametrize(
    "data,message",
    [
        ({"load": [0, 1, 2]}, "Penetration and load arrays are required"),
        ({"penetration": [0, 2.5, 5], "load": [0, 1]}, "Penetration and load arrays must have the same length"),
        ({"penetration": [2.5, 5], "load": [1, 2]}, "At least 3 load-penetration points are required"),
        ({"penetration": [0, 2.5, 5], "load": [0, -1, 2]}, "Penetration and load values must be non-negative"),
        ({"penetration": [0, 5, 2.5], "load": [0, 1, 2]}, "Penetration values must be strictly increasing"),
        ({"penetration": [0, 0.5, 1.0, 1.5], "load": [0, 1, 2, 3]}, "Penetration data must span 2.5 mm and 5.0 mm"),
        ({"penetration": [0, 0.5, 7.0, 8.0], "load": [0, 1, 2, 3]}, "No penetration reading within 1.0 mm of 2.5 mm"),
    ],
)
def test_cbr_validation(data, message):
    status, response = calculator.run("CBR", {"test_id": "cbr-1", "data": data})
    assert status == 400
    assert response["message"] == message
