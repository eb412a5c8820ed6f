import math

import pytest

from geotech import calculator
from geotech.lab import psd
from geotech.models import SievePoint


def _log_linear_points():
    # P(d) = 50 + 25·lg(d), 0.01 ... 100 mm
    sizes = [100.0, 10.0, 1.0, 0.1, 0.01]
    return [SievePoint(sieve_size=d, percent_passing=50 + 25 * math.log10(d)) for d in sizes]


def test_psd_log_linear_round_trip():
    result = psd.interpret(_log_linear_points())
    data = result.computed_data

    d10 = 10 ** ((10 - 50) / 25)
    d30 = 10 ** ((30 - 50) / 25)
    d60 = 10 ** ((60 - 50) / 25)
    assert data["d10"] == pytest.approx(d10)
    assert data["d60"] == pytest.approx(d60)
    assert data["coefficient_of_uniformity"] == pytest.approx(d60 / d10, rel=1e-9)
    assert data["coefficient_of_curvature"] == pytest.approx(d30 * d30 / (d60 * d10), rel=1e-9)


def test_psd_fractions_and_dual_classification():
    result = psd.interpret(_log_linear_points())
    data = result.computed_data

    assert data["fines_percent"] == pytest.approx(50 + 25 * math.log10(0.075))
    assert data["gravel_percent"] == pytest.approx(100 - (50 + 25 * math.log10(4.75)))
    assert data["gravel_percent"] + data["sand_percent"] + data["fines_percent"] == pytest.approx(100)
    assert data["uscs_classification"] == "SM/SC"
    assert data["aashto_classification"] == "A-1-b"
    assert "Intermediate fines content - dual classification may apply" in result.warnings


def test_psd_clean_sand():
    sizes = [4.75, 2.0, 0.85, 0.425, 0.25, 0.075]
    passing = [100.0, 90.0, 60.0, 30.0, 15.0, 2.0]
    points = [SievePoint(sieve_size=s, percent_passing=p) for s, p in zip(sizes, passing)]
    result = psd.interpret(points)
    data = result.computed_data

    assert data["fines_percent"] == 2.0
    assert data["gravel_percent"] == 0.0
    assert data["uscs_classification"] == "SP"
    assert data["effective_size"] == data["d10"]
    assert result.interpretation.startswith("Clean granular soil")


def test_psd_d10_undeterminable_is_clamped():
    points = [
        SievePoint(sieve_size=10.0, percent_passing=100.0),
        SievePoint(sieve_size=1.0, percent_passing=60.0),
        SievePoint(sieve_size=0.075, percent_passing=20.0),
    ]
    result = psd.interpret(points)
    assert result.computed_data["d10"] == 0.075
    assert any(w.startswith("D10 could not be determined") for w in result.warnings)


def test_psd_unsorted_input_is_accepted():
    status, response = calculator.run(
        "PSD",
        {
            "test_id": "p1",
            "data": [
                {"sieve_size": 0.075, "percent_passing": 5},
                {"sieve_size": 4.75, "percent_passing": 100},
                {"sieve_size": 0.425, "percent_passing": 40},
            ],
        },
    )
    assert status == 200
    assert response["chart_data"]["grain_size_curve"][0]["x"] == 4.75


@pytest.mark.parametrize(
    "data,message",
    [
        ([{"sieve_size": 0, "percent_passing": 10}], "Sieve size is required and must be greater than 0"),
        ([{"sieve_size": 1, "percent_passing": 110}], "Percent passing must be between 0 and 100"),
        (
            [{"sieve_size": 2, "percent_passing": 40}, {"sieve_size": 1, "percent_passing": 60}],
            "Percent passing must not increase as sieve size decreases",
        ),
    ],
)
def test_psd_validation(data, message):
    status, response = calculator.run("PSD", {"test_id": "p1", "data": data})
    assert status == 400
    assert response["message"] == message
