import math

import pytest

from geotech import calculator
from geotech.insitu import cpt
from geotech.models import CPTReading


def test_cpt_granular_regime_only():
    # qt = 30 MPa, Rf = 0.3 % -> Ic ≈ 2.16
    result = cpt.interpret([CPTReading(depth=5.0, qc=30.0, fs=90.0)])
    point = result.computed_data[0]

    assert point["friction_ratio"] == pytest.approx(0.3)
    assert point["ic"] < 2.6
    assert point["friction_angle"] == pytest.approx(cpt.friction_angle(30.0))
    assert 0 <= point["relative_density"] <= 100
    assert point["undrained_shear_strength"] is None


def test_cpt_cohesive_regime_only():
    result = cpt.interpret([CPTReading(depth=5.0, qc=1.0, fs=40.0)])
    point = result.computed_data[0]

    assert point["ic"] > 2.6
    assert point["friction_angle"] is None
    assert point["relative_density"] is None
    nkt = 10 + 7 * math.sin(math.radians(cpt.friction_angle(1.0)))
    assert point["undrained_shear_strength"] == pytest.approx(1000.0 / nkt)


def test_cpt_pore_pressure_correction():
    assert cpt.corrected_resistance(2.0, 100.0) == pytest.approx(2.02)
    assert cpt.corrected_resistance(2.0, None) == 2.0


@pytest.mark.parametrize(
    "ic,label",
    [
        (1.0, "Dense Sand to Clayey Sand"),
        (1.5, "Sands: Clean Sand to Silty Sand"),
        (2.3, "Sand Mixtures: Silty Sand to Sandy Silt"),
        (2.8, "Silt Mixtures: Clayey Silt to Silty Clay"),
        (3.2, "Clays: Silty Clay to Clay"),
        (3.8, "Organic Soils: Peat"),
    ],
)
def test_cpt_behavior_bands(ic, label):
    from geotech.classification import cpt_behavior_type

    assert cpt_behavior_type(ic) == label


def test_cpt_warnings():
    result = cpt.interpret([CPTReading(depth=2.0, qc=0.4, fs=40.0)])
    assert any("High friction ratio (10.0%)" in w for w in result.warnings)
    assert any("Very low cone resistance" in w for w in result.warnings)


def test_cpt_charts_and_classifications():
    result = cpt.interpret([
        CPTReading(depth=1.0, qc=30.0, fs=90.0),
        CPTReading(depth=2.0, qc=1.0, fs=40.0),
        CPTReading(depth=3.0, qc=1.0, fs=40.0),
    ])
    assert len(result.classifications) == 2
    assert result.chart_data["qc_vs_friction_ratio"][0]["type"] == result.computed_data[0]["soil_behavior_type"]
    assert result.standard == "ASTM D5778"


def test_cpt_rejects_zero_qc():
    status, response = calculator.run("CPT", {"test_id": "c1", "data": [{"depth": 1.0, "qc": 0, "fs": 10}]})
    assert status == 400
    assert response["message"] == "Cone resistance qc must be greater than 0"
