import plotly.graph_objects as go

from geotech import calculator
from main import main
from plot import ChartPlotter
from plot.base import group_panels

SPT_BODY = {"test_id": "BH1", "data": [{"depth": 1.5, "N1": 3, "N2": 4, "N3": 5}, {"depth": 3.0, "N1": 5, "N2": 7, "N3": 8}]}


def test_group_panels_by_title():
    keys = ["compaction_curve", "fitted_curve", "zero_air_voids", "load_settlement"]
    assert group_panels(keys) == [["compaction_curve", "fitted_curve", "zero_air_voids"], ["load_settlement"]]


def test_spt_figure_has_depth_axis_reversed():
    _, response = calculator.run("SPT", SPT_BODY)
    fig = ChartPlotter(response["chart_data"], title="BH1").plot().get_figure()

    assert len(fig.data) == 3
    assert fig.layout.yaxis.range[0] > fig.layout.yaxis.range[1] == 0


def test_bar_for_categorical_series():
    chart_data = {"capacity_components": [{"x": "Cohesion", "y": 10.0}, {"x": "Surcharge", "y": 20.0}]}
    fig = ChartPlotter(chart_data).plot().get_figure()
    assert isinstance(fig.data[0], go.Bar)


def test_empty_series_skipped():
    fig = ChartPlotter({"depth_vs_qc": [], "load_settlement": [{"x": 0.0, "y": 0.0}]}).plot().get_figure()
    assert len(fig.data) == 1


def test_cli_writes_html(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("GEOTECH_CONFIG", raising=False)
    request = tmp_path / "request.toml"
    request.write_text(
        'kind = "spt"\ntest_id = "BH1"\n\n[[data]]\ndepth = 3.0\nN1 = 5\nN2 = 7\nN3 = 8\n',
        encoding="utf-8",
    )

    status, response = main(str(request))

    assert status == 200
    assert response["computed_data"][0]["n_raw"] == 15
    assert (tmp_path / "request.html").exists()
