"""Tests for the Plotly figure builders."""

import pandas as pd
import plotly.graph_objects as go

from shooting_report import charts
from shooting_report.decomposition import decompose

EXAMPLE = [10, 12, 9, 11, 10, 13, 9, 12, 11, 10, 12, 14,
           11, 13, 10, 12, 11, 14, 10, 13, 12, 11, 13, 15]


def _monthly_boro() -> pd.DataFrame:
    return pd.DataFrame({
        "month": pd.to_datetime(["2020-01-01", "2020-01-01", "2020-02-01", "2020-02-01"]),
        "BORO": ["BRONX", "QUEENS", "BRONX", "QUEENS"],
        "incidents": [3, 1, 0, 4],
    })


class TestFigures:
    def test_incidents_by_category_totals(self) -> None:
        fig = charts.incidents_by_category_figure(_monthly_boro())
        assert isinstance(fig, go.Figure)
        bar = fig.data[0]
        assert list(bar.x) == ["QUEENS", "BRONX"]
        assert list(bar.y) == [5, 3]

    def test_incidents_over_time(self) -> None:
        monthly = pd.DataFrame({
            "month": pd.date_range("2020-01-01", periods=3, freq="MS"),
            "incidents": [1, 0, 2],
        })
        fig = charts.incidents_over_time_figure(monthly)
        assert list(fig.data[0].y) == [1, 0, 2]

    def test_decomposition_panel_has_four_traces(self) -> None:
        result = decompose(EXAMPLE, (2020, 1))
        fig = charts.decomposition_figure(result.components)
        assert [t.name for t in fig.data] == ["observed", "trend", "seasonal", "residual"]

    def test_seasonal_effects_in_calendar_order(self) -> None:
        result = decompose(EXAMPLE, (2020, 1))
        fig = charts.seasonal_effects_figure(result.seasonal_effects)
        assert list(fig.data[0].x)[:3] == ["Jan", "Feb", "Mar"]

    def test_risk_scores_keep_rank_order(self) -> None:
        risk = pd.DataFrame({
            "category": ["B", "A"],
            "total": [50, 100],
            "severe": [10, 5],
            "severe_rate": [20.0, 5.0],
            "risk_score": [40.0, 10.0],
            "rank": [1, 2],
        })
        fig = charts.risk_scores_figure(risk)
        assert list(fig.layout.xaxis.categoryarray) == ["B", "A"]

    def test_write_figures(self, tmp_path) -> None:
        fig = charts.incidents_by_category_figure(_monthly_boro())
        written = charts.write_figures({"by_borough": fig}, tmp_path / "figs")
        assert written == [tmp_path / "figs" / "by_borough.html"]
        assert written[0].read_text(encoding="utf-8").lstrip().startswith("<html>")
