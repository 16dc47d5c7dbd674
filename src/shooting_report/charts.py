# src/shooting_report/charts.py
# Plotly figure builders shared by the batch build (HTML files) and the
# Streamlit dashboard. Each builder takes one precomputed artifact frame.

from pathlib import Path

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from . import config
from .monthly import WEEKDAY_ORDER


def incidents_by_category_figure(monthly_by_category: pd.DataFrame, category: str = config.CATEGORY_FIELD) -> go.Figure:
    totals = (
        monthly_by_category.groupby(category, observed=True)["incidents"]
                           .sum()
                           .sort_values(ascending=False)
                           .reset_index()
    )
    fig = px.bar(totals, x=category, y="incidents", labels={category: "Borough", "incidents": "Incidents"})
    fig.update_layout(title="Shooting incidents by borough")
    return fig


def incidents_over_time_figure(monthly: pd.DataFrame) -> go.Figure:
    fig = px.line(monthly, x="month", y="incidents", markers=True,
                  labels={"month": "Month", "incidents": "Incidents"})
    fig.update_layout(title="Shooting incidents per month")
    return fig


def decomposition_figure(components: pd.DataFrame) -> go.Figure:
    panels = ["observed", "trend", "seasonal", "residual"]
    fig = make_subplots(rows=len(panels), cols=1, shared_xaxes=True,
                        subplot_titles=[p.capitalize() for p in panels])

    for row, panel in enumerate(panels, start=1):
        if panel == "residual":
            trace = go.Bar(x=components["month"], y=components[panel], name=panel)
        else:
            trace = go.Scatter(x=components["month"], y=components[panel], mode="lines", name=panel)
        fig.add_trace(trace, row=row, col=1)

    fig.update_layout(height=900, showlegend=False, title="Additive seasonal decomposition (monthly incidents)")
    return fig


def seasonal_effects_figure(effects: pd.DataFrame) -> go.Figure:
    ordered = effects.sort_values("month_of_year")
    fig = px.bar(ordered, x="month_name", y="effect",
                 labels={"month_name": "Month", "effect": "Seasonal effect (incidents)"})
    fig.update_layout(title="Seasonal effect by month of year")
    return fig


def risk_scores_figure(risk: pd.DataFrame) -> go.Figure:
    fig = px.bar(risk, x="category", y="risk_score", hover_data=["total", "severe", "severe_rate"],
                 labels={"category": "Borough", "risk_score": "Risk score"})
    fig.update_layout(title="Borough risk score (murder rate x weight)",
                      xaxis={"categoryorder": "array", "categoryarray": list(risk["category"])})
    return fig


def hour_weekday_heatmap(hourly_weekday: pd.DataFrame) -> go.Figure:
    hw = hourly_weekday.copy()
    hw["weekday_label"] = pd.Categorical(hw["weekday_label"], categories=WEEKDAY_ORDER, ordered=True)
    hw = hw.sort_values(["weekday_label", "hour"])

    fig = px.density_heatmap(
        hw,
        x="hour",
        y="weekday_label",
        z="incidents",
        nbinsx=24,
        histfunc="sum",
        category_orders={"weekday_label": WEEKDAY_ORDER},
        labels={"weekday_label": "Weekday", "hour": "Hour", "incidents": "Incidents"},
    )
    fig.update_layout(title="Incidents by hour and weekday")
    return fig


def write_figures(figures: dict, out_dir: Path = config.FIGURES_DIR) -> list:
    """Write each figure to ``<out_dir>/<name>.html``; returns the written paths."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for name, fig in figures.items():
        path = out_dir / f"{name}.html"
        fig.write_html(str(path), include_plotlyjs="cdn")
        written.append(path)
    return written
