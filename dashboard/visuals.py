"""Plotly figure builders and table helpers for the Streamlit app."""
from __future__ import annotations

from typing import Dict, Sequence

import pandas as pd
import plotly.graph_objects as go

from analytics.reshaping import EntryKind, ProfitabilityEntry, ReinvestmentRow
from simulation.models import SimulationResult

ASSET_COLORS = ["#10b981", "#3b82f6", "#f59e0b", "#ef4444", "#8b5cf6", "#ec4899"]
WITH_LABEL = "With reinvestment"
WITHOUT_LABEL = "Without reinvestment"


def asset_color(index: int) -> str:
    return ASSET_COLORS[index % len(ASSET_COLORS)]


def format_currency(value: float) -> str:
    """Brazilian-style money, e.g. ``R$ 1.234,56``."""
    text = f"{value:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"R$ {text}"


def format_percent(value: float) -> str:
    return f"{value:.2f}%"


def value_frame(table: Dict[str, Dict[str, float]]) -> pd.DataFrame:
    """Flatten date -> ticker -> value into a wide frame; absent values become NaN."""
    frame = pd.DataFrame.from_dict(table, orient="index")
    frame.index.name = "date"
    return frame


def reinvestment_frame(rows: Sequence[ReinvestmentRow]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            WITH_LABEL: [row.with_reinvest for row in rows],
            WITHOUT_LABEL: [row.without_reinvest for row in rows],
        },
        index=pd.Index([row.date for row in rows], name="date"),
    )


def details_frame(results: Sequence[SimulationResult]) -> pd.DataFrame:
    """Accumulated detail table for the reinvested scenario."""
    return pd.DataFrame(
        {
            "Asset": [r.ticker for r in results],
            "Units accumulated": [r.accumulated_units for r in results],
            "Total invested": [r.total_invested for r in results],
            "Total dividends": [r.total_dividends for r in results],
            "Final value": [r.final_value for r in results],
            "Profitability": [r.profitability_pct for r in results],
        }
    )


def value_growth_figure(table: Dict[str, Dict[str, float]], tickers: Sequence[str]) -> go.Figure:
    frame = value_frame(table)
    fig = go.Figure()
    for idx, ticker in enumerate(tickers):
        if ticker not in frame.columns:
            continue
        series = frame[ticker].dropna()
        fig.add_trace(
            go.Scatter(
                x=series.index,
                y=series.values,
                mode="lines",
                name=ticker,
                line=dict(color=asset_color(idx), width=3),
                hovertemplate="%{x}<br>R$ %{y:,.2f}<extra>" + ticker + "</extra>",
            )
        )
    fig.update_layout(
        title="Portfolio Value Growth",
        xaxis_title="Month",
        yaxis_title="Total Value (R$)",
        template="plotly_white",
    )
    return fig


def reinvestment_figure(rows: Sequence[ReinvestmentRow]) -> go.Figure:
    frame = reinvestment_frame(rows)
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=frame.index,
            y=frame[WITH_LABEL],
            mode="lines",
            name=WITH_LABEL,
            fill="tozeroy",
            line=dict(color="#10b981", width=3),
            fillcolor="rgba(16,185,129,0.1)",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=frame.index,
            y=frame[WITHOUT_LABEL],
            mode="lines",
            name=WITHOUT_LABEL,
            fill="tozeroy",
            line=dict(color="#64748b", width=2, dash="dash"),
            fillcolor="rgba(100,116,139,0.1)",
        )
    )
    fig.update_layout(
        title="Reinvestment Impact",
        xaxis_title="Month",
        yaxis_title="Total Value (R$)",
        template="plotly_white",
    )
    return fig


def profitability_figure(entries: Sequence[ProfitabilityEntry]) -> go.Figure:
    colors = [
        asset_color(idx) if entry.kind is EntryKind.ASSET else (entry.color or "#94a3b8")
        for idx, entry in enumerate(entries)
    ]
    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=[entry.label for entry in entries],
            y=[entry.value for entry in entries],
            marker=dict(color=colors),
            hovertemplate="%{x}: %{y:.2f}%<extra></extra>",
        )
    )
    fig.update_layout(
        title="Profitability vs Benchmarks",
        xaxis_title="",
        yaxis_title="Return (%)",
        template="plotly_white",
    )
    return fig
