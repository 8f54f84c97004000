"""Streamlit dashboard comparing AI-simulated asset performance against benchmarks."""
from __future__ import annotations

import datetime as dt
import sys
from pathlib import Path
from typing import Tuple

import streamlit as st

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from analytics.reshaping import cached_profitability_table, cached_reinvestment_table, cached_value_table
from core.config import AppConfig
from core.logging import get_logger, setup_logging
from dashboard import visuals
from dashboard.state import DashboardState
from simulation import (
    Market,
    OpenAIGenerationService,
    SimulationBatch,
    SimulationParams,
    SimulationResult,
    run_simulation_batch,
)

CONFIG = AppConfig.load()
setup_logging(CONFIG.log_level)
logger = get_logger("dashboard")

st.set_page_config(page_title="InvestSim", layout="wide")  # widescreen so charts have breathing room

MARKET_OPTIONS = {"BR": Market.DOMESTIC, "US": Market.FOREIGN}


def _request_batch(params: SimulationParams) -> SimulationBatch:
    """Build the service lazily so a missing API key surfaces as a run failure."""
    service = OpenAIGenerationService.from_config(CONFIG)
    return run_simulation_batch(params, service, max_workers=CONFIG.max_workers)


def _init_state() -> DashboardState:
    """Set up the session's DashboardState so reruns stay predictable."""
    if "dashboard" not in st.session_state:
        st.session_state["dashboard"] = DashboardState.default()
    return st.session_state["dashboard"]


def _asset_controls(state: DashboardState) -> None:
    st.sidebar.header("Assets")
    for asset in state.params.assets:
        cols = st.sidebar.columns([1, 3, 1])
        cols[0].caption(asset.market.value)
        cols[1].markdown(f"**{asset.ticker}** {asset.name if asset.name != asset.ticker else ''}")
        if cols[2].button("✕", key=f"remove_asset_{asset.ticker}", help="Remove asset"):
            state.remove_asset(asset.ticker)
            st.rerun()
    with st.sidebar.form("add_asset", clear_on_submit=True):
        ticker = st.text_input("Ticker", placeholder="Ex: PETR4")
        market = st.selectbox("Market", options=list(MARKET_OPTIONS))
        if st.form_submit_button("Add asset"):
            if state.add_asset(ticker, MARKET_OPTIONS[market]):
                st.rerun()


def _benchmark_controls(state: DashboardState) -> None:
    st.sidebar.header("Benchmarks")
    for bench in state.params.benchmarks:
        cols = st.sidebar.columns([3, 1, 1])
        cols[0].markdown(
            f"<span style='color:{bench.color}'>●</span> {bench.name}", unsafe_allow_html=True
        )
        cols[1].caption(visuals.format_percent(bench.annual_return_pct))
        if cols[2].button("✕", key=f"remove_bench_{bench.id}", help="Remove benchmark"):
            state.remove_benchmark(bench.id)
            st.rerun()
    with st.sidebar.form("add_benchmark", clear_on_submit=True):
        name = st.text_input("Name", placeholder="Ex: CDI")
        value = st.text_input("Return (%)", placeholder="Ex: 95")
        if st.form_submit_button("Add benchmark"):
            if state.add_benchmark(name, value) is not None:
                st.rerun()


def _period_controls(state: DashboardState) -> None:
    st.sidebar.header("Period")
    start = st.sidebar.date_input("Start date", value=dt.date.fromisoformat(state.params.start_date))
    end = st.sidebar.date_input("End date", value=dt.date.fromisoformat(state.params.end_date))
    state.set_date_range(start.isoformat(), end.isoformat())

    st.sidebar.header("Contributions")
    initial = st.sidebar.number_input(
        "Initial investment (R$)", min_value=0.0, value=float(state.params.initial_contribution), step=500.0
    )
    monthly = st.sidebar.number_input(
        "Monthly contribution (R$)", min_value=0.0, value=float(state.params.monthly_contribution), step=50.0
    )
    state.set_contributions(initial, monthly)
    reinvest = st.sidebar.checkbox("Reinvest dividends", value=state.params.reinvest_dividends)
    state.set_reinvest(reinvest)


def _render_summary_cards(results: Tuple[SimulationResult, ...]) -> None:
    """One metric card per simulated asset."""
    cols = st.columns(min(len(results), 3))
    for idx, result in enumerate(results):
        col = cols[idx % len(cols)]
        col.metric(
            result.ticker,
            visuals.format_currency(result.final_value),
            visuals.format_percent(result.profitability_pct),
        )
        col.caption(
            f"Invested {visuals.format_currency(result.total_invested)} · "
            f"Dividends {visuals.format_currency(result.total_dividends)}"
        )


state = _init_state()
_asset_controls(state)
_benchmark_controls(state)
_period_controls(state)

st.title("InvestSim")
st.subheader("Simulated portfolio growth with and without dividend reinvestment")

if st.button("Simulate performance", type="primary", disabled=not state.can_simulate):
    if state.params.start_date >= state.params.end_date:
        st.warning("Start date must be before end date")
    else:
        logger.info("Simulation requested for %s", ", ".join(state.params.tickers()))
        with st.spinner("Simulating..."):
            state.run_simulation(_request_batch)

if state.error:
    st.error(state.error)
if state.dropped_tickers:
    removed = ", ".join(state.dropped_tickers)
    st.warning(f"No usable data for: {removed}. Those assets were left out of the results.")

if not state.results:
    st.info(
        "Configure your assets, set the contributions and compare how reinvested dividends change your wealth"
        " over time. Click **Simulate performance** to start."
    )
    st.caption("Data is simulated by AI based on approximate historical trends.")
    st.stop()

results = state.results
tickers = [result.ticker for result in results]
_render_summary_cards(results)

st.markdown("### Wealth Evolution")
st.plotly_chart(
    visuals.value_growth_figure(cached_value_table(results), tickers), use_container_width=True
)

st.markdown("### Reinvestment Impact")
st.caption("Total wealth with and without reinvesting dividends.")
st.plotly_chart(visuals.reinvestment_figure(cached_reinvestment_table(results)), use_container_width=True)

st.markdown("### Profitability vs Benchmarks")
st.plotly_chart(
    visuals.profitability_figure(cached_profitability_table(results, state.params.benchmarks)),
    use_container_width=True,
)

st.markdown("### Accumulated Details (reinvested)")
details = visuals.details_frame(results)
st.dataframe(
    details.style.format(
        {
            "Units accumulated": "{:.2f}",
            "Total invested": visuals.format_currency,
            "Total dividends": visuals.format_currency,
            "Final value": visuals.format_currency,
            "Profitability": visuals.format_percent,
        }
    ),
    hide_index=True,
)
st.caption("Data is simulated by AI based on approximate historical trends.")
