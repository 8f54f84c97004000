"""Interactive state behind the Streamlit page.

The page keeps one DashboardState in ``st.session_state`` and routes every user
action through it, so the rules (unique tickers, busy flag, error handling) can
be tested without Streamlit.
"""
from __future__ import annotations

import datetime as dt
import math
import uuid
from dataclasses import dataclass, replace
from typing import Callable, Optional, Tuple

from core.logging import get_logger
from simulation.models import Asset, Benchmark, Market, SimulationBatch, SimulationParams, SimulationResult
from simulation.service import SimulationRequestError

logger = get_logger(__name__)

BENCHMARK_COLORS = ["#94a3b8", "#cbd5e1", "#e2e8f0", "#64748b", "#475569"]
DEFAULT_START = "2015-01-01"
DEFAULT_INITIAL = 10000.0
DEFAULT_MONTHLY = 500.0
GENERIC_ERROR = "Could not simulate the data. Please try again."

RequestFn = Callable[[SimulationParams], SimulationBatch]


def _token() -> str:
    return uuid.uuid4().hex[:9]


def default_params(today: Optional[dt.date] = None) -> SimulationParams:
    """Seed values shown on the first page load."""
    today = today or dt.date.today()
    return SimulationParams(
        assets=(
            Asset("PETR4", "Petrobras", Market.DOMESTIC),
            Asset("VALE3", "Vale", Market.DOMESTIC),
        ),
        start_date=DEFAULT_START,
        end_date=today.isoformat(),
        initial_contribution=DEFAULT_INITIAL,
        monthly_contribution=DEFAULT_MONTHLY,
        reinvest_dividends=True,
        benchmarks=(
            Benchmark(_token(), "IBOV", 120.0, BENCHMARK_COLORS[0]),
            Benchmark(_token(), "CDI", 95.0, BENCHMARK_COLORS[1]),
            Benchmark(_token(), "Poupança", 55.0, BENCHMARK_COLORS[2]),
        ),
    )


@dataclass
class DashboardState:
    """Params, latest results and run status for one browser session."""

    params: SimulationParams
    results: Tuple[SimulationResult, ...] = ()
    dropped_tickers: Tuple[str, ...] = ()
    busy: bool = False
    error: Optional[str] = None

    @classmethod
    def default(cls, today: Optional[dt.date] = None) -> "DashboardState":
        return cls(params=default_params(today))

    def add_asset(self, ticker: str, market: Market = Market.DOMESTIC, name: Optional[str] = None) -> bool:
        """Append an asset; empty or already-listed tickers are ignored."""
        try:
            asset = Asset.create(ticker, market, name)
        except ValueError:
            return False
        if asset.ticker in self.params.tickers():
            return False
        self.params = replace(self.params, assets=self.params.assets + (asset,))
        return True

    def remove_asset(self, ticker: str) -> None:
        self.params = replace(
            self.params,
            assets=tuple(a for a in self.params.assets if a.ticker != ticker),
        )

    def add_benchmark(self, name: str, value) -> Optional[Benchmark]:
        """Append a benchmark; a blank name or a non-finite value is ignored."""
        name = (name or "").strip()
        if not name or value is None or value == "":
            return None
        try:
            annual = float(value)
        except (TypeError, ValueError):
            return None
        if not math.isfinite(annual):
            return None
        color = BENCHMARK_COLORS[len(self.params.benchmarks) % len(BENCHMARK_COLORS)]
        bench = Benchmark(id=_token(), name=name, annual_return_pct=annual, color=color)
        self.params = replace(self.params, benchmarks=self.params.benchmarks + (bench,))
        return bench

    def remove_benchmark(self, bench_id: str) -> None:
        self.params = replace(
            self.params,
            benchmarks=tuple(b for b in self.params.benchmarks if b.id != bench_id),
        )

    def set_date_range(self, start, end) -> None:
        self.params = replace(self.params, start_date=str(start), end_date=str(end))

    def set_contributions(self, initial: float, monthly: float) -> bool:
        if initial is None or monthly is None or initial < 0 or monthly < 0:
            return False
        self.params = replace(
            self.params,
            initial_contribution=float(initial),
            monthly_contribution=float(monthly),
        )
        return True

    def set_reinvest(self, flag: bool) -> None:
        self.params = replace(self.params, reinvest_dividends=bool(flag))

    @property
    def can_simulate(self) -> bool:
        return not self.busy and bool(self.params.assets)

    def run_simulation(self, request: RequestFn) -> bool:
        """Run ``request`` once; results are replaced only when it succeeds."""
        if not self.can_simulate:
            return False
        self.busy = True
        try:
            batch = request(self.params)
        except SimulationRequestError as exc:
            logger.error("Simulation run failed: %s", exc)
            self.error = GENERIC_ERROR
            return False
        finally:
            self.busy = False
        self.results = tuple(batch.results)
        self.dropped_tickers = tuple(batch.dropped)
        self.error = None
        return True
