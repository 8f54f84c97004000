"""Domain types shared by the requester, the reshaping layer and the dashboard.

Every value here is frozen and stores sequences as tuples so results and
benchmarks stay hashable; the dashboard memoizes the reshaping helpers on them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class Market(str, Enum):
    """Listing market of an asset."""

    DOMESTIC = "BR"
    FOREIGN = "US"

    @property
    def label(self) -> str:
        return "Brazil" if self is Market.DOMESTIC else "United States"


def normalize_ticker(ticker: str) -> str:
    """Strip whitespace and uppercase a user-entered ticker."""
    return (ticker or "").strip().upper()


@dataclass(frozen=True)
class Asset:
    """A tradable instrument the user wants simulated."""

    ticker: str
    name: str
    market: Market = Market.DOMESTIC

    @classmethod
    def create(cls, ticker: str, market: Market = Market.DOMESTIC, name: str | None = None) -> "Asset":
        symbol = normalize_ticker(ticker)
        if not symbol:
            raise ValueError("Ticker must not be empty")
        return cls(ticker=symbol, name=(name or "").strip() or symbol, market=Market(market))


@dataclass(frozen=True)
class Benchmark:
    """Fixed comparison return (index or fixed-income proxy), not simulated."""

    id: str
    name: str
    annual_return_pct: float
    color: str


@dataclass(frozen=True)
class SimulationParams:
    """Everything the user configured for a simulation run."""

    assets: Tuple[Asset, ...]
    start_date: str
    end_date: str
    initial_contribution: float = 0.0
    monthly_contribution: float = 0.0
    reinvest_dividends: bool = True  # advisory; not sent to the generation service
    benchmarks: Tuple[Benchmark, ...] = ()

    def tickers(self) -> Tuple[str, ...]:
        return tuple(asset.ticker for asset in self.assets)


@dataclass(frozen=True)
class MonthlyPoint:
    """One month of a simulated scenario."""

    date: str  # YYYY-MM
    total_value: float
    accumulated_dividends: float


@dataclass(frozen=True)
class SimulationResult:
    """Per-asset outcome returned by the generation service."""

    ticker: str
    final_value: float
    total_dividends: float
    total_invested: float
    profitability_pct: float
    accumulated_units: float
    history: Tuple[MonthlyPoint, ...] = ()
    history_no_reinvest: Tuple[MonthlyPoint, ...] = ()


@dataclass(frozen=True)
class SimulationBatch:
    """Outcome of one simulation run: parsed results plus tickers that were dropped."""

    results: Tuple[SimulationResult, ...] = ()
    dropped: Tuple[str, ...] = field(default_factory=tuple)
