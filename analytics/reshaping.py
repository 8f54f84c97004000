"""Turn per-asset simulation results into row sets the charts can plot.

Dates are "YYYY-MM" strings, so sorting them lexically sorts them in time.
Nothing here keeps state; the cached_* variants memoize on hashable tuples.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

from simulation.models import Benchmark, MonthlyPoint, SimulationResult


class EntryKind(str, Enum):
    ASSET = "asset"
    BENCHMARK = "benchmark"


@dataclass(frozen=True)
class ReinvestmentRow:
    """Total portfolio value on one date, with and without dividend reinvestment."""

    date: str
    with_reinvest: float
    without_reinvest: float


@dataclass(frozen=True)
class ProfitabilityEntry:
    """One bar of the profitability comparison chart."""

    label: str
    value: float
    kind: EntryKind
    color: Optional[str] = None


def _values_by_date(points: Sequence[MonthlyPoint]) -> Dict[str, float]:
    """Index a series by date; the first point wins on repeated dates."""
    indexed: Dict[str, float] = {}
    for point in points:
        indexed.setdefault(point.date, point.total_value)
    return indexed


def history_dates(results: Sequence[SimulationResult]) -> List[str]:
    """Sorted union of every result's reinvested-history dates."""
    return sorted({point.date for result in results for point in result.history})


def value_table(results: Sequence[SimulationResult]) -> Dict[str, Dict[str, float]]:
    """Map each date to the tickers that have a value on it.

    A ticker missing a date is left out of that date's mapping rather than
    being reported as zero.
    """
    indexed = [(result.ticker, _values_by_date(result.history)) for result in results]
    table: Dict[str, Dict[str, float]] = {}
    for date in history_dates(results):
        table[date] = {ticker: values[date] for ticker, values in indexed if date in values}
    return table


def reinvestment_table(results: Sequence[SimulationResult]) -> List[ReinvestmentRow]:
    """Sum every asset's value per date for both scenarios.

    The timeline comes from the reinvested histories only; a date missing from a
    series contributes nothing to that scenario's total.
    """
    with_series = [_values_by_date(result.history) for result in results]
    without_series = [_values_by_date(result.history_no_reinvest) for result in results]
    rows: List[ReinvestmentRow] = []
    for date in history_dates(results):
        rows.append(
            ReinvestmentRow(
                date=date,
                with_reinvest=sum(series.get(date, 0.0) for series in with_series),
                without_reinvest=sum(series.get(date, 0.0) for series in without_series),
            )
        )
    return rows


def profitability_table(
    results: Sequence[SimulationResult],
    benchmarks: Sequence[Benchmark],
) -> List[ProfitabilityEntry]:
    """Assets first, then benchmarks, each in their original order."""
    entries = [
        ProfitabilityEntry(label=result.ticker, value=result.profitability_pct, kind=EntryKind.ASSET)
        for result in results
    ]
    entries.extend(
        ProfitabilityEntry(
            label=bench.name,
            value=bench.annual_return_pct,
            kind=EntryKind.BENCHMARK,
            color=bench.color,
        )
        for bench in benchmarks
    )
    return entries


# Memoized variants used by the dashboard. Results are shared between callers.
@lru_cache(maxsize=16)
def cached_value_table(results: Tuple[SimulationResult, ...]) -> Dict[str, Dict[str, float]]:
    return value_table(results)


@lru_cache(maxsize=16)
def cached_reinvestment_table(results: Tuple[SimulationResult, ...]) -> List[ReinvestmentRow]:
    return reinvestment_table(results)


@lru_cache(maxsize=16)
def cached_profitability_table(
    results: Tuple[SimulationResult, ...],
    benchmarks: Tuple[Benchmark, ...],
) -> List[ProfitabilityEntry]:
    return profitability_table(results, benchmarks)
