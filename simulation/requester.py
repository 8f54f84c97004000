"""Ask the generation service for simulated monthly data, one asset at a time.

Each asset gets its own prompt and its own reply. A reply that does not match
the expected schema only drops that asset; the rest of the batch carries on.
Service failures (network, auth, rate limits) are not caught here and abort the
whole run, so the dashboard can show a single error.
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from core.logging import get_logger

from .models import Asset, MonthlyPoint, SimulationBatch, SimulationParams, SimulationResult
from .schema import GeneratedPayload, GeneratedPoint, response_schema
from .service import GenerationService

logger = get_logger(__name__)

CURRENCY = "R$"


def _money(value: float) -> str:
    return f"{CURRENCY} {value:,.2f}"


def build_prompt(asset: Asset, params: SimulationParams) -> str:
    """Describe the two scenarios and the summary the service must produce for ``asset``."""
    return "\n".join(
        [
            f"Simulate monthly historical data for the stock with ticker {asset.ticker} "
            f"({asset.name}, listed in {asset.market.label}) from {params.start_date} to {params.end_date}.",
            f"Initial investment: {_money(params.initial_contribution)}.",
            f"Monthly contribution: {_money(params.monthly_contribution)}.",
            "",
            "Return a JSON object with two monthly scenarios:",
            "1. history: dividends are reinvested automatically.",
            "2. historyNoReinvest: dividends are not reinvested and accumulate as cash.",
            "Every point has: date (YYYY-MM), totalValue (number), accumulatedDividends (number).",
            "",
            "Also include a summary of the reinvested scenario: finalValue, totalDividends,"
            " totalInvested, profitability (total return in percent) and sharesAccumulated.",
            "Base the numbers on the company's approximate real historical performance.",
        ]
    )


def _points(raw: Sequence[GeneratedPoint]) -> tuple[MonthlyPoint, ...]:
    return tuple(
        MonthlyPoint(date=p.date, total_value=p.total_value, accumulated_dividends=p.accumulated_dividends)
        for p in raw
    )


def decode_reply(ticker: str, text: str) -> SimulationResult:
    """Validate a raw reply and merge it with ``ticker``.

    Raises ``pydantic.ValidationError`` for invalid JSON or a missing/ill-typed field.
    The service's numbers are taken verbatim.
    """
    payload = GeneratedPayload.model_validate_json(text)
    summary = payload.summary
    return SimulationResult(
        ticker=ticker,
        final_value=summary.final_value,
        total_dividends=summary.total_dividends,
        total_invested=summary.total_invested,
        profitability_pct=summary.profitability,
        accumulated_units=summary.shares_accumulated,
        history=_points(payload.history),
        history_no_reinvest=_points(payload.history_no_reinvest),
    )


def simulate_asset(
    asset: Asset,
    params: SimulationParams,
    service: GenerationService,
    schema: Optional[Dict[str, Any]] = None,
) -> Optional[SimulationResult]:
    """Request and decode one asset; ``None`` when the reply has the wrong shape."""
    text = service.generate(build_prompt(asset, params), schema or response_schema())
    try:
        return decode_reply(asset.ticker, text)
    except ValidationError as exc:
        logger.warning("Dropping %s: reply did not match the schema (%d errors)", asset.ticker, exc.error_count())
        logger.debug("Rejected reply for %s: %s", asset.ticker, exc)
        return None


def run_simulation_batch(
    params: SimulationParams,
    service: GenerationService,
    max_workers: int = 1,
) -> SimulationBatch:
    """Simulate every asset in ``params`` and keep results in request order."""
    assets = list(params.assets)
    schema = response_schema()
    logger.info(
        "Simulating %d assets from %s to %s", len(assets), params.start_date, params.end_date
    )
    if max_workers > 1 and len(assets) > 1:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(assets))) as pool:
            outcomes = list(pool.map(lambda a: simulate_asset(a, params, service, schema), assets))
    else:
        outcomes = [simulate_asset(asset, params, service, schema) for asset in assets]

    results: List[SimulationResult] = []
    dropped: List[str] = []
    for asset, outcome in zip(assets, outcomes):
        if outcome is None:
            dropped.append(asset.ticker)
        else:
            results.append(outcome)
    logger.info("Simulation finished: %d succeeded, %d dropped", len(results), len(dropped))
    return SimulationBatch(results=tuple(results), dropped=tuple(dropped))


def simulate_assets(
    params: SimulationParams,
    service: GenerationService,
    max_workers: int = 1,
) -> List[SimulationResult]:
    """Return the successfully simulated assets, in request order."""
    return list(run_simulation_batch(params, service, max_workers=max_workers).results)
