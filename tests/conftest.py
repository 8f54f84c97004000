import json
from typing import Any, Dict, List, Sequence, Tuple

import pytest

from simulation.models import Asset, Market, MonthlyPoint, SimulationParams, SimulationResult


def make_result(
    ticker: str,
    history: Sequence[Tuple[str, float]],
    no_reinvest: Sequence[Tuple[str, float]] = (),
    profitability: float = 10.0,
) -> SimulationResult:
    return SimulationResult(
        ticker=ticker,
        final_value=history[-1][1] if history else 0.0,
        total_dividends=0.0,
        total_invested=0.0,
        profitability_pct=profitability,
        accumulated_units=0.0,
        history=tuple(MonthlyPoint(date, value, 0.0) for date, value in history),
        history_no_reinvest=tuple(MonthlyPoint(date, value, 0.0) for date, value in no_reinvest),
    )


def make_payload(history: Sequence[Tuple[str, float, float]], final_value: float = 0.0) -> Dict[str, Any]:
    points = [{"date": d, "totalValue": v, "accumulatedDividends": div} for d, v, div in history]
    return {
        "history": points,
        "historyNoReinvest": points,
        "summary": {
            "finalValue": final_value,
            "totalDividends": 50.0,
            "totalInvested": 10500.0,
            "profitability": 6.0,
            "sharesAccumulated": 380.5,
        },
    }


class FakeGenerationService:
    """Answers with canned replies keyed by the ticker named in the prompt."""

    def __init__(self, replies: Dict[str, Any]):
        self.replies = replies
        self.prompts: List[str] = []
        self.schemas: List[Dict[str, Any]] = []

    def generate(self, prompt: str, schema: Dict[str, Any]) -> str:
        self.prompts.append(prompt)
        self.schemas.append(schema)
        for ticker, reply in self.replies.items():
            if f"ticker {ticker} (" in prompt:
                if isinstance(reply, Exception):
                    raise reply
                return reply if isinstance(reply, str) else json.dumps(reply)
        return ""


@pytest.fixture()
def params() -> SimulationParams:
    return SimulationParams(
        assets=(
            Asset("PETR4", "Petrobras", Market.DOMESTIC),
            Asset("VALE3", "Vale", Market.DOMESTIC),
        ),
        start_date="2015-01-01",
        end_date="2015-03-31",
        initial_contribution=10000.0,
        monthly_contribution=500.0,
    )


@pytest.fixture()
def example_replies() -> Dict[str, Any]:
    return {
        "PETR4": make_payload([("2015-01", 10000.0, 0.0), ("2015-02", 10600.0, 50.0)], final_value=10600.0),
        "VALE3": make_payload([("2015-01", 10000.0, 0.0)], final_value=10000.0),
    }


@pytest.fixture()
def result_factory():
    return make_result


@pytest.fixture()
def payload_factory():
    return make_payload


@pytest.fixture()
def fake_service():
    return FakeGenerationService
