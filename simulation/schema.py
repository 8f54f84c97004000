"""Schemas for the structured reply of the generation service."""

from __future__ import annotations

import re
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

MONTH_PATTERN = re.compile(r"([0-9]{4})-(0[1-9]|1[0-2])(?:-[0-9]{2})?")

# Numbers must be real, finite JSON numbers. Extra keys in a reply are ignored,
# but the schema sent to the service forbids them.
_REPLY_CONFIG = ConfigDict(
    strict=True,
    allow_inf_nan=False,
    extra="ignore",
    populate_by_name=True,
    json_schema_extra={"additionalProperties": False},
)


class GeneratedPoint(BaseModel):
    model_config = _REPLY_CONFIG

    date: str = Field(description="Month in YYYY-MM format")
    total_value: float = Field(alias="totalValue")
    accumulated_dividends: float = Field(alias="accumulatedDividends")

    @field_validator("date")
    @classmethod
    def _month_only(cls, value: str) -> str:
        match = MONTH_PATTERN.fullmatch(value.strip())
        if match is None:
            raise ValueError(f"date must look like YYYY-MM, got {value!r}")
        return f"{match.group(1)}-{match.group(2)}"


class GeneratedSummary(BaseModel):
    model_config = _REPLY_CONFIG

    final_value: float = Field(alias="finalValue")
    total_dividends: float = Field(alias="totalDividends")
    total_invested: float = Field(alias="totalInvested")
    profitability: float = Field(description="Total return over the period, in percent")
    shares_accumulated: float = Field(alias="sharesAccumulated")


class GeneratedPayload(BaseModel):
    model_config = _REPLY_CONFIG

    history: List[GeneratedPoint]
    history_no_reinvest: List[GeneratedPoint] = Field(alias="historyNoReinvest")
    summary: GeneratedSummary


def response_schema() -> Dict[str, Any]:
    """JSON schema (camelCase field names) the service must conform to."""
    return GeneratedPayload.model_json_schema(by_alias=True)


__all__ = ["GeneratedPayload", "GeneratedPoint", "GeneratedSummary", "response_schema"]
