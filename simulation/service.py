"""Adapter around the external text-generation service that fabricates monthly data."""
from __future__ import annotations

from typing import Any, Dict, Protocol

import openai
from openai import OpenAI

from core.config import AppConfig
from core.logging import get_logger

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are a financial data simulator. Reply with a single JSON object that matches the"
    " provided schema exactly. Do not add commentary or markdown."
)
SCHEMA_NAME = "asset_simulation"


class SimulationRequestError(RuntimeError):
    """The generation service could not be reached or refused the request."""


class GenerationService(Protocol):
    """Anything that turns a prompt plus a JSON schema into raw JSON text."""

    def generate(self, prompt: str, schema: Dict[str, Any]) -> str:
        ...


class OpenAIGenerationService:
    """Chat-completions backed generation service with JSON-schema constrained output."""

    def __init__(self, client: OpenAI, model: str, temperature: float = 0.2) -> None:
        self.client = client
        self.model = model
        self.temperature = temperature

    @classmethod
    def from_config(cls, config: AppConfig) -> "OpenAIGenerationService":
        if not config.api_key:
            raise SimulationRequestError("OPENAI_API_KEY is not configured")
        client = OpenAI(api_key=config.api_key, timeout=config.request_timeout, max_retries=0)
        return cls(client, model=config.model, temperature=config.temperature)

    def generate(self, prompt: str, schema: Dict[str, Any]) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                response_format={
                    "type": "json_schema",
                    "json_schema": {"name": SCHEMA_NAME, "schema": schema, "strict": True},
                },
            )
        except openai.OpenAIError as exc:
            logger.error("Generation service call failed: %s", exc)
            raise SimulationRequestError(f"Generation service call failed: {exc}") from exc
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

