"""Simulation package exports."""
from .models import (
    Asset,
    Benchmark,
    Market,
    MonthlyPoint,
    SimulationBatch,
    SimulationParams,
    SimulationResult,
)
from .requester import build_prompt, decode_reply, run_simulation_batch, simulate_asset, simulate_assets
from .service import GenerationService, OpenAIGenerationService, SimulationRequestError

__all__ = [
    "Asset",
    "Benchmark",
    "Market",
    "MonthlyPoint",
    "SimulationBatch",
    "SimulationParams",
    "SimulationResult",
    "build_prompt",
    "decode_reply",
    "run_simulation_batch",
    "simulate_asset",
    "simulate_assets",
    "GenerationService",
    "OpenAIGenerationService",
    "SimulationRequestError",
]
