# src/tracking/models.py - v1
"""Cost tracking models: CostRecord, ModelPricing, CostSummary."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ModelPricing(BaseModel):
    """LLM model pricing, USD per 1M tokens."""

    model: str
    input_price_per_1m: float
    output_price_per_1m: float


class CostRecord(BaseModel):
    """One successful LLM call. Append-only; never mutated."""

    model_config = ConfigDict(frozen=True)

    record_id: str
    timestamp: datetime
    user_id: str
    manuscript_id: str
    operation_group: str
    operation: str
    agent: str
    model: str
    input_tokens: int
    output_tokens: int
    cost_usd: float
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class CostSummary(BaseModel):
    """Aggregate over a group of cost records."""

    key: str
    total_calls: int
    total_input_tokens: int
    total_output_tokens: int
    total_cost_usd: float
    avg_cost_per_call_usd: float
