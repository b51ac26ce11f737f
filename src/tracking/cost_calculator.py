# src/tracking/cost_calculator.py - v1
"""Per-call USD cost from token usage and the per-model rate table."""

from __future__ import annotations

import logging

from manuscriptai.tracking.models import ModelPricing

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-sonnet-4-20250514"

# Default pricing per 1M tokens
DEFAULT_PRICING: dict[str, ModelPricing] = {
    "claude-sonnet-4-20250514": ModelPricing(
        model="claude-sonnet-4-20250514",
        input_price_per_1m=3.0, output_price_per_1m=15.0,
    ),
    "claude-opus-4-20250514": ModelPricing(
        model="claude-opus-4-20250514",
        input_price_per_1m=15.0, output_price_per_1m=75.0,
    ),
    "claude-3-5-sonnet-20241022": ModelPricing(
        model="claude-3-5-sonnet-20241022",
        input_price_per_1m=3.0, output_price_per_1m=15.0,
    ),
    "claude-3-5-haiku-20241022": ModelPricing(
        model="claude-3-5-haiku-20241022",
        input_price_per_1m=0.80, output_price_per_1m=4.0,
    ),
    "claude-3-haiku-20240307": ModelPricing(
        model="claude-3-haiku-20240307",
        input_price_per_1m=0.25, output_price_per_1m=1.25,
    ),
}


def build_pricing_table(
    overrides: dict[str, dict[str, float]] | None = None,
) -> dict[str, ModelPricing]:
    """Merge settings-provided rates over the defaults."""
    table = dict(DEFAULT_PRICING)
    for model, rates in (overrides or {}).items():
        table[model] = ModelPricing(
            model=model,
            input_price_per_1m=rates["input_per_1m"],
            output_price_per_1m=rates["output_per_1m"],
        )
    return table


def resolve_pricing(
    model: str, pricing: dict[str, ModelPricing] | None = None
) -> ModelPricing:
    """Rates for ``model``; unknown models are billed at the default model's rate."""
    pricing = pricing or DEFAULT_PRICING
    p = pricing.get(model)
    if p is None:
        logger.warning("No pricing for model %s, using %s rates", model, DEFAULT_MODEL)
        p = pricing.get(DEFAULT_MODEL, DEFAULT_PRICING[DEFAULT_MODEL])
    return p


def compute_call_cost(
    model: str,
    input_tokens: int,
    output_tokens: int,
    pricing: dict[str, ModelPricing] | None = None,
) -> float:
    """Compute estimated cost for a single LLM call in USD."""
    p = resolve_pricing(model, pricing)
    return (
        input_tokens * p.input_price_per_1m / 1_000_000
        + output_tokens * p.output_price_per_1m / 1_000_000
    )
