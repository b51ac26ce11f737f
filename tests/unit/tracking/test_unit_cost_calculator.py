# tests/unit/tracking/test_unit_cost_calculator.py - v1
"""Tests for tracking/cost_calculator.py."""

from __future__ import annotations

import pytest

from manuscriptai.tracking.cost_calculator import (
    DEFAULT_MODEL,
    build_pricing_table,
    compute_call_cost,
    resolve_pricing,
)


class TestComputeCallCost:
    def test_default_model(self):
        # 1000 in at $3/1M + 500 out at $15/1M
        assert compute_call_cost(DEFAULT_MODEL, 1000, 500) == pytest.approx(0.0105)

    def test_unknown_model_uses_default_rates(self):
        assert compute_call_cost("mystery-model", 1_000_000, 0) == pytest.approx(3.0)

    def test_overrides(self):
        table = build_pricing_table({"custom": {"input_per_1m": 1.0, "output_per_1m": 2.0}})
        assert compute_call_cost("custom", 1_000_000, 1_000_000, table) == pytest.approx(3.0)
        assert DEFAULT_MODEL in table


class TestResolvePricing:
    def test_known(self):
        assert resolve_pricing("claude-3-haiku-20240307").input_price_per_1m == 0.25
