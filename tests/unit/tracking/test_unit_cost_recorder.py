# tests/unit/tracking/test_unit_cost_recorder.py - v1
"""Tests for tracking/cost_recorder.py."""

from __future__ import annotations

import pytest

from manuscriptai.llm.models import CallIdentity, LLMResponse
from manuscriptai.tracking.cost_recorder import (
    BaseCostSink,
    CostRecorder,
    JsonlCostSink,
    MemoryCostSink,
    create_cost_recorder,
)
from manuscriptai.config.settings import load_settings

IDENTITY = CallIdentity(
    agent="developmental",
    user_id="u1",
    manuscript_id="m1",
    operation_group="editorial_analysis",
    operation="analyze_developmental",
)
RESPONSE = LLMResponse(
    content="{}", input_tokens=1000, output_tokens=500, model="claude-sonnet-4-20250514"
)


class BrokenSink(BaseCostSink):
    async def append(self, record):
        raise OSError("disk full")

    async def read_all(self):
        return []


class TestCostRecorder:
    @pytest.mark.asyncio
    async def test_record_fields(self):
        sink = MemoryCostSink()
        record = await CostRecorder(sink).record(IDENTITY, RESPONSE)
        assert record.cost_usd == pytest.approx(0.0105)
        assert record.total_tokens == 1500
        assert record.operation_group == "editorial_analysis"
        assert await sink.read_all() == [record]

    @pytest.mark.asyncio
    async def test_sink_failure_is_not_fatal(self):
        assert await CostRecorder(BrokenSink()).record(IDENTITY, RESPONSE) is None


class TestJsonlCostSink:
    @pytest.mark.asyncio
    async def test_append_and_read(self, tmp_path):
        sink = JsonlCostSink(tmp_path / "logs" / "costs.jsonl")
        recorder = CostRecorder(sink)
        await recorder.record(IDENTITY, RESPONSE)
        await recorder.record(IDENTITY, RESPONSE)
        records = await sink.read_all()
        assert len(records) == 2
        assert records[0].agent == "developmental"

    @pytest.mark.asyncio
    async def test_bad_lines_skipped(self, tmp_path):
        path = tmp_path / "costs.jsonl"
        sink = JsonlCostSink(path)
        await CostRecorder(sink).record(IDENTITY, RESPONSE)
        with path.open("a", encoding="utf-8") as f:
            f.write("{broken\n\n")
        assert len(await sink.read_all()) == 1

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        assert await JsonlCostSink(tmp_path / "none.jsonl").read_all() == []


class TestFactory:
    def test_jsonl(self, tmp_path):
        recorder = create_cost_recorder(
            load_settings(cost_sink="jsonl", cost_log_path=str(tmp_path / "c.jsonl"))
        )
        assert isinstance(recorder.sink, JsonlCostSink)

    def test_memory(self):
        recorder = create_cost_recorder(load_settings(cost_sink="memory"))
        assert isinstance(recorder.sink, MemoryCostSink)
