# src/tracking/aggregator.py - v1
"""Group cost records into summaries by agent or by operation group."""

from __future__ import annotations

from collections import defaultdict
from typing import Callable

from manuscriptai.tracking.models import CostRecord, CostSummary


def _summarize(
    records: list[CostRecord], key: Callable[[CostRecord], str]
) -> dict[str, CostSummary]:
    grouped: dict[str, list[CostRecord]] = defaultdict(list)
    for rec in records:
        grouped[key(rec)].append(rec)

    result: dict[str, CostSummary] = {}
    for name, group in sorted(grouped.items()):
        total_cost = sum(r.cost_usd for r in group)
        result[name] = CostSummary(
            key=name,
            total_calls=len(group),
            total_input_tokens=sum(r.input_tokens for r in group),
            total_output_tokens=sum(r.output_tokens for r in group),
            total_cost_usd=round(total_cost, 6),
            avg_cost_per_call_usd=round(total_cost / len(group), 6),
        )
    return result


def aggregate_by_agent(records: list[CostRecord]) -> dict[str, CostSummary]:
    """Per-agent totals."""
    return _summarize(records, lambda r: r.agent)


def aggregate_by_operation_group(records: list[CostRecord]) -> dict[str, CostSummary]:
    """Per operation group totals (editorial analysis, asset generation, ...)."""
    return _summarize(records, lambda r: r.operation_group)


def filter_by_manuscript(records: list[CostRecord], manuscript_id: str) -> list[CostRecord]:
    return [r for r in records if r.manuscript_id == manuscript_id]
