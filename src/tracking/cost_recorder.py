# src/tracking/cost_recorder.py - v1
"""Cost recording for LLM calls.

Each successful call becomes one CostRecord appended to a sink. Sinks are
append-only. A failing sink is logged and never fails the call it records.
"""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from manuscriptai.tracking.cost_calculator import compute_call_cost
from manuscriptai.tracking.models import CostRecord, ModelPricing

if TYPE_CHECKING:
    from manuscriptai.config.settings import Settings
    from manuscriptai.llm.models import CallIdentity, LLMResponse

logger = logging.getLogger(__name__)


class BaseCostSink(ABC):
    """Append-only destination for cost records."""

    @abstractmethod
    async def append(self, record: CostRecord) -> None:
        """Persist one record."""

    @abstractmethod
    async def read_all(self) -> list[CostRecord]:
        """Return every record written so far."""


class MemoryCostSink(BaseCostSink):
    """Keeps records in process memory."""

    def __init__(self) -> None:
        self._records: list[CostRecord] = []

    async def append(self, record: CostRecord) -> None:
        self._records.append(record)

    async def read_all(self) -> list[CostRecord]:
        return list(self._records)


class JsonlCostSink(BaseCostSink):
    """One JSON object per line, appended to a local file."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    async def append(self, record: CostRecord) -> None:
        line = record.model_dump_json() + "\n"
        async with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as f:
                f.write(line)

    async def read_all(self) -> list[CostRecord]:
        if not self._path.exists():
            return []
        records: list[CostRecord] = []
        with self._path.open(encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    records.append(CostRecord(**json.loads(line)))
                except (json.JSONDecodeError, ValueError) as e:
                    logger.warning("Skipping bad cost line %d in %s: %s", lineno, self._path, e)
        return records


class CostRecorder:
    """Turns LLM responses into cost records."""

    def __init__(
        self,
        sink: BaseCostSink,
        pricing: dict[str, ModelPricing] | None = None,
    ) -> None:
        self._sink = sink
        self._pricing = pricing

    @property
    def sink(self) -> BaseCostSink:
        return self._sink

    async def record(
        self, identity: CallIdentity, response: LLMResponse
    ) -> CostRecord | None:
        """Build and append a record. Returns None if the sink failed."""
        cost = compute_call_cost(
            response.model, response.input_tokens, response.output_tokens, self._pricing
        )
        record = CostRecord(
            record_id=str(uuid.uuid4()),
            timestamp=datetime.now(timezone.utc),
            user_id=identity.user_id,
            manuscript_id=identity.manuscript_id,
            operation_group=identity.operation_group,
            operation=identity.operation,
            agent=identity.agent,
            model=response.model,
            input_tokens=response.input_tokens,
            output_tokens=response.output_tokens,
            cost_usd=round(cost, 6),
            metadata={"latency_ms": response.latency_ms},
        )
        try:
            await self._sink.append(record)
        except OSError as e:
            logger.error("Failed to record cost for %s: %s", identity.agent, e)
            return None
        logger.info(
            "Cost recorded: %s/%s $%.4f (%d in, %d out)",
            identity.operation_group, identity.operation, record.cost_usd,
            record.input_tokens, record.output_tokens,
        )
        return record


def create_cost_recorder(
    settings: Settings, pricing: dict[str, ModelPricing] | None = None
) -> CostRecorder:
    """Build the recorder for the configured sink."""
    sink: BaseCostSink
    if settings.cost_sink == "jsonl":
        sink = JsonlCostSink(settings.cost_log_path)
    else:
        sink = MemoryCostSink()
    return CostRecorder(sink, pricing=pricing)
