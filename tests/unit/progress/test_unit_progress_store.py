# tests/unit/progress/test_unit_progress_store.py - v1
"""Tests for progress/store.py write guards."""

from __future__ import annotations

import pytest

from manuscriptai.progress.models import (
    AgentState,
    AgentSubStatus,
    AssetProgress,
    EditorialProgress,
    ProgressStatus,
)
from manuscriptai.progress.store import ProgressStore
from manuscriptai.storage.memory_store import MemoryObjectStore


def editorial(status: ProgressStatus, progress: int) -> EditorialProgress:
    return EditorialProgress(status=status, progress=progress, message=status.value)


@pytest.fixture
def progress_store():
    return ProgressStore(MemoryObjectStore(), ttl_seconds=60)


class TestProgressStatus:
    def test_terminal(self):
        assert ProgressStatus.COMPLETE.is_terminal
        assert ProgressStatus.PARTIAL.is_terminal
        assert ProgressStatus.FAILED.is_terminal
        assert not ProgressStatus.QUEUED.is_terminal
        assert not ProgressStatus.PROCESSING.is_terminal


class TestProgressStore:
    @pytest.mark.asyncio
    async def test_absent(self, progress_store):
        assert await progress_store.get_editorial("nope") is None
        assert await progress_store.get_assets("nope") is None

    @pytest.mark.asyncio
    async def test_write_and_read_camel_case(self, progress_store):
        await progress_store.write_editorial(
            "r1", EditorialProgress(status=ProgressStatus.PROCESSING, progress=5,
                                    current_step="developmental")
        )
        raw = await progress_store._store.get_json("status:r1")
        assert raw["currentStep"] == "developmental"
        assert raw["reportId"] == "r1"
        record = await progress_store.get_editorial("r1")
        assert record.progress == 5
        assert record.current_step == "developmental"

    @pytest.mark.asyncio
    async def test_progress_never_decreases(self, progress_store):
        await progress_store.write_editorial("r1", editorial(ProgressStatus.PROCESSING, 40))
        stored = await progress_store.write_editorial(
            "r1", editorial(ProgressStatus.PROCESSING, 33)
        )
        assert stored.progress == 40
        assert (await progress_store.get_editorial("r1")).progress == 40

    @pytest.mark.asyncio
    async def test_terminal_not_overwritten(self, progress_store):
        await progress_store.write_editorial("r1", editorial(ProgressStatus.COMPLETE, 100))
        stored = await progress_store.write_editorial(
            "r1", editorial(ProgressStatus.PROCESSING, 30)
        )
        assert stored.status is ProgressStatus.COMPLETE
        assert (await progress_store.get_editorial("r1")).status is ProgressStatus.COMPLETE

    @pytest.mark.asyncio
    async def test_force_resets(self, progress_store):
        await progress_store.write_editorial("r1", editorial(ProgressStatus.FAILED, 63))
        await progress_store.write_editorial(
            "r1", editorial(ProgressStatus.QUEUED, 0), force=True
        )
        record = await progress_store.get_editorial("r1")
        assert record.status is ProgressStatus.QUEUED
        assert record.progress == 0

    @pytest.mark.asyncio
    async def test_failed_keeps_reached_progress(self, progress_store):
        await progress_store.write_editorial("r1", editorial(ProgressStatus.PROCESSING, 33))
        stored = await progress_store.write_editorial("r1", editorial(ProgressStatus.FAILED, 0))
        assert stored.status is ProgressStatus.FAILED
        assert stored.progress == 33

    @pytest.mark.asyncio
    async def test_asset_record(self, progress_store):
        await progress_store.write_assets(
            "r1",
            AssetProgress(
                status=ProgressStatus.PROCESSING,
                progress=10,
                agents={"keywords": AgentSubStatus(status=AgentState.RUNNING, progress=10)},
            ),
        )
        record = await progress_store.get_assets("r1")
        assert record.agents["keywords"].status is AgentState.RUNNING
        assert await progress_store.get_editorial("r1") is None
