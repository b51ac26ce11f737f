# tests/unit/manuscripts/test_unit_repositories.py - v1
"""Tests for manuscript status repositories (memory and SQLite)."""

from __future__ import annotations

import pytest

from manuscriptai.config.settings import load_settings
from manuscriptai.core.errors import InvalidStatusTransition
from manuscriptai.core.models import ManuscriptRecord, ManuscriptStatus
from manuscriptai.manuscripts.base_repository import check_transition
from manuscriptai.manuscripts.memory_repository import MemoryManuscriptRepository
from manuscriptai.manuscripts.repository_factory import create_manuscript_repository
from manuscriptai.manuscripts.sqlite_repository import SqliteManuscriptRepository


@pytest.fixture(params=["memory", "sqlite"])
def repository(request, tmp_path):
    if request.param == "memory":
        yield MemoryManuscriptRepository()
    else:
        repo = SqliteManuscriptRepository(tmp_path / "manuscripts.db")
        yield repo
        repo.close()


class TestCheckTransition:
    def test_same_state_is_noop(self):
        assert check_transition(ManuscriptStatus.ANALYZING, ManuscriptStatus.ANALYZING) is False

    @pytest.mark.parametrize(
        "current,target",
        [
            (ManuscriptStatus.UPLOADED, ManuscriptStatus.ANALYZING),
            (ManuscriptStatus.ANALYZING, ManuscriptStatus.COMPLETE),
            (ManuscriptStatus.ANALYZING, ManuscriptStatus.FAILED),
            (ManuscriptStatus.FAILED, ManuscriptStatus.ANALYZING),
            (ManuscriptStatus.COMPLETE, ManuscriptStatus.ANALYZING),
        ],
    )
    def test_allowed(self, current, target):
        assert check_transition(current, target) is True

    @pytest.mark.parametrize(
        "current,target",
        [
            (ManuscriptStatus.UPLOADED, ManuscriptStatus.COMPLETE),
            (ManuscriptStatus.COMPLETE, ManuscriptStatus.FAILED),
            (ManuscriptStatus.ANALYZING, ManuscriptStatus.UPLOADED),
        ],
    )
    def test_forbidden(self, current, target):
        with pytest.raises(InvalidStatusTransition):
            check_transition(current, target)


class TestRepositories:
    @pytest.mark.asyncio
    async def test_lifecycle(self, repository, manuscript_record):
        await repository.add(manuscript_record)

        record = await repository.set_status("m1", ManuscriptStatus.ANALYZING)
        assert record.status is ManuscriptStatus.ANALYZING
        record = await repository.set_status("m1", ManuscriptStatus.COMPLETE)
        assert record.status is ManuscriptStatus.COMPLETE
        assert (await repository.get("m1")).title == "Shadow City"

    @pytest.mark.asyncio
    async def test_unknown_manuscript(self, repository):
        assert await repository.set_status("nope", ManuscriptStatus.ANALYZING) is None

    @pytest.mark.asyncio
    async def test_invalid_transition(self, repository, manuscript_record):
        await repository.add(manuscript_record)
        with pytest.raises(InvalidStatusTransition):
            await repository.set_status("m1", ManuscriptStatus.COMPLETE)
        assert (await repository.get("m1")).status is ManuscriptStatus.UPLOADED


class TestMemoryHistory:
    @pytest.mark.asyncio
    async def test_records_only_real_changes(self):
        repo = MemoryManuscriptRepository()
        await repo.add(ManuscriptRecord(id="m1", user_id="u1", object_key="u1/m1/f.txt"))
        await repo.set_status("m1", ManuscriptStatus.ANALYZING)
        await repo.set_status("m1", ManuscriptStatus.ANALYZING)
        assert repo.history == [("m1", ManuscriptStatus.ANALYZING)]


class TestFactory:
    def test_memory_default(self):
        repo = create_manuscript_repository(load_settings(manuscript_repository="memory"))
        assert isinstance(repo, MemoryManuscriptRepository)

    def test_sqlite(self, tmp_path):
        repo = create_manuscript_repository(
            load_settings(manuscript_repository="sqlite",
                          manuscript_db_path=str(tmp_path / "m.db"))
        )
        assert isinstance(repo, SqliteManuscriptRepository)
        repo.close()
