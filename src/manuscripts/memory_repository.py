# src/manuscripts/memory_repository.py - v1
"""In-memory manuscript repository for tests and single-process runs."""

from __future__ import annotations

from manuscriptai.core.models import ManuscriptRecord, ManuscriptStatus, utc_now
from manuscriptai.manuscripts.base_repository import BaseManuscriptRepository


class MemoryManuscriptRepository(BaseManuscriptRepository):
    def __init__(self) -> None:
        self._rows: dict[str, ManuscriptRecord] = {}
        self.history: list[tuple[str, ManuscriptStatus]] = []

    async def get(self, manuscript_id: str) -> ManuscriptRecord | None:
        row = self._rows.get(manuscript_id)
        return row.model_copy() if row is not None else None

    async def add(self, record: ManuscriptRecord) -> None:
        self._rows[record.id] = record.model_copy()

    async def _store_status(
        self, manuscript_id: str, status: ManuscriptStatus
    ) -> None:
        row = self._rows[manuscript_id]
        self._rows[manuscript_id] = row.model_copy(
            update={"status": status, "updated_at": utc_now()}
        )
        self.history.append((manuscript_id, status))
