# src/progress/store.py - v1
"""Progress records in the object store, keyed by report id.

Writes go through two guards so that a polling client only ever sees a
record move forward:

- a terminal record (complete, partial, failed) is never replaced by a
  non-terminal one;
- the progress percentage never decreases.

Each report id has a single writer (its orchestrator), so the
read-then-write below needs no lock.
"""

from __future__ import annotations

import logging
from typing import TypeVar

from manuscriptai.progress.models import AssetProgress, EditorialProgress
from manuscriptai.storage.base_object_store import BaseObjectStore
from manuscriptai.storage.layout import asset_status_key, editorial_status_key

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 7 * 86_400

RecordT = TypeVar("RecordT", bound=EditorialProgress)


class ProgressStore:
    """Read and write editorial and asset progress records."""

    def __init__(
        self, store: BaseObjectStore, ttl_seconds: int = DEFAULT_TTL_SECONDS
    ) -> None:
        self._store = store
        self._ttl_seconds = ttl_seconds

    async def get_editorial(self, report_id: str) -> EditorialProgress | None:
        return await self._read(editorial_status_key(report_id), EditorialProgress)

    async def get_assets(self, report_id: str) -> AssetProgress | None:
        return await self._read(asset_status_key(report_id), AssetProgress)

    async def write_editorial(
        self, report_id: str, record: EditorialProgress, force: bool = False
    ) -> EditorialProgress:
        record.report_id = report_id
        return await self._write(
            editorial_status_key(report_id), record, EditorialProgress, force
        )

    async def write_assets(
        self, report_id: str, record: AssetProgress, force: bool = False
    ) -> AssetProgress:
        record.report_id = report_id
        return await self._write(asset_status_key(report_id), record, AssetProgress, force)

    async def _read(self, key: str, model: type[RecordT]) -> RecordT | None:
        data = await self._store.get_json(key)
        if data is None:
            return None
        return model.model_validate(data)

    async def _write(
        self, key: str, record: RecordT, model: type[RecordT], force: bool
    ) -> RecordT:
        """Apply the guards and persist. Returns the record now stored.

        ``force`` skips the guards; only explicit (re)submission uses it.
        """
        if not force:
            current = await self._read(key, model)
            if current is not None:
                if current.status.is_terminal and not record.status.is_terminal:
                    logger.debug(
                        "Dropping %s write over terminal %s record at %s",
                        record.status.value, current.status.value, key,
                    )
                    return current
                if record.progress < current.progress:
                    record = record.model_copy(update={"progress": current.progress})

        await self._store.put_json(
            key, record.to_json_dict(), ttl_seconds=self._ttl_seconds
        )
        return record
