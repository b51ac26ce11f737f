# src/manuscripts/sqlite_repository.py - v1
"""SQLite-backed manuscript repository (MANUSCRIPT_REPOSITORY=sqlite).

Uses stdlib sqlite3 - no external dependency.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from pathlib import Path

from manuscriptai.core.models import ManuscriptRecord, ManuscriptStatus, utc_now
from manuscriptai.manuscripts.base_repository import BaseManuscriptRepository

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS manuscripts (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    title TEXT NOT NULL DEFAULT '',
    genre TEXT NOT NULL DEFAULT 'general',
    object_key TEXT NOT NULL,
    total_size INTEGER NOT NULL DEFAULT 0,
    status TEXT NOT NULL DEFAULT 'uploaded',
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_manuscripts_user ON manuscripts(user_id);
"""

_COLUMNS = (
    "id, user_id, title, genre, object_key, total_size, status, created_at, updated_at"
)


class SqliteManuscriptRepository(BaseManuscriptRepository):
    """Manuscript rows in a local SQLite database."""

    def __init__(self, db_path: Path | str) -> None:
        path = str(db_path)
        if path != ":memory:":
            resolved = Path(path).expanduser()
            resolved.parent.mkdir(parents=True, exist_ok=True)
            path = str(resolved)
        self._conn = sqlite3.connect(path)
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    async def get(self, manuscript_id: str) -> ManuscriptRecord | None:
        cursor = self._conn.execute(
            f"SELECT {_COLUMNS} FROM manuscripts WHERE id = ?", (manuscript_id,)
        )
        row = cursor.fetchone()
        if row is None:
            return None
        return ManuscriptRecord(
            id=row[0],
            user_id=row[1],
            title=row[2],
            genre=row[3],
            object_key=row[4],
            total_size=row[5],
            status=ManuscriptStatus(row[6]),
            created_at=datetime.fromisoformat(row[7]),
            updated_at=datetime.fromisoformat(row[8]),
        )

    async def add(self, record: ManuscriptRecord) -> None:
        self._conn.execute(
            f"INSERT OR REPLACE INTO manuscripts ({_COLUMNS}) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                record.id,
                record.user_id,
                record.title,
                record.genre,
                record.object_key,
                record.total_size,
                record.status.value,
                record.created_at.isoformat(),
                record.updated_at.isoformat(),
            ),
        )
        self._conn.commit()

    async def _store_status(
        self, manuscript_id: str, status: ManuscriptStatus
    ) -> None:
        self._conn.execute(
            "UPDATE manuscripts SET status = ?, updated_at = ? WHERE id = ?",
            (status.value, utc_now().isoformat(), manuscript_id),
        )
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()
