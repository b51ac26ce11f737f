# src/core/models.py - v1
"""Job and manuscript models shared across modules."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Model serialised with camelCase keys, as stored and served."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# === MANUSCRIPTS ===


class ManuscriptStatus(str, Enum):
    UPLOADED = "uploaded"
    ANALYZING = "analyzing"
    COMPLETE = "complete"
    FAILED = "failed"


class ManuscriptRecord(BaseModel):
    """Database row for an uploaded manuscript. Only ``status`` is ours."""

    id: str
    user_id: str
    title: str = ""
    genre: str = "general"
    object_key: str
    total_size: int = 0
    status: ManuscriptStatus = ManuscriptStatus.UPLOADED
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ManuscriptKey(BaseModel):
    """Parsed ``userId/manuscriptId/filename`` object key."""

    raw: str
    user_id: str | None = None
    manuscript_id: str | None = None
    filename: str | None = None

    @classmethod
    def parse(cls, key: str) -> ManuscriptKey:
        parts = key.split("/")
        if len(parts) >= 3:
            return cls(
                raw=key,
                user_id=parts[0],
                manuscript_id=parts[1],
                filename="/".join(parts[2:]),
            )
        return cls(raw=key, filename=parts[-1])


# === JOBS ===


class EditorialJob(CamelModel):
    """Message body on the analysis queue."""

    manuscript_key: str
    report_id: str
    genre: str = "general"
    style_guide: str = "chicago"
    author_data: dict[str, Any] = Field(default_factory=dict)
    series_data: dict[str, Any] = Field(default_factory=dict)


class AssetJob(CamelModel):
    """Message body on the asset queue."""

    manuscript_key: str
    report_id: str
    genre: str = "general"
    author_data: dict[str, Any] = Field(default_factory=dict)
    series_data: dict[str, Any] = Field(default_factory=dict)
