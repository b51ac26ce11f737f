# src/progress/models.py - v1
"""Progress records polled by clients.

Two flavours share one shape: the editorial record and the asset record,
which adds a per-agent sub-status map and, once finished, the artifacts.
Records are stored and served with camelCase keys.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field

from manuscriptai.core.models import CamelModel, utc_now


class ProgressStatus(str, Enum):
    QUEUED = "queued"
    PROCESSING = "processing"
    PARTIAL = "partial"
    COMPLETE = "complete"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset(
    {ProgressStatus.PARTIAL, ProgressStatus.COMPLETE, ProgressStatus.FAILED}
)


class AgentState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETE = "complete"
    FAILED = "failed"


class AgentSubStatus(CamelModel):
    status: AgentState = AgentState.PENDING
    progress: int = Field(default=0, ge=0, le=100)
    error: str | None = None


class AssetError(CamelModel):
    """One failed asset agent in the combined bundle."""

    type: str
    error: str


class EditorialProgress(CamelModel):
    status: ProgressStatus
    progress: int = Field(ge=0, le=100)
    message: str = ""
    current_step: str = ""
    timestamp: datetime = Field(default_factory=utc_now)
    completed_at: datetime | None = None
    error: str | None = None
    report_id: str | None = None


class AssetProgress(EditorialProgress):
    agents: dict[str, AgentSubStatus] = Field(default_factory=dict)
    assets: dict[str, Any] | None = None
    errors: list[AssetError] = Field(default_factory=list)
