# src/jobs/models.py - v1
"""Queue message envelope."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from manuscriptai.core.models import utc_now


class QueueMessage(BaseModel):
    """A job body plus delivery bookkeeping.

    ``attempts`` counts failed deliveries so far; ``receipt`` is the
    backend's handle for acknowledging this delivery and is never serialised.
    """

    id: str
    body: dict[str, Any]
    attempts: int = 0
    enqueued_at: datetime = Field(default_factory=utc_now)
    last_error: str | None = None
    receipt: str | None = Field(default=None, exclude=True)
