# src/manuscripts/base_repository.py - v1
"""Manuscript status repository interface.

The pipeline owns only the ``status`` column. Transitions follow the
lifecycle ``uploaded -> analyzing -> complete | failed``; a finished
manuscript may go back to ``analyzing`` only through re-analysis.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from manuscriptai.core.errors import InvalidStatusTransition
from manuscriptai.core.models import ManuscriptRecord, ManuscriptStatus

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[ManuscriptStatus, frozenset[ManuscriptStatus]] = {
    ManuscriptStatus.UPLOADED: frozenset({ManuscriptStatus.ANALYZING}),
    ManuscriptStatus.ANALYZING: frozenset(
        {ManuscriptStatus.COMPLETE, ManuscriptStatus.FAILED}
    ),
    # Re-analysis (including queue redelivery of a failed job)
    ManuscriptStatus.COMPLETE: frozenset({ManuscriptStatus.ANALYZING}),
    ManuscriptStatus.FAILED: frozenset({ManuscriptStatus.ANALYZING}),
}


def check_transition(current: ManuscriptStatus, target: ManuscriptStatus) -> bool:
    """Return True if a write is needed, False for a same-state no-op.

    Raises:
        InvalidStatusTransition: If the lifecycle forbids the change.
    """
    if current == target:
        return False
    if target not in ALLOWED_TRANSITIONS[current]:
        raise InvalidStatusTransition(
            f"Manuscript status cannot go from {current.value} to {target.value}"
        )
    return True


class BaseManuscriptRepository(ABC):
    """Storage for manuscript rows."""

    @abstractmethod
    async def get(self, manuscript_id: str) -> ManuscriptRecord | None:
        """Fetch a manuscript row."""

    @abstractmethod
    async def add(self, record: ManuscriptRecord) -> None:
        """Insert or replace a row (normally done by the upload flow)."""

    @abstractmethod
    async def _store_status(
        self, manuscript_id: str, status: ManuscriptStatus
    ) -> None:
        """Persist a validated status change."""

    async def set_status(
        self, manuscript_id: str, status: ManuscriptStatus
    ) -> ManuscriptRecord | None:
        """Move a manuscript to ``status``.

        Returns the updated record, or None when the manuscript is unknown.

        Raises:
            InvalidStatusTransition: If the lifecycle forbids the change.
        """
        record = await self.get(manuscript_id)
        if record is None:
            logger.warning("Manuscript %s not found; status %s not recorded",
                           manuscript_id, status.value)
            return None
        if check_transition(record.status, status):
            await self._store_status(manuscript_id, status)
            logger.info("Manuscript %s: %s -> %s",
                        manuscript_id, record.status.value, status.value)
        return await self.get(manuscript_id)
