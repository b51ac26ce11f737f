# src/pipeline/notifier.py - v1
"""Completion notifications sent once a job reaches a terminal state."""

from __future__ import annotations

import logging
from typing import Protocol

from manuscriptai.core.models import AssetJob, EditorialJob
from manuscriptai.progress.models import ProgressStatus

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Delivery channel for completion notices (e-mail, webhook, ...)."""

    async def editorial_complete(self, job: EditorialJob) -> None: ...

    async def assets_complete(
        self, job: AssetJob, status: ProgressStatus, error_count: int
    ) -> None: ...


class LoggingNotifier:
    """Default notifier: writes the notice to the log."""

    async def editorial_complete(self, job: EditorialJob) -> None:
        logger.info(
            "Notify: editorial analysis %s ready for %s",
            job.report_id, job.manuscript_key,
        )

    async def assets_complete(
        self, job: AssetJob, status: ProgressStatus, error_count: int
    ) -> None:
        logger.info(
            "Notify: assets %s %s for %s (%d error(s))",
            job.report_id, status.value, job.manuscript_key, error_count,
        )
