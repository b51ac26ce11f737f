# src/api/submission.py - v1
"""Job submission: mint report ids, seed progress records, enqueue jobs."""

from __future__ import annotations

import logging
import secrets
import string
from typing import TYPE_CHECKING

from manuscriptai.api.models import AssetRequest, EditorialRequest
from manuscriptai.core.errors import MissingPrerequisite, UnknownReportId
from manuscriptai.core.models import AssetJob, EditorialJob
from manuscriptai.progress.models import AssetProgress, EditorialProgress, ProgressStatus
from manuscriptai.storage.layout import developmental_key, report_id_key

if TYPE_CHECKING:
    from manuscriptai.jobs.base_queue import BaseJobQueue
    from manuscriptai.progress.store import ProgressStore
    from manuscriptai.storage.base_object_store import BaseObjectStore

logger = logging.getLogger(__name__)

REPORT_ID_ALPHABET = string.ascii_lowercase + string.digits
REPORT_ID_LENGTH = 8
REPORT_ID_TTL_SECONDS = 30 * 86_400


def mint_report_id() -> str:
    return "".join(secrets.choice(REPORT_ID_ALPHABET) for _ in range(REPORT_ID_LENGTH))


class SubmissionService:
    """Entry point used by the HTTP layer and the CLI."""

    def __init__(
        self,
        *,
        store: BaseObjectStore,
        progress: ProgressStore,
        analysis_queue: BaseJobQueue,
        asset_queue: BaseJobQueue,
        report_id_ttl_seconds: int = REPORT_ID_TTL_SECONDS,
    ) -> None:
        self._store = store
        self._progress = progress
        self._analysis_queue = analysis_queue
        self._asset_queue = asset_queue
        self._report_id_ttl_seconds = report_id_ttl_seconds

    async def submit_editorial(self, request: EditorialRequest) -> str:
        """Queue an editorial analysis and return its report id."""
        report_id = mint_report_id()
        await self._store.put(
            report_id_key(report_id),
            request.manuscript_key,
            content_type="text/plain",
            ttl_seconds=self._report_id_ttl_seconds,
        )
        await self._progress.write_editorial(
            report_id,
            EditorialProgress(
                status=ProgressStatus.QUEUED,
                progress=0,
                message="Queued for analysis",
                current_step="queued",
            ),
            force=True,
        )
        job = EditorialJob(
            manuscript_key=request.manuscript_key,
            report_id=report_id,
            genre=request.genre,
            style_guide=request.style_guide,
            author_data=request.author_data,
            series_data=request.series_data,
        )
        await self._analysis_queue.send(job.to_json_dict())
        logger.info("Editorial job %s submitted for %s", report_id, request.manuscript_key)
        return report_id

    async def resolve_report_id(self, report_id: str) -> str:
        """Manuscript key for ``report_id``.

        Raises:
            UnknownReportId: No live mapping for the id.
        """
        manuscript_key = await self._store.get_text(report_id_key(report_id))
        if not manuscript_key:
            raise UnknownReportId(f"Unknown report id {report_id!r}")
        return manuscript_key

    async def submit_assets(self, request: AssetRequest) -> None:
        """Queue asset generation for a finished editorial analysis.

        Raises:
            UnknownReportId: The report id is not mapped.
            MissingPrerequisite: The developmental artifact does not exist yet.
        """
        manuscript_key = await self.resolve_report_id(request.report_id)
        if not await self._store.exists(developmental_key(manuscript_key)):
            raise MissingPrerequisite(
                f"Developmental analysis not found for {manuscript_key}"
            )

        await self._progress.write_assets(
            request.report_id,
            AssetProgress(
                status=ProgressStatus.QUEUED,
                progress=0,
                message="Queued for asset generation",
                current_step="queued",
            ),
            force=True,
        )
        job = AssetJob(
            manuscript_key=manuscript_key,
            report_id=request.report_id,
            genre=request.genre,
            author_data=request.author_data,
            series_data=request.series_data,
        )
        await self._asset_queue.send(job.to_json_dict())
        logger.info("Asset job %s submitted for %s", request.report_id, manuscript_key)
