# src/api/http.py - v1
"""Minimal HTTP surface: progress polling, bundle download, job submission.

Records are returned exactly as stored (camelCase). Authentication belongs to
the outer HTTP layer that fronts this app.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, HTTPException, Query, status
from fastapi.responses import JSONResponse

from manuscriptai.api.models import AssetRequest, EditorialRequest, SubmissionResponse
from manuscriptai.core.errors import MissingPrerequisite, UnknownReportId
from manuscriptai.storage.layout import asset_status_key, bundle_key, editorial_status_key
from manuscriptai.version import __version__

if TYPE_CHECKING:
    from manuscriptai.pipeline.services import PipelineServices

logger = logging.getLogger(__name__)


def create_app(services: PipelineServices) -> FastAPI:
    """Build the FastAPI app over an already wired set of services."""
    app = FastAPI(title="manuscriptai", version=__version__)
    store = services.store
    submission = services.submission

    @app.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/analyze/status", tags=["progress"])
    async def analyze_status(report_id: str = Query(alias="reportId")) -> Any:
        record = await store.get_json(editorial_status_key(report_id))
        if record is None:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND, content={"status": "not_started"}
            )
        return record

    @app.get("/assets/status", tags=["progress"])
    async def assets_status(report_id: str = Query(alias="reportId")) -> Any:
        record = await store.get_json(asset_status_key(report_id))
        if record is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Asset generation not started"
            )
        return record

    @app.get("/assets", tags=["assets"])
    async def asset_bundle(report_id: str = Query(alias="id")) -> Any:
        try:
            manuscript_key = await submission.resolve_report_id(report_id)
        except UnknownReportId as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Report not found"
            ) from exc
        bundle = await store.get_json(bundle_key(manuscript_key))
        if bundle is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Assets not generated yet"
            )
        return bundle

    @app.post(
        "/analyze",
        response_model=SubmissionResponse,
        response_model_by_alias=True,
        status_code=status.HTTP_202_ACCEPTED,
        tags=["jobs"],
    )
    async def submit_analysis(request: EditorialRequest) -> SubmissionResponse:
        report_id = await submission.submit_editorial(request)
        return SubmissionResponse(report_id=report_id)

    @app.post(
        "/assets",
        response_model=SubmissionResponse,
        response_model_by_alias=True,
        status_code=status.HTTP_202_ACCEPTED,
        tags=["jobs"],
    )
    async def submit_assets(request: AssetRequest) -> SubmissionResponse:
        try:
            await submission.submit_assets(request)
        except UnknownReportId as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Report not found"
            ) from exc
        except MissingPrerequisite as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail=str(exc)
            ) from exc
        return SubmissionResponse(report_id=request.report_id)

    logger.debug("HTTP app created")
    return app
