# src/api/models.py - v1
"""Submission request models, accepted in camelCase or snake_case."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from manuscriptai.core.models import CamelModel


class EditorialRequest(CamelModel):
    """Start an editorial analysis of an uploaded manuscript."""

    manuscript_key: str = Field(min_length=1)
    genre: str = "general"
    style_guide: str = "chicago"
    author_data: dict[str, Any] = Field(default_factory=dict)
    series_data: dict[str, Any] = Field(default_factory=dict)


class AssetRequest(CamelModel):
    """Generate assets for a finished analysis."""

    report_id: str = Field(min_length=1)
    genre: str = "general"
    author_data: dict[str, Any] = Field(default_factory=dict)
    series_data: dict[str, Any] = Field(default_factory=dict)


class SubmissionResponse(CamelModel):
    report_id: str
    status: str = "queued"
