# src/pipeline/plugin_kit/models.py - v1
"""Agent plugin models: AgentInputs, AgentRun."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from manuscriptai.extraction.structure import ManuscriptStructure


class AgentInputs(BaseModel):
    """Everything an agent may draw on when building its prompt.

    ``text`` and ``structure`` are filled in by the executor for agents that
    declare a text window.
    """

    manuscript_key: str
    report_id: str
    genre: str = "general"
    style_guide: str = "chicago"
    text: str = ""
    structure: ManuscriptStructure | None = None
    developmental: dict[str, Any] | None = None
    author_data: dict[str, Any] = Field(default_factory=dict)
    series_data: dict[str, Any] = Field(default_factory=dict)
    related: dict[str, dict[str, Any] | None] = Field(default_factory=dict)


class AgentRun(BaseModel):
    """Result of one executed agent."""

    agent: str
    artifact_key: str
    artifact: dict[str, Any]
    execution_time_ms: int
    storage_retries: int = 0
