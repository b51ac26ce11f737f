# src/pipeline/agents/assets/cover_brief.py - v1
"""Cover design brief with image-generation prompts."""

from __future__ import annotations

from typing import Any

from manuscriptai.llm.models import Temperature
from manuscriptai.pipeline.plugin_kit.base_agent import AssetAgent
from manuscriptai.pipeline.plugin_kit.models import AgentInputs


class CoverBriefAgent(AssetAgent):

    @property
    def name(self) -> str:
        return "coverBrief"

    @property
    def description(self) -> str:
        return "Visual concept, palette, typography and AI art prompts"

    @property
    def temperature(self) -> Temperature:
        return Temperature.CREATIVE

    @property
    def required_fields(self) -> list[str]:
        return ["visualConcept", "colorPalette", "typography", "aiArtPrompts"]

    @property
    def artifact_suffix(self) -> str:
        return "cover-brief"

    @property
    def text_window(self) -> int | None:
        return 5000

    def prompt_variables(self, inputs: AgentInputs) -> dict[str, Any]:
        return {
            "genre": inputs.genre,
            "analysis": self.developmental_summary(inputs),
            "excerpt": inputs.text,
        }
