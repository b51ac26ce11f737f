# src/pipeline/agents/audiobook/narration.py - v1
"""Narrator brief and character voice list."""

from __future__ import annotations

from typing import Any

from manuscriptai.extraction.structure import estimate_listening_minutes
from manuscriptai.llm.models import Temperature
from manuscriptai.pipeline.plugin_kit.base_agent import AudiobookAgent
from manuscriptai.pipeline.plugin_kit.models import AgentInputs


def estimated_runtime(total_words: int) -> dict[str, Any]:
    minutes = estimate_listening_minutes(total_words)
    return {
        "totalWords": total_words,
        "estimatedMinutes": minutes,
        "estimatedHours": round(minutes / 60, 2),
    }


class NarrationAgent(AudiobookAgent):

    @property
    def name(self) -> str:
        return "audiobookNarration"

    @property
    def description(self) -> str:
        return "Narration style, character voices and technical specs"

    @property
    def temperature(self) -> Temperature:
        return Temperature.BALANCED

    @property
    def required_fields(self) -> list[str]:
        return ["narrationStyle", "characterVoices", "technicalSpecs"]

    @property
    def artifact_suffix(self) -> str:
        return "audiobook-narration"

    def prompt_variables(self, inputs: AgentInputs) -> dict[str, Any]:
        runtime = estimated_runtime(self.total_words(inputs))
        return {
            "genre": inputs.genre,
            "analysis": self.developmental_summary(inputs),
            "estimated_hours": runtime["estimatedHours"],
            "total_words": runtime["totalWords"],
        }

    def finalize(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        result["estimatedRuntime"] = estimated_runtime(self.total_words(inputs))
        return result
