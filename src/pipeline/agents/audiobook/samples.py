# src/pipeline/agents/audiobook/samples.py - v1
"""Retail and audition sample passages."""

from __future__ import annotations

from typing import Any

from manuscriptai.core.errors import SchemaViolation
from manuscriptai.llm.models import Temperature
from manuscriptai.pipeline.plugin_kit.base_agent import AudiobookAgent
from manuscriptai.pipeline.plugin_kit.models import AgentInputs


class SamplesAgent(AudiobookAgent):

    @property
    def name(self) -> str:
        return "audiobookSamples"

    @property
    def description(self) -> str:
        return "Retail sample and narrator audition passages"

    @property
    def temperature(self) -> Temperature:
        return Temperature.BALANCED

    @property
    def required_fields(self) -> list[str]:
        return ["retailAudioSample", "auditionSamples", "selectionStrategy"]

    @property
    def artifact_suffix(self) -> str:
        return "audiobook-samples"

    @property
    def text_window(self) -> int | None:
        return 40_000

    def prompt_variables(self, inputs: AgentInputs) -> dict[str, Any]:
        return {"genre": inputs.genre, "text": inputs.text}

    def validate(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        auditions = result["auditionSamples"]
        if not isinstance(auditions, list) or not auditions:
            raise SchemaViolation("auditionSamples must list at least one passage")
        return result
