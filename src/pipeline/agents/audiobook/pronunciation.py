# src/pipeline/agents/audiobook/pronunciation.py - v1
"""Phonetic guide for names, places and invented terms."""

from __future__ import annotations

from typing import Any

from manuscriptai.llm.models import Temperature
from manuscriptai.pipeline.plugin_kit.base_agent import AudiobookAgent
from manuscriptai.pipeline.plugin_kit.models import AgentInputs


class PronunciationAgent(AudiobookAgent):

    @property
    def name(self) -> str:
        return "audiobookPronunciation"

    @property
    def description(self) -> str:
        return "Pronunciation guide for the narrator"

    @property
    def temperature(self) -> Temperature:
        return Temperature.PRECISE

    @property
    def required_fields(self) -> list[str]:
        return ["characterNames", "pronunciationKey"]

    @property
    def artifact_suffix(self) -> str:
        return "audiobook-pronunciation"

    @property
    def text_window(self) -> int | None:
        return 50_000

    def prompt_variables(self, inputs: AgentInputs) -> dict[str, Any]:
        return {"genre": inputs.genre, "text": inputs.text}
