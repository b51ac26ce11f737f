# src/pipeline/agents/audiobook/timing.py - v1
"""Listening time and production schedule.

Per-chapter and total minutes are computed here from the word counts in the
developmental report; the model supplies pacing and scheduling advice only,
and its own totals are overwritten.
"""

from __future__ import annotations

import json
from typing import Any

from manuscriptai.extraction.structure import (
    LISTENING_WORDS_PER_HOUR,
    estimate_listening_minutes,
)
from manuscriptai.llm.models import Temperature
from manuscriptai.pipeline.plugin_kit.base_agent import AudiobookAgent
from manuscriptai.pipeline.plugin_kit.models import AgentInputs

PROMPT_CHAPTERS = 10


def chapter_timings(structure: dict[str, Any]) -> list[dict[str, Any]]:
    """Minutes per chapter; one whole-manuscript entry when none were found."""
    chapters = structure.get("chapters") or []
    if not chapters:
        words = int(structure.get("totalWords") or 0)
        return [{
            "chapter": 1,
            "title": "Full manuscript",
            "wordCount": words,
            "estimatedMinutes": estimate_listening_minutes(words),
        }]
    return [
        {
            "chapter": ch.get("number", index + 1),
            "title": ch.get("title", f"Chapter {index + 1}"),
            "wordCount": int(ch.get("wordCount") or 0),
            "estimatedMinutes": estimate_listening_minutes(int(ch.get("wordCount") or 0)),
        }
        for index, ch in enumerate(chapters)
    ]


class TimingAgent(AudiobookAgent):

    @property
    def name(self) -> str:
        return "audiobookTiming"

    @property
    def description(self) -> str:
        return "Chapter minute estimates and recording schedule"

    @property
    def temperature(self) -> Temperature:
        return Temperature.BALANCED

    @property
    def required_fields(self) -> list[str]:
        return ["overallTiming", "pacingStrategy", "productionSchedule"]

    @property
    def artifact_suffix(self) -> str:
        return "audiobook-timing"

    def prompt_variables(self, inputs: AgentInputs) -> dict[str, Any]:
        structure = self.developmental_of(inputs).get("structure") or {}
        words = self.total_words(inputs)
        return {
            "genre": inputs.genre,
            "total_words": words,
            "estimated_minutes": estimate_listening_minutes(words),
            "words_per_hour": LISTENING_WORDS_PER_HOUR,
            "chapters": json.dumps(chapter_timings(structure)[:PROMPT_CHAPTERS], indent=2),
        }

    def finalize(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        structure = self.developmental_of(inputs).get("structure") or {}
        minutes = estimate_listening_minutes(self.total_words(inputs))

        overall = result["overallTiming"]
        overall = dict(overall) if isinstance(overall, dict) else {}
        overall["totalListeningMinutes"] = minutes
        overall["estimatedHours"] = round(minutes / 60, 2)
        overall["wordsPerHour"] = LISTENING_WORDS_PER_HOUR
        result["overallTiming"] = overall
        result["chapterTimings"] = chapter_timings(structure)
        return result
