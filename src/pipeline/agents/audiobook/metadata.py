# src/pipeline/agents/audiobook/metadata.py - v1
"""ACX/Audible metadata package.

Reads the book description, categories and keywords artifacts when they are
available. Any of them may be absent; the prompt says so and the model falls
back to the developmental report.
"""

from __future__ import annotations

import json
from typing import Any

from manuscriptai.llm.models import Temperature
from manuscriptai.pipeline.plugin_kit.base_agent import AudiobookAgent
from manuscriptai.pipeline.plugin_kit.models import AgentInputs

NOT_AVAILABLE = "Not available"


def _related_text(value: dict[str, Any] | None, limit: int = 3000) -> str:
    if not value:
        return NOT_AVAILABLE
    return json.dumps(value, indent=2, default=str)[:limit]


class MetadataAgent(AudiobookAgent):

    @property
    def name(self) -> str:
        return "audiobookMetadata"

    @property
    def description(self) -> str:
        return "Audiobook distribution metadata"

    @property
    def temperature(self) -> Temperature:
        return Temperature.BALANCED

    @property
    def required_fields(self) -> list[str]:
        return ["titleMetadata", "publisherSummary", "categories", "audiobookSpecs"]

    @property
    def artifact_suffix(self) -> str:
        return "audiobook-metadata"

    @property
    def dependencies(self) -> list[str]:
        return ["bookDescription", "categories", "keywords"]

    def prompt_variables(self, inputs: AgentInputs) -> dict[str, Any]:
        return {
            "genre": inputs.genre,
            "analysis": self.developmental_summary(inputs, limit=4000),
            "book_description": _related_text(inputs.related.get("bookDescription")),
            "categories": _related_text(inputs.related.get("categories")),
            "keywords": _related_text(inputs.related.get("keywords")),
        }

    def finalize(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        result["sourcesUsed"] = [
            name for name in self.dependencies if inputs.related.get(name)
        ]
        return result
