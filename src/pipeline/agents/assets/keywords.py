# src/pipeline/agents/assets/keywords.py - v1
"""Seven KDP keyword phrases."""

from __future__ import annotations

from typing import Any

from manuscriptai.core.errors import SchemaViolation
from manuscriptai.llm.models import Temperature
from manuscriptai.pipeline.plugin_kit.base_agent import AssetAgent
from manuscriptai.pipeline.plugin_kit.models import AgentInputs

KEYWORD_COUNT = 7
MAX_KEYWORD_CHARS = 50


class KeywordsAgent(AssetAgent):

    @property
    def name(self) -> str:
        return "keywords"

    @property
    def description(self) -> str:
        return "Seven search keyword phrases for the KDP keyword slots"

    @property
    def temperature(self) -> Temperature:
        return Temperature.PRECISE

    @property
    def required_fields(self) -> list[str]:
        return ["keywords"]

    @property
    def artifact_suffix(self) -> str:
        return "keywords"

    def prompt_variables(self, inputs: AgentInputs) -> dict[str, Any]:
        return {"genre": inputs.genre, "analysis": self.developmental_summary(inputs)}

    def validate(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        keywords = result["keywords"]
        if not isinstance(keywords, list):
            raise SchemaViolation("keywords must be a list")

        keywords = [str(k).strip()[:MAX_KEYWORD_CHARS] for k in keywords]
        if len(keywords) != KEYWORD_COUNT:
            raise SchemaViolation(
                f"expected {KEYWORD_COUNT} keywords, got {len(keywords)}"
            )
        result["keywords"] = keywords
        return result
