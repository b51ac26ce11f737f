# src/pipeline/agents/assets/book_description.py - v1
"""Retail book description in short, medium and long variants."""

from __future__ import annotations

import logging
from typing import Any

from manuscriptai.llm.models import Temperature
from manuscriptai.pipeline.plugin_kit.base_agent import AssetAgent
from manuscriptai.pipeline.plugin_kit.models import AgentInputs

logger = logging.getLogger(__name__)

MAX_LONG_CHARS = 4000


class BookDescriptionAgent(AssetAgent):

    @property
    def name(self) -> str:
        return "bookDescription"

    @property
    def description(self) -> str:
        return "Short, medium and long retail descriptions"

    @property
    def temperature(self) -> Temperature:
        return Temperature.BALANCED

    @property
    def required_fields(self) -> list[str]:
        return ["short", "medium", "long"]

    @property
    def artifact_suffix(self) -> str:
        return "book-description"

    @property
    def text_window(self) -> int | None:
        return 5000

    def prompt_variables(self, inputs: AgentInputs) -> dict[str, Any]:
        return {
            "genre": inputs.genre,
            "analysis": self.developmental_summary(inputs),
            "excerpt": inputs.text,
        }

    def validate(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        long = str(result["long"])
        if len(long) > MAX_LONG_CHARS:
            logger.warning(
                "Long description is %d chars, truncating to %d",
                len(long), MAX_LONG_CHARS,
            )
            long = long[: MAX_LONG_CHARS - 3] + "..."
        result["long"] = long
        return result
