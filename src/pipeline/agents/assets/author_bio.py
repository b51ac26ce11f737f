# src/pipeline/agents/assets/author_bio.py - v1
"""Author biography in three lengths."""

from __future__ import annotations

import json
from typing import Any

from manuscriptai.llm.models import Temperature
from manuscriptai.pipeline.plugin_kit.base_agent import AssetAgent
from manuscriptai.pipeline.plugin_kit.models import AgentInputs


def author_info(author_data: dict[str, Any]) -> str:
    """Author details for a prompt, or a note that none were given."""
    if not author_data:
        return "No author details provided. Keep the bio general and leave placeholders like [Author Name]."
    return json.dumps(author_data, indent=2, default=str)


class AuthorBioAgent(AssetAgent):

    @property
    def name(self) -> str:
        return "authorBio"

    @property
    def description(self) -> str:
        return "Short, medium and long author bios"

    @property
    def temperature(self) -> Temperature:
        return Temperature.CREATIVE

    @property
    def required_fields(self) -> list[str]:
        return ["short", "medium", "long"]

    @property
    def artifact_suffix(self) -> str:
        return "author-bio"

    def prompt_variables(self, inputs: AgentInputs) -> dict[str, Any]:
        return {
            "genre": inputs.genre,
            "author_info": author_info(inputs.author_data),
            "analysis": self.developmental_summary(inputs, limit=3000),
        }

    def finalize(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        result["authorName"] = inputs.author_data.get("name")
        return result
