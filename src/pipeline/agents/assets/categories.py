# src/pipeline/agents/assets/categories.py - v1
"""BISAC category recommendations."""

from __future__ import annotations

import logging
import re
from typing import Any

from manuscriptai.llm.models import Temperature
from manuscriptai.pipeline.plugin_kit.base_agent import AssetAgent
from manuscriptai.pipeline.plugin_kit.models import AgentInputs

logger = logging.getLogger(__name__)

BISAC_CODE = re.compile(r"^[A-Z]{3}\d{6}$")

CATEGORY_GROUPS = ("primary", "secondary", "alternative")


def invalid_codes(result: dict[str, Any]) -> list[str]:
    """Codes in any category group that do not look like BISAC codes."""
    bad: list[str] = []
    for group in CATEGORY_GROUPS:
        entries = result.get(group) or []
        if isinstance(entries, dict):
            entries = [entries]
        for entry in entries:
            code = entry.get("code") if isinstance(entry, dict) else entry
            if not isinstance(code, str) or not BISAC_CODE.match(code):
                bad.append(str(code))
    return bad


class CategoriesAgent(AssetAgent):

    @property
    def name(self) -> str:
        return "categories"

    @property
    def description(self) -> str:
        return "Primary, secondary and alternative BISAC categories"

    @property
    def temperature(self) -> Temperature:
        return Temperature.PRECISE

    @property
    def required_fields(self) -> list[str]:
        return ["primary", "secondary"]

    @property
    def artifact_suffix(self) -> str:
        return "categories"

    def prompt_variables(self, inputs: AgentInputs) -> dict[str, Any]:
        return {"genre": inputs.genre, "analysis": self.developmental_summary(inputs)}

    def validate(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        bad = invalid_codes(result)
        if bad:
            logger.warning("Non-BISAC category code(s) kept: %s", ", ".join(bad))
        return result
