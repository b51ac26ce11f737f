# src/pipeline/agents/editorial/copy_editing.py - v1
"""Copy editing agent: mechanics and consistency against a style guide."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from manuscriptai.core.errors import SchemaViolation
from manuscriptai.llm.models import Temperature
from manuscriptai.pipeline.plugin_kit.base_agent import EditorialAgent
from manuscriptai.pipeline.plugin_kit.models import AgentInputs
from manuscriptai.storage.layout import COPY_EDITING_SUFFIX

logger = logging.getLogger(__name__)

STYLE_GUIDES: dict[str, tuple[str, str]] = {
    "chicago": (
        "Chicago Manual of Style",
        "- Use the serial (Oxford) comma\n"
        "- Spell out numbers zero through one hundred\n"
        "- Em dashes without surrounding spaces\n"
        "- Periods and commas inside quotation marks\n"
        "- Lowercase titles unless they directly precede a name",
    ),
    "ap": (
        "AP Stylebook",
        "- No serial comma in simple series\n"
        "- Spell out numbers one through nine, numerals for 10 and up\n"
        "- Spaces around dashes\n"
        "- Abbreviate months with specific dates (Jan. 5)\n"
        "- Capitalize formal titles before names only",
    ),
    "custom": (
        "the author's house style",
        "- Follow whatever conventions the manuscript establishes\n"
        "- Flag only clear errors and internal inconsistencies\n"
        "- Note each convention you infer in consistencyIssues",
    ),
}


class CopyEditingAgent(EditorialAgent):
    """Phase 3 of the editorial pipeline."""

    @property
    def name(self) -> str:
        return "copyEditing"

    @property
    def description(self) -> str:
        return "Grammar, punctuation, spelling and consistency errors"

    @property
    def temperature(self) -> Temperature:
        return Temperature.PRECISE

    @property
    def required_fields(self) -> list[str]:
        return ["overallScore", "errorCount", "errors", "strengths"]

    @property
    def artifact_suffix(self) -> str:
        return COPY_EDITING_SUFFIX

    @property
    def text_window(self) -> int | None:
        return 50_000

    @staticmethod
    def style_guide(key: str) -> tuple[str, str]:
        guide = STYLE_GUIDES.get(key.lower())
        if guide is None:
            logger.warning("Unknown style guide %r, using chicago", key)
            guide = STYLE_GUIDES["chicago"]
        return guide

    def prompt_variables(self, inputs: AgentInputs) -> dict[str, Any]:
        guide_name, rules = self.style_guide(inputs.style_guide)
        return {
            "style_guide_name": guide_name,
            "style_guide_rules": rules,
            "text": inputs.text,
        }

    def validate(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        if not isinstance(result["errors"], list):
            raise SchemaViolation("errors must be a list")
        result["errors"] = [e for e in result["errors"] if isinstance(e, dict)]
        try:
            result["errorCount"] = int(result["errorCount"])
        except (TypeError, ValueError):
            result["errorCount"] = len(result["errors"])
        return result

    def finalize(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        errors = result["errors"]
        by_type = Counter(str(e.get("type", "other")) for e in errors)
        high = sum(1 for e in errors if e.get("severity") == "high")
        return {
            "overallScore": result["overallScore"],
            "errorCount": result["errorCount"],
            "errors": errors,
            "consistencyIssues": result.get("consistencyIssues") or [],
            "strengths": result["strengths"],
            "styleGuide": inputs.style_guide,
            "summary": {
                "errorsByType": dict(by_type),
                "highSeverityCount": high,
            },
        }
