# src/pipeline/agents/editorial/line_editing.py - v1
"""Line editing agent: sentence-level prose critique."""

from __future__ import annotations

from collections import Counter
from typing import Any

from manuscriptai.core.errors import SchemaViolation
from manuscriptai.llm.models import Temperature
from manuscriptai.pipeline.plugin_kit.base_agent import EditorialAgent
from manuscriptai.pipeline.plugin_kit.models import AgentInputs
from manuscriptai.storage.layout import LINE_EDITING_SUFFIX

SEVERITY_ORDER = {"high": 0, "medium": 1, "low": 2}

MAX_TOP_SUGGESTIONS = 20


def assessment_summary(score: float) -> str:
    if score >= 8:
        return "Strong prose with minimal issues. Focus on fine-tuning."
    if score >= 6:
        return "Solid foundation with room for improvement in several areas."
    return "Prose needs significant revision to meet publishing standards."


class LineEditingAgent(EditorialAgent):
    """Phase 2 of the editorial pipeline."""

    @property
    def name(self) -> str:
        return "lineEditing"

    @property
    def description(self) -> str:
        return "Sentence-level prose issues with concrete rewrites"

    @property
    def temperature(self) -> Temperature:
        return Temperature.PRECISE

    @property
    def required_fields(self) -> list[str]:
        return ["overallScore", "issues", "strengths", "readabilityMetrics"]

    @property
    def artifact_suffix(self) -> str:
        return LINE_EDITING_SUFFIX

    @property
    def text_window(self) -> int | None:
        return 20_000

    def prompt_variables(self, inputs: AgentInputs) -> dict[str, Any]:
        return {"genre": inputs.genre, "text": inputs.text}

    def validate(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        if not isinstance(result["issues"], list):
            raise SchemaViolation("issues must be a list")
        try:
            result["overallScore"] = float(result["overallScore"])
        except (TypeError, ValueError) as e:
            raise SchemaViolation("overallScore is not numeric") from e
        result["issues"] = [i for i in result["issues"] if isinstance(i, dict)]
        return result

    def finalize(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        issues: list[dict[str, Any]] = result["issues"]
        type_counts = Counter(str(i.get("type", "other")) for i in issues)
        severity_counts = Counter(str(i.get("severity", "low")) for i in issues)

        prioritized = sorted(
            issues,
            key=lambda i: SEVERITY_ORDER.get(str(i.get("severity", "low")), 3),
        )

        strengths = result["strengths"] if isinstance(result["strengths"], list) else []
        score = result["overallScore"]
        return {
            "overallAssessment": {
                "overallProseScore": score,
                "summary": assessment_summary(score),
                "keyStrengths": strengths[:5],
                "keyWeaknesses": [t for t, _ in type_counts.most_common(3)],
            },
            "issues": issues,
            "strengths": strengths,
            "readabilityMetrics": result["readabilityMetrics"],
            "patterns": {
                "issueTypeCounts": dict(type_counts),
                "severityCounts": dict(severity_counts),
                "totalIssues": len(issues),
            },
            "topSuggestions": prioritized[:MAX_TOP_SUGGESTIONS],
            "genre": inputs.genre,
        }
