# src/pipeline/agents/editorial/developmental.py - v1
"""Developmental editing agent.

Big-picture critique of structure, pacing, characters, plot, voice and genre
fit. Runs first; every asset agent reads its artifact. The stored artifact
joins the model's critique with the chapter statistics computed locally and a
short list of rule-based recommendations.
"""

from __future__ import annotations

import logging
from typing import Any

from manuscriptai.core.errors import SchemaViolation
from manuscriptai.extraction.text import balanced_window
from manuscriptai.llm.models import Temperature
from manuscriptai.pipeline.plugin_kit.base_agent import EditorialAgent
from manuscriptai.pipeline.plugin_kit.models import AgentInputs
from manuscriptai.storage.layout import DEVELOPMENTAL_SUFFIX

logger = logging.getLogger(__name__)

SCORED_SECTIONS = ("structure", "pacing", "characters", "plot", "voice", "genreFit")

_STRUCTURE_STATS = ("totalWords", "chapterCount", "avgChapterLength", "chapters")


class DevelopmentalAgent(EditorialAgent):
    """Phase 1 of the editorial pipeline."""

    @property
    def name(self) -> str:
        return "developmental"

    @property
    def description(self) -> str:
        return "Structure, character, plot and market critique of the whole manuscript"

    @property
    def temperature(self) -> Temperature:
        return Temperature.BALANCED

    @property
    def required_fields(self) -> list[str]:
        return [
            "overallScore",
            "plot",
            "characters",
            "pacing",
            "topPriorities",
            "marketability",
        ]

    @property
    def artifact_suffix(self) -> str:
        return DEVELOPMENTAL_SUFFIX

    @property
    def text_window(self) -> int | None:
        return 30_000

    def select_text(self, text: str) -> str:
        return balanced_window(text, self.text_window or len(text))

    def prompt_variables(self, inputs: AgentInputs) -> dict[str, Any]:
        structure = inputs.structure
        return {
            "genre": inputs.genre,
            "total_words": structure.total_words if structure else 0,
            "chapter_count": structure.chapter_count if structure else 0,
            "avg_chapter_length": structure.avg_chapter_length if structure else 0,
            "text": inputs.text,
        }

    def validate(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        try:
            result["overallScore"] = float(result["overallScore"])
        except (TypeError, ValueError) as e:
            raise SchemaViolation(
                f"overallScore is not numeric: {result['overallScore']!r}"
            ) from e

        # A bare number is accepted as the section score.
        for section in SCORED_SECTIONS:
            value = result.get(section)
            if isinstance(value, (int, float)):
                result[section] = {"score": value}

        if not isinstance(result["topPriorities"], list):
            raise SchemaViolation("topPriorities must be a list")
        return result

    def finalize(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        analysis = dict(result)
        comp_titles = analysis.pop("compTitles", None) or []

        structure = inputs.structure.to_json_dict() if inputs.structure else {}
        stats = {k: structure[k] for k in _STRUCTURE_STATS if k in structure}
        model_structure = analysis.get("structure")
        merged = dict(model_structure) if isinstance(model_structure, dict) else {}
        merged.update(stats)
        analysis["structure"] = merged

        recommendations = build_recommendations(analysis, comp_titles)
        logger.info(
            "Developmental analysis: score %s, %d chapter(s), %d recommendation(s)",
            analysis.get("overallScore"),
            structure.get("chapterCount", 0),
            len(recommendations),
        )
        return {
            "analysis": analysis,
            "structure": structure,
            "compTitles": comp_titles,
            "recommendations": recommendations,
        }


def _score(section: Any) -> float | None:
    if not isinstance(section, dict):
        return None
    try:
        return float(section.get("score"))
    except (TypeError, ValueError):
        return None


def build_recommendations(
    analysis: dict[str, Any], comp_titles: list[Any]
) -> list[dict[str, str]]:
    """Priority recommendations derived from the section scores."""
    recommendations: list[dict[str, str]] = []

    structure_score = _score(analysis.get("structure"))
    if structure_score is not None and structure_score < 6:
        recommendations.append({
            "priority": "HIGH",
            "category": "Structure",
            "recommendation": "Consider restructuring to improve story flow",
            "impact": "Better reader engagement and pacing",
        })

    character_score = _score(analysis.get("characters"))
    if character_score is not None and character_score < 7:
        recommendations.append({
            "priority": "HIGH",
            "category": "Character Development",
            "recommendation": "Deepen character motivations and growth arcs",
            "impact": "Stronger emotional connection with readers",
        })

    genre_score = _score(analysis.get("genreFit"))
    if genre_score is not None and genre_score < 7:
        recommendations.append({
            "priority": "MEDIUM",
            "category": "Genre Expectations",
            "recommendation": "Align more closely with genre conventions",
            "impact": "Better market fit and reader satisfaction",
        })

    if comp_titles:
        first = comp_titles[0]
        title = first.get("title") if isinstance(first, dict) else str(first)
        recommendations.append({
            "priority": "MEDIUM",
            "category": "Market Positioning",
            "recommendation": f"Position alongside titles such as {title}",
            "impact": "Clearer retail positioning and discoverability",
        })

    return recommendations
