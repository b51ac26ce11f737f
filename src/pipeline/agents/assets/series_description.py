# src/pipeline/agents/assets/series_description.py - v1
"""Series marketing copy with a book-by-book arc."""

from __future__ import annotations

from typing import Any

from manuscriptai.core.errors import SchemaViolation
from manuscriptai.llm.models import Temperature
from manuscriptai.pipeline.plugin_kit.base_agent import AssetAgent
from manuscriptai.pipeline.plugin_kit.models import AgentInputs

MIN_ARC_ENTRIES = 3

DEFAULT_SERIES_TITLE = "Untitled Series"
DEFAULT_BOOK_NUMBER = 1
DEFAULT_TOTAL_BOOKS = 3


class SeriesDescriptionAgent(AssetAgent):

    @property
    def name(self) -> str:
        return "seriesDescription"

    @property
    def description(self) -> str:
        return "Series tagline, descriptions and per-book arc"

    @property
    def temperature(self) -> Temperature:
        return Temperature.CREATIVE

    @property
    def required_fields(self) -> list[str]:
        return ["seriesTagline", "shortSeriesDescription", "bookByBookArc"]

    @property
    def artifact_suffix(self) -> str:
        return "series-description"

    @staticmethod
    def series_info(series_data: dict[str, Any]) -> dict[str, Any]:
        return {
            "series_title": series_data.get("seriesTitle") or DEFAULT_SERIES_TITLE,
            "book_number": series_data.get("bookNumber") or DEFAULT_BOOK_NUMBER,
            "total_books": max(
                int(series_data.get("totalBooks") or DEFAULT_TOTAL_BOOKS),
                MIN_ARC_ENTRIES,
            ),
        }

    def prompt_variables(self, inputs: AgentInputs) -> dict[str, Any]:
        return {
            "genre": inputs.genre,
            "analysis": self.developmental_summary(inputs, limit=4000),
            **self.series_info(inputs.series_data),
        }

    def validate(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        arc = result["bookByBookArc"]
        if not isinstance(arc, list):
            raise SchemaViolation("bookByBookArc must be a list")
        if len(arc) < MIN_ARC_ENTRIES:
            raise SchemaViolation(
                f"bookByBookArc has {len(arc)} entries, need at least {MIN_ARC_ENTRIES}",
                terminal=True,
            )
        return result

    def finalize(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        info = self.series_info(inputs.series_data)
        result["seriesInfo"] = {
            "seriesTitle": info["series_title"],
            "bookNumber": info["book_number"],
            "totalBooks": info["total_books"],
        }
        return result
