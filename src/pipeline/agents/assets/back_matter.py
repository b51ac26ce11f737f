# src/pipeline/agents/assets/back_matter.py - v1
"""End-of-book back matter: thanks, newsletter call to action, social links."""

from __future__ import annotations

from typing import Any

from manuscriptai.llm.models import Temperature
from manuscriptai.pipeline.agents.assets.author_bio import author_info
from manuscriptai.pipeline.plugin_kit.base_agent import AssetAgent
from manuscriptai.pipeline.plugin_kit.models import AgentInputs


def format_back_matter(result: dict[str, Any], also_by: list[str]) -> str:
    """Plain-text rendering ready to paste after the last chapter."""
    cta = result.get("newsletterCTA") or {}
    if not isinstance(cta, dict):
        cta = {"body": str(cta)}

    sections = [str(result.get("thankYouMessage", ""))]
    newsletter = "\n".join(
        str(cta[part]) for part in ("headline", "body", "callToAction") if cta.get(part)
    )
    if newsletter:
        sections.append(newsletter)
    if also_by:
        sections.append("Also by the author:\n" + "\n".join(f"- {t}" for t in also_by))
    sections.append(str(result.get("connectMessage", "")))
    sections.append(str(result.get("closingLine", "")))
    return "\n\n".join(s for s in sections if s.strip())


class BackMatterAgent(AssetAgent):

    @property
    def name(self) -> str:
        return "backMatter"

    @property
    def description(self) -> str:
        return "Thank-you note, newsletter call to action and connect message"

    @property
    def temperature(self) -> Temperature:
        return Temperature.CREATIVE

    @property
    def required_fields(self) -> list[str]:
        return ["thankYouMessage", "newsletterCTA", "connectMessage", "closingLine"]

    @property
    def artifact_suffix(self) -> str:
        return "back-matter"

    def prompt_variables(self, inputs: AgentInputs) -> dict[str, Any]:
        return {
            "genre": inputs.genre,
            "author_info": author_info(inputs.author_data),
            "analysis": self.developmental_summary(inputs, limit=3000),
        }

    def finalize(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        other_books = inputs.author_data.get("otherBooks") or []
        also_by = [str(b) for b in other_books] if isinstance(other_books, list) else []
        result["alsoByAuthor"] = also_by
        result["formatted"] = format_back_matter(result, also_by)
        return result
