# src/pipeline/plugin_kit/base_agent.py - v1
"""Standard agent interface.

An agent is a capability set: a name, a temperature preset, the top-level
fields its JSON must carry, a prompt template and the suffix its artifact is
stored under. Prompting, calling, validating and persisting are done by one
shared executor; agents only supply the parts that differ.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from manuscriptai.core.errors import MissingPrerequisite
from manuscriptai.extraction.text import head_window
from manuscriptai.llm.models import Temperature
from manuscriptai.pipeline.plugin_kit.models import AgentInputs

PROMPTS_DIR = Path(__file__).parent.parent / "prompts"

_TEMPLATE_CACHE: dict[Path, str] = {}


class BaseAgent(ABC):
    """Standard interface for all pipeline agents."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Canonical agent name (e.g. 'developmental', 'bookDescription')."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what this agent does."""

    @property
    @abstractmethod
    def temperature(self) -> Temperature:
        """Sampling preset."""

    @property
    @abstractmethod
    def required_fields(self) -> list[str]:
        """Top-level keys the model's JSON must contain."""

    @property
    @abstractmethod
    def artifact_suffix(self) -> str:
        """Artifact is stored at ``<manuscriptKey>-<suffix>.json``."""

    @property
    @abstractmethod
    def operation_group(self) -> str:
        """Cost accounting group."""

    @property
    def version(self) -> str:
        return "1.0.0"

    @property
    def operation(self) -> str:
        """Cost accounting operation name."""
        return f"generate_{self.artifact_suffix.replace('-', '_')}"

    @property
    def max_tokens(self) -> int:
        return 4096

    @property
    def text_window(self) -> int | None:
        """Characters of manuscript text the prompt needs; None for no text."""
        return None

    @property
    def dependencies(self) -> list[str]:
        """Agents whose artifacts this one reads, best effort."""
        return []

    @property
    def prompt_file(self) -> Path:
        return PROMPTS_DIR / f"{self.artifact_suffix}.txt"

    def load_prompt(self) -> str:
        """Load and cache the prompt template."""
        path = self.prompt_file
        if path not in _TEMPLATE_CACHE:
            _TEMPLATE_CACHE[path] = path.read_text(encoding="utf-8")
        return _TEMPLATE_CACHE[path]

    @abstractmethod
    def prompt_variables(self, inputs: AgentInputs) -> dict[str, Any]:
        """Values substituted into the prompt template."""

    def build_prompt(self, inputs: AgentInputs) -> str:
        return self.load_prompt().format(**self.prompt_variables(inputs))

    def select_text(self, text: str) -> str:
        """Cut the manuscript down to this agent's window."""
        return head_window(text, self.text_window or len(text))

    def validate(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        """Normalise the model's object or raise SchemaViolation."""
        return result

    def finalize(self, result: dict[str, Any], inputs: AgentInputs) -> dict[str, Any]:
        """Shape the validated object into the stored artifact."""
        return result


class EditorialAgent(BaseAgent):
    """One of the three sequential editorial phases."""

    @property
    def operation_group(self) -> str:
        return "analysis"

    @property
    def operation(self) -> str:
        return f"analyze_{self.artifact_suffix.replace('-', '_')}"


class AssetAgent(BaseAgent):
    """A marketing or audiobook asset derived from the developmental report."""

    @property
    def operation_group(self) -> str:
        return "asset_generation"

    @staticmethod
    def developmental_of(inputs: AgentInputs) -> dict[str, Any]:
        if not inputs.developmental:
            raise MissingPrerequisite(
                f"Developmental analysis missing for {inputs.manuscript_key}"
            )
        return inputs.developmental

    def developmental_summary(self, inputs: AgentInputs, limit: int = 6000) -> str:
        """Compact JSON view of the developmental report for prompts."""
        dev = self.developmental_of(inputs)
        analysis = dict(dev.get("analysis") or {})
        structure = dev.get("structure") or {}
        summary = {
            "overallScore": analysis.get("overallScore"),
            "plot": analysis.get("plot"),
            "characters": analysis.get("characters"),
            "pacing": analysis.get("pacing"),
            "marketability": analysis.get("marketability"),
            "genreFit": analysis.get("genreFit"),
            "topPriorities": analysis.get("topPriorities"),
            "totalWords": structure.get("totalWords"),
            "chapterCount": structure.get("chapterCount"),
        }
        text = json.dumps(
            {k: v for k, v in summary.items() if v is not None}, indent=2
        )
        return text[:limit]

    @staticmethod
    def total_words(inputs: AgentInputs) -> int:
        structure = (inputs.developmental or {}).get("structure") or {}
        return int(structure.get("totalWords") or 0)


class AudiobookAgent(AssetAgent):
    """Audiobook production assets share their own cost group."""

    @property
    def operation_group(self) -> str:
        return "audiobook_generation"
