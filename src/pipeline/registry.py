# src/pipeline/registry.py - v1
"""Agent registry: dynamic loading and lookup of pipeline agents.

Loads agent classes from the EDITORIAL_AGENTS and ASSET_AGENTS config lists
and validates that declared dependencies are satisfiable. A class path that
cannot be loaded is a deployment error and fails loudly.
"""

from __future__ import annotations

import importlib
import logging

from manuscriptai.config.agents import ASSET_AGENTS, EDITORIAL_AGENTS
from manuscriptai.pipeline.plugin_kit.base_agent import (
    AssetAgent,
    BaseAgent,
    EditorialAgent,
)

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Raised when agent loading or validation fails."""


class AgentRegistry:
    """Registry of the editorial and asset agents, in configured order."""

    def __init__(self) -> None:
        self._editorial: list[EditorialAgent] = []
        self._assets: list[AssetAgent] = []

    @property
    def editorial_agents(self) -> list[EditorialAgent]:
        return list(self._editorial)

    @property
    def asset_agents(self) -> list[AssetAgent]:
        return list(self._assets)

    @property
    def agent_names(self) -> list[str]:
        return [a.name for a in self._editorial] + [a.name for a in self._assets]

    def load_all(
        self,
        editorial: list[str] | None = None,
        assets: list[str] | None = None,
    ) -> None:
        """Load agents from class paths (defaults to the config lists).

        Raises:
            RegistryError: If a path cannot be imported, is of the wrong kind
                or duplicates another agent's name.
        """
        for class_path in EDITORIAL_AGENTS if editorial is None else editorial:
            self.register(_import_agent(class_path, EditorialAgent))
        for class_path in ASSET_AGENTS if assets is None else assets:
            self.register(_import_agent(class_path, AssetAgent))

        errors = self.validate_dependencies()
        if errors:
            raise RegistryError("; ".join(errors))

        logger.info(
            "Registry loaded %d editorial and %d asset agents",
            len(self._editorial),
            len(self._assets),
        )

    def register(self, agent: BaseAgent) -> None:
        if agent.name in self.agent_names:
            raise RegistryError(f"Duplicate agent name '{agent.name}'")
        if isinstance(agent, EditorialAgent):
            self._editorial.append(agent)
        elif isinstance(agent, AssetAgent):
            self._assets.append(agent)
        else:
            raise RegistryError(
                f"{type(agent).__name__} is neither an editorial nor an asset agent"
            )
        logger.debug("Loaded agent: %s v%s", agent.name, agent.version)

    def get(self, name: str) -> BaseAgent | None:
        for agent in (*self._editorial, *self._assets):
            if agent.name == name:
                return agent
        return None

    def get_or_raise(self, name: str) -> BaseAgent:
        agent = self.get(name)
        if agent is None:
            raise RegistryError(f"Agent '{name}' not found in registry")
        return agent

    def validate_dependencies(self) -> list[str]:
        """Error messages for dependencies on unregistered agents."""
        names = set(self.agent_names)
        errors: list[str] = []
        for agent in self._assets:
            for dep in agent.dependencies:
                if dep not in names:
                    errors.append(
                        f"Agent '{agent.name}' depends on '{dep}' which is not registered"
                    )
        return errors


def _import_agent(class_path: str, kind: type[BaseAgent]) -> BaseAgent:
    """Import and instantiate an agent from a dotted class path."""
    parts = class_path.rsplit(".", 1)
    if len(parts) != 2:
        raise RegistryError(f"Invalid class path: {class_path}")
    module_path, class_name = parts

    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        raise RegistryError(f"Cannot import module {module_path}: {exc}") from exc

    cls = getattr(module, class_name, None)
    if cls is None:
        raise RegistryError(f"Class {class_name} not found in {module_path}")

    if not isinstance(cls, type) or not issubclass(cls, kind):
        raise RegistryError(f"{class_path} is not a {kind.__name__} subclass")

    return cls()


def load_registry() -> AgentRegistry:
    registry = AgentRegistry()
    registry.load_all()
    return registry
