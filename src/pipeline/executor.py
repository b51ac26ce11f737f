# src/pipeline/executor.py - v1
"""Run one agent end to end: text, prompt, LLM call, validation, persistence.

Both orchestrators drive every agent through ``AgentExecutor.run``. Object
store failures retry the whole agent once; anything else propagates.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from manuscriptai.core.errors import StorageError
from manuscriptai.core.models import ManuscriptKey, utc_now
from manuscriptai.extraction.structure import analyze_structure
from manuscriptai.extraction.text import load_manuscript_text
from manuscriptai.llm.models import CallIdentity
from manuscriptai.logging.context import set_agent_context
from manuscriptai.pipeline.plugin_kit.models import AgentInputs, AgentRun
from manuscriptai.storage.layout import artifact_key

if TYPE_CHECKING:
    from manuscriptai.llm.caller import LLMCaller
    from manuscriptai.pipeline.plugin_kit.base_agent import BaseAgent
    from manuscriptai.storage.base_object_store import BaseObjectStore

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_RETRIES = 1


def call_identity(agent: BaseAgent, manuscript_key: str) -> CallIdentity:
    parsed = ManuscriptKey.parse(manuscript_key)
    return CallIdentity(
        agent=agent.name,
        user_id=parsed.user_id or "unknown",
        manuscript_id=parsed.manuscript_id or "unknown",
        operation_group=agent.operation_group,
        operation=agent.operation,
    )


class AgentExecutor:
    """Shared executor for all agents.

    Args:
        store: Object store holding the manuscript and receiving artifacts.
        caller: LLM call layer (retries, JSON extraction, cost recording).
        storage_retries: Extra whole-agent attempts after a StorageError.
    """

    def __init__(
        self,
        store: BaseObjectStore,
        caller: LLMCaller,
        storage_retries: int = DEFAULT_STORAGE_RETRIES,
    ) -> None:
        self._store = store
        self._caller = caller
        self._storage_retries = storage_retries

    async def run(
        self, agent: BaseAgent, inputs: AgentInputs, phase: str | None = None
    ) -> AgentRun:
        """Execute ``agent`` and persist its artifact.

        Raises:
            TerminalLLMError: The model call failed for good.
            MissingPrerequisite: Manuscript or developmental report absent.
            StorageError: Object store still failing after the retry.
        """
        set_agent_context(agent.name, phase)
        start_ns = time.monotonic_ns()
        retries = 0

        while True:
            try:
                key, artifact = await self._run_once(agent, inputs)
                break
            except StorageError as e:
                if retries >= self._storage_retries:
                    logger.error("Agent '%s' storage failure, giving up: %s", agent.name, e)
                    raise
                retries += 1
                logger.warning(
                    "Agent '%s' storage failure, retrying agent (%d/%d): %s",
                    agent.name, retries, self._storage_retries, e,
                )

        elapsed_ms = (time.monotonic_ns() - start_ns) // 1_000_000
        logger.info("Agent '%s' stored %s in %dms", agent.name, key, elapsed_ms)
        return AgentRun(
            agent=agent.name,
            artifact_key=key,
            artifact=artifact,
            execution_time_ms=elapsed_ms,
            storage_retries=retries,
        )

    async def _run_once(
        self, agent: BaseAgent, inputs: AgentInputs
    ) -> tuple[str, dict]:
        if agent.text_window is not None:
            inputs = await self._with_text(agent, inputs)

        prompt = agent.build_prompt(inputs)
        result = await self._caller.call_json(
            prompt,
            identity=call_identity(agent, inputs.manuscript_key),
            temperature=agent.temperature,
            max_tokens=agent.max_tokens,
            required_fields=agent.required_fields,
            validator=lambda obj: agent.validate(obj, inputs),
        )
        artifact = agent.finalize(result, inputs)

        key = artifact_key(inputs.manuscript_key, agent.artifact_suffix)
        await self._store.put_json(
            key,
            artifact,
            metadata={
                "assetType": agent.artifact_suffix,
                "manuscriptKey": inputs.manuscript_key,
                "timestamp": utc_now().isoformat(),
            },
        )
        return key, artifact

    async def _with_text(self, agent: BaseAgent, inputs: AgentInputs) -> AgentInputs:
        """Inputs carrying this agent's text window and the chapter structure."""
        full_text = inputs.text or await load_manuscript_text(
            self._store, inputs.manuscript_key
        )
        structure = inputs.structure or analyze_structure(full_text)
        return inputs.model_copy(
            update={"text": agent.select_text(full_text), "structure": structure}
        )
