# src/pipeline/asset_orchestrator.py - v1
"""Asset orchestrator: twelve asset agents fanned out for one job.

All agents start together and every one settles before the combined bundle
is written; a failed agent leaves a null in the bundle and an entry in its
``errors`` list. Progress is written twice: at launch (10%) and once
finished (100%, ``complete`` or ``partial``).

Agents that declare dependencies (the audiobook metadata agent) receive the
other agents' artifacts in one of two ways:

- ``delay``: sleep, then read whatever has already been persisted;
- ``barrier``: wait for the producer tasks and use their results.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Literal

from manuscriptai.core.errors import MissingPrerequisite, OrchestratorFailure, StorageError
from manuscriptai.core.models import AssetJob, utc_now
from manuscriptai.pipeline.plugin_kit.models import AgentInputs, AgentRun
from manuscriptai.progress.models import (
    AgentState,
    AgentSubStatus,
    AssetError,
    AssetProgress,
    ProgressStatus,
)
from manuscriptai.storage.layout import (
    BUNDLE_SUFFIX,
    artifact_key,
    bundle_key,
    developmental_key,
)

if TYPE_CHECKING:
    from manuscriptai.pipeline.executor import AgentExecutor
    from manuscriptai.pipeline.notifier import Notifier
    from manuscriptai.pipeline.plugin_kit.base_agent import AssetAgent
    from manuscriptai.pipeline.registry import AgentRegistry
    from manuscriptai.progress.store import ProgressStore
    from manuscriptai.storage.base_object_store import BaseObjectStore

logger = logging.getLogger(__name__)

LAUNCH_PROGRESS = 10


def build_bundle(
    job: AssetJob, names: list[str], outcomes: list[AgentRun | BaseException]
) -> tuple[dict[str, Any], list[AssetError]]:
    """Combined bundle: every asset under its name, null where it failed."""
    bundle: dict[str, Any] = {
        "manuscriptKey": job.manuscript_key,
        "reportId": job.report_id,
        "generated": utc_now().isoformat(),
    }
    errors: list[AssetError] = []
    for name, outcome in zip(names, outcomes):
        if isinstance(outcome, BaseException):
            bundle[name] = None
            errors.append(AssetError(type=name, error=str(outcome) or type(outcome).__name__))
        else:
            bundle[name] = outcome.artifact
    bundle["errors"] = [e.to_json_dict() for e in errors]
    return bundle, errors


class AssetOrchestrator:
    """Handler for ASSET_QUEUE messages."""

    def __init__(
        self,
        *,
        registry: AgentRegistry,
        executor: AgentExecutor,
        store: BaseObjectStore,
        progress: ProgressStore,
        notifier: Notifier,
        dependency_mode: Literal["delay", "barrier"] = "delay",
        dependency_delay_s: float = 5.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._registry = registry
        self._executor = executor
        self._store = store
        self._progress = progress
        self._notifier = notifier
        self._dependency_mode = dependency_mode
        self._dependency_delay_s = dependency_delay_s
        self._sleep = sleep

    async def handle(self, body: dict[str, Any]) -> AssetProgress:
        """Generate every asset for one queue message.

        Returns the final progress record. Any crash after the job is parsed
        leaves a ``failed`` record behind before the error propagates.

        Raises:
            MissingPrerequisite: No developmental artifact for the manuscript.
            OrchestratorFailure: The job crashed before its bundle was stored.
        """
        job = AssetJob.model_validate(body)
        try:
            return await self._generate(job)
        except MissingPrerequisite as e:
            await self._record_failure(job, e)
            raise
        except Exception as e:
            logger.error("Asset job %s crashed: %s", job.report_id, e)
            await self._record_failure(job, e)
            if isinstance(e, OrchestratorFailure):
                raise
            raise OrchestratorFailure(
                f"Asset generation {job.report_id} failed: {e}"
            ) from e

    async def _record_failure(self, job: AssetJob, error: Exception) -> None:
        # progress=0 is lifted to the stored value by the progress guard
        try:
            await self._progress.write_assets(
                job.report_id,
                AssetProgress(
                    status=ProgressStatus.FAILED,
                    progress=0,
                    message=f"Asset generation failed: {error}",
                    error=str(error) or type(error).__name__,
                ),
            )
        except StorageError as e:
            logger.error("Failed progress for %s not written: %s", job.report_id, e)

    async def _generate(self, job: AssetJob) -> AssetProgress:
        agents = self._registry.asset_agents
        names = [a.name for a in agents]

        developmental = await self._store.get_json(developmental_key(job.manuscript_key))
        if developmental is None:
            error = f"Developmental analysis missing for {job.manuscript_key}"
            logger.error("Asset job %s: %s", job.report_id, error)
            raise MissingPrerequisite(error)

        logger.info(
            "Asset job %s started for %s: %d agents (%s mode)",
            job.report_id, job.manuscript_key, len(agents), self._dependency_mode,
        )
        await self._progress.write_assets(
            job.report_id,
            AssetProgress(
                status=ProgressStatus.PROCESSING,
                progress=LAUNCH_PROGRESS,
                message="Generating marketing and audiobook assets...",
                current_step="generating",
                agents={
                    name: AgentSubStatus(status=AgentState.RUNNING, progress=LAUNCH_PROGRESS)
                    for name in names
                },
            ),
        )

        inputs = AgentInputs(
            manuscript_key=job.manuscript_key,
            report_id=job.report_id,
            genre=job.genre,
            developmental=developmental,
            author_data=job.author_data,
            series_data=job.series_data,
        )
        outcomes = await self._run_all(agents, inputs)

        bundle, errors = build_bundle(job, names, outcomes)
        for err in errors:
            logger.error("Asset '%s' failed for %s: %s", err.type, job.report_id, err.error)

        status = ProgressStatus.PARTIAL if errors else ProgressStatus.COMPLETE
        final = AssetProgress(
            status=status,
            progress=100,
            message=(
                f"Asset generation completed with {len(errors)} error(s)"
                if errors
                else "All assets generated successfully!"
            ),
            current_step="complete",
            completed_at=utc_now(),
            agents={
                name: _sub_status(outcome) for name, outcome in zip(names, outcomes)
            },
            assets={name: bundle[name] for name in names},
            errors=errors,
        )

        try:
            await self._store.put_json(
                bundle_key(job.manuscript_key),
                bundle,
                metadata={
                    "assetType": BUNDLE_SUFFIX,
                    "manuscriptKey": job.manuscript_key,
                    "timestamp": bundle["generated"],
                },
            )
            final = await self._progress.write_assets(job.report_id, final)
        except StorageError as e:
            raise OrchestratorFailure(f"Asset bundle {job.report_id} not stored: {e}") from e

        logger.info(
            "Asset job %s %s (%d/%d assets)",
            job.report_id, status.value, len(names) - len(errors), len(names),
        )
        try:
            await self._notifier.assets_complete(job, status, len(errors))
        except Exception:
            logger.warning("Asset notice for %s not sent", job.report_id, exc_info=True)
        return final

    async def _run_all(
        self, agents: list[AssetAgent], inputs: AgentInputs
    ) -> list[AgentRun | BaseException]:
        tasks: dict[str, asyncio.Task] = {}
        for agent in agents:
            if not agent.dependencies:
                tasks[agent.name] = asyncio.create_task(self._executor.run(agent, inputs))
        for agent in agents:
            if agent.dependencies:
                tasks[agent.name] = asyncio.create_task(
                    self._run_dependent(agent, inputs, tasks)
                )
        return await asyncio.gather(
            *(tasks[agent.name] for agent in agents), return_exceptions=True
        )

    async def _run_dependent(
        self,
        agent: AssetAgent,
        inputs: AgentInputs,
        producers: dict[str, asyncio.Task],
    ) -> AgentRun:
        if self._dependency_mode == "barrier":
            related = await self._await_producers(agent, producers)
        else:
            await self._sleep(self._dependency_delay_s)
            related = await self._read_persisted(agent, inputs.manuscript_key)

        available = sorted(k for k, v in related.items() if v)
        logger.info(
            "Agent '%s' starting with dependencies: %s",
            agent.name, ", ".join(available) or "none",
        )
        return await self._executor.run(
            agent, inputs.model_copy(update={"related": related})
        )

    async def _await_producers(
        self, agent: AssetAgent, producers: dict[str, asyncio.Task]
    ) -> dict[str, dict[str, Any] | None]:
        deps = [d for d in agent.dependencies if d in producers]
        settled = await asyncio.gather(
            *(producers[d] for d in deps), return_exceptions=True
        )
        return {
            dep: (result.artifact if isinstance(result, AgentRun) else None)
            for dep, result in zip(deps, settled)
        }

    async def _read_persisted(
        self, agent: AssetAgent, manuscript_key: str
    ) -> dict[str, dict[str, Any] | None]:
        related: dict[str, dict[str, Any] | None] = {}
        for dep in agent.dependencies:
            producer = self._registry.get_or_raise(dep)
            key = artifact_key(manuscript_key, producer.artifact_suffix)
            try:
                related[dep] = await self._store.get_json(key)
            except StorageError as e:
                logger.warning("Dependency %s unreadable, treated as absent: %s", key, e)
                related[dep] = None
        return related


def _sub_status(outcome: AgentRun | BaseException) -> AgentSubStatus:
    if isinstance(outcome, BaseException):
        return AgentSubStatus(
            status=AgentState.FAILED,
            progress=100,
            error=str(outcome) or type(outcome).__name__,
        )
    return AgentSubStatus(status=AgentState.COMPLETE, progress=100)
