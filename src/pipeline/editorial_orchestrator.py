# src/pipeline/editorial_orchestrator.py - v1
"""Editorial orchestrator: three sequential phases for one analysis job.

State machine::

    init -> phase1 -> phase2 -> phase3 -> done
              |         |         |
              +---------+---------+--> failed

Progress is written at the phase boundaries (5, 33, 66, 100) and ticked
inside each phase's band while its agent is in flight. The ticker is
stopped and awaited before the next boundary write, so a tick can never
land after it. On success the asset job is enqueued; on failure the
manuscript is marked failed and the message goes back to the queue.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from manuscriptai.core.errors import InvalidStatusTransition, OrchestratorFailure, StorageError
from manuscriptai.core.models import (
    AssetJob,
    EditorialJob,
    ManuscriptKey,
    ManuscriptStatus,
    utc_now,
)
from manuscriptai.logging.context import set_agent_context
from manuscriptai.pipeline.plugin_kit.models import AgentInputs
from manuscriptai.progress.models import EditorialProgress, ProgressStatus
from manuscriptai.progress.ticker import ProgressTicker

if TYPE_CHECKING:
    from manuscriptai.jobs.base_queue import BaseJobQueue
    from manuscriptai.manuscripts.base_repository import BaseManuscriptRepository
    from manuscriptai.pipeline.executor import AgentExecutor
    from manuscriptai.pipeline.notifier import Notifier
    from manuscriptai.pipeline.registry import AgentRegistry
    from manuscriptai.progress.store import ProgressStore

logger = logging.getLogger(__name__)


class EditorialState(str, Enum):
    INIT = "init"
    PHASE1 = "phase1"
    PHASE2 = "phase2"
    PHASE3 = "phase3"
    DONE = "done"
    FAILED = "failed"


TRANSITIONS: dict[EditorialState, frozenset[EditorialState]] = {
    EditorialState.INIT: frozenset({EditorialState.PHASE1}),
    EditorialState.PHASE1: frozenset({EditorialState.PHASE2, EditorialState.FAILED}),
    EditorialState.PHASE2: frozenset({EditorialState.PHASE3, EditorialState.FAILED}),
    EditorialState.PHASE3: frozenset({EditorialState.DONE, EditorialState.FAILED}),
    EditorialState.DONE: frozenset(),
    EditorialState.FAILED: frozenset(),
}


def advance(current: EditorialState, target: EditorialState) -> EditorialState:
    if target not in TRANSITIONS[current]:
        raise RuntimeError(f"Illegal editorial transition {current.value} -> {target.value}")
    return target


@dataclass(frozen=True)
class Phase:
    state: EditorialState
    start: int
    ceiling: int
    message: str


PHASES: tuple[Phase, ...] = (
    Phase(EditorialState.PHASE1, 5, 30, "Analyzing story structure and characters..."),
    Phase(EditorialState.PHASE2, 33, 63, "Reviewing prose line by line..."),
    Phase(EditorialState.PHASE3, 66, 98, "Checking grammar and style consistency..."),
)

COMPLETE_MESSAGE = "Analysis complete!"


class EditorialOrchestrator:
    """Handler for ANALYSIS_QUEUE messages."""

    def __init__(
        self,
        *,
        registry: AgentRegistry,
        executor: AgentExecutor,
        progress: ProgressStore,
        manuscripts: BaseManuscriptRepository,
        asset_queue: BaseJobQueue,
        notifier: Notifier,
        tick_interval_s: float = 2.0,
        tick_step: int = 2,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._registry = registry
        self._executor = executor
        self._progress = progress
        self._manuscripts = manuscripts
        self._asset_queue = asset_queue
        self._notifier = notifier
        self._tick_interval_s = tick_interval_s
        self._tick_step = tick_step
        self._sleep = sleep

    async def handle(self, body: dict[str, Any]) -> EditorialState:
        """Run all three phases for one queue message.

        Raises:
            OrchestratorFailure: An agent failed; the queue should redeliver.
        """
        job = EditorialJob.model_validate(body)
        agents = self._registry.editorial_agents
        if len(agents) != len(PHASES):
            raise OrchestratorFailure(
                f"Expected {len(PHASES)} editorial agents, registry has {len(agents)}"
            )

        logger.info(
            "Editorial job %s started for %s (genre=%s, style=%s)",
            job.report_id, job.manuscript_key, job.genre, job.style_guide,
        )
        await self._set_manuscript_status(job, ManuscriptStatus.ANALYZING)

        inputs = AgentInputs(
            manuscript_key=job.manuscript_key,
            report_id=job.report_id,
            genre=job.genre,
            style_guide=job.style_guide,
            author_data=job.author_data,
            series_data=job.series_data,
        )

        state = EditorialState.INIT
        phase = PHASES[0]
        try:
            for phase, agent in zip(PHASES, agents):
                state = advance(state, phase.state)
                await self._progress.write_editorial(
                    job.report_id,
                    EditorialProgress(
                        status=ProgressStatus.PROCESSING,
                        progress=phase.start,
                        message=phase.message,
                        current_step=agent.name,
                    ),
                )
                ticker = ProgressTicker(
                    self._progress,
                    job.report_id,
                    start=phase.start,
                    ceiling=phase.ceiling,
                    step=self._tick_step,
                    interval=self._tick_interval_s,
                    message=phase.message,
                    current_step=agent.name,
                    sleep=self._sleep,
                )
                async with ticker:
                    await self._executor.run(agent, inputs, phase=state.value)

            await self._progress.write_editorial(
                job.report_id,
                EditorialProgress(
                    status=ProgressStatus.COMPLETE,
                    progress=100,
                    message=COMPLETE_MESSAGE,
                    current_step="complete",
                    completed_at=utc_now(),
                ),
            )
            state = advance(state, EditorialState.DONE)
        except Exception as e:
            state = advance(state, EditorialState.FAILED)
            logger.error(
                "Editorial job %s failed in %s: %s", job.report_id, phase.state.value, e
            )
            await self._record_failure(job, phase, e)
            raise OrchestratorFailure(
                f"Editorial analysis {job.report_id} failed: {e}"
            ) from e
        finally:
            set_agent_context(None)

        await self._set_manuscript_status(job, ManuscriptStatus.COMPLETE)
        logger.info("Editorial job %s complete", job.report_id)

        await self._enqueue_assets(job)
        try:
            await self._notifier.editorial_complete(job)
        except Exception:
            logger.warning("Completion notice for %s not sent", job.report_id, exc_info=True)
        return state

    async def _record_failure(self, job: EditorialJob, phase: Phase, error: Exception) -> None:
        try:
            await self._progress.write_editorial(
                job.report_id,
                EditorialProgress(
                    status=ProgressStatus.FAILED,
                    progress=phase.start,
                    message="Analysis failed",
                    current_step=phase.state.value,
                    error=str(error),
                ),
            )
        except StorageError as e:
            logger.error("Failed progress for %s not written: %s", job.report_id, e)
        await self._set_manuscript_status(job, ManuscriptStatus.FAILED)

    async def _enqueue_assets(self, job: EditorialJob) -> None:
        asset_job = AssetJob(
            manuscript_key=job.manuscript_key,
            report_id=job.report_id,
            genre=job.genre,
            author_data=job.author_data,
            series_data=job.series_data,
        )
        try:
            message_id = await self._asset_queue.send(asset_job.to_json_dict())
        except Exception:
            logger.exception(
                "Asset job for %s not enqueued; editorial results are kept",
                job.report_id,
            )
            return
        logger.info("Asset job %s enqueued as %s", job.report_id, message_id)

    async def _set_manuscript_status(
        self, job: EditorialJob, status: ManuscriptStatus
    ) -> None:
        manuscript_id = ManuscriptKey.parse(job.manuscript_key).manuscript_id
        if manuscript_id is None:
            logger.debug("No manuscript id in %s; status not tracked", job.manuscript_key)
            return
        try:
            await self._manuscripts.set_status(manuscript_id, status)
        except InvalidStatusTransition as e:
            logger.warning("Manuscript %s: %s", manuscript_id, e)
