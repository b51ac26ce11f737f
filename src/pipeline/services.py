# src/pipeline/services.py - v1
"""Wiring: build every pipeline component from Settings.

Workers, the HTTP app and the CLI all start from ``build_services``; tests
pass their own LLM client, sleep function or backends through the keyword
overrides.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from manuscriptai.api.submission import SubmissionService
from manuscriptai.config.settings import Settings
from manuscriptai.jobs.base_queue import BaseJobQueue
from manuscriptai.jobs.consumer import QueueConsumer
from manuscriptai.jobs.queue_factory import create_queue
from manuscriptai.llm.base_client import BaseLLMClient
from manuscriptai.llm.caller import LLMCaller
from manuscriptai.llm.client_factory import create_llm_client
from manuscriptai.llm.retry import RetryPolicy
from manuscriptai.manuscripts.base_repository import BaseManuscriptRepository
from manuscriptai.manuscripts.repository_factory import create_manuscript_repository
from manuscriptai.pipeline.asset_orchestrator import AssetOrchestrator
from manuscriptai.pipeline.editorial_orchestrator import EditorialOrchestrator
from manuscriptai.pipeline.executor import AgentExecutor
from manuscriptai.pipeline.notifier import LoggingNotifier, Notifier
from manuscriptai.pipeline.registry import AgentRegistry, load_registry
from manuscriptai.progress.store import ProgressStore
from manuscriptai.storage.base_object_store import BaseObjectStore
from manuscriptai.storage.store_factory import create_object_store
from manuscriptai.tracking.cost_calculator import build_pricing_table
from manuscriptai.tracking.cost_recorder import CostRecorder, create_cost_recorder

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


@dataclass
class PipelineServices:
    """Every long-lived component of one process."""

    settings: Settings
    store: BaseObjectStore
    progress: ProgressStore
    manuscripts: BaseManuscriptRepository
    analysis_queue: BaseJobQueue
    asset_queue: BaseJobQueue
    registry: AgentRegistry
    recorder: CostRecorder
    caller: LLMCaller
    executor: AgentExecutor
    editorial: EditorialOrchestrator
    assets: AssetOrchestrator
    submission: SubmissionService
    notifier: Notifier

    def editorial_consumer(self) -> QueueConsumer:
        return QueueConsumer(
            self.analysis_queue,
            self.editorial.handle,
            batch_size=self.settings.queue_batch_size,
            idle_sleep_s=self.settings.queue_poll_timeout_s,
        )

    def asset_consumer(self) -> QueueConsumer:
        return QueueConsumer(
            self.asset_queue,
            self.assets.handle,
            batch_size=self.settings.queue_batch_size,
            idle_sleep_s=self.settings.queue_poll_timeout_s,
        )


def build_services(
    settings: Settings,
    *,
    llm_client: BaseLLMClient | None = None,
    store: BaseObjectStore | None = None,
    manuscripts: BaseManuscriptRepository | None = None,
    notifier: Notifier | None = None,
    registry: AgentRegistry | None = None,
    sleep: Sleep = asyncio.sleep,
) -> PipelineServices:
    """Wire the pipeline from settings.

    Args:
        settings: Validated settings.
        llm_client: Model client; defaults to the Anthropic adapter.
        store: Object store; defaults to OBJECT_STORE_BACKEND.
        manuscripts: Status repository; defaults to MANUSCRIPT_REPOSITORY.
        notifier: Completion notifier; defaults to logging.
        registry: Agent registry; defaults to the configured agents.
        sleep: Used for LLM backoff and the metadata delay. Progress ticks
            always use the event loop clock.
    """
    if store is None:
        store = create_object_store(settings)
    progress = ProgressStore(store, ttl_seconds=settings.progress_ttl_seconds)
    if manuscripts is None:
        manuscripts = create_manuscript_repository(settings)
    analysis_queue = create_queue(settings, settings.analysis_queue_name)
    asset_queue = create_queue(settings, settings.asset_queue_name)
    if registry is None:
        registry = load_registry()
    if notifier is None:
        notifier = LoggingNotifier()

    recorder = create_cost_recorder(
        settings, pricing=build_pricing_table(settings.llm_pricing)
    )
    caller = LLMCaller(
        llm_client if llm_client is not None else create_llm_client(settings),
        model=settings.llm_model,
        policy=RetryPolicy(
            max_attempts=settings.llm_max_attempts,
            backoff_base_s=settings.llm_backoff_base_s,
        ),
        recorder=recorder,
        sleep=sleep,
    )
    executor = AgentExecutor(store, caller)

    editorial = EditorialOrchestrator(
        registry=registry,
        executor=executor,
        progress=progress,
        manuscripts=manuscripts,
        asset_queue=asset_queue,
        notifier=notifier,
        tick_interval_s=settings.progress_tick_interval_s,
        tick_step=settings.progress_tick_step,
    )
    assets = AssetOrchestrator(
        registry=registry,
        executor=executor,
        store=store,
        progress=progress,
        notifier=notifier,
        dependency_mode=settings.metadata_dependency_mode,
        dependency_delay_s=settings.metadata_agent_delay_s,
        sleep=sleep,
    )
    submission = SubmissionService(
        store=store,
        progress=progress,
        analysis_queue=analysis_queue,
        asset_queue=asset_queue,
        report_id_ttl_seconds=settings.report_id_ttl_seconds,
    )

    logger.debug(
        "Services built: store=%s queues=%s model=%s",
        settings.object_store_backend, settings.queue_backend, settings.llm_model,
    )
    return PipelineServices(
        settings=settings,
        store=store,
        progress=progress,
        manuscripts=manuscripts,
        analysis_queue=analysis_queue,
        asset_queue=asset_queue,
        registry=registry,
        recorder=recorder,
        caller=caller,
        executor=executor,
        editorial=editorial,
        assets=assets,
        submission=submission,
        notifier=notifier,
    )
