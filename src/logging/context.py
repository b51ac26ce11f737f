# src/logging/context.py - v1
"""Per-job logging context carried in contextvars.

Every queue message is processed in its own asyncio task, so each task sees
its own report id, manuscript key, agent and phase.
"""

from __future__ import annotations

import contextvars
import logging
from dataclasses import dataclass
from typing import Any

_report_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "report_id", default=None
)
_manuscript_key: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "manuscript_key", default=None
)
_queue: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "queue", default=None
)
_agent: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "agent", default=None
)
_phase: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "phase", default=None
)


@dataclass
class LogContext:
    """Snapshot of the current job context."""

    report_id: str | None = None
    manuscript_key: str | None = None
    queue: str | None = None
    agent: str | None = None
    phase: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return the fields that are set."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    return LogContext(
        report_id=_report_id.get(),
        manuscript_key=_manuscript_key.get(),
        queue=_queue.get(),
        agent=_agent.get(),
        phase=_phase.get(),
    )


def set_job_context(
    report_id: str | None,
    manuscript_key: str | None,
    queue: str | None = None,
) -> None:
    """Bind the job being processed by the current task."""
    _report_id.set(report_id)
    _manuscript_key.set(manuscript_key)
    _queue.set(queue)


def set_agent_context(agent: str | None, phase: str | None = None) -> None:
    """Bind the agent currently running in this task."""
    _agent.set(agent)
    _phase.set(phase)


def clear_context() -> None:
    _report_id.set(None)
    _manuscript_key.set(None)
    _queue.set(None)
    _agent.set(None)
    _phase.set(None)


class ContextFilter(logging.Filter):
    """Copy the job context onto each record as ``record.context``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.context = get_context().as_dict()
        return True
