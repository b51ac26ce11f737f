# src/core/errors.py - v1
"""Error kinds shared by the pipeline layers.

The LLM layer keeps retryable failures to itself; everything listed here can
cross a module boundary.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for pipeline errors."""


class TerminalLLMError(PipelineError):
    """LLM call failed for good: non-retryable status or retry budget spent."""

    def __init__(
        self,
        agent: str,
        attempts: int,
        last_status: int | None,
        reason: str,
    ) -> None:
        self.agent = agent
        self.attempts = attempts
        self.last_status = last_status
        self.reason = reason
        status = last_status if last_status is not None else "n/a"
        super().__init__(
            f"Agent '{agent}' failed after {attempts} attempt(s) "
            f"(last status {status}): {reason}"
        )


class SchemaViolation(PipelineError):
    """Model output broke an agent's schema contract.

    Retryable inside the LLM layer unless ``terminal`` is set.
    """

    def __init__(self, message: str, terminal: bool = False) -> None:
        super().__init__(message)
        self.terminal = terminal


class StorageError(PipelineError):
    """Object store read or write failed."""


class MissingPrerequisite(PipelineError):
    """A required upstream artifact is absent."""


class OrchestratorFailure(PipelineError):
    """A job could not be completed; the message goes back to the queue."""


class UnsupportedManuscriptError(PipelineError):
    """Manuscript content type cannot be turned into text."""


class InvalidStatusTransition(PipelineError):
    """Manuscript status change not allowed by the lifecycle."""


class UnknownReportId(PipelineError):
    """No manuscript key is mapped to the given report id."""
