# src/llm/caller.py - v1
"""The LLM call layer: one prompt in, one validated JSON object out.

Every agent routes through ``LLMCaller.call_json``. Each attempt resolves to
an ``Ok``, ``Retryable`` or ``Terminal`` outcome; the loop here is the only
retry loop in the pipeline, and only ``TerminalLLMError`` leaves it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Sequence

from manuscriptai.core.errors import SchemaViolation, TerminalLLMError
from manuscriptai.llm.base_client import BaseLLMClient, LLMHTTPError
from manuscriptai.llm.json_extract import JSONExtractionError, extract_json_object
from manuscriptai.llm.models import (
    CallIdentity,
    CallOutcome,
    Message,
    Ok,
    Retryable,
    Terminal,
)
from manuscriptai.llm.retry import RetryPolicy, is_retryable_status

if TYPE_CHECKING:
    from manuscriptai.tracking.cost_recorder import CostRecorder

logger = logging.getLogger(__name__)

Validator = Callable[[dict[str, Any]], dict[str, Any]]
Sleep = Callable[[float], Awaitable[Any]]


def missing_fields(value: dict[str, Any], required: Sequence[str]) -> list[str]:
    """Required top-level keys that are absent or null."""
    return [name for name in required if value.get(name) is None]


class LLMCaller:
    """Bounded-retry JSON calls with cost accounting."""

    def __init__(
        self,
        client: BaseLLMClient,
        *,
        model: str,
        policy: RetryPolicy | None = None,
        recorder: CostRecorder | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._client = client
        self._model = model
        self._policy = policy or RetryPolicy()
        self._recorder = recorder
        self._sleep = sleep

    @property
    def model(self) -> str:
        return self._model

    async def attempt(
        self,
        prompt: str,
        *,
        temperature: float,
        max_tokens: int,
        required_fields: Sequence[str] = (),
        validator: Validator | None = None,
    ) -> CallOutcome:
        """Run one attempt and classify the result."""
        try:
            response = await self._client.complete(
                [Message(role="user", content=prompt)],
                model=self._model,
                temperature=float(temperature),
                max_tokens=max_tokens,
            )
        except LLMHTTPError as e:
            if is_retryable_status(e.status_code):
                return Retryable(str(e), e.status_code)
            return Terminal(str(e), e.status_code)

        try:
            value = extract_json_object(response.content)
        except JSONExtractionError as e:
            return Retryable(str(e), response.status_code)

        missing = missing_fields(value, required_fields)
        if missing:
            return Retryable(
                f"missing required field(s): {', '.join(missing)}",
                response.status_code,
            )

        if validator is not None:
            try:
                value = validator(value)
            except SchemaViolation as e:
                if e.terminal:
                    return Terminal(str(e), response.status_code)
                return Retryable(str(e), response.status_code)

        return Ok(value, response)

    async def call_json(
        self,
        prompt: str,
        *,
        identity: CallIdentity,
        temperature: float,
        max_tokens: int = 4096,
        required_fields: Sequence[str] = (),
        validator: Validator | None = None,
    ) -> dict[str, Any]:
        """Call the model until a validated object comes back.

        Raises:
            TerminalLLMError: Non-retryable failure, or all attempts used.
        """
        attempts = self._policy.max_attempts
        attempt = 0
        while True:
            attempt += 1
            outcome = await self.attempt(
                prompt,
                temperature=temperature,
                max_tokens=max_tokens,
                required_fields=required_fields,
                validator=validator,
            )

            if isinstance(outcome, Ok):
                if attempt > 1:
                    logger.info(
                        "Agent '%s' succeeded on attempt %d/%d",
                        identity.agent, attempt, attempts,
                    )
                await self._record_cost(identity, outcome)
                return outcome.value

            if isinstance(outcome, Terminal):
                logger.error(
                    "Agent '%s' terminal failure on attempt %d: %s",
                    identity.agent, attempt, outcome.reason,
                )
                raise TerminalLLMError(
                    identity.agent, attempt, outcome.status, outcome.reason
                )

            if not self._policy.should_retry(attempt):
                logger.error(
                    "Agent '%s' exhausted %d attempts: %s",
                    identity.agent, attempts, outcome.reason,
                )
                raise TerminalLLMError(
                    identity.agent,
                    attempt,
                    outcome.status,
                    f"retry budget exhausted: {outcome.reason}",
                )

            delay = self._policy.delay_for(attempt)
            logger.warning(
                "Agent '%s' - %s (attempt %d/%d), retrying in %.1fs",
                identity.agent, outcome.reason, attempt, attempts, delay,
            )
            await self._sleep(delay)

    async def _record_cost(self, identity: CallIdentity, outcome: Ok) -> None:
        if self._recorder is None:
            return
        await self._recorder.record(identity, outcome.response)
