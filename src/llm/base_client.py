# src/llm/base_client.py - v1
"""Abstract LLM client interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from manuscriptai.llm.models import LLMResponse, Message


class LLMHTTPError(Exception):
    """Endpoint answered with an error status, or could not be reached.

    ``status_code`` is None for connection failures and timeouts.
    """

    def __init__(self, status_code: int | None, message: str) -> None:
        self.status_code = status_code
        super().__init__(
            f"HTTP {status_code}: {message}" if status_code is not None else message
        )


class BaseLLMClient(ABC):
    """Single-shot completion against a model endpoint. Never retries."""

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        *,
        model: str,
        temperature: float,
        max_tokens: int = 4096,
    ) -> LLMResponse:
        """Text completion.

        Raises:
            LLMHTTPError: On any non-2xx status or transport failure.
        """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier."""
