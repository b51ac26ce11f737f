# src/llm/adapters/anthropic_adapter.py - v1
"""Anthropic Messages API adapter implementing BaseLLMClient.

Uses the official anthropic SDK with SDK-level retries disabled; the call
layer owns the retry loop. An optional gateway base URL routes requests
through a proxy.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from manuscriptai.llm.base_client import BaseLLMClient, LLMHTTPError
from manuscriptai.llm.models import LLMResponse, Message

logger = logging.getLogger(__name__)


class AnthropicAdapter(BaseLLMClient):
    """Adapter for Anthropic Claude models."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        api_version: str = "2023-06-01",
        timeout_s: float = 600.0,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url or None
        self._api_version = api_version
        self._timeout_s = timeout_s
        self.__client = None  # Lazy initialization

    @property
    def _client(self):
        """Lazy-init Anthropic client (only on first API call)."""
        if self.__client is None:
            try:
                import anthropic
            except ImportError as e:
                raise ImportError(
                    "anthropic package required: pip install anthropic"
                ) from e
            self.__client = anthropic.AsyncAnthropic(
                api_key=self._api_key or "",
                base_url=self._base_url,
                max_retries=0,
                timeout=self._timeout_s,
                default_headers={"anthropic-version": self._api_version},
            )
        return self.__client

    async def complete(
        self,
        messages: list[Message],
        *,
        model: str,
        temperature: float,
        max_tokens: int = 4096,
    ) -> LLMResponse:
        """POST /v1/messages and normalise the reply."""
        client = self._client
        import anthropic

        kwargs: dict[str, Any] = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": float(temperature),
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }

        start = time.monotonic()
        try:
            response = await client.messages.create(**kwargs)
        except anthropic.APIStatusError as e:
            raise LLMHTTPError(e.status_code, str(e)) from e
        except anthropic.APIConnectionError as e:
            raise LLMHTTPError(None, f"connection error: {e}") from e
        latency_ms = int((time.monotonic() - start) * 1000)

        return LLMResponse(
            content=self._extract_text(response),
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            model=getattr(response, "model", None) or model,
            latency_ms=latency_ms,
        )

    @property
    def provider_name(self) -> str:
        return "anthropic"

    @staticmethod
    def _extract_text(response: Any) -> str:
        """Concatenate text blocks of the response content."""
        return "".join(
            block.text
            for block in response.content
            if getattr(block, "type", None) == "text"
        )
