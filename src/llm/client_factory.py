# src/llm/client_factory.py - v1
"""Factory: build the LLM client from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from manuscriptai.llm.base_client import BaseLLMClient

if TYPE_CHECKING:
    from manuscriptai.config.settings import Settings


def create_llm_client(settings: Settings) -> BaseLLMClient:
    """Create the Anthropic client, routed through the gateway when configured."""
    from manuscriptai.llm.adapters.anthropic_adapter import AnthropicAdapter

    return AnthropicAdapter(
        api_key=settings.anthropic_api_key,
        base_url=settings.llm_gateway_base_url or None,
        api_version=settings.llm_api_version,
        timeout_s=settings.llm_request_timeout_s,
    )
