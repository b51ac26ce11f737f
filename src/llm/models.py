# src/llm/models.py - v1
"""LLM-specific types: messages, responses, temperature presets, call outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel


class Message(BaseModel):
    """Single message in a conversation."""

    role: Literal["user", "assistant"]
    content: str


class LLMResponse(BaseModel):
    """Normalized response from the model endpoint."""

    content: str
    input_tokens: int
    output_tokens: int
    model: str
    latency_ms: int = 0
    status_code: int = 200


class Temperature(float, Enum):
    """Sampling temperature presets used by the agents."""

    PRECISE = 0.3
    BALANCED = 0.5
    CREATIVE = 0.8


class CallIdentity(BaseModel):
    """Who is paying for a call: used for cost accounting and logs."""

    agent: str
    user_id: str = "unknown"
    manuscript_id: str = "unknown"
    operation_group: str
    operation: str


# --- Per-attempt outcome ---


@dataclass(frozen=True)
class Ok:
    value: dict[str, Any]
    response: LLMResponse


@dataclass(frozen=True)
class Retryable:
    reason: str
    status: int | None = None


@dataclass(frozen=True)
class Terminal:
    reason: str
    status: int | None = None


CallOutcome = Union[Ok, Retryable, Terminal]
