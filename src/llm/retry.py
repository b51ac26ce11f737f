# src/llm/retry.py - v1
"""Retry policy for LLM calls: status classification and exponential backoff."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded retry with ``base ** attempt`` second waits between attempts."""

    max_attempts: int = 5
    backoff_base_s: float = 2.0

    def delay_for(self, attempt: int) -> float:
        """Wait after failed attempt number ``attempt`` (1-based)."""
        return self.backoff_base_s**attempt

    def should_retry(self, attempt: int) -> bool:
        return attempt < self.max_attempts


def is_retryable_status(status: int | None) -> bool:
    """429, any 5xx, and transport failures (no status) are retryable."""
    if status is None:
        return True
    return status == 429 or 500 <= status <= 599
