# src/config/settings.py - v1
"""Typed configuration loaded from the environment and .env via pydantic-settings.

Single source of truth for deployment-specific settings: LLM endpoint and
pricing, object store, queues, progress cadence and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === LLM ===
    anthropic_api_key: str = ""
    llm_gateway_base_url: str = ""
    llm_model: str = "claude-sonnet-4-20250514"
    llm_api_version: str = "2023-06-01"
    llm_max_tokens: int = 4096
    llm_max_attempts: int = 5
    llm_backoff_base_s: float = 2.0
    llm_request_timeout_s: float = 600.0

    # Per-model overrides, USD per 1M tokens:
    # {"model": {"input_per_1m": 3.0, "output_per_1m": 15.0}}
    llm_pricing: dict[str, dict[str, float]] = {}

    # === Object store ===
    object_store_backend: Literal["memory", "local", "s3", "redis"] = "local"
    object_store_root: Path = Path("~/.manuscriptai/objects")
    object_store_s3_bucket: str = ""
    object_store_s3_prefix: str = ""
    object_store_s3_region: str = ""
    object_store_redis_url: str = ""

    # === Queues ===
    queue_backend: Literal["memory", "redis"] = "memory"
    queue_redis_url: str = ""
    analysis_queue_name: str = "ANALYSIS_QUEUE"
    asset_queue_name: str = "ASSET_QUEUE"
    queue_max_retries: int = 3
    queue_retry_delays_s: list[float] = [5.0, 30.0, 300.0]
    queue_batch_size: int = 5
    queue_poll_timeout_s: float = 5.0

    # === Pipeline ===
    progress_tick_interval_s: float = 2.0
    progress_tick_step: int = 2
    metadata_dependency_mode: Literal["delay", "barrier"] = "delay"
    metadata_agent_delay_s: float = 5.0
    progress_ttl_days: int = 7
    report_id_ttl_days: int = 30

    # === Manuscript repository ===
    manuscript_repository: Literal["memory", "sqlite"] = "memory"
    manuscript_db_path: Path = Path("~/.manuscriptai/manuscripts.db")

    # === Cost tracking ===
    cost_sink: Literal["memory", "jsonl"] = "jsonl"
    cost_log_path: Path = Path("~/.manuscriptai/costs.jsonl")

    # === HTTP ===
    http_host: str = "127.0.0.1"
    http_port: int = 8080

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("llm_max_attempts", "queue_batch_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:  # noqa: N805
        if v < 1:
            raise ValueError("must be >= 1")
        return v

    @field_validator("progress_tick_step")
    @classmethod
    def validate_tick_step(cls, v: int) -> int:  # noqa: N805
        if v < 1 or v > 25:
            raise ValueError("progress_tick_step must be between 1 and 25")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.object_store_backend == "s3" and not self.object_store_s3_bucket:
            errors.append("OBJECT_STORE_BACKEND=s3 requires OBJECT_STORE_S3_BUCKET")

        if self.object_store_backend == "redis" and not self.object_store_redis_url:
            errors.append(
                "OBJECT_STORE_BACKEND=redis requires OBJECT_STORE_REDIS_URL"
            )

        if self.queue_backend == "redis" and not self.queue_redis_url:
            errors.append("QUEUE_BACKEND=redis requires QUEUE_REDIS_URL")

        if any(delay < 0 for delay in self.queue_retry_delays_s):
            errors.append("QUEUE_RETRY_DELAYS_S must be non-negative")

        for model, rates in self.llm_pricing.items():
            missing = {"input_per_1m", "output_per_1m"} - set(rates)
            if missing:
                errors.append(
                    f"LLM_PRICING[{model}] missing {', '.join(sorted(missing))}"
                )

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def progress_ttl_seconds(self) -> int:
        return self.progress_ttl_days * 86_400

    @property
    def report_id_ttl_seconds(self) -> int:
        return self.report_id_ttl_days * 86_400


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or embedding).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
