# tests/unit/config/test_unit_settings.py - v1
"""Tests for config/settings.py."""

from __future__ import annotations

import pytest

from manuscriptai.config.settings import ConfigurationError, Settings, load_settings


class TestDefaults:
    def test_pipeline_defaults(self, monkeypatch):
        monkeypatch.delenv("LLM_MODEL", raising=False)
        settings = Settings(_env_file=None)
        assert settings.llm_max_attempts == 5
        assert settings.llm_backoff_base_s == 2.0
        assert settings.progress_tick_interval_s == 2.0
        assert settings.progress_tick_step == 2
        assert settings.metadata_dependency_mode == "delay"
        assert settings.metadata_agent_delay_s == 5.0
        assert settings.analysis_queue_name == "ANALYSIS_QUEUE"
        assert settings.asset_queue_name == "ASSET_QUEUE"

    def test_ttl_helpers(self):
        settings = load_settings(progress_ttl_days=1, report_id_ttl_days=2)
        assert settings.progress_ttl_seconds == 86_400
        assert settings.report_id_ttl_seconds == 172_800


class TestEnvironment:
    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("METADATA_DEPENDENCY_MODE", "barrier")
        monkeypatch.setenv("QUEUE_RETRY_DELAYS_S", "[1, 2]")
        settings = Settings(_env_file=None)
        assert settings.metadata_dependency_mode == "barrier"
        assert settings.queue_retry_delays_s == [1.0, 2.0]


class TestValidation:
    def test_s3_needs_bucket(self):
        with pytest.raises(ConfigurationError, match="OBJECT_STORE_S3_BUCKET"):
            load_settings(object_store_backend="s3")

    def test_redis_queue_needs_url(self):
        with pytest.raises(ConfigurationError, match="QUEUE_REDIS_URL"):
            load_settings(queue_backend="redis")

    def test_errors_are_collected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(object_store_backend="redis", queue_backend="redis")
        assert "OBJECT_STORE_REDIS_URL" in str(exc_info.value)
        assert "QUEUE_REDIS_URL" in str(exc_info.value)

    def test_pricing_needs_both_rates(self):
        with pytest.raises(ConfigurationError, match="output_per_1m"):
            load_settings(llm_pricing={"m": {"input_per_1m": 1.0}})

    def test_negative_retry_delay(self):
        with pytest.raises(ConfigurationError):
            load_settings(queue_retry_delays_s=[-1.0])

    @pytest.mark.parametrize("step", [0, 26])
    def test_tick_step_range(self, step):
        with pytest.raises(ValueError):
            load_settings(progress_tick_step=step)
