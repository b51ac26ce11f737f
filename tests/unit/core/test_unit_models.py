# tests/unit/core/test_unit_models.py - v1
"""Tests for core/models.py and core/errors.py."""

from __future__ import annotations

from manuscriptai.core.errors import SchemaViolation, TerminalLLMError
from manuscriptai.core.models import AssetJob, EditorialJob, ManuscriptKey


class TestManuscriptKey:
    def test_full_key(self):
        key = ManuscriptKey.parse("u1/m1/my draft.docx")
        assert key.user_id == "u1"
        assert key.manuscript_id == "m1"
        assert key.filename == "my draft.docx"

    def test_nested_filename(self):
        assert ManuscriptKey.parse("u1/m1/drafts/v2.txt").filename == "drafts/v2.txt"

    def test_short_key(self):
        key = ManuscriptKey.parse("draft.txt")
        assert key.user_id is None
        assert key.manuscript_id is None
        assert key.filename == "draft.txt"


class TestJobs:
    def test_editorial_from_camel_case(self):
        job = EditorialJob.model_validate(
            {"manuscriptKey": "u1/m1/f.txt", "reportId": "abc12345", "styleGuide": "ap"}
        )
        assert job.genre == "general"
        assert job.style_guide == "ap"
        assert job.to_json_dict()["manuscriptKey"] == "u1/m1/f.txt"

    def test_asset_defaults(self):
        job = AssetJob(manuscript_key="u1/m1/f.txt", report_id="abc12345")
        assert job.author_data == {}
        assert job.series_data == {}


class TestErrors:
    def test_terminal_llm_error_message(self):
        error = TerminalLLMError("keywords", 5, 429, "retry budget exhausted")
        assert "keywords" in str(error)
        assert "5 attempt" in str(error)
        assert error.last_status == 429

    def test_schema_violation_default_retryable(self):
        assert SchemaViolation("x").terminal is False
        assert SchemaViolation("x", terminal=True).terminal is True
