# tests/unit/storage/test_unit_layout.py - v1
"""Tests for storage/layout.py key conventions."""

from __future__ import annotations

from manuscriptai.storage.layout import (
    artifact_key,
    asset_status_key,
    bundle_key,
    developmental_key,
    editorial_keys,
    editorial_status_key,
    report_id_key,
)

KEY = "u1/m1/draft.docx"


class TestLayout:
    def test_artifact_key(self):
        assert artifact_key(KEY, "keywords") == "u1/m1/draft.docx-keywords.json"

    def test_editorial_keys_in_phase_order(self):
        assert editorial_keys(KEY) == [
            "u1/m1/draft.docx-analysis.json",
            "u1/m1/draft.docx-line-analysis.json",
            "u1/m1/draft.docx-copy-analysis.json",
        ]
        assert developmental_key(KEY) == editorial_keys(KEY)[0]

    def test_bundle_key(self):
        assert bundle_key(KEY) == "u1/m1/draft.docx-assets.json"

    def test_report_keys(self):
        assert report_id_key("abc12345") == "report-id:abc12345"
        assert editorial_status_key("abc12345") == "status:abc12345"
        assert asset_status_key("abc12345") == "asset-status:abc12345"
