# src/storage/layout.py - v1
"""Canonical object store keys.

Artifacts hang off the manuscript key, so a re-analysis overwrites the
previous artifacts in place. Progress records and report-id mappings are
keyed by report id.
"""

from __future__ import annotations

REPORT_ID_PREFIX = "report-id:"
EDITORIAL_STATUS_PREFIX = "status:"
ASSET_STATUS_PREFIX = "asset-status:"

DEVELOPMENTAL_SUFFIX = "analysis"
LINE_EDITING_SUFFIX = "line-analysis"
COPY_EDITING_SUFFIX = "copy-analysis"
BUNDLE_SUFFIX = "assets"


def artifact_key(manuscript_key: str, suffix: str) -> str:
    """``<manuscriptKey>-<suffix>.json``."""
    return f"{manuscript_key}-{suffix}.json"


def developmental_key(manuscript_key: str) -> str:
    return artifact_key(manuscript_key, DEVELOPMENTAL_SUFFIX)


def editorial_keys(manuscript_key: str) -> list[str]:
    """The three editorial artifact keys, in phase order."""
    return [
        artifact_key(manuscript_key, suffix)
        for suffix in (DEVELOPMENTAL_SUFFIX, LINE_EDITING_SUFFIX, COPY_EDITING_SUFFIX)
    ]


def bundle_key(manuscript_key: str) -> str:
    return artifact_key(manuscript_key, BUNDLE_SUFFIX)


def report_id_key(report_id: str) -> str:
    return f"{REPORT_ID_PREFIX}{report_id}"


def editorial_status_key(report_id: str) -> str:
    return f"{EDITORIAL_STATUS_PREFIX}{report_id}"


def asset_status_key(report_id: str) -> str:
    return f"{ASSET_STATUS_PREFIX}{report_id}"
