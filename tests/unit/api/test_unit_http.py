# tests/unit/api/test_unit_http.py - v1
"""Tests for api/http.py through the FastAPI test client."""

from __future__ import annotations

import asyncio

import pytest
from fastapi.testclient import TestClient

from manuscriptai.api.http import create_app
from manuscriptai.storage.layout import bundle_key, developmental_key
from tests.conftest import MANUSCRIPT_KEY


@pytest.fixture
def client(services) -> TestClient:
    return TestClient(create_app(services))


def submit(client: TestClient) -> str:
    resp = client.post("/analyze", json={"manuscriptKey": MANUSCRIPT_KEY, "genre": "thriller"})
    assert resp.status_code == 202
    return resp.json()["reportId"]


class TestHealth:
    def test_ok(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestAnalyze:
    def test_submit_returns_report_id(self, client, services):
        report_id = submit(client)
        assert len(report_id) == 8
        assert services.analysis_queue.sent[0]["reportId"] == report_id

    def test_submit_validates_body(self, client):
        resp = client.post("/analyze", json={"genre": "thriller"})
        assert resp.status_code == 422

    def test_status_as_stored(self, client):
        report_id = submit(client)
        resp = client.get("/analyze/status", params={"reportId": report_id})
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "queued"
        assert body["progress"] == 0
        assert body["currentStep"] == "queued"

    def test_status_not_started(self, client):
        resp = client.get("/analyze/status", params={"reportId": "missing1"})
        assert resp.status_code == 404
        assert resp.json() == {"status": "not_started"}

    def test_status_requires_report_id(self, client):
        assert client.get("/analyze/status").status_code == 422


class TestAssets:
    def test_status_not_started(self, client):
        resp = client.get("/assets/status", params={"reportId": "missing1"})
        assert resp.status_code == 404

    def test_submit_unknown_report(self, client):
        resp = client.post("/assets", json={"reportId": "missing1"})
        assert resp.status_code == 404

    def test_submit_before_analysis(self, client, services):
        report_id = submit(client)
        resp = client.post("/assets", json={"reportId": report_id})
        assert resp.status_code == 409
        assert services.asset_queue.sent == []

    def test_submit_and_poll(self, client, services, store):
        report_id = submit(client)
        asyncio.run(store.put_json(developmental_key(MANUSCRIPT_KEY), {"overallScore": 7}))

        resp = client.post(
            "/assets", json={"reportId": report_id, "authorData": {"name": "Jane Doe"}}
        )
        assert resp.status_code == 202
        assert resp.json() == {"reportId": report_id, "status": "queued"}
        assert services.asset_queue.sent[0]["authorData"] == {"name": "Jane Doe"}

        status = client.get("/assets/status", params={"reportId": report_id})
        assert status.status_code == 200
        assert status.json()["status"] == "queued"

    def test_bundle_download(self, client, store):
        report_id = submit(client)
        assert client.get("/assets", params={"id": report_id}).status_code == 404

        asyncio.run(store.put_json(bundle_key(MANUSCRIPT_KEY), {"keywords": None, "errors": []}))
        resp = client.get("/assets", params={"id": report_id})
        assert resp.status_code == 200
        assert resp.json() == {"keywords": None, "errors": []}

    def test_bundle_unknown_report(self, client):
        resp = client.get("/assets", params={"id": "missing1"})
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Report not found"
