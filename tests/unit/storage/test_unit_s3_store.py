# tests/unit/storage/test_unit_s3_store.py - v1
"""Tests for storage/s3_store.py - mocked S3 client."""

from __future__ import annotations

import io
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from manuscriptai.core.errors import StorageError
from manuscriptai.storage.s3_store import S3ObjectStore


@pytest.fixture
def s3_objects() -> dict[str, dict]:
    return {}


@pytest.fixture
def mock_s3_store(s3_objects):
    """Create S3ObjectStore with mocked boto3 client."""
    mock_client = MagicMock()

    def put_object(Bucket, Key, Body, ContentType, Metadata):
        s3_objects[Key] = {"Body": Body, "ContentType": ContentType, "Metadata": Metadata}

    def get_object(Bucket, Key):
        if Key not in s3_objects:
            raise ClientError({"Error": {"Code": "NoSuchKey"}}, "GetObject")
        obj = s3_objects[Key]
        return {
            "Body": io.BytesIO(obj["Body"]),
            "ContentType": obj["ContentType"],
            "Metadata": dict(obj["Metadata"]),
        }

    def delete_object(Bucket, Key):
        s3_objects.pop(Key, None)

    mock_client.put_object = put_object
    mock_client.get_object = get_object
    mock_client.delete_object = delete_object

    with patch("manuscriptai.storage.s3_store.S3ObjectStore.__init__", return_value=None):
        store = S3ObjectStore.__new__(S3ObjectStore)
        store._s3 = mock_client
        store._bucket = "test-bucket"
        store._prefix = "manuscripts/"

    return store


class TestS3ObjectStore:
    @pytest.mark.asyncio
    async def test_put_and_get(self, mock_s3_store, s3_objects):
        await mock_s3_store.put(
            "u1/m1/f.txt-analysis.json", '{"a": 1}',
            content_type="application/json", metadata={"assetType": "analysis"},
        )
        assert "manuscripts/u1/m1/f.txt-analysis.json" in s3_objects

        obj = await mock_s3_store.get("u1/m1/f.txt-analysis.json")
        assert obj.key == "u1/m1/f.txt-analysis.json"
        assert obj.as_json() == {"a": 1}
        assert obj.content_type == "application/json"
        assert obj.metadata == {"assetType": "analysis"}
        assert obj.expires_at is None

    @pytest.mark.asyncio
    async def test_missing_key_is_none(self, mock_s3_store):
        assert await mock_s3_store.get("nope") is None
        assert await mock_s3_store.exists("nope") is False

    @pytest.mark.asyncio
    async def test_ttl_stored_as_metadata(self, mock_s3_store, s3_objects):
        await mock_s3_store.put("status:abc12345", b"{}", ttl_seconds=60)
        assert "expires-at" in s3_objects["manuscripts/status:abc12345"]["Metadata"]
        obj = await mock_s3_store.get("status:abc12345")
        assert obj.expires_at is not None
        assert "expires-at" not in obj.metadata

    @pytest.mark.asyncio
    async def test_expired_reads_as_missing(self, mock_s3_store):
        await mock_s3_store.put("status:abc12345", b"{}", ttl_seconds=-1)
        assert await mock_s3_store.get("status:abc12345") is None

    @pytest.mark.asyncio
    async def test_delete(self, mock_s3_store):
        await mock_s3_store.put("k", b"x")
        await mock_s3_store.delete("k")
        assert await mock_s3_store.get("k") is None

    @pytest.mark.asyncio
    async def test_access_denied_raises(self, mock_s3_store):
        def denied(Bucket, Key):
            raise ClientError({"Error": {"Code": "AccessDenied"}}, "GetObject")

        mock_s3_store._s3.get_object = denied
        with pytest.raises(StorageError, match="S3 read failed"):
            await mock_s3_store.get("k")

    def test_full_key(self, mock_s3_store):
        assert mock_s3_store._full_key("a.json") == "manuscripts/a.json"
