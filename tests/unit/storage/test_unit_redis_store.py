# tests/unit/storage/test_unit_redis_store.py - v1
"""Tests for storage/redis_store.py - mocked Redis client."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from manuscriptai.core.errors import StorageError
from manuscriptai.storage.redis_store import RedisObjectStore


def _to_bytes(value) -> bytes:
    return value if isinstance(value, bytes) else str(value).encode("utf-8")


@pytest.fixture
def mock_redis_store():
    """Create RedisObjectStore over a dict-backed fake client."""
    hashes: dict[str, dict[bytes, bytes]] = {}
    expiries: dict[str, int] = {}

    pipe = MagicMock()
    pipe.delete = lambda k: hashes.pop(k, None)
    pipe.hset = lambda k, mapping: hashes.__setitem__(
        k, {_to_bytes(f): _to_bytes(v) for f, v in mapping.items()}
    )
    pipe.expire = lambda k, seconds: expiries.__setitem__(k, seconds)

    mock_client = MagicMock()
    mock_client.pipeline = lambda: pipe
    mock_client.hgetall = lambda k: dict(hashes.get(k, {}))
    mock_client.delete = lambda k: hashes.pop(k, None)
    mock_client.exists = lambda k: int(k in hashes)

    with patch("manuscriptai.storage.redis_store.RedisObjectStore.__init__", return_value=None):
        store = RedisObjectStore.__new__(RedisObjectStore)
        store._client = mock_client

    store.expiries = expiries
    return store


class TestRedisObjectStore:
    @pytest.mark.asyncio
    async def test_put_and_get(self, mock_redis_store):
        await mock_redis_store.put(
            "u1/m1/f.txt", "hello", content_type="text/plain", metadata={"a": "1"}
        )
        obj = await mock_redis_store.get("u1/m1/f.txt")
        assert obj.text() == "hello"
        assert obj.content_type == "text/plain"
        assert obj.metadata == {"a": "1"}

    @pytest.mark.asyncio
    async def test_missing(self, mock_redis_store):
        assert await mock_redis_store.get("nope") is None
        assert await mock_redis_store.exists("nope") is False

    @pytest.mark.asyncio
    async def test_ttl_sets_expire(self, mock_redis_store):
        await mock_redis_store.put("status:abc12345", b"{}", ttl_seconds=604_800)
        assert mock_redis_store.expiries == {"manuscriptai:obj:status:abc12345": 604_800}

    @pytest.mark.asyncio
    async def test_delete(self, mock_redis_store):
        await mock_redis_store.put("k", b"x")
        assert await mock_redis_store.exists("k") is True
        await mock_redis_store.delete("k")
        assert await mock_redis_store.exists("k") is False

    @pytest.mark.asyncio
    async def test_connection_error_wrapped(self, mock_redis_store):
        def down(key):
            raise RedisConnectionError("connection refused")

        mock_redis_store._client.hgetall = down
        with pytest.raises(StorageError, match="Redis read failed"):
            await mock_redis_store.get("k")
