# src/storage/local_store.py - v1
"""Local filesystem object store (OBJECT_STORE_BACKEND=local, default).

Each object is a file under the root directory, with a ``.meta.json``
sidecar holding content type, custom metadata and expiry.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

from manuscriptai.core.errors import StorageError
from manuscriptai.storage.base_object_store import (
    BaseObjectStore,
    StoredObject,
    to_bytes,
)

logger = logging.getLogger(__name__)

_META_SUFFIX = ".meta.json"


class LocalObjectStore(BaseObjectStore):
    """Write objects to the local filesystem."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).expanduser()

    def _resolve(self, key: str) -> Path:
        """Map a key to a path below root, rejecting traversal."""
        if not key or key.startswith("/") or ".." in Path(key).parts:
            raise StorageError(f"Invalid object key: {key!r}")
        return self._root / key

    @staticmethod
    def _meta_path(path: Path) -> Path:
        return path.with_name(path.name + _META_SUFFIX)

    async def get(self, key: str) -> StoredObject | None:
        path = self._resolve(key)
        if not path.is_file():
            return None
        try:
            body = path.read_bytes()
            meta_path = self._meta_path(path)
            meta = (
                json.loads(meta_path.read_text(encoding="utf-8"))
                if meta_path.exists()
                else {}
            )
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Failed to read {key}: {e}") from e

        obj = StoredObject(
            key=key,
            body=body,
            content_type=meta.get("content_type", "application/octet-stream"),
            metadata=meta.get("metadata", {}),
            expires_at=meta.get("expires_at"),
        )
        if obj.is_expired():
            logger.debug("Expired object %s removed on read", key)
            await self.delete(key)
            return None
        return obj

    async def put(
        self,
        key: str,
        body: bytes | str,
        *,
        content_type: str = "application/octet-stream",
        metadata: dict[str, str] | None = None,
        ttl_seconds: int | None = None,
    ) -> None:
        path = self._resolve(key)
        expires_at = None
        if ttl_seconds is not None:
            expires_at = (
                datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds)
            ).isoformat()
        meta = {
            "content_type": content_type,
            "metadata": dict(metadata or {}),
            "expires_at": expires_at,
        }
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(to_bytes(body))
            self._meta_path(path).write_text(json.dumps(meta), encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to write {key}: {e}") from e

    async def delete(self, key: str) -> None:
        path = self._resolve(key)
        try:
            path.unlink(missing_ok=True)
            self._meta_path(path).unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to delete {key}: {e}") from e
