# src/storage/s3_store.py - v1
"""S3-compatible object store (OBJECT_STORE_BACKEND=s3).

Supports AWS S3, MinIO, R2 and other S3-compatible storage.
Requires 'boto3' package: pip install boto3.
S3 has no per-object TTL, so expiry is recorded in user metadata and
enforced on read; bucket lifecycle rules do the actual cleanup.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from manuscriptai.core.errors import StorageError
from manuscriptai.storage.base_object_store import (
    BaseObjectStore,
    StoredObject,
    to_bytes,
)

logger = logging.getLogger(__name__)

_EXPIRES_META = "expires-at"
_MISSING_CODES = {"NoSuchKey", "404", "NotFound"}


class S3ObjectStore(BaseObjectStore):
    """Objects in an S3 bucket, optionally below a key prefix."""

    def __init__(
        self,
        bucket: str,
        prefix: str = "",
        region: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        """Initialize S3 store.

        Args:
            bucket: S3 bucket name.
            prefix: Key prefix for all objects (e.g. "manuscripts/").
            region: AWS region (optional, uses boto3 default if not set).
            endpoint_url: Custom endpoint for MinIO/compatible storage.
        """
        try:
            import boto3
        except ImportError as e:
            raise ImportError(
                "boto3 package required for S3 store: pip install boto3"
            ) from e

        kwargs: dict = {}
        if region:
            kwargs["region_name"] = region
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url

        self._s3 = boto3.client("s3", **kwargs)
        self._bucket = bucket
        self._prefix = prefix.rstrip("/") + "/" if prefix else ""

    def _full_key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> StoredObject | None:
        from botocore.exceptions import BotoCoreError, ClientError

        full_key = self._full_key(key)
        try:
            response = self._s3.get_object(Bucket=self._bucket, Key=full_key)
            body = response["Body"].read()
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in _MISSING_CODES:
                return None
            raise StorageError(f"S3 read failed for {full_key}: {e}") from e
        except BotoCoreError as e:
            raise StorageError(f"S3 read failed for {full_key}: {e}") from e

        metadata = dict(response.get("Metadata") or {})
        expires_raw = metadata.pop(_EXPIRES_META, None)
        obj = StoredObject(
            key=key,
            body=body,
            content_type=response.get("ContentType", "application/octet-stream"),
            metadata=metadata,
            expires_at=datetime.fromisoformat(expires_raw) if expires_raw else None,
        )
        if obj.is_expired():
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
        from botocore.exceptions import BotoCoreError, ClientError

        full_key = self._full_key(key)
        payload = to_bytes(body)
        user_meta = {k: str(v) for k, v in (metadata or {}).items()}
        if ttl_seconds is not None:
            user_meta[_EXPIRES_META] = (
                datetime.now(timezone.utc) + timedelta(seconds=ttl_seconds)
            ).isoformat()
        try:
            self._s3.put_object(
                Bucket=self._bucket,
                Key=full_key,
                Body=payload,
                ContentType=content_type,
                Metadata=user_meta,
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"S3 write failed for {full_key}: {e}") from e
        logger.debug("S3 write: s3://%s/%s (%d bytes)", self._bucket, full_key, len(payload))

    async def delete(self, key: str) -> None:
        from botocore.exceptions import BotoCoreError, ClientError

        full_key = self._full_key(key)
        try:
            self._s3.delete_object(Bucket=self._bucket, Key=full_key)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"S3 delete failed for {full_key}: {e}") from e
