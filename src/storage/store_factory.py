# src/storage/store_factory.py - v1
"""Factory: instantiate the object store from configuration."""

from __future__ import annotations

from manuscriptai.config.settings import Settings
from manuscriptai.storage.base_object_store import BaseObjectStore


def create_object_store(settings: Settings) -> BaseObjectStore:
    """Create the object store backend named by OBJECT_STORE_BACKEND.

    Raises:
        ValueError: If the backend is not supported.
    """
    backend = settings.object_store_backend

    if backend == "memory":
        from manuscriptai.storage.memory_store import MemoryObjectStore

        return MemoryObjectStore()

    if backend == "local":
        from manuscriptai.storage.local_store import LocalObjectStore

        return LocalObjectStore(settings.object_store_root)

    if backend == "s3":
        from manuscriptai.storage.s3_store import S3ObjectStore

        return S3ObjectStore(
            bucket=settings.object_store_s3_bucket,
            prefix=settings.object_store_s3_prefix,
            region=settings.object_store_s3_region or None,
        )

    if backend == "redis":
        from manuscriptai.storage.redis_store import RedisObjectStore

        return RedisObjectStore(settings.object_store_redis_url)

    raise ValueError(f"Unsupported object store backend: {backend!r}")
