# src/manuscripts/repository_factory.py - v1
"""Factory: instantiate the manuscript repository from configuration."""

from __future__ import annotations

from manuscriptai.config.settings import Settings
from manuscriptai.manuscripts.base_repository import BaseManuscriptRepository


def create_manuscript_repository(settings: Settings) -> BaseManuscriptRepository:
    if settings.manuscript_repository == "sqlite":
        from manuscriptai.manuscripts.sqlite_repository import (
            SqliteManuscriptRepository,
        )

        return SqliteManuscriptRepository(settings.manuscript_db_path)

    from manuscriptai.manuscripts.memory_repository import MemoryManuscriptRepository

    return MemoryManuscriptRepository()
