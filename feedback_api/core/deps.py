# feedback_api/core/deps.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from fastapi import Depends, Request

from feedback_api.core.config import Settings, get_settings
from feedback_api.services.store import FeedbackStore, InMemoryStore, SqliteStore


@lru_cache
def _memory_store() -> InMemoryStore:
    # process-wide; lost on restart
    return InMemoryStore()


@lru_cache
def _sqlite_store(sqlite_path: Path) -> SqliteStore:
    # one per file, so init_db runs once per process
    return SqliteStore(sqlite_path)


def get_store(settings: Settings = Depends(get_settings)) -> FeedbackStore:
    if settings.store_backend == "memory":
        return _memory_store()
    return _sqlite_store(settings.abs_sqlite_path())


def resolve_origin(request: Request, settings: Settings) -> str:
    """Configured public origin, else the origin the request came in on."""
    if settings.public_origin:
        return settings.public_origin
    base = str(request.base_url).rstrip("/")
    return base or settings.fallback_origin
