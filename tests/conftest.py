# tests/conftest.py
from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

# now imports work
from feedback_api.main import app  # noqa


from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from feedback_api.core.config import get_settings, Settings
from feedback_api.core.deps import get_store
from feedback_api.schemas.entity import Entity, EntityKind, EntityStatus
from feedback_api.schemas.feedback import FeedbackRecord
from feedback_api.services.store import InMemoryStore, SqliteStore

T0 = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_entity(
    entity_id: str = "r1",
    status: EntityStatus = EntityStatus.ACTIVE,
    kind: EntityKind = EntityKind.RESTAURANT,
    created_at: Optional[datetime] = None,
) -> Entity:
    ts = created_at or T0
    return Entity(
        id=entity_id,
        kind=kind,
        name=f"{kind.value} {entity_id}",
        status=status,
        created_at=ts,
        updated_at=ts,
    )


def make_feedback(
    feedback_id: str,
    entity_id: str = "r1",
    minutes: int = 0,
    overall: int = 4,
) -> FeedbackRecord:
    return FeedbackRecord(
        id=feedback_id,
        entity_id=entity_id,
        created_at=T0 + timedelta(minutes=minutes),
        food_rating=4,
        staff_rating=5,
        ambience_rating=3,
        overall_rating=overall,
    )


@pytest.fixture()
def tmp_repo(tmp_path: Path) -> Path:
    """
    Temp repo-like structure so tests don't touch the real store/logs.
    """
    (tmp_path / "artifacts" / "stores").mkdir(parents=True, exist_ok=True)
    (tmp_path / "logs").mkdir(parents=True, exist_ok=True)
    return tmp_path


@pytest.fixture()
def test_settings(tmp_repo: Path) -> Settings:
    s = Settings()
    s.repo_root = str(tmp_repo)
    s.logs_dir = "logs"
    s.sqlite_path = "artifacts/stores/feedback_store.sqlite"
    s.store_backend = "memory"
    s.public_origin = None
    return s


@pytest.fixture()
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def sqlite_store(test_settings: Settings) -> SqliteStore:
    return SqliteStore(test_settings.abs_sqlite_path())


@pytest.fixture()
def client(test_settings: Settings, memory_store: InMemoryStore):
    """
    FastAPI client with settings + store overridden.
    """
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_store] = lambda: memory_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def sqlite_client(test_settings: Settings):
    """
    Client running against the real sqlite backend under tmp_path.
    """
    test_settings.store_backend = "sqlite"
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def entity_factory():
    return make_entity


@pytest.fixture()
def feedback_factory():
    return make_feedback
