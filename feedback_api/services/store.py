# feedback_api/services/store.py
from __future__ import annotations

import sqlite3
from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Set

from feedback_api.core.errors import StoreError, ValidationError
from feedback_api.schemas.entity import Entity, EntityStatus
from feedback_api.schemas.feedback import FeedbackRecord
from feedback_api.schemas.review import ExternalReview


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FeedbackStore(ABC):
    """
    Persistence seam for entities, feedback and external reviews.

    Services only talk to this interface, so backends can be swapped
    (in-memory for tests, sqlite locally) without touching service logic.
    Feedback and external reviews are append-only: there is no update or
    delete for them.
    """

    # ---- entities ----
    @abstractmethod
    def get_entity(self, entity_id: str) -> Optional[Entity]:
        ...

    @abstractmethod
    def set_status(self, entity_id: str, status: EntityStatus) -> bool:
        """Overwrite the status. Returns False when the entity is unknown."""

    @abstractmethod
    def create_entity(self, entity: Entity) -> Entity:
        ...

    @abstractmethod
    def list_entities(self) -> List[Entity]:
        ...

    # ---- feedback ----
    @abstractmethod
    def append_feedback(self, record: FeedbackRecord) -> FeedbackRecord:
        ...

    @abstractmethod
    def query_feedback(self, entity_id: str) -> List[FeedbackRecord]:
        """All records for `entity_id` in insertion order."""

    # ---- external reviews ----
    @abstractmethod
    def append_external_review(self, review: ExternalReview) -> ExternalReview:
        ...

    @abstractmethod
    def query_external_reviews(self, entity_id: str) -> List[ExternalReview]:
        ...

    def healthcheck(self) -> bool:
        return True


# -------------------------
# In-memory backend
# -------------------------
def _claim_id(taken: Set[str], record_id: str) -> None:
    # mirrors the sqlite primary keys: a reused id is a store failure
    if record_id in taken:
        raise StoreError(f"duplicate record id {record_id}")
    taken.add(record_id)


class InMemoryStore(FeedbackStore):
    def __init__(self) -> None:
        self._entities: Dict[str, Entity] = {}
        self._feedback: Dict[str, List[FeedbackRecord]] = defaultdict(list)
        self._reviews: Dict[str, List[ExternalReview]] = defaultdict(list)
        self._feedback_ids: Set[str] = set()
        self._review_ids: Set[str] = set()

    def get_entity(self, entity_id: str) -> Optional[Entity]:
        return self._entities.get(entity_id)

    def set_status(self, entity_id: str, status: EntityStatus) -> bool:
        current = self._entities.get(entity_id)
        if current is None:
            return False
        self._entities[entity_id] = current.model_copy(
            update={"status": EntityStatus(status), "updated_at": utcnow()}
        )
        return True

    def create_entity(self, entity: Entity) -> Entity:
        if entity.id in self._entities:
            raise ValidationError(f"Entity {entity.id} already exists", param="id")
        self._entities[entity.id] = entity
        return entity

    def list_entities(self) -> List[Entity]:
        return list(self._entities.values())

    def append_feedback(self, record: FeedbackRecord) -> FeedbackRecord:
        _claim_id(self._feedback_ids, record.id)
        self._feedback[record.entity_id].append(record)
        return record

    def query_feedback(self, entity_id: str) -> List[FeedbackRecord]:
        return list(self._feedback.get(entity_id, ()))

    def append_external_review(self, review: ExternalReview) -> ExternalReview:
        _claim_id(self._review_ids, review.id)
        self._reviews[review.entity_id].append(review)
        return review

    def query_external_reviews(self, entity_id: str) -> List[ExternalReview]:
        return list(self._reviews.get(entity_id, ()))


# -------------------------
# SQLite backend
# -------------------------
def _ensure_column(con: sqlite3.Connection, table: str, col: str, col_type: str) -> None:
    """Lightweight migration: add column if missing (SQLite-safe for local use)."""
    cur = con.cursor()
    cur.execute(f"PRAGMA table_info({table});")
    cols = {row[1] for row in cur.fetchall()}
    if col not in cols:
        cur.execute(f"ALTER TABLE {table} ADD COLUMN {col} {col_type};")


def init_db(sqlite_path: Path) -> None:
    sqlite_path.parent.mkdir(parents=True, exist_ok=True)

    con = sqlite3.connect(str(sqlite_path))
    try:
        cur = con.cursor()

        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS entities (
              id TEXT PRIMARY KEY,
              name TEXT NOT NULL DEFAULT '',
              email TEXT,
              phone TEXT,
              address TEXT,
              status TEXT NOT NULL DEFAULT 'active',  -- active | blocked
              created_at TEXT NOT NULL,
              updated_at TEXT NOT NULL
            )
            """
        )

        # append-only
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS feedback (
              id TEXT PRIMARY KEY,
              entity_id TEXT NOT NULL,
              created_at TEXT NOT NULL,
              customer_name TEXT,
              customer_contact TEXT,
              food_rating INTEGER NOT NULL,
              staff_rating INTEGER NOT NULL,
              ambience_rating INTEGER NOT NULL,
              overall_rating INTEGER NOT NULL,
              suggestions TEXT
            )
            """
        )
        cur.execute("CREATE INDEX IF NOT EXISTS idx_feedback_entity ON feedback (entity_id)")

        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS external_reviews (
              id TEXT PRIMARY KEY,
              entity_id TEXT NOT NULL,
              platform TEXT NOT NULL,    -- google | facebook | instagram
              author TEXT,
              rating REAL NOT NULL,
              comment TEXT,
              review_date TEXT NOT NULL,
              synced_at TEXT NOT NULL
            )
            """
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_external_reviews_entity ON external_reviews (entity_id)"
        )

        # ---- migrations (for older DBs) ----
        _ensure_column(con, "entities", "kind", "TEXT NOT NULL DEFAULT 'restaurant'")

        con.commit()
    finally:
        con.close()


def _row_to_entity(row: sqlite3.Row) -> Entity:
    return Entity(**dict(row))


def _row_to_feedback(row: sqlite3.Row) -> FeedbackRecord:
    return FeedbackRecord(**dict(row))


def _row_to_review(row: sqlite3.Row) -> ExternalReview:
    return ExternalReview(**dict(row))


class SqliteStore(FeedbackStore):
    """One connection per operation; any sqlite3 failure surfaces as StoreError."""

    def __init__(self, sqlite_path: Path) -> None:
        self.sqlite_path = Path(sqlite_path)
        self._initialized = False

    def _connect(self) -> sqlite3.Connection:
        try:
            if not self._initialized:
                init_db(self.sqlite_path)
                self._initialized = True
            con = sqlite3.connect(str(self.sqlite_path))
        except (sqlite3.Error, OSError) as exc:
            raise StoreError(f"sqlite open failed: {exc}") from exc
        con.row_factory = sqlite3.Row
        return con

    def _fetch(self, sql: str, params: tuple = ()) -> List[sqlite3.Row]:
        con = self._connect()
        try:
            cur = con.cursor()
            cur.execute(sql, params)
            return cur.fetchall()
        except sqlite3.Error as exc:
            raise StoreError(f"sqlite query failed: {exc}") from exc
        finally:
            con.close()

    def _write(self, sql: str, params: tuple, on_conflict: Optional[Exception] = None) -> int:
        con = self._connect()
        try:
            cur = con.cursor()
            cur.execute(sql, params)
            con.commit()
            return cur.rowcount
        except sqlite3.IntegrityError as exc:
            if on_conflict is not None:
                raise on_conflict from exc
            raise StoreError(f"sqlite constraint failed: {exc}") from exc
        except sqlite3.Error as exc:
            raise StoreError(f"sqlite write failed: {exc}") from exc
        finally:
            con.close()

    # ---- entities ----
    def get_entity(self, entity_id: str) -> Optional[Entity]:
        rows = self._fetch("SELECT * FROM entities WHERE id = ?", (entity_id,))
        return _row_to_entity(rows[0]) if rows else None

    def set_status(self, entity_id: str, status: EntityStatus) -> bool:
        n = self._write(
            "UPDATE entities SET status = ?, updated_at = ? WHERE id = ?",
            (EntityStatus(status).value, utcnow().isoformat(), entity_id),
        )
        return n > 0

    def create_entity(self, entity: Entity) -> Entity:
        self._write(
            """
            INSERT INTO entities (id, kind, name, email, phone, address, status, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                entity.id,
                entity.kind.value,
                entity.name,
                entity.email,
                entity.phone,
                entity.address,
                entity.status.value,
                entity.created_at.isoformat(),
                entity.updated_at.isoformat(),
            ),
            on_conflict=ValidationError(f"Entity {entity.id} already exists", param="id"),
        )
        return entity

    def list_entities(self) -> List[Entity]:
        rows = self._fetch("SELECT * FROM entities ORDER BY rowid")
        return [_row_to_entity(r) for r in rows]

    # ---- feedback ----
    def append_feedback(self, record: FeedbackRecord) -> FeedbackRecord:
        self._write(
            """
            INSERT INTO feedback (
              id, entity_id, created_at,
              customer_name, customer_contact,
              food_rating, staff_rating, ambience_rating, overall_rating,
              suggestions
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                record.id,
                record.entity_id,
                record.created_at.isoformat(),
                record.customer_name,
                record.customer_contact,
                int(record.food_rating),
                int(record.staff_rating),
                int(record.ambience_rating),
                int(record.overall_rating),
                record.suggestions,
            ),
        )
        return record

    def query_feedback(self, entity_id: str) -> List[FeedbackRecord]:
        rows = self._fetch("SELECT * FROM feedback WHERE entity_id = ? ORDER BY rowid", (entity_id,))
        return [_row_to_feedback(r) for r in rows]

    # ---- external reviews ----
    def append_external_review(self, review: ExternalReview) -> ExternalReview:
        self._write(
            """
            INSERT INTO external_reviews (
              id, entity_id, platform, author, rating, comment, review_date, synced_at
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                review.id,
                review.entity_id,
                review.platform.value,
                review.author,
                float(review.rating),
                review.comment,
                review.review_date.isoformat(),
                review.synced_at.isoformat(),
            ),
        )
        return review

    def query_external_reviews(self, entity_id: str) -> List[ExternalReview]:
        rows = self._fetch(
            "SELECT * FROM external_reviews WHERE entity_id = ? ORDER BY rowid", (entity_id,)
        )
        return [_row_to_review(r) for r in rows]

    def healthcheck(self) -> bool:
        self._fetch("SELECT 1")
        return True
