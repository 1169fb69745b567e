#!/usr/bin/env python3
"""Seed a store with demo restaurants/teachers and feedback.

Usage examples:
  # seed the configured sqlite store (FBK_SQLITE_PATH / defaults)
  scripts/bootstrap_data.py

  # bigger dataset, fixed seed, one entity already blocked
  scripts/bootstrap_data.py --entities 5 --feedback 30 --seed 7 --block-first

Feedback timestamps are spread over the last --days days so listings and
trend statistics have something to order.
"""
from __future__ import annotations

import argparse
import random
import sys
from datetime import timedelta
from pathlib import Path

NAMES = [
    ("restaurant", "Lagoon Spice Kitchen"),
    ("restaurant", "Hill Country Cafe"),
    ("teacher", "Ms. Perera"),
    ("restaurant", "Harbour Grill"),
    ("teacher", "Mr. Fernando"),
]
SUGGESTIONS = [None, "Great service", "Food was cold", "More vegetarian options", "Friendly staff"]


def load_store(sqlite_path: str | None):
    # ensure repo root is on sys.path
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))

    from feedback_api.core.config import get_settings
    from feedback_api.services.store import SqliteStore

    settings = get_settings()
    path = Path(sqlite_path).resolve() if sqlite_path else settings.abs_sqlite_path()
    return settings, SqliteStore(path)


def main() -> int:
    ap = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    ap.add_argument("--sqlite-path", default=None, help="override the configured sqlite file")
    ap.add_argument("--entities", type=int, default=3)
    ap.add_argument("--feedback", type=int, default=12, help="feedback records per entity")
    ap.add_argument("--days", type=int, default=30)
    ap.add_argument("--seed", type=int, default=42)
    ap.add_argument("--block-first", action="store_true", help="mark the first seeded entity as blocked")
    args = ap.parse_args()

    settings, store = load_store(args.sqlite_path)

    from feedback_api.schemas.entity import EntityCreateIn, EntityStatus
    from feedback_api.schemas.feedback import FeedbackRecord
    from feedback_api.services.entity_service import register_entity
    from feedback_api.services.links import generate_feedback_id, generate_feedback_link
    from feedback_api.services.status_service import set_status
    from feedback_api.services.store import utcnow

    rng = random.Random(args.seed)
    now = utcnow()

    for i in range(max(0, args.entities)):
        kind, name = NAMES[i % len(NAMES)]
        prefix = "teach" if kind == "teacher" else settings.entity_id_prefix
        entity = register_entity(store, EntityCreateIn(name=name, kind=kind), id_prefix=prefix)

        for _ in range(max(0, args.feedback)):
            overall = rng.randint(2, 5)
            store.append_feedback(
                FeedbackRecord(
                    id=generate_feedback_id(),
                    entity_id=entity.id,
                    created_at=now - timedelta(minutes=rng.randint(0, args.days * 24 * 60)),
                    customer_name=None,
                    food_rating=max(1, min(5, overall + rng.randint(-1, 1))),
                    staff_rating=max(1, min(5, overall + rng.randint(-1, 1))),
                    ambience_rating=max(1, min(5, overall + rng.randint(-1, 1))),
                    overall_rating=overall,
                    suggestions=rng.choice(SUGGESTIONS),
                )
            )

        if i == 0 and args.block_first:
            set_status(store, entity.id, EntityStatus.BLOCKED.value)

        link = generate_feedback_link(entity.id, settings.public_origin, settings.fallback_origin)
        print(f"seeded {kind:<10} {entity.id}  {name:<24} {link}")

    print(f"done: {store.sqlite_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
