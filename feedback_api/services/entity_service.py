# feedback_api/services/entity_service.py
from __future__ import annotations

from typing import List

from feedback_api.schemas.entity import Entity, EntityCreateIn, EntityOverview, EntityStatus
from feedback_api.services.links import generate_entity_id
from feedback_api.services.store import FeedbackStore, utcnow

MAX_ID_ATTEMPTS = 5


def register_entity(store: FeedbackStore, body: EntityCreateIn, id_prefix: str = "rest") -> Entity:
    # generated ids are only probabilistically unique, so check before use
    entity_id = generate_entity_id(id_prefix)
    for _ in range(MAX_ID_ATTEMPTS - 1):
        if store.get_entity(entity_id) is None:
            break
        entity_id = generate_entity_id(id_prefix)

    now = utcnow()
    entity = Entity(
        id=entity_id,
        kind=body.kind,
        name=body.name,
        email=body.email,
        phone=body.phone,
        address=body.address,
        status=EntityStatus.ACTIVE,
        created_at=now,
        updated_at=now,
    )
    return store.create_entity(entity)


def list_entities_with_details(store: FeedbackStore) -> List[EntityOverview]:
    """Every entity, newest first, with feedback count and mean overall rating."""
    out: List[EntityOverview] = []
    for entity in store.list_entities():
        feedback = store.query_feedback(entity.id)
        count = len(feedback)
        avg = sum(r.overall_rating for r in feedback) / count if count else 0.0
        out.append(
            EntityOverview(
                **entity.model_dump(),
                feedback_count=count,
                average_rating=round(avg, 2),
            )
        )
    out.sort(key=lambda e: e.created_at, reverse=True)
    return out
