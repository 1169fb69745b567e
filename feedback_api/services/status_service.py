# feedback_api/services/status_service.py
from __future__ import annotations

from typing import Optional

from feedback_api.core.errors import NotFoundError, ValidationError
from feedback_api.schemas.entity import EntityStatus
from feedback_api.services.store import FeedbackStore

ALLOWED_STATUSES = {s.value for s in EntityStatus}


def validate_status(new_status: object) -> EntityStatus:
    if new_status is None or new_status == "":
        raise ValidationError("status is required", param="status")
    value = new_status.value if isinstance(new_status, EntityStatus) else new_status
    if not isinstance(value, str) or value not in ALLOWED_STATUSES:
        raise ValidationError(
            f"status must be one of: {', '.join(sorted(ALLOWED_STATUSES))}",
            param="status",
        )
    return EntityStatus(value)


def set_status(store: FeedbackStore, entity_id: Optional[str], new_status: object) -> str:
    """
    Overwrite an entity's status and return a confirmation message.

    Any valid status may be set from any current one; repeating the same
    status is a no-op success. Input is fully validated before the store
    is touched. Feedback is never affected.
    """
    if not entity_id or not str(entity_id).strip():
        raise ValidationError("restaurantId is required", param="restaurantId")
    status = validate_status(new_status)

    entity = store.get_entity(entity_id)
    if entity is None:
        raise NotFoundError(f"{entity_noun(None)} not found", param="restaurantId")

    if not store.set_status(entity_id, status):
        # removed between the lookup and the write
        raise NotFoundError(f"{entity_noun(entity.kind.value)} not found", param="restaurantId")

    verb = "activated" if status is EntityStatus.ACTIVE else "blocked"
    return f"{entity_noun(entity.kind.value)} {verb} successfully"


def entity_noun(kind: Optional[str]) -> str:
    """Display noun for an entity kind, as used in user-facing messages."""
    return (kind or "restaurant").capitalize()
