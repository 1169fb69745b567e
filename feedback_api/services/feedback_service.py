# feedback_api/services/feedback_service.py
from __future__ import annotations

from typing import List, Optional, Sequence

from feedback_api.core.errors import NotFoundError, ValidationError
from feedback_api.schemas.entity import EntityStatus
from feedback_api.schemas.feedback import (
    AverageRatings,
    ExternalReviewsCount,
    FeedbackRecord,
    FeedbackStats,
    FeedbackSubmitIn,
)
from feedback_api.services.links import generate_feedback_id
from feedback_api.services.status_service import entity_noun
from feedback_api.services.store import FeedbackStore, utcnow

TREND_WINDOW = 3
TREND_DELTA = 0.3


def _require_entity_id(entity_id: Optional[str]) -> str:
    if not entity_id or not str(entity_id).strip():
        raise ValidationError("restaurantId is required", param="restaurantId")
    return str(entity_id)


def list_by_entity(store: FeedbackStore, entity_id: Optional[str]) -> List[FeedbackRecord]:
    """
    All feedback for an entity, newest first.

    Unknown entities simply yield an empty list. The sort is stable, so
    records sharing a created_at keep the store's order.
    """
    entity_id = _require_entity_id(entity_id)
    records = store.query_feedback(entity_id)
    return sorted(records, key=lambda r: r.created_at, reverse=True)


def submit_feedback(store: FeedbackStore, submission: FeedbackSubmitIn) -> FeedbackRecord:
    entity_id = _require_entity_id(submission.restaurant_id)

    entity = store.get_entity(entity_id)
    if entity is None:
        raise NotFoundError("Restaurant not found", param="restaurantId")
    if entity.status is not EntityStatus.ACTIVE:
        raise ValidationError(
            f"{entity_noun(entity.kind.value)} is not accepting feedback",
            param="restaurantId",
        )

    record = FeedbackRecord(
        id=generate_feedback_id(),
        entity_id=entity_id,
        created_at=utcnow(),
        customer_name=submission.customer_name or None,
        customer_contact=submission.customer_contact or None,
        food_rating=submission.food_rating,
        staff_rating=submission.staff_rating,
        ambience_rating=submission.ambience_rating,
        overall_rating=submission.overall_rating,
        suggestions=submission.suggestions or None,
    )
    return store.append_feedback(record)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def recent_trend(newest_first: Sequence[FeedbackRecord]) -> str:
    if len(newest_first) < 2 * TREND_WINDOW:
        return "stable"

    recent = _mean([r.overall_rating for r in newest_first[:TREND_WINDOW]])
    previous = _mean([r.overall_rating for r in newest_first[TREND_WINDOW : 2 * TREND_WINDOW]])

    if recent > previous + TREND_DELTA:
        return "improving"
    if recent < previous - TREND_DELTA:
        return "declining"
    return "stable"


def feedback_stats(store: FeedbackStore, entity_id: Optional[str]) -> FeedbackStats:
    feedback = list_by_entity(store, entity_id)
    reviews = store.query_external_reviews(str(entity_id))

    averages = AverageRatings(
        food=_mean([r.food_rating for r in feedback]),
        staff=_mean([r.staff_rating for r in feedback]),
        ambience=_mean([r.ambience_rating for r in feedback]),
        overall=_mean([r.overall_rating for r in feedback]),
    )

    # no own feedback yet: borrow the external rating
    if not feedback and reviews:
        ext = _mean([r.rating for r in reviews])
        averages = AverageRatings(food=ext, staff=ext, ambience=ext, overall=ext)

    counts = {p: 0 for p in ExternalReviewsCount.model_fields}
    for r in reviews:
        counts[r.platform.value] = counts.get(r.platform.value, 0) + 1

    return FeedbackStats(
        total_feedback=len(feedback),
        average_ratings=AverageRatings(
            food=round(averages.food, 2),
            staff=round(averages.staff, 2),
            ambience=round(averages.ambience, 2),
            overall=round(averages.overall, 2),
        ),
        recent_trend=recent_trend(feedback),
        external_reviews_count=ExternalReviewsCount(**counts),
    )
