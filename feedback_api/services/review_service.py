# feedback_api/services/review_service.py
from __future__ import annotations

from datetime import timezone
from typing import List, Optional

from feedback_api.core.errors import NotFoundError, ValidationError
from feedback_api.schemas.review import ExternalReview, ExternalReviewIn
from feedback_api.services.links import generate_review_id
from feedback_api.services.store import FeedbackStore, utcnow


def ingest_external_review(store: FeedbackStore, body: ExternalReviewIn) -> ExternalReview:
    if store.get_entity(body.restaurant_id) is None:
        raise NotFoundError("Restaurant not found", param="restaurantId")

    review_date = body.review_date
    if review_date.tzinfo is None:
        review_date = review_date.replace(tzinfo=timezone.utc)

    review = ExternalReview(
        id=generate_review_id(),
        entity_id=body.restaurant_id,
        platform=body.platform,
        author=body.author,
        rating=body.rating,
        comment=body.comment,
        review_date=review_date,
        synced_at=utcnow(),
    )
    return store.append_external_review(review)


def list_external_reviews(store: FeedbackStore, entity_id: Optional[str]) -> List[ExternalReview]:
    if not entity_id or not str(entity_id).strip():
        raise ValidationError("restaurantId is required", param="restaurantId")
    reviews = store.query_external_reviews(entity_id)
    return sorted(reviews, key=lambda r: r.review_date, reverse=True)
