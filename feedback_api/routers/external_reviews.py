# feedback_api/routers/external_reviews.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from feedback_api.core.deps import get_store
from feedback_api.core.errors import ApiError, StoreError
from feedback_api.core.logging import get_logger, json_log
from feedback_api.schemas.review import ExternalReviewIn
from feedback_api.services import review_service
from feedback_api.services.store import FeedbackStore

router = APIRouter(prefix="/external-reviews", tags=["external-reviews"])


@router.get("/list")
def external_reviews_list(
    restaurant_id: Optional[str] = Query(default=None, alias="restaurantId"),
    store: FeedbackStore = Depends(get_store),
):
    try:
        reviews = review_service.list_external_reviews(store, restaurant_id)
    except StoreError as exc:
        get_logger().error("external review listing failed for %s: %s", restaurant_id, exc.message)
        raise ApiError(500, "internal_error", "Failed to fetch reviews") from exc
    return {"reviews": [r.to_wire() for r in reviews]}


@router.post("", status_code=201)
def external_review_ingest(body: ExternalReviewIn, store: FeedbackStore = Depends(get_store)):
    logger = get_logger()
    try:
        review = review_service.ingest_external_review(store, body)
    except StoreError as exc:
        logger.error("external review ingest failed for %s: %s", body.restaurant_id, exc.message)
        raise ApiError(500, "internal_error", "Failed to save review") from exc

    json_log(
        logger,
        {
            "event": "external_review_ingested",
            "entity_id": review.entity_id,
            "platform": review.platform.value,
            "review_id": review.id,
        },
    )
    return {"review": review.to_wire()}
