# feedback_api/routers/feedback.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from feedback_api.core.deps import get_store
from feedback_api.core.errors import ApiError, StoreError
from feedback_api.core.logging import get_logger, json_log
from feedback_api.schemas.feedback import FeedbackSubmitIn
from feedback_api.services import feedback_service
from feedback_api.services.store import FeedbackStore

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.get("/list")
def feedback_list(
    restaurant_id: Optional[str] = Query(default=None, alias="restaurantId"),
    store: FeedbackStore = Depends(get_store),
):
    try:
        records = feedback_service.list_by_entity(store, restaurant_id)
    except StoreError as exc:
        get_logger().error("feedback listing failed for %s: %s", restaurant_id, exc.message)
        raise ApiError(500, "internal_error", "Failed to fetch feedback") from exc
    return {"feedback": [r.to_wire() for r in records]}


@router.post("/submit", status_code=201)
def feedback_submit(
    body: FeedbackSubmitIn,
    request: Request,
    store: FeedbackStore = Depends(get_store),
):
    logger = get_logger()
    try:
        record = feedback_service.submit_feedback(store, body)
    except StoreError as exc:
        logger.error("feedback submission failed for %s: %s", body.restaurant_id, exc.message)
        raise ApiError(500, "internal_error", "Failed to submit feedback") from exc

    json_log(
        logger,
        {
            "event": "feedback_submitted",
            "request_id": getattr(request.state, "request_id", None),
            "entity_id": record.entity_id,
            "feedback_id": record.id,
            "overall_rating": record.overall_rating,
        },
    )
    return {"success": True, "message": "Feedback submitted successfully", "feedbackId": record.id}


@router.get("/stats")
def feedback_stats(
    restaurant_id: Optional[str] = Query(default=None, alias="restaurantId"),
    store: FeedbackStore = Depends(get_store),
):
    try:
        stats = feedback_service.feedback_stats(store, restaurant_id)
    except StoreError as exc:
        get_logger().error("stats failed for %s: %s", restaurant_id, exc.message)
        raise ApiError(500, "internal_error", "Failed to calculate stats") from exc
    return {"stats": stats.to_wire()}
