# feedback_api/routers/admin.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from feedback_api.core.config import Settings, get_settings
from feedback_api.core.deps import get_store, resolve_origin
from feedback_api.core.errors import ApiError, StoreError
from feedback_api.core.logging import get_logger, json_log
from feedback_api.schemas.entity import EntityCreateIn, StatusUpdateIn
from feedback_api.services import entity_service, status_service
from feedback_api.services.links import generate_feedback_link, generate_qr_code_url
from feedback_api.services.store import FeedbackStore

router = APIRouter(prefix="/admin", tags=["admin"])


@router.patch("/restaurants/status")
def update_restaurant_status(
    body: StatusUpdateIn,
    request: Request,
    store: FeedbackStore = Depends(get_store),
):
    logger = get_logger()
    try:
        message = status_service.set_status(store, body.restaurant_id, body.status)
        restaurant = store.get_entity(body.restaurant_id)
    except StoreError as exc:
        logger.error("status update failed for %s: %s", body.restaurant_id, exc.message)
        raise ApiError(500, "internal_error", "Failed to update restaurant status") from exc

    json_log(
        logger,
        {
            "event": "entity_status_changed",
            "request_id": getattr(request.state, "request_id", None),
            "entity_id": body.restaurant_id,
            "status": body.status.value,
        },
    )
    return {
        "success": True,
        "message": message,
        "restaurant": restaurant.to_wire() if restaurant else None,
    }


@router.get("/restaurants")
def list_restaurants(store: FeedbackStore = Depends(get_store)):
    try:
        items = entity_service.list_entities_with_details(store)
    except StoreError as exc:
        get_logger().error("restaurant listing failed: %s", exc.message)
        raise ApiError(500, "internal_error", "Failed to fetch restaurants") from exc
    return {"restaurants": [it.to_wire() for it in items], "total": len(items)}


@router.post("/restaurants", status_code=201)
def create_restaurant(
    body: EntityCreateIn,
    request: Request,
    store: FeedbackStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    logger = get_logger()
    try:
        entity = entity_service.register_entity(store, body, id_prefix=settings.entity_id_prefix)
    except StoreError as exc:
        logger.error("restaurant registration failed: %s", exc.message)
        raise ApiError(500, "internal_error", "Failed to create restaurant") from exc

    link = generate_feedback_link(
        entity.id,
        origin=resolve_origin(request, settings),
        fallback_origin=settings.fallback_origin,
    )
    json_log(logger, {"event": "entity_created", "entity_id": entity.id, "kind": entity.kind.value})
    return {
        "restaurant": entity.to_wire(),
        "feedbackLink": link,
        "qrCodeUrl": generate_qr_code_url(link, size=settings.qr_size, service_url=settings.qr_service_url),
    }
