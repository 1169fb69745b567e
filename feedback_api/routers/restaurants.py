# feedback_api/routers/restaurants.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from feedback_api.core.config import Settings, get_settings
from feedback_api.core.deps import resolve_origin
from feedback_api.schemas.entity import FeedbackLinkOut
from feedback_api.services.links import generate_feedback_link, generate_qr_code_url

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.get("/{restaurant_id}/feedback-link")
def feedback_link(restaurant_id: str, request: Request, settings: Settings = Depends(get_settings)):
    # pure: no store lookup, the link is valid even before the entity exists
    link = generate_feedback_link(
        restaurant_id,
        origin=resolve_origin(request, settings),
        fallback_origin=settings.fallback_origin,
    )
    out = FeedbackLinkOut(
        restaurant_id=restaurant_id,
        feedback_link=link,
        qr_code_url=generate_qr_code_url(link, size=settings.qr_size, service_url=settings.qr_service_url),
    )
    return out.to_wire()
