# feedback_api/routers/health.py
from __future__ import annotations

from fastapi import APIRouter, Depends

from feedback_api.core.config import Settings, get_settings
from feedback_api.core.deps import get_store
from feedback_api.services.store import FeedbackStore

router = APIRouter(tags=["health"])


@router.get("/health")
def health_root():
    return {"status": "ok"}


@router.get("/health/store")
def health_store(
    settings: Settings = Depends(get_settings),
    store: FeedbackStore = Depends(get_store),
):
    # StoreError here falls through to the 500 handler
    store.healthcheck()
    return {"status": "ok", "backend": settings.store_backend}
