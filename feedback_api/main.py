# feedback_api/main.py
from fastapi import FastAPI

from feedback_api.core.config import get_settings
from feedback_api.core.errors import register_exception_handlers
from feedback_api.core.logging import setup_logging, RequestIdMiddleware

from feedback_api.routers.health import router as health_router
from feedback_api.routers.admin import router as admin_router
from feedback_api.routers.feedback import router as feedback_router
from feedback_api.routers.external_reviews import router as external_reviews_router
from feedback_api.routers.restaurants import router as restaurants_router


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings)

    app = FastAPI(title="Feedback Collection API")

    app.add_middleware(RequestIdMiddleware)
    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(admin_router)
    app.include_router(feedback_router)
    app.include_router(external_reviews_router)
    app.include_router(restaurants_router)

    return app


app = create_app()
