"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import api_router
from app.config import get_settings
from app.core.logging import setup_logging
from app.core.telemetry import setup_telemetry

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the application with routes, CORS and telemetry attached."""

    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Starting %s with settings %s", settings.app_name, settings.dict_for_logging())

    application = FastAPI(title=settings.app_name, version="0.1.0")
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_telemetry(application, settings)

    @application.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        """Return service readiness metadata."""

        return {"status": "ok", "timestamp": datetime.now().isoformat()}

    application.include_router(api_router)
    return application


app = create_app()
