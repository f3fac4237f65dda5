"""FastAPI application entrypoint for the storefront API."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.categories import router as categories_router
from storefront.api.health import router as health_router
from storefront.api.products import router as products_router
from storefront.api.sliders import router as sliders_router
from storefront.core.config import Settings
from storefront.core.config import get_settings
from storefront.core.errors import ErrorResponder
from storefront.core.errors import install_not_found_trap
from storefront.core.errors import register_error_handlers
from storefront.db import models as _models  # noqa: F401
from storefront.keepalive import KeepAlivePinger
from storefront.media.storage import CloudinaryImageStorage
from storefront.media.storage import ImageStorage

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"]
CORS_HEADERS = ["Content-Type", "Authorization", "X-Requested-With", "Accept"]
CORS_EXPOSED_HEADERS = ["Content-Range", "X-Content-Range"]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    logger.info("Starting storefront API with settings=%s", settings.safe_for_logging())
    pinger: KeepAlivePinger | None = None
    if settings.keepalive_url:
        pinger = KeepAlivePinger(
            base_url=settings.keepalive_url,
            interval_seconds=settings.keepalive_interval_seconds,
            timeout_seconds=settings.http_timeout_seconds,
        )
        pinger.start()
    try:
        yield
    finally:
        if pinger is not None:
            pinger.stop()


def create_app(settings: Settings | None = None, image_storage: ImageStorage | None = None) -> FastAPI:
    """Build the API with its routers, error handlers and not-found trap."""
    settings = settings or get_settings()
    app = FastAPI(title="Storefront API", lifespan=lifespan)
    app.state.settings = settings
    app.state.image_storage = image_storage or CloudinaryImageStorage(settings.cloudinary)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_credentials=True,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
        expose_headers=CORS_EXPOSED_HEADERS,
    )
    register_error_handlers(app, ErrorResponder(production=settings.is_production))
    app.include_router(health_router)
    app.include_router(products_router)
    app.include_router(categories_router)
    app.include_router(sliders_router)
    install_not_found_trap(app)
    return app


app = create_app()
