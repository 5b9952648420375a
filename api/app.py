"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from modules.auth.routes import account_router, user_router
from modules.resources.models import RESOURCE_SPECS, ResourceKind
from modules.resources.routes import create_resource_router
from shared.config import get_settings
from shared.logging import CORRELATION_ID_HEADER, configure_logging

from .dependencies import get_comment_service, get_photo_service, get_social_media_service
from .errors import register_exception_handlers
from .middleware.correlation import add_correlation_id
from .routes import health

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

_RESOURCE_ROUTES = (
    (ResourceKind.PHOTO, get_photo_service),
    (ResourceKind.COMMENT, get_comment_service),
    (ResourceKind.SOCIAL_MEDIA, get_social_media_service),
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    settings = get_settings()
    if not settings.jwt_secret:
        logger.warning("JWT_SECRET is not set; logins will fail to sign tokens")
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    yield
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Accounts, sessions and owned content for mygram",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        expose_headers=[CORRELATION_ID_HEADER],
    )
    app.middleware("http")(add_correlation_id)

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(account_router, prefix=f"{API_PREFIX}/account", tags=["account"])
    app.include_router(user_router, prefix=f"{API_PREFIX}/user", tags=["user"])
    for kind, dependency in _RESOURCE_ROUTES:
        app.include_router(
            create_resource_router(RESOURCE_SPECS[kind], dependency),
            prefix=f"{API_PREFIX}/{kind.value}",
            tags=[kind.value],
        )

    return app


# Application instance for uvicorn
app = create_app()
