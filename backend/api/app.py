"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from modules.auth.routes import router as auth_router
from modules.language.routes import router as language_router
from modules.otp.routes import router as otp_router
from modules.password_reset.routes import router as password_reset_router
from modules.subscriptions.routes import router as subscription_router
from modules.tweets.routes import router as tweets_router
from modules.uploads.routes import router as upload_router
from modules.users.routes import router as users_router
from shared.config import get_settings

from .dependencies import reset_container
from .errors import register_exception_handlers
from .routes import health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    logger.info(
        f"Starting {settings.app_name} on {settings.host}:{settings.port} "
        f"(storage: {settings.storage_backend}, policy timezone: {settings.policy_timezone})"
    )
    yield
    # Shutdown
    reset_container()
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        description="Social network backend with step-up login security and tiered posting quotas",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(users_router, prefix="/api/users", tags=["users"])
    app.include_router(tweets_router, prefix="/api/tweets", tags=["tweets"])
    app.include_router(upload_router, prefix="/api/upload", tags=["upload"])
    app.include_router(otp_router, prefix="/api/otp", tags=["otp"])
    app.include_router(password_reset_router, prefix="/api/password-reset", tags=["password-reset"])
    app.include_router(subscription_router, prefix="/api/subscription", tags=["subscription"])
    app.include_router(language_router, prefix="/api/language", tags=["language"])

    return app


# Application instance for uvicorn
app = create_app()
