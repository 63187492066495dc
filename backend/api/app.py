"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from shared.config import get_settings
from modules.auth.routes import router as auth_router
from modules.membership.routes import router as membership_router
from modules.projects.routes import router as projects_router
from modules.services.routes import router as services_router

from .dependencies import get_container
from .exception_handlers import setup_exception_handlers
from .models import ERROR_RESPONSES
from .routes import health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Builds the token codec up front so a missing JWT secret stops the
    server before it accepts requests.
    """
    # Startup
    settings = get_settings()
    get_container().token_codec
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Construction services marketplace API",
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

    setup_exception_handlers(app)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(
        auth_router, prefix="/api/auth", tags=["auth"], responses=ERROR_RESPONSES
    )
    app.include_router(
        services_router, prefix="/api/services", tags=["services"], responses=ERROR_RESPONSES
    )
    app.include_router(
        projects_router, prefix="/api/projects", tags=["projects"], responses=ERROR_RESPONSES
    )
    app.include_router(
        membership_router,
        prefix="/api/membership",
        tags=["membership"],
        responses=ERROR_RESPONSES,
    )

    # Stored uploads; the directory is created at startup
    app.mount(
        "/uploads",
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    return app


# Application instance for uvicorn
app = create_app()
