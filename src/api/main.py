"""FastAPI application for the PPC dashboard proxy.

``create_app`` wires settings, logging, cross-origin policy, error rendering
and routes. The module-level ``app`` is what uvicorn serves.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src import __version__
from src.api.middleware import OriginAllowListMiddleware
from src.api.routes import (
    credentials_router,
    google_ads_router,
    health_router,
    oauth_router,
)
from src.config.settings import AppSettings, get_settings
from src.utils.error_handling import AppException
from src.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    settings: AppSettings = app.state.settings
    logger.info(
        "Starting PPC dashboard proxy",
        extra={
            "environment": settings.environment,
            "port": settings.port,
            "allowed_origins": settings.allowed_origin_list,
        },
    )
    if settings.uses_default_key:
        if settings.is_production:
            logger.error("ENCRYPTION_KEY is not set; stored credentials use the default key")
        else:
            logger.warning("Using the default encryption key (development only)")
    yield
    logger.info("Shutting down PPC dashboard proxy")


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        exc.message,
        extra={
            "path": request.url.path,
            "status_code": exc.status_code,
            "error_detail": exc.detail_message,
        },
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Malformed bodies are client errors like any other missing input
    logger.warning("Rejected malformed request", extra={"path": request.url.path})
    fields = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "details": {"fields": fields}},
    )


def create_app(settings: Optional[AppSettings] = None) -> FastAPI:
    """Build the API application.

    Args:
        settings: Settings to run with; loaded from the environment when omitted.
    """
    settings = settings or get_settings()
    setup_logging(level=settings.log_level, log_format=settings.log_format)

    app = FastAPI(
        title="PPC Dashboard Proxy",
        description="Credential-holding proxy between the PPC dashboard and Google Ads",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Last added runs first: the allow-list rejects before CORS headers are set
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        OriginAllowListMiddleware, allowed_origins=settings.allowed_origin_list
    )

    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(health_router)
    app.include_router(credentials_router)
    app.include_router(google_ads_router)
    app.include_router(oauth_router)

    return app


app = create_app()
