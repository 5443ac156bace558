"""API routes."""

from src.api.routes.credentials import router as credentials_router
from src.api.routes.google_ads import router as google_ads_router
from src.api.routes.health import router as health_router
from src.api.routes.oauth import router as oauth_router

__all__ = [
    "health_router",
    "credentials_router",
    "google_ads_router",
    "oauth_router",
]
