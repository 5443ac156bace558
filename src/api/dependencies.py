"""FastAPI dependencies.

Services are built per request from the settings attached to the app, so
each app instance (and each test) gets its own store and proxy service.
"""

from fastapi import Depends, Request

from src.config.settings import AppSettings
from src.core.credential_store import CredentialStore
from src.services.ads_proxy_service import GoogleAdsProxyService


def get_app_settings(request: Request) -> AppSettings:
    """Settings the running app was created with."""
    return request.app.state.settings


def get_credential_store(
    settings: AppSettings = Depends(get_app_settings),
) -> CredentialStore:
    return CredentialStore(settings.credentials_path, settings.encryption_key)


def get_ads_proxy_service(
    store: CredentialStore = Depends(get_credential_store),
    settings: AppSettings = Depends(get_app_settings),
) -> GoogleAdsProxyService:
    return GoogleAdsProxyService(
        store,
        api_version=settings.google_ads_api_version,
        timeout=settings.upstream_timeout,
    )
