"""Business logic services."""

from src.services.ads_proxy_service import GoogleAdsProxyService
from src.services.google_ads_auth import (
    GoogleAdsAuth,
    GoogleAdsAuthError,
    exchange_code,
    get_auth_url,
    validate_credentials,
)
from src.services.google_ads_client import (
    GoogleAdsApiError,
    GoogleAdsClient,
    normalize_customer_id,
)

__all__ = [
    "GoogleAdsApiError",
    "GoogleAdsAuth",
    "GoogleAdsAuthError",
    "GoogleAdsClient",
    "GoogleAdsProxyService",
    "exchange_code",
    "get_auth_url",
    "normalize_customer_id",
    "validate_credentials",
]
