"""Proxied Google Ads reporting endpoints.

Each handler loads the stored credentials, mints an access token and calls
Google Ads on the caller's behalf. Errors propagate as ``AppException``
subclasses and are rendered by the app-level handler.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from src.api.dependencies import get_ads_proxy_service
from src.api.schemas.responses import ConnectionTestResponse
from src.domain.periods import validate_period
from src.domain.reporting import Account, AccountMetrics, ConversionReport
from src.services.ads_proxy_service import GoogleAdsProxyService
from src.services.google_ads_client import GoogleAdsApiError, normalize_customer_id
from src.utils.error_handling import UpstreamError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["google-ads"])


def _parse_period(period: Optional[str]) -> str:
    try:
        return validate_period(period)
    except ValueError as exc:
        raise ValidationError("Invalid period", detail_message=str(exc)) from exc


def _parse_account_id(account_id: str) -> str:
    try:
        return normalize_customer_id(account_id)
    except ValueError as exc:
        raise ValidationError("Invalid account id", detail_message=str(exc)) from exc


def _upstream_error(label: str, exc: GoogleAdsApiError) -> UpstreamError:
    return UpstreamError(label, detail_message=exc.message, details=exc.details)


@router.post("/test-connection", response_model=ConnectionTestResponse)
def test_connection(
    service: GoogleAdsProxyService = Depends(get_ads_proxy_service),
):
    """Verify stored credentials end to end by listing accessible accounts."""
    try:
        accounts = service.test_connection()
    except GoogleAdsApiError as exc:
        raise _upstream_error("Connection test failed", exc) from exc
    return ConnectionTestResponse(accounts=accounts)


@router.get("/accounts", response_model=list[Account])
def list_accounts(service: GoogleAdsProxyService = Depends(get_ads_proxy_service)):
    try:
        return service.list_accounts()
    except GoogleAdsApiError as exc:
        raise _upstream_error("Failed to fetch accounts", exc) from exc


@router.get("/metrics/{account_id}", response_model=AccountMetrics)
def get_metrics(
    account_id: str,
    period: Optional[str] = None,
    service: GoogleAdsProxyService = Depends(get_ads_proxy_service),
):
    """Performance totals, trends and daily series for one account."""
    customer_id = _parse_account_id(account_id)
    period = _parse_period(period)
    try:
        return service.get_metrics(customer_id, period)
    except GoogleAdsApiError as exc:
        raise _upstream_error("Failed to fetch metrics", exc) from exc


@router.get("/conversions/{account_id}", response_model=ConversionReport)
def get_conversions(
    account_id: str,
    period: Optional[str] = None,
    service: GoogleAdsProxyService = Depends(get_ads_proxy_service),
):
    """Form vs. call conversion breakdown for one account."""
    customer_id = _parse_account_id(account_id)
    period = _parse_period(period)
    try:
        return service.get_conversions(customer_id, period)
    except GoogleAdsApiError as exc:
        raise _upstream_error("Failed to fetch conversions", exc) from exc
