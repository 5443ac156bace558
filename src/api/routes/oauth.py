"""OAuth helper endpoints for obtaining a Google Ads refresh token."""

from fastapi import APIRouter

from src.api.schemas.requests import OAuthTokenRequest, OAuthUrlRequest
from src.api.schemas.responses import AuthUrlResponse, TokenResponse
from src.services import google_ads_auth
from src.utils.error_handling import AuthenticationError, ValidationError

router = APIRouter(prefix="/api/oauth", tags=["oauth"])


@router.post("/url", response_model=AuthUrlResponse)
def create_auth_url(request: OAuthUrlRequest):
    missing = request.missing_fields()
    if missing:
        raise ValidationError(
            "Missing required OAuth parameters", details={"missing": missing}
        )
    url = google_ads_auth.get_auth_url(
        request.client_id, request.client_secret, request.redirect_uri
    )
    return AuthUrlResponse(url=url)


@router.post("/token", response_model=TokenResponse)
def exchange_token(request: OAuthTokenRequest):
    """Exchange an authorization code for access and refresh tokens."""
    missing = request.missing_fields()
    if missing:
        raise ValidationError(
            "Missing required OAuth parameters", details={"missing": missing}
        )
    try:
        tokens = google_ads_auth.exchange_code(
            request.client_id,
            request.client_secret,
            request.code,
            request.redirect_uri,
        )
    except google_ads_auth.GoogleAdsAuthError as exc:
        raise AuthenticationError(
            "Failed to exchange authorization code", detail_message=str(exc)
        ) from exc
    return TokenResponse.model_validate(tokens)
