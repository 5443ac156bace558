"""API schemas for request and response bodies."""

from .requests import CredentialsRequest, OAuthTokenRequest, OAuthUrlRequest
from .responses import (
    AuthUrlResponse,
    ConnectionTestResponse,
    CredentialStatusResponse,
    HealthResponse,
    SuccessResponse,
    TokenResponse,
)

__all__ = [
    "AuthUrlResponse",
    "ConnectionTestResponse",
    "CredentialStatusResponse",
    "CredentialsRequest",
    "HealthResponse",
    "OAuthTokenRequest",
    "OAuthUrlRequest",
    "SuccessResponse",
    "TokenResponse",
]
