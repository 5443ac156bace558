"""Google Ads OAuth2 credential handling.

Mints short-lived access tokens from the stored refresh token and supports
the one-off consent flow used to obtain a refresh token in the first place.
Access tokens are never persisted; every proxied request refreshes anew.
"""

import logging
from typing import Optional

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials as OAuthCredentials
from google_auth_oauthlib.flow import Flow

from src.domain.credentials import Credentials

logger = logging.getLogger(__name__)

# OAuth scope required for the Google Ads API
SCOPES = ["https://www.googleapis.com/auth/adwords"]

AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
TOKEN_URI = "https://oauth2.googleapis.com/token"

# Redirect registered for manual token generation
DEFAULT_REDIRECT_URI = "https://developers.google.com/oauthplayground"


class GoogleAdsAuthError(Exception):
    """Raised when an access token cannot be obtained."""
    pass


def validate_credentials(credentials: Optional[Credentials]) -> bool:
    """Whether *credentials* carry everything needed to call the API."""
    return credentials is not None and credentials.is_complete()


def _client_config(client_id: str, client_secret: str, redirect_uri: str) -> dict:
    return {
        "web": {
            "client_id": client_id,
            "client_secret": client_secret,
            "auth_uri": AUTH_URI,
            "token_uri": TOKEN_URI,
            "redirect_uris": [redirect_uri],
        }
    }


def _build_flow(client_id: str, client_secret: str, redirect_uri: str) -> Flow:
    # The consent URL and the code exchange happen in separate requests, so
    # no PKCE verifier can be carried between them.
    return Flow.from_client_config(
        _client_config(client_id, client_secret, redirect_uri),
        scopes=SCOPES,
        redirect_uri=redirect_uri,
        autogenerate_code_verifier=False,
    )


def get_auth_url(
    client_id: str,
    client_secret: str,
    redirect_uri: str = DEFAULT_REDIRECT_URI,
) -> str:
    """Generate the OAuth2 consent URL.

    ``prompt=consent`` with offline access forces Google to issue a refresh
    token even when the user has authorized this client before.
    """
    flow = _build_flow(client_id, client_secret, redirect_uri)
    auth_url, _ = flow.authorization_url(access_type="offline", prompt="consent")
    logger.info("Generated Google Ads OAuth consent URL")
    return auth_url


def exchange_code(
    client_id: str,
    client_secret: str,
    code: str,
    redirect_uri: str = DEFAULT_REDIRECT_URI,
) -> dict:
    """Exchange an authorization code for tokens.

    Returns:
        ``{"accessToken", "refreshToken", "expiry"}``; expiry is ISO-8601 or None.

    Raises:
        GoogleAdsAuthError: If Google rejects the code.
    """
    flow = _build_flow(client_id, client_secret, redirect_uri)
    try:
        flow.fetch_token(code=code)
    except Exception as exc:
        # oauthlib raises its own hierarchy for rejected grants
        raise GoogleAdsAuthError(f"Authorization code exchange failed: {exc}") from exc

    creds = flow.credentials
    logger.info("Google Ads OAuth authorization code exchanged")
    return {
        "accessToken": creds.token,
        "refreshToken": creds.refresh_token,
        "expiry": creds.expiry.isoformat() if creds.expiry else None,
    }


class GoogleAdsAuth:
    """Turns stored credentials into a live access token.

    Args:
        credentials: Stored credentials; client id/secret and refresh token
            are used here, the developer token is not.
    """

    def __init__(self, credentials: Credentials):
        self._credentials = credentials

    def _oauth_credentials(self) -> OAuthCredentials:
        return OAuthCredentials(
            token=None,
            refresh_token=self._credentials.refresh_token,
            client_id=self._credentials.client_id,
            client_secret=self._credentials.client_secret,
            token_uri=TOKEN_URI,
            scopes=SCOPES,
        )

    def get_access_token(self) -> str:
        """Refresh and return a short-lived access token.

        Raises:
            GoogleAdsAuthError: If the refresh fails or yields no token.
        """
        creds = self._oauth_credentials()
        try:
            creds.refresh(Request())
        except GoogleAuthError as exc:
            logger.warning("Google Ads token refresh failed", exc_info=True)
            raise GoogleAdsAuthError(f"Token refresh failed: {exc}") from exc

        if not creds.token:
            raise GoogleAdsAuthError("Token refresh did not return an access token")
        return creds.token
