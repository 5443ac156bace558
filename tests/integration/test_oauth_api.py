"""Integration tests for the OAuth helper endpoints.

Run: pytest tests/integration/test_oauth_api.py -v
"""

from unittest.mock import patch
from urllib.parse import parse_qs, urlparse

from src.services.google_ads_auth import DEFAULT_REDIRECT_URI, GoogleAdsAuthError


class TestAuthUrl:
    def test_returns_consent_url(self, client):
        response = client.post(
            "/api/oauth/url", json={"clientId": "client-123", "clientSecret": "secret"}
        )

        assert response.status_code == 200
        query = parse_qs(urlparse(response.json()["url"]).query)
        assert query["client_id"] == ["client-123"]
        assert query["access_type"] == ["offline"]
        assert query["prompt"] == ["consent"]
        assert query["redirect_uri"] == [DEFAULT_REDIRECT_URI]

    def test_custom_redirect(self, client):
        response = client.post(
            "/api/oauth/url",
            json={
                "clientId": "client-123",
                "clientSecret": "secret",
                "redirectUri": "http://localhost:5173/callback",
            },
        )
        query = parse_qs(urlparse(response.json()["url"]).query)
        assert query["redirect_uri"] == ["http://localhost:5173/callback"]

    def test_missing_client_secret(self, client):
        response = client.post("/api/oauth/url", json={"clientId": "client-123"})

        assert response.status_code == 400
        assert response.json()["details"]["missing"] == ["clientSecret"]


class TestTokenExchange:
    @patch("src.services.google_ads_auth.exchange_code")
    def test_returns_tokens(self, mock_exchange, client):
        mock_exchange.return_value = {
            "accessToken": "ya29.access",
            "refreshToken": "1//refresh",
            "expiry": "2025-03-15T12:00:00",
        }

        response = client.post(
            "/api/oauth/token",
            json={"clientId": "client", "clientSecret": "secret", "code": "4/code"},
        )

        assert response.status_code == 200
        assert response.json() == mock_exchange.return_value
        mock_exchange.assert_called_once_with("client", "secret", "4/code", DEFAULT_REDIRECT_URI)

    @patch("src.services.google_ads_auth.exchange_code")
    def test_rejected_code_is_401(self, mock_exchange, client):
        mock_exchange.side_effect = GoogleAdsAuthError("Authorization code exchange failed: invalid_grant")

        response = client.post(
            "/api/oauth/token",
            json={"clientId": "client", "clientSecret": "secret", "code": "bad"},
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Failed to exchange authorization code"
        assert "invalid_grant" in response.json()["message"]

    def test_missing_code(self, client):
        response = client.post(
            "/api/oauth/token", json={"clientId": "client", "clientSecret": "secret"}
        )

        assert response.status_code == 400
        assert response.json()["details"]["missing"] == ["code"]
