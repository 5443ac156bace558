"""Integration tests for the proxied Google Ads endpoints.

The Google Ads API is replaced with an in-process httpx transport and token
minting with a stub, so the full route -> service -> client path runs.

Run: pytest tests/integration/test_google_ads_api.py -v
"""

import httpx
import pytest

from src.api.dependencies import get_ads_proxy_service, get_credential_store
from src.services.ads_proxy_service import GoogleAdsProxyService
from src.services.google_ads_auth import GoogleAdsAuthError

PROXIED_ENDPOINTS = [
    ("POST", "/api/test-connection"),
    ("GET", "/api/accounts"),
    ("GET", "/api/metrics/1234567890"),
    ("GET", "/api/conversions/1234567890"),
]


class StubAuth:
    fail = False

    def __init__(self, credentials):
        self.credentials = credentials

    def get_access_token(self):
        if StubAuth.fail:
            raise GoogleAdsAuthError("Token refresh failed: invalid_grant")
        return "ya29.integration-token"


class FakeGoogleAds:
    def __init__(self):
        self.status_code = 200
        self.error_body = None
        self.search_rows: list[dict] = []
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error_body is not None:
            return httpx.Response(self.status_code, json=self.error_body)
        if request.url.path.endswith(":listAccessibleCustomers"):
            return httpx.Response(200, json={"resourceNames": ["customers/1234567890"]})
        return httpx.Response(200, json=[{"results": self.search_rows}])


@pytest.fixture(autouse=True)
def reset_stub():
    StubAuth.fail = False
    yield


@pytest.fixture
def fake_api():
    return FakeGoogleAds()


@pytest.fixture
def api(app, client, credential_store, fake_api):
    """Client whose proxy service talks to the fake Google Ads API."""

    def service_override():
        return GoogleAdsProxyService(
            credential_store,
            auth_factory=StubAuth,
            transport=httpx.MockTransport(fake_api),
        )

    app.dependency_overrides[get_credential_store] = lambda: credential_store
    app.dependency_overrides[get_ads_proxy_service] = service_override
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def configured(credential_store, sample_credentials):
    credential_store.save(sample_credentials)
    return sample_credentials


class TestHandlerFlow:
    @pytest.mark.parametrize("method, path", PROXIED_ENDPOINTS)
    def test_no_credentials_is_400(self, api, fake_api, method, path):
        response = api.request(method, path)

        assert response.status_code == 400
        assert response.json() == {"error": "No credentials found"}
        assert fake_api.requests == []

    @pytest.mark.parametrize("method, path", PROXIED_ENDPOINTS)
    def test_token_failure_is_401(self, api, configured, fake_api, method, path):
        StubAuth.fail = True

        response = api.request(method, path)

        assert response.status_code == 401
        assert response.json()["error"] == "Failed to get access token"
        assert "invalid_grant" in response.json()["message"]
        assert fake_api.requests == []

    @pytest.mark.parametrize("method, path", PROXIED_ENDPOINTS)
    def test_unusable_stored_manager_id_is_400(
        self, api, credential_store, sample_credentials, fake_api, method, path
    ):
        credential_store.save(sample_credentials.model_copy(update={"manager_id": "none"}))

        response = api.request(method, path)

        assert response.status_code == 400
        assert response.headers["content-type"] == "application/json"
        assert response.json()["error"] == "Stored manager id is invalid"
        assert fake_api.requests == []

    def test_upstream_error_passes_through(self, api, configured, fake_api):
        fake_api.status_code = 403
        fake_api.error_body = {
            "error": {"code": 403, "message": "User doesn't have permission", "status": "PERMISSION_DENIED"}
        }

        response = api.get("/api/metrics/1234567890")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to fetch metrics",
            "message": "User doesn't have permission",
            "details": fake_api.error_body,
        }

    @pytest.mark.parametrize(
        "path, label",
        [
            ("/api/accounts", "Failed to fetch accounts"),
            ("/api/conversions/1234567890", "Failed to fetch conversions"),
        ],
    )
    def test_upstream_error_labels(self, api, configured, fake_api, path, label):
        fake_api.status_code = 500
        fake_api.error_body = {"error": {"message": "Internal error encountered."}}

        response = api.get(path)

        assert response.status_code == 500
        assert response.json()["error"] == label

    def test_connection_test_failure_label(self, api, configured, fake_api):
        fake_api.status_code = 401
        fake_api.error_body = {"error": {"message": "Invalid developer token"}}

        response = api.post("/api/test-connection")

        assert response.status_code == 500
        assert response.json()["error"] == "Connection test failed"
        assert response.json()["message"] == "Invalid developer token"


class TestSuccess:
    def test_test_connection(self, api, configured, fake_api):
        fake_api.search_rows = [{"customer": {"id": "1234567890", "descriptiveName": "Acme"}}]

        response = api.post("/api/test-connection")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Connection successful"
        assert body["accounts"][0]["name"] == "Acme"

    def test_accounts(self, api, configured, fake_api):
        fake_api.search_rows = [
            {"customer": {"id": "1234567890", "descriptiveName": "Acme", "currencyCode": "USD"}}
        ]

        response = api.get("/api/accounts")

        assert response.status_code == 200
        assert response.json() == [
            {
                "id": "1234567890",
                "name": "Acme",
                "currencyCode": "USD",
                "timeZone": None,
                "isManager": False,
            }
        ]

    def test_sends_credentials_headers(self, api, configured, fake_api):
        api.get("/api/accounts")

        headers = fake_api.requests[0].headers
        assert headers["Authorization"] == "Bearer ya29.integration-token"
        assert headers["developer-token"] == configured.developer_token
        assert headers["login-customer-id"] == "1234567890"

    def test_metrics_default_period(self, api, configured):
        response = api.get("/api/metrics/1234567890")

        assert response.status_code == 200
        body = response.json()
        assert body["period"] == "30days"
        assert len(body["daily"]) == 30
        assert set(body["trends"]) == {"impressions", "clicks", "cost", "conversions", "costPerLead"}

    def test_metrics_dashed_account_id(self, api, configured):
        response = api.get("/api/metrics/123-456-7890", params={"period": "7days"})

        assert response.status_code == 200
        assert response.json()["accountId"] == "1234567890"
        assert len(response.json()["daily"]) == 7

    def test_conversions(self, api, configured, fake_api):
        fake_api.search_rows = []

        response = api.get("/api/conversions/1234567890", params={"period": "month"})

        assert response.status_code == 200
        body = response.json()
        assert body["period"] == "month"
        assert body["records"] == []
        assert body["totalConversions"] == 0.0


class TestValidation:
    def test_invalid_period(self, api, configured, fake_api):
        response = api.get("/api/metrics/1234567890", params={"period": "year"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid period"
        assert fake_api.requests == []

    def test_invalid_account_id(self, api, configured):
        response = api.get("/api/conversions/not-an-id")

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid account id"
