"""Tests for the proxy-backed data source."""

import json

import httpx
import pytest

from src.client.base import DataSourceError
from src.client.proxy import ProxyDataSource

BASE_URL = "http://proxy.test/api"

METRICS_BODY = {
    "accountId": "1234567890",
    "period": "7days",
    "startDate": "2025-03-09",
    "endDate": "2025-03-15",
    "impressions": 1500,
    "clicks": 75,
    "cost": 37.5,
    "conversions": 3.0,
    "costPerLead": 12.5,
    "ctr": 5.0,
    "trends": {"impressions": 50.0, "clicks": 50.0, "cost": 25.0, "conversions": 50.0, "costPerLead": -16.7},
    "daily": [{"date": "2025-03-15", "impressions": 1500, "clicks": 75, "cost": 37.5, "conversions": 3.0}],
}

CONVERSIONS_BODY = {
    "accountId": "1234567890",
    "period": "7days",
    "startDate": "2025-03-09",
    "endDate": "2025-03-15",
    "totalConversions": 3.0,
    "formConversions": 2.0,
    "callConversions": 1.0,
    "daily": [{"date": "2025-03-15", "formConversions": 2.0, "callConversions": 1.0}],
    "records": [
        {
            "id": "2025-03-15-11-phone_call_lead",
            "date": "2025-03-15",
            "type": "call",
            "campaign": "Calls",
            "adGroup": "Main Services",
            "conversions": 1.0,
        }
    ],
}


def make_source(handler, timeout=5.0) -> ProxyDataSource:
    return ProxyDataSource(BASE_URL, timeout=timeout, transport=httpx.MockTransport(handler))


def respond(status_code, body):
    def handler(request):
        return httpx.Response(status_code, json=body)

    return handler


class TestReads:
    def test_get_accounts(self):
        source = make_source(respond(200, [{"id": "1", "name": "Acme", "isManager": False}]))
        accounts = source.get_accounts()
        assert [(a.id, a.name) for a in accounts] == [("1", "Acme")]

    def test_get_metrics_sends_period(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=METRICS_BODY)

        metrics = make_source(handler).get_metrics("1234567890", "7days")

        assert seen[0].url.path == "/api/metrics/1234567890"
        assert seen[0].url.params["period"] == "7days"
        assert metrics.cost_per_lead == 12.5
        assert metrics.trends.cost_per_lead == -16.7

    def test_get_conversions(self):
        report = make_source(respond(200, CONVERSIONS_BODY)).get_conversions("1234567890", "7days")
        assert report.records[0].type == "call"
        assert report.records[0].ad_group == "Main Services"

    def test_overview_combines_metrics_and_conversions(self):
        def handler(request):
            body = METRICS_BODY if "/metrics/" in request.url.path else CONVERSIONS_BODY
            return httpx.Response(200, json=body)

        overview = make_source(handler).get_metrics_overview("1234567890", "7days")

        assert overview.total_conversions == 3.0
        assert overview.form_conversions == 2.0
        assert overview.call_conversions == 1.0
        assert overview.total_spend == 37.5
        assert overview.trends == {"totalConversions": 50.0, "costPerLead": -16.7, "totalSpend": 25.0}


class TestErrors:
    @pytest.mark.parametrize(
        "status_code, body, expected",
        [
            (400, {"error": "No credentials found"}, "not configured"),
            (401, {"error": "Failed to get access token", "message": "invalid_grant"}, "authorization failed"),
            (500, {"error": "Failed to fetch accounts", "message": "Quota exceeded"}, "Quota exceeded"),
            (403, {"error": "CORS"}, "refused this origin"),
        ],
    )
    def test_status_becomes_readable_message(self, status_code, body, expected):
        with pytest.raises(DataSourceError, match=expected) as excinfo:
            make_source(respond(status_code, body)).get_accounts()
        assert excinfo.value.status_code == status_code

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(DataSourceError, match="did not respond within 2.5 seconds"):
            make_source(handler, timeout=2.5).get_accounts()

    def test_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(DataSourceError, match="Could not reach the proxy server"):
            make_source(handler).get_accounts()

    def test_invalid_json(self):
        def handler(request):
            return httpx.Response(200, text="<html>")

        with pytest.raises(DataSourceError, match="invalid response"):
            make_source(handler).get_accounts()


    @pytest.mark.parametrize("body", [{"unexpected": True}, ["not", "an", "object"], "text"])
    def test_wrong_shape_is_invalid_response(self, body):
        source = make_source(respond(200, body))
        with pytest.raises(DataSourceError, match="invalid response"):
            source.get_metrics("1234567890", "7days")
        with pytest.raises(DataSourceError, match="invalid response"):
            source.get_conversions("1234567890", "7days")

    @pytest.mark.parametrize("body", [{"accounts": []}, [{"name": "missing id"}], [1, 2]])
    def test_wrong_shape_accounts_is_invalid_response(self, body):
        with pytest.raises(DataSourceError, match="invalid response"):
            make_source(respond(200, body)).get_accounts()

class TestConnection:
    def test_success(self):
        body = {"success": True, "message": "Connection successful", "accounts": [{"id": "1", "name": "Acme"}]}
        result = make_source(respond(200, body)).test_connection()
        assert result.success is True
        assert result.accounts[0].name == "Acme"
        assert result.timestamp

    def test_failure_reported_not_raised(self):
        result = make_source(respond(401, {"error": "Failed to get access token"})).test_connection()
        assert result.success is False
        assert "authorization failed" in result.error

    @pytest.mark.parametrize("body", [{"unexpected": True}, ["not", "an", "object"]])
    def test_wrong_shape_reported_not_raised(self, body):
        result = make_source(respond(200, body)).test_connection()
        assert result.success is False
        assert result.error == "The proxy server returned an invalid response"


class TestCredentialCalls:
    def test_save_posts_camel_case(self, sample_credentials):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"success": True, "message": "Credentials saved successfully"})

        assert make_source(handler).save_credentials(sample_credentials) is True
        assert seen[0].method == "POST"
        assert json.loads(seen[0].content)["refreshToken"] == sample_credentials.refresh_token

    def test_check(self):
        assert make_source(respond(200, {"exists": True})).check_credentials() is True
        assert make_source(respond(200, {"exists": False})).check_credentials() is False

    def test_delete(self):
        assert make_source(respond(200, {"success": True})).delete_credentials() is True

    def test_non_object_body_returns_false(self, sample_credentials):
        source = make_source(respond(200, ["unexpected"]))
        assert source.save_credentials(sample_credentials) is False
        assert source.check_credentials() is False
        assert source.delete_credentials() is False

    def test_failures_return_false(self, sample_credentials):
        source = make_source(respond(500, {"error": "Failed to save credentials"}))
        assert source.save_credentials(sample_credentials) is False
        assert source.check_credentials() is False
        assert source.delete_credentials() is False
