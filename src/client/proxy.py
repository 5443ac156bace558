"""Data source backed by the proxy server's REST API."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from src.client.base import DashboardDataSource, DataSourceError
from src.domain.credentials import Credentials
from src.domain.reporting import (
    Account,
    AccountMetrics,
    ConnectionTestResult,
    ConversionReport,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

INVALID_RESPONSE_MESSAGE = "The proxy server returned an invalid response"

ModelT = TypeVar("ModelT", bound=BaseModel)


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    return body.get("message") or body.get("error")


def _describe_status(response: httpx.Response) -> str:
    detail = _error_message(response)
    status_code = response.status_code
    if status_code == 400:
        return f"Google Ads API is not configured or the request was invalid: {detail or 'bad request'}"
    if status_code == 401:
        return f"Google Ads authorization failed, check the refresh token: {detail or 'unauthorized'}"
    if status_code == 403:
        return "The proxy server refused this origin"
    if status_code >= 500:
        return f"Google Ads request failed on the proxy server: {detail or 'server error'}"
    return f"Unexpected response from the proxy server ({status_code})"


class ProxyDataSource(DashboardDataSource):
    """Calls the proxy server, one HTTP request per method.

    Args:
        base_url: Proxy API root, e.g. ``http://localhost:3001/api``
        timeout: Per-request timeout in seconds
        transport: Optional httpx transport (tests)
    """

    name = "proxy"

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            with httpx.Client(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                response = client.request(method, path, **kwargs)
        except httpx.TimeoutException as exc:
            raise DataSourceError(
                f"The proxy server did not respond within {self.timeout:g} seconds"
            ) from exc
        except httpx.HTTPError as exc:
            raise DataSourceError(
                f"Could not reach the proxy server at {self.base_url}"
            ) from exc

        if response.is_error:
            raise DataSourceError(_describe_status(response), status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise DataSourceError(INVALID_RESPONSE_MESSAGE) from exc

    def _request_object(self, method: str, path: str, **kwargs) -> dict:
        body = self._request(method, path, **kwargs)
        if not isinstance(body, dict):
            raise DataSourceError(INVALID_RESPONSE_MESSAGE)
        return body

    def _parse(self, model: type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except PydanticValidationError as exc:
            logger.warning(
                "Proxy response did not match the expected shape",
                extra={"model": model.__name__, "error_count": exc.error_count()},
            )
            raise DataSourceError(INVALID_RESPONSE_MESSAGE) from exc

    def test_connection(self) -> ConnectionTestResult:
        checked_at = datetime.now(timezone.utc).isoformat()
        try:
            body = self._request_object("POST", "/test-connection")
            result = self._parse(ConnectionTestResult, {**body, "timestamp": checked_at})
        except DataSourceError as exc:
            logger.warning("Proxy connection test failed", extra={"error_detail": exc.message})
            return ConnectionTestResult(
                success=False,
                message="Connection failed",
                error=exc.message,
                timestamp=checked_at,
            )
        return result

    def get_accounts(self) -> list[Account]:
        body = self._request("GET", "/accounts")
        if not isinstance(body, list):
            raise DataSourceError(INVALID_RESPONSE_MESSAGE)
        return [self._parse(Account, item) for item in body]

    def get_metrics(self, account_id: str, period: str) -> AccountMetrics:
        body = self._request("GET", f"/metrics/{account_id}", params={"period": period})
        return self._parse(AccountMetrics, body)

    def get_conversions(self, account_id: str, period: str) -> ConversionReport:
        body = self._request("GET", f"/conversions/{account_id}", params={"period": period})
        return self._parse(ConversionReport, body)

    def save_credentials(self, credentials: Credentials) -> bool:
        """Store credentials on the proxy. Returns False on any failure."""
        try:
            body = self._request_object("POST", "/credentials", json=credentials.to_wire())
        except DataSourceError as exc:
            logger.warning("Saving credentials failed", extra={"error_detail": exc.message})
            return False
        return bool(body.get("success"))

    def check_credentials(self) -> bool:
        """Whether the proxy has credentials stored. False on any failure."""
        try:
            body = self._request_object("GET", "/credentials")
        except DataSourceError as exc:
            logger.warning("Checking credentials failed", extra={"error_detail": exc.message})
            return False
        return bool(body.get("exists"))

    def delete_credentials(self) -> bool:
        try:
            body = self._request_object("DELETE", "/credentials")
        except DataSourceError as exc:
            logger.warning("Deleting credentials failed", extra={"error_detail": exc.message})
            return False
        return bool(body.get("success"))
