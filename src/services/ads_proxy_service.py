"""Request-scoped orchestration for the proxied Google Ads endpoints.

Each call loads the stored credentials, mints an access token and opens a
fresh ``GoogleAdsClient``; nothing is cached between calls.
"""

import logging
from datetime import date
from typing import Callable, Optional

import httpx

from src.core.credential_store import CredentialStore
from src.domain.credentials import Credentials
from src.domain.reporting import Account, AccountMetrics, ConversionReport
from src.services.google_ads_auth import (
    GoogleAdsAuth,
    GoogleAdsAuthError,
    validate_credentials,
)
from src.services.google_ads_client import GoogleAdsClient
from src.utils.error_handling import AuthenticationError, NotConfiguredError

logger = logging.getLogger(__name__)

AuthFactory = Callable[[Credentials], GoogleAdsAuth]


class GoogleAdsProxyService:
    """Runs Google Ads queries on behalf of the stored credentials.

    Args:
        store: Credential store to read from
        api_version: Google Ads API version
        timeout: Upstream timeout in seconds (None for no timeout)
        auth_factory: Builds the token minter from credentials
        transport: Optional httpx transport for the Google Ads client (tests)

    Raises (from every public method):
        NotConfiguredError: No credentials are stored, or the stored manager
            id is unusable.
        AuthenticationError: The refresh token could not be exchanged.
        GoogleAdsApiError: The Google Ads call failed.
    """

    def __init__(
        self,
        store: CredentialStore,
        api_version: str = "v18",
        timeout: Optional[float] = None,
        auth_factory: AuthFactory = GoogleAdsAuth,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self._store = store
        self._api_version = api_version
        self._timeout = timeout
        self._auth_factory = auth_factory
        self._transport = transport

    def _open_client(self) -> GoogleAdsClient:
        credentials = self._store.load()
        if not validate_credentials(credentials):
            raise NotConfiguredError("No credentials found")

        try:
            access_token = self._auth_factory(credentials).get_access_token()
        except GoogleAdsAuthError as exc:
            raise AuthenticationError(
                "Failed to get access token", detail_message=str(exc)
            ) from exc

        try:
            return GoogleAdsClient(
                access_token=access_token,
                developer_token=credentials.developer_token,
                login_customer_id=credentials.manager_id,
                api_version=self._api_version,
                timeout=self._timeout,
                transport=self._transport,
            )
        except ValueError as exc:
            raise NotConfiguredError(
                "Stored manager id is invalid", detail_message=str(exc)
            ) from exc

    def test_connection(self) -> list[Account]:
        """Verify the credentials end to end by listing accounts."""
        accounts = self.list_accounts()
        logger.info("Google Ads connection test succeeded", extra={"accounts": len(accounts)})
        return accounts

    def list_accounts(self) -> list[Account]:
        with self._open_client() as client:
            return client.get_account_list()

    def get_metrics(
        self, account_id: str, period: str, today: Optional[date] = None
    ) -> AccountMetrics:
        with self._open_client() as client:
            return client.get_account_metrics(account_id, period, today=today)

    def get_conversions(
        self, account_id: str, period: str, today: Optional[date] = None
    ) -> ConversionReport:
        with self._open_client() as client:
            return client.get_conversion_data(account_id, period, today=today)
