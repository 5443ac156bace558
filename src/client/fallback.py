"""Primary data source with a fallback on failure."""

import logging
from typing import Callable, Optional, TypeVar

from src.client.base import DashboardDataSource, DataSourceError
from src.domain.reporting import (
    Account,
    AccountMetrics,
    ConnectionTestResult,
    ConversionReport,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FallbackDataSource(DashboardDataSource):
    """Serve from *primary*; when it raises ``DataSourceError``, serve from *fallback*.

    Each call tries the primary exactly once. The most recent failure is kept
    in ``last_error`` and cleared by the next successful primary call.
    """

    def __init__(self, primary: DashboardDataSource, fallback: DashboardDataSource):
        self.primary = primary
        self.fallback = fallback
        self.last_error: Optional[str] = None

    @property
    def name(self) -> str:
        return f"{self.primary.name}+{self.fallback.name}"

    @property
    def using_fallback(self) -> bool:
        return self.last_error is not None

    def _call(self, operation: str, primary: Callable[[], T], fallback: Callable[[], T]) -> T:
        try:
            result = primary()
        except DataSourceError as exc:
            self.last_error = exc.message
            logger.warning(
                f"{self.primary.name} {operation} failed, using {self.fallback.name} data",
                extra={"error_detail": exc.message},
            )
            return fallback()
        self.last_error = None
        return result

    def test_connection(self) -> ConnectionTestResult:
        # The primary reports its own failures in the result rather than raising
        result = self.primary.test_connection()
        self.last_error = None if result.success else result.error
        return result

    def get_accounts(self) -> list[Account]:
        return self._call("get_accounts", self.primary.get_accounts, self.fallback.get_accounts)

    def get_metrics(self, account_id: str, period: str) -> AccountMetrics:
        return self._call(
            "get_metrics",
            lambda: self.primary.get_metrics(account_id, period),
            lambda: self.fallback.get_metrics(account_id, period),
        )

    def get_conversions(self, account_id: str, period: str) -> ConversionReport:
        return self._call(
            "get_conversions",
            lambda: self.primary.get_conversions(account_id, period),
            lambda: self.fallback.get_conversions(account_id, period),
        )
