"""Dashboard state: the selected account and the connection status."""

import logging
from datetime import datetime, timezone
from typing import Optional

from src.client.base import DashboardDataSource
from src.domain.periods import DEFAULT_PERIOD, validate_period
from src.domain.reporting import (
    Account,
    ConnectionTestResult,
    ConversionReport,
    CostPerLeadPoint,
    MetricsOverview,
)

logger = logging.getLogger(__name__)


class DashboardService:
    """What a dashboard view needs, backed by an injected data source.

    Args:
        source: Where data comes from (proxy, mock or fallback)
        account_id: Initially selected account; the first account is used when unset
    """

    def __init__(self, source: DashboardDataSource, account_id: Optional[str] = None):
        self.source = source
        self.selected_account_id = account_id
        self.is_connected = False
        self.last_checked: Optional[datetime] = None

    def test_connection(self) -> ConnectionTestResult:
        result = self.source.test_connection()
        self.is_connected = result.success
        self.last_checked = datetime.now(timezone.utc)
        if result.success and not self.selected_account_id and result.accounts:
            self.selected_account_id = result.accounts[0].id
        logger.info(
            "Dashboard connection checked",
            extra={"connected": result.success, "source": self.source.name},
        )
        return result

    def connection_status(self) -> dict:
        return {
            "isConnected": self.is_connected,
            "lastChecked": self.last_checked.isoformat() if self.last_checked else None,
        }

    def get_accounts(self) -> list[Account]:
        return self.source.get_accounts()

    def select_account(self, account_id: str) -> None:
        self.selected_account_id = account_id

    def _account_id(self) -> str:
        if not self.selected_account_id:
            accounts = self.source.get_accounts()
            if not accounts:
                raise LookupError("No accounts available")
            self.selected_account_id = accounts[0].id
        return self.selected_account_id

    def get_metrics_overview(self, period: str = DEFAULT_PERIOD) -> MetricsOverview:
        return self.source.get_metrics_overview(self._account_id(), validate_period(period))

    def get_conversions(self, period: str = DEFAULT_PERIOD) -> ConversionReport:
        return self.source.get_conversions(self._account_id(), validate_period(period))

    def get_cost_per_lead_series(self, period: str = DEFAULT_PERIOD) -> list[CostPerLeadPoint]:
        return self.source.get_cost_per_lead_series(self._account_id(), validate_period(period))
