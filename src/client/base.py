"""Data source interface for the dashboard.

A dashboard only ever talks to a ``DashboardDataSource``. The real
implementation calls the proxy server, the mock one generates demo data, and
both return the same models so the views cannot tell them apart.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.reporting import (
    CPL_BENCHMARK,
    Account,
    AccountMetrics,
    ConnectionTestResult,
    ConversionReport,
    CostPerLeadPoint,
    MetricsOverview,
)


class DataSourceError(Exception):
    """A data source could not produce a result.

    Attributes:
        message: Human-readable explanation suitable for display
        status_code: HTTP status from the proxy, if one was received
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class DashboardDataSource(ABC):
    """Everything the dashboard views need, for one account and period."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier, e.g. 'proxy' or 'mock'."""

    @abstractmethod
    def test_connection(self) -> ConnectionTestResult:
        """Check the source is usable. Never raises; failures are in the result."""

    @abstractmethod
    def get_accounts(self) -> list[Account]:
        """Accounts available to the dashboard."""

    @abstractmethod
    def get_metrics(self, account_id: str, period: str) -> AccountMetrics:
        """Performance totals, trends and daily series."""

    @abstractmethod
    def get_conversions(self, account_id: str, period: str) -> ConversionReport:
        """Form vs. call conversion breakdown."""

    def get_metrics_overview(self, account_id: str, period: str) -> MetricsOverview:
        """Headline numbers for the summary cards."""
        metrics = self.get_metrics(account_id, period)
        conversions = self.get_conversions(account_id, period)
        return MetricsOverview(
            total_conversions=metrics.conversions,
            form_conversions=conversions.form_conversions,
            call_conversions=conversions.call_conversions,
            cost_per_lead=metrics.cost_per_lead,
            total_spend=metrics.cost,
            trends={
                "totalConversions": metrics.trends.conversions,
                "costPerLead": metrics.trends.cost_per_lead,
                "totalSpend": metrics.trends.cost,
            },
        )

    def get_cost_per_lead_series(
        self, account_id: str, period: str
    ) -> list[CostPerLeadPoint]:
        """Daily cost per lead against the fixed benchmark.

        Days without conversions report 0.
        """
        metrics = self.get_metrics(account_id, period)
        return [
            CostPerLeadPoint(
                date=day.date,
                cost_per_lead=round(day.cost / day.conversions, 2) if day.conversions else 0.0,
                benchmark=CPL_BENCHMARK,
            )
            for day in metrics.daily
        ]
