"""Read-only reporting shapes returned by the proxy and consumed by the dashboard.

These are projections of Google Ads API responses; nothing here is stored.
"""

from typing import Literal, Optional

from pydantic import Field

from src.domain.base import CamelModel

CPL_BENCHMARK = 45.0

# Most recent conversions kept in a ConversionReport
MAX_CONVERSION_RECORDS = 50


class Account(CamelModel):
    """An advertising account the credentials can access."""

    id: str
    name: str
    currency_code: Optional[str] = None
    time_zone: Optional[str] = None
    is_manager: bool = False


class MetricTrends(CamelModel):
    """Percent change against the preceding window of equal length."""

    impressions: float = 0.0
    clicks: float = 0.0
    cost: float = 0.0
    conversions: float = 0.0
    cost_per_lead: float = 0.0


class DailyMetrics(CamelModel):
    date: str
    impressions: int = 0
    clicks: int = 0
    cost: float = 0.0
    conversions: float = 0.0


class AccountMetrics(CamelModel):
    """Performance totals for one account over a reporting period."""

    account_id: str
    period: str
    start_date: str
    end_date: str
    impressions: int = 0
    clicks: int = 0
    cost: float = 0.0
    conversions: float = 0.0
    cost_per_lead: float = 0.0
    ctr: float = 0.0
    trends: MetricTrends = Field(default_factory=MetricTrends)
    daily: list[DailyMetrics] = Field(default_factory=list)


class DailyConversions(CamelModel):
    date: str
    form_conversions: float = 0.0
    call_conversions: float = 0.0


class ConversionRecord(CamelModel):
    """Conversions attributed to one ad group on one day for one lead type."""

    id: str
    date: str
    type: Literal["form", "call"]
    campaign: str
    ad_group: str
    conversions: float = 0.0


class ConversionReport(CamelModel):
    """Form vs. call conversion breakdown for one account over a period."""

    account_id: str
    period: str
    start_date: str
    end_date: str
    total_conversions: float = 0.0
    form_conversions: float = 0.0
    call_conversions: float = 0.0
    daily: list[DailyConversions] = Field(default_factory=list)
    records: list[ConversionRecord] = Field(default_factory=list)


class MetricsOverview(CamelModel):
    """Headline numbers for the dashboard summary cards."""

    total_conversions: float = 0.0
    form_conversions: float = 0.0
    call_conversions: float = 0.0
    cost_per_lead: float = 0.0
    total_spend: float = 0.0
    trends: dict[str, float] = Field(default_factory=dict)


class CostPerLeadPoint(CamelModel):
    date: str
    cost_per_lead: float
    benchmark: float = CPL_BENCHMARK


class ConnectionTestResult(CamelModel):
    success: bool
    message: str
    accounts: list[Account] = Field(default_factory=list)
    error: Optional[str] = None
    timestamp: Optional[str] = None
