"""Domain types shared by the proxy server and the dashboard client."""

from .credentials import Credentials
from .periods import DEFAULT_PERIOD, PERIODS, DateWindow, resolve_period, validate_period
from .reporting import (
    Account,
    AccountMetrics,
    ConnectionTestResult,
    ConversionRecord,
    ConversionReport,
    CostPerLeadPoint,
    DailyConversions,
    DailyMetrics,
    MetricsOverview,
    MetricTrends,
)

__all__ = [
    'Account',
    'AccountMetrics',
    'ConnectionTestResult',
    'ConversionRecord',
    'ConversionReport',
    'CostPerLeadPoint',
    'Credentials',
    'DailyConversions',
    'DailyMetrics',
    'DateWindow',
    'DEFAULT_PERIOD',
    'MetricsOverview',
    'MetricTrends',
    'PERIODS',
    'resolve_period',
    'validate_period',
]
