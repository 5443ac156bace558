"""Dashboard-side data access: proxy, mock and fallback data sources."""

from src.client.base import DashboardDataSource, DataSourceError
from src.client.dashboard import DashboardService
from src.client.factory import create_data_source
from src.client.fallback import FallbackDataSource
from src.client.mock import MockDataSource
from src.client.proxy import ProxyDataSource

__all__ = [
    "DashboardDataSource",
    "DataSourceError",
    "DashboardService",
    "FallbackDataSource",
    "MockDataSource",
    "ProxyDataSource",
    "create_data_source",
]
