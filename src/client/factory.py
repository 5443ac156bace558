"""Build the dashboard's data source from configuration."""

import logging

from src.client.base import DashboardDataSource
from src.client.fallback import FallbackDataSource
from src.client.mock import MockDataSource
from src.client.proxy import ProxyDataSource
from src.config.settings import ClientSettings

logger = logging.getLogger(__name__)


def create_data_source(settings: ClientSettings) -> DashboardDataSource:
    """Select the data source named by ``settings.data_source``.

    ``real`` talks to the proxy only, ``mock`` serves demo data only, and
    ``auto`` talks to the proxy and falls back to demo data on failure.
    """
    mode = settings.data_source
    if mode == "mock":
        source: DashboardDataSource = MockDataSource()
    else:
        proxy = ProxyDataSource(settings.api_url, timeout=settings.timeout)
        source = proxy if mode == "real" else FallbackDataSource(proxy, MockDataSource())

    logger.info(
        "Dashboard data source selected",
        extra={"mode": mode, "source": source.name, "api_url": settings.api_url},
    )
    return source
