"""Configuration."""

from src.config.settings import (
    AppSettings,
    ClientSettings,
    get_client_settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "AppSettings",
    "ClientSettings",
    "get_client_settings",
    "get_settings",
    "reload_settings",
]
