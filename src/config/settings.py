"""
Application settings management using Pydantic.

All configuration comes from environment variables (optionally via a
``.env`` file). Secrets such as the encryption key are validated here so a
misconfigured process fails at startup instead of on the first request.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root (parent of the src directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

DEFAULT_ENCRYPTION_KEY = "a1b2c3d4e5f6g7h8i9j0k1l2m3n4o5p6"
DEFAULT_ALLOWED_ORIGINS = "http://localhost:5173,http://localhost:5180"
ENCRYPTION_KEY_BYTES = 32


class AppSettings(BaseSettings):
    """
    Proxy server settings.

    Values are read from environment variables (case-insensitive), e.g.
    ``PORT``, ``ALLOWED_ORIGINS``, ``ENCRYPTION_KEY``, ``ENVIRONMENT``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 3001
    environment: str = "development"

    # Comma separated; parsed by ``allowed_origin_list``
    allowed_origins: str = DEFAULT_ALLOWED_ORIGINS

    encryption_key: str = Field(
        default=DEFAULT_ENCRYPTION_KEY,
        description="AES-256 key, exactly 32 bytes",
        repr=False,
    )
    credentials_path: Path = PROJECT_ROOT / ".credentials"

    google_ads_api_version: str = "v18"
    upstream_timeout: Optional[float] = None

    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "text"

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @field_validator("encryption_key")
    @classmethod
    def validate_encryption_key(cls, v: str) -> str:
        if len(v.encode("utf-8")) != ENCRYPTION_KEY_BYTES:
            raise ValueError(
                f"Encryption key must be exactly {ENCRYPTION_KEY_BYTES} bytes for AES-256"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v_upper

    @field_validator("upstream_timeout")
    @classmethod
    def validate_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("Upstream timeout must be positive")
        return v

    @property
    def allowed_origin_list(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def uses_default_key(self) -> bool:
        return self.encryption_key == DEFAULT_ENCRYPTION_KEY


class ClientSettings(BaseSettings):
    """Settings for the dashboard client layer (``DASHBOARD_*`` variables)."""

    model_config = SettingsConfigDict(
        env_prefix="DASHBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_url: str = "http://localhost:3001/api"
    data_source: Literal["auto", "real", "mock"] = "auto"
    timeout: float = 10.0

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        if not v.startswith(("https://", "http://")):
            raise ValueError("api_url must start with https:// or http://")
        return v.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Get cached proxy settings."""
    return AppSettings()


@lru_cache(maxsize=1)
def get_client_settings() -> ClientSettings:
    """Get cached client settings."""
    return ClientSettings()


def reload_settings() -> AppSettings:
    """Clear cached settings and read the environment again."""
    get_settings.cache_clear()
    get_client_settings.cache_clear()
    return get_settings()
