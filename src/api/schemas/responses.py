"""Response models for the API."""

from typing import Optional

from pydantic import Field

from src.domain.base import CamelModel
from src.domain.reporting import Account


class HealthResponse(CamelModel):
    status: str = "ok"
    timestamp: str


class SuccessResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None


class CredentialStatusResponse(CamelModel):
    """Which credential fields are stored. Never carries the values themselves."""

    exists: bool
    has_refresh_token: Optional[bool] = None
    has_developer_token: Optional[bool] = None
    has_client_id: Optional[bool] = None
    has_client_secret: Optional[bool] = None
    has_manager_id: Optional[bool] = None


class ConnectionTestResponse(CamelModel):
    success: bool = True
    message: str = "Connection successful"
    accounts: list[Account] = Field(default_factory=list)


class AuthUrlResponse(CamelModel):
    url: str


class TokenResponse(CamelModel):
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expiry: Optional[str] = None
