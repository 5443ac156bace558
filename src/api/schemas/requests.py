"""Request schemas for the API."""

from typing import Optional

from pydantic import field_validator
from pydantic.alias_generators import to_camel

from src.domain.base import CamelModel
from src.domain.credentials import Credentials
from src.services.google_ads_auth import DEFAULT_REDIRECT_URI


class _StrippedModel(CamelModel):
    @field_validator("*", mode="before")
    @classmethod
    def strip_strings(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    def missing(self, *fields: str) -> list[str]:
        """camelCase names of the given fields that are empty."""
        return [to_camel(name) for name in fields if not getattr(self, name)]


class CredentialsRequest(_StrippedModel):
    """Google Ads API credentials submitted for storage."""

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    developer_token: Optional[str] = None
    refresh_token: Optional[str] = None
    manager_id: Optional[str] = None

    def missing_fields(self) -> list[str]:
        return self.missing("client_id", "client_secret", "developer_token", "refresh_token")

    def to_credentials(self) -> Credentials:
        return Credentials(
            client_id=self.client_id or "",
            client_secret=self.client_secret or "",
            developer_token=self.developer_token or "",
            refresh_token=self.refresh_token or "",
            manager_id=self.manager_id or None,
        )


class OAuthUrlRequest(_StrippedModel):
    """Client id/secret used to build the consent URL."""

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    redirect_uri: str = DEFAULT_REDIRECT_URI

    def missing_fields(self) -> list[str]:
        return self.missing("client_id", "client_secret")


class OAuthTokenRequest(OAuthUrlRequest):
    """Authorization code returned by Google's consent screen."""

    code: Optional[str] = None

    def missing_fields(self) -> list[str]:
        return self.missing("client_id", "client_secret", "code")
