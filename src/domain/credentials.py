"""Google Ads API credentials record."""

from typing import Optional

from pydantic.alias_generators import to_camel

from src.domain.base import CamelModel

REQUIRED_FIELDS = ("client_id", "client_secret", "developer_token", "refresh_token")


class Credentials(CamelModel):
    """The single stored set of Google Ads API credentials.

    Attributes:
        client_id: OAuth2 client id
        client_secret: OAuth2 client secret
        developer_token: Google Ads developer token
        refresh_token: Long-lived OAuth2 refresh token
        manager_id: Optional manager (MCC) account id used as login-customer-id
    """

    client_id: str = ""
    client_secret: str = ""
    developer_token: str = ""
    refresh_token: str = ""
    manager_id: Optional[str] = None

    def missing_fields(self) -> list[str]:
        """Return the camelCase names of required fields that are blank."""
        return [
            to_camel(name)
            for name in REQUIRED_FIELDS
            if not (getattr(self, name) or "").strip()
        ]

    def is_complete(self) -> bool:
        return not self.missing_fields()

    def presence(self) -> dict[str, bool]:
        """Per-field presence flags; safe to return to clients."""
        return {
            "hasRefreshToken": bool(self.refresh_token),
            "hasDeveloperToken": bool(self.developer_token),
            "hasClientId": bool(self.client_id),
            "hasClientSecret": bool(self.client_secret),
            "hasManagerId": bool(self.manager_id),
        }

    def __repr__(self) -> str:
        return f"Credentials(client_id={self.client_id!r}, manager_id={self.manager_id!r})"

    __str__ = __repr__
