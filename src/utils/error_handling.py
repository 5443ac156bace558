"""Application exception hierarchy.

Every error the proxy reports to a caller derives from ``AppException``,
which carries the HTTP status the API layer should answer with. The
``details`` payload is passed through to the response body, so it must never
contain credential values.
"""

from typing import Any, Optional

from fastapi import status


class AppException(Exception):
    """Base class for errors surfaced through the REST API.

    Attributes:
        message: Short, client-facing error label
        status_code: HTTP status used when rendering the error
        detail_message: Optional longer explanation (e.g. upstream message)
        details: Optional structured detail (e.g. upstream error body)
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        *,
        detail_message: Optional[str] = None,
        details: Optional[Any] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.detail_message = detail_message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Render the error as a JSON-serializable response body."""
        body: dict[str, Any] = {"error": self.message}
        if self.detail_message is not None:
            body["message"] = self.detail_message
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(AppException):
    """Missing or malformed request input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotConfiguredError(AppException):
    """No Google Ads credentials have been stored yet."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(AppException):
    """OAuth token refresh or code exchange failed."""

    status_code = status.HTTP_401_UNAUTHORIZED


class UpstreamError(AppException):
    """The Google Ads API call failed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class StorageError(AppException):
    """Credential persistence failed (disk or cipher)."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
