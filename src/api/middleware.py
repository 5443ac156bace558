"""Cross-origin enforcement.

``CORSMiddleware`` only decides which response headers to send; a browser
request from an unknown origin would still reach the handler. This middleware
rejects such requests outright. Requests without an ``Origin`` header
(curl, server-to-server, mobile apps) are always let through.
"""

import logging
from collections.abc import Iterable

from fastapi import status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

CORS_REJECTION_MESSAGE = (
    "The CORS policy for this site does not allow access from the specified Origin."
)


class OriginAllowListMiddleware(BaseHTTPMiddleware):
    """Reject requests whose Origin header is not in the allow-list."""

    def __init__(self, app: ASGIApp, allowed_origins: Iterable[str]):
        super().__init__(app)
        self.allowed_origins = frozenset(allowed_origins)

    def is_allowed(self, origin: str | None) -> bool:
        return origin is None or origin in self.allowed_origins

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        origin = request.headers.get("origin")
        if not self.is_allowed(origin):
            logger.warning(
                "Rejected cross-origin request",
                extra={"origin": origin, "path": request.url.path},
            )
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"error": CORS_REJECTION_MESSAGE},
            )
        return await call_next(request)
