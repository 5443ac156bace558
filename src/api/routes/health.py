"""Liveness endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter

from src.api.schemas.responses import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health():
    """Health check endpoint."""
    return HealthResponse(timestamp=datetime.now(timezone.utc).isoformat())
