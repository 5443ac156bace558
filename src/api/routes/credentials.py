"""Stored Google Ads credential endpoints.

Credentials are written encrypted to disk and never read back to callers;
``GET`` only reports which fields are present.
"""

import logging

from fastapi import APIRouter, Depends

from src.api.dependencies import get_credential_store
from src.api.schemas.requests import CredentialsRequest
from src.api.schemas.responses import CredentialStatusResponse, SuccessResponse
from src.core.credential_store import CredentialStore
from src.services.google_ads_client import normalize_customer_id
from src.utils.error_handling import StorageError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/credentials", tags=["credentials"])


@router.post("", response_model=SuccessResponse, response_model_exclude_none=True)
def save_credentials(
    request: CredentialsRequest,
    store: CredentialStore = Depends(get_credential_store),
):
    """Validate and store Google Ads API credentials."""
    missing = request.missing_fields()
    if missing:
        raise ValidationError(
            "Missing required credentials", details={"missing": missing}
        )

    if request.manager_id:
        try:
            normalize_customer_id(request.manager_id)
        except ValueError as exc:
            raise ValidationError(
                "Invalid manager id", detail_message=str(exc), details={"invalid": ["managerId"]}
            ) from exc

    if not store.save(request.to_credentials()):
        raise StorageError("Failed to save credentials")

    logger.info("Google Ads credentials saved")
    return SuccessResponse(message="Credentials saved successfully")


@router.get(
    "", response_model=CredentialStatusResponse, response_model_exclude_none=True
)
def get_credential_status(store: CredentialStore = Depends(get_credential_store)):
    """Report whether credentials are stored and which fields are set."""
    credentials = store.load()
    if credentials is None:
        return CredentialStatusResponse(exists=False)
    return CredentialStatusResponse.model_validate(
        {"exists": True, **credentials.presence()}
    )


@router.delete("", response_model=SuccessResponse, response_model_exclude_none=True)
def delete_credentials(store: CredentialStore = Depends(get_credential_store)):
    """Remove stored credentials. Succeeds when nothing is stored."""
    if not store.clear():
        raise StorageError("Failed to delete credentials")

    logger.info("Google Ads credentials deleted")
    return SuccessResponse(message="Credentials deleted successfully")
