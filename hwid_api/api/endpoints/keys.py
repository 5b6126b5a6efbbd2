"""
Credential endpoints: register a device, then read, update, delete or
validate its key using the X-API-Key / X-HWID headers.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status

from hwid_api.core.auth import get_authorized_credential, get_store
from hwid_api.core.errors import CredentialNotFound, InvalidPair
from hwid_api.core.logging_config import mask_key
from hwid_api.models.credential import Credential
from hwid_api.schemas.credential import (
    CredentialCreateRequest,
    CredentialPatch,
    CredentialResponse,
    MessageResponse,
    ValidateResponse,
)
from hwid_api.services.credential_generator import new_credential
from hwid_api.services.credential_store import CredentialStore
from hwid_api.utils.rendering import render_html, wants_html

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=CredentialResponse)
def create_key(
    request: Optional[CredentialCreateRequest] = None,
    store: CredentialStore = Depends(get_store),
):
    """
    Register a device and issue a new API key.

    No authentication required. When `hwid` is omitted a random one is generated.
    """
    hwid = request.hwid if request else None
    credential = store.insert(new_credential(hwid=hwid))
    logger.info(
        f"Created credential: id={credential.id}, key={mask_key(credential.key)}, "
        f"hwid_generated={hwid is None}"
    )
    return credential


@router.post("/validate", response_model=ValidateResponse)
def validate_key(credential: Credential = Depends(get_authorized_credential)):
    """Report whether the presented key/HWID pair is valid."""
    logger.info(f"Validated credential: id={credential.id}")
    return ValidateResponse(valid=True, message="Key and HWID are valid")


@router.get("/{key}", response_model=CredentialResponse)
def get_key(
    key: str,
    http_request: Request,
    credential: Credential = Depends(get_authorized_credential),
):
    """
    Return the credential matching the X-API-Key / X-HWID headers.

    The path segment is informational; the headers decide which record is returned.
    """
    if wants_html(http_request):
        return render_html("API Key", credential.to_public())
    return credential


@router.patch("/{key}", response_model=CredentialResponse)
def update_key(
    key: str,
    patch: CredentialPatch,
    credential: Credential = Depends(get_authorized_credential),
    store: CredentialStore = Depends(get_store),
):
    """
    Update `hwid`, `isActive` or metadata of the authorized credential.

    `id` and `createdAt` are never changed. Unknown fields are merged into metadata.
    """
    try:
        updated = store.apply_patch(credential, patch)
    except CredentialNotFound:
        raise InvalidPair() from None

    logger.info(f"Updated credential: id={updated.id}")
    return updated


@router.delete("/{key}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_key(
    key: str,
    credential: Credential = Depends(get_authorized_credential),
    store: CredentialStore = Depends(get_store),
):
    """Permanently delete the authorized credential."""
    try:
        store.remove(credential.key)
    except CredentialNotFound:
        raise InvalidPair() from None

    logger.info(f"Deleted credential: id={credential.id}")
    return MessageResponse(message="Key deleted successfully")
