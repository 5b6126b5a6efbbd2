"""
Authorization gate: API key + HWID pairing check for protected endpoints.
"""
import logging
from typing import Optional

from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader

from hwid_api.core.errors import CredentialNotFound, InvalidPair, MissingCredentials
from hwid_api.core.logging_config import mask_key
from hwid_api.models.credential import Credential
from hwid_api.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)

# Define the credential headers
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)
hwid_header = APIKeyHeader(name="X-HWID", auto_error=False)


def authorize(
    store: CredentialStore,
    presented_key: Optional[str],
    presented_hwid: Optional[str],
) -> Credential:
    """
    Check a presented (API key, HWID) pair against the store.

    Args:
        store: Credential store to look the pair up in
        presented_key: Value of the X-API-Key header
        presented_hwid: Value of the X-HWID header

    Returns:
        The matched credential

    Raises:
        MissingCredentials: If either value is missing or empty
        InvalidPair: If no stored credential matches both values
    """
    if not presented_key or not presented_hwid:
        logger.warning("API key or HWID missing from request")
        raise MissingCredentials()

    try:
        credential = store.find_by_key_and_hwid(presented_key, presented_hwid)
    except CredentialNotFound:
        logger.warning(f"Invalid API key/HWID pair attempted: {mask_key(presented_key)}")
        raise InvalidPair() from None

    logger.debug(f"Authorized credential id={credential.id}")
    return credential


def get_store(request: Request) -> CredentialStore:
    """Dependency returning the store owned by the running application."""
    return request.app.state.store


def get_authorized_credential(
    api_key: Optional[str] = Security(api_key_header),
    hwid: Optional[str] = Security(hwid_header),
    store: CredentialStore = Depends(get_store),
) -> Credential:
    """Dependency that gates an endpoint on the X-API-Key / X-HWID headers."""
    return authorize(store, api_key, hwid)
