"""
Health check endpoint for monitoring and diagnostics.
"""
import logging

from fastapi import APIRouter, Depends

from hwid_api.core.auth import get_store
from hwid_api.core.config import settings
from hwid_api.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health_check(store: CredentialStore = Depends(get_store)):
    """
    Health check endpoint.

    Returns:
        {
            "ok": true,
            "credentials": <number of live credentials>,
            "environment": "<APP_ENV>"
        }
    """
    return {
        "ok": True,
        "credentials": len(store),
        "environment": settings.APP_ENV,
    }
