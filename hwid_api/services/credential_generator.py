"""
Credential value generation: API keys, fallback HWIDs and opaque ids.
"""
import hashlib
import logging
import secrets
import uuid
from datetime import datetime, timezone
from typing import Optional

from hwid_api.core.errors import EntropySourceError
from hwid_api.models.credential import Credential

logger = logging.getLogger(__name__)

API_KEY_BYTES = 32  # 256 bits -> 64 hex chars


def new_api_key() -> str:
    """Generate a random 64-hex-char API key."""
    try:
        return secrets.token_hex(API_KEY_BYTES)
    except (OSError, NotImplementedError) as e:
        logger.critical(f"OS random source unavailable: {e}")
        raise EntropySourceError("Random source unavailable") from e


def new_hwid() -> str:
    """Generate a fallback HWID: SHA-256 hex digest of a fresh UUID4."""
    return hashlib.sha256(new_id().encode()).hexdigest()


def new_id() -> str:
    """Generate an opaque credential id."""
    try:
        return str(uuid.uuid4())
    except (OSError, NotImplementedError) as e:
        logger.critical(f"OS random source unavailable: {e}")
        raise EntropySourceError("Random source unavailable") from e


def new_credential(hwid: Optional[str] = None) -> Credential:
    """Build a fresh active credential, generating a HWID when none is given."""
    if not hwid:
        hwid = new_hwid()
    return Credential(
        id=new_id(),
        key=new_api_key(),
        hwid=hwid,
        created_at=datetime.now(timezone.utc),
        is_active=True,
    )
