"""
Error taxonomy for credential operations.

Domain errors derive from CredentialError and carry the HTTP status the
transport should answer with. CredentialNotFound is store-internal and is
always translated to InvalidPair before it reaches a client.
"""
from fastapi import status


class CredentialError(Exception):
    """Base class for client-facing credential errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    reason: str = "credential_error"
    message: str = "Credential error"

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingCredentials(CredentialError):
    """X-API-Key or X-HWID was absent or empty."""

    status_code = status.HTTP_400_BAD_REQUEST
    reason = "missing_credentials"
    message = "API key and HWID required"


class InvalidPair(CredentialError):
    """No stored credential matches the presented (key, hwid) pair.

    Deliberately does not say whether the key never existed, was deleted,
    or the HWID was wrong.
    """

    status_code = status.HTTP_403_FORBIDDEN
    reason = "invalid_pair"
    message = "Invalid API key or HWID"


class KeyConflict(CredentialError):
    """Another live credential already holds this API key."""

    status_code = status.HTTP_409_CONFLICT
    reason = "key_conflict"
    message = "API key already in use"


class CredentialNotFound(LookupError):
    """Store lookup found nothing."""


class EntropySourceError(RuntimeError):
    """The OS random source could not produce bytes."""
