"""Domain models."""
from hwid_api.models.credential import Credential

__all__ = [
    "Credential",
]
