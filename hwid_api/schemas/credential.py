"""Schemas for credential requests and responses."""
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# Wire and attribute names of fields a patch may name but never changes
IGNORED_PATCH_FIELDS = frozenset({"id", "createdAt", "created_at"})


class CredentialCreateRequest(BaseModel):
    """Request schema for registering a device. HWID is generated when omitted."""

    model_config = ConfigDict(extra="ignore")

    hwid: Optional[str] = Field(default=None, min_length=1, max_length=512)


class CredentialPatch(BaseModel):
    """Partial update for a credential.

    Known mutable fields are typed. Any other top-level field is treated as
    metadata and merged into the credential's metadata map; `id` and
    `createdAt` are dropped.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    hwid: Optional[str] = Field(default=None, min_length=1, max_length=512)
    is_active: Optional[bool] = Field(default=None, alias="isActive")
    metadata: Optional[Dict[str, Any]] = None
    key: Optional[str] = Field(default=None, min_length=1, max_length=512)

    def extra_metadata(self) -> Dict[str, Any]:
        """Unknown top-level fields, minus the protected ones."""
        extra = self.model_extra or {}
        return {k: v for k, v in extra.items() if k not in IGNORED_PATCH_FIELDS}

    def ignored_fields(self) -> set:
        """Protected field names present in the request body."""
        extra = self.model_extra or {}
        return {k for k in extra if k in IGNORED_PATCH_FIELDS}


class CredentialResponse(BaseModel):
    """Full credential record as returned to the client."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    key: str
    hwid: str
    created_at: datetime = Field(alias="createdAt")
    is_active: bool = Field(alias="isActive")
    metadata: Dict[str, Any] = Field(default_factory=dict)


class MessageResponse(BaseModel):
    message: str


class ValidateResponse(BaseModel):
    valid: bool
    message: str
