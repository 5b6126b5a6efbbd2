"""Credential model: an API key bound to a hardware identifier."""
from datetime import datetime
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class Credential(BaseModel):
    """Issued credential pairing an API key with a HWID.

    Instances are immutable; the store swaps in a new instance on update.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    key: str
    hwid: str
    created_at: datetime = Field(alias="createdAt")
    is_active: bool = Field(default=True, alias="isActive")
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def to_public(self) -> Dict[str, Any]:
        """Serialize with camelCase wire names."""
        return self.model_dump(mode="json", by_alias=True)
