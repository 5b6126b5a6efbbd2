"""
In-memory credential store.

One instance is created per application and lives for the process lifetime.
Every operation runs under a single lock, so readers never observe a
half-applied insert, patch or removal.
"""
import logging
import threading
from typing import Any, Dict, List, Mapping, Union

from hwid_api.core.errors import CredentialNotFound, KeyConflict
from hwid_api.core.logging_config import mask_key
from hwid_api.models.credential import Credential
from hwid_api.schemas.credential import CredentialPatch

logger = logging.getLogger(__name__)


class CredentialStore:
    """Credentials indexed by API key."""

    def __init__(self, allow_key_patch: bool = False):
        self.allow_key_patch = allow_key_patch
        self._lock = threading.Lock()
        self._by_key: Dict[str, Credential] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_key)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._by_key

    def keys(self) -> List[str]:
        """Snapshot of all live API keys."""
        with self._lock:
            return list(self._by_key)

    def insert(self, candidate: Credential) -> Credential:
        """
        Add a credential and return it unchanged.

        Raises:
            KeyConflict: If a live credential already holds the same key
        """
        with self._lock:
            if candidate.key in self._by_key:
                raise KeyConflict()
            self._by_key[candidate.key] = candidate
        logger.debug(f"Inserted credential id={candidate.id} key={mask_key(candidate.key)}")
        return candidate

    def find_by_key_and_hwid(self, key: str, hwid: str) -> Credential:
        """
        Return the credential whose key and hwid both match exactly.

        Raises:
            CredentialNotFound: If no stored credential matches the pair
        """
        with self._lock:
            record = self._by_key.get(key)
        if record is None or record.hwid != hwid:
            raise CredentialNotFound(key)
        return record

    def apply_patch(
        self,
        record: Credential,
        patch: Union[CredentialPatch, Mapping[str, Any]],
    ) -> Credential:
        """
        Overlay a patch onto a stored credential and return the new record.

        `id` and `createdAt` are always preserved. `key` is only replaced when
        the store was built with allow_key_patch=True, and never onto a key
        another credential already holds.

        Raises:
            CredentialNotFound: If the record was removed before the patch landed
            KeyConflict: If the new key collides with another live credential
        """
        if not isinstance(patch, CredentialPatch):
            patch = CredentialPatch.model_validate(dict(patch))

        ignored = patch.ignored_fields()
        if ignored:
            logger.warning(f"Ignoring protected fields in patch: {sorted(ignored)}")

        with self._lock:
            current = self._by_key.get(record.key)
            if current is None or current.id != record.id:
                raise CredentialNotFound(record.key)

            updates = self._build_updates(current, patch)
            new_key = updates.get("key", current.key)
            if new_key != current.key and new_key in self._by_key:
                raise KeyConflict()

            updated = current.model_copy(update=updates)
            if new_key != current.key:
                del self._by_key[current.key]
            self._by_key[new_key] = updated

        logger.debug(f"Patched credential id={updated.id} fields={sorted(updates)}")
        return updated

    def remove(self, key: str) -> Credential:
        """
        Delete the credential holding `key` and return it.

        Raises:
            CredentialNotFound: If no credential holds the key (e.g. a concurrent
                delete already removed it)
        """
        with self._lock:
            record = self._by_key.pop(key, None)
        if record is None:
            raise CredentialNotFound(key)
        logger.debug(f"Removed credential id={record.id} key={mask_key(key)}")
        return record

    def _build_updates(self, current: Credential, patch: CredentialPatch) -> Dict[str, Any]:
        updates: Dict[str, Any] = {}
        if patch.hwid is not None:
            updates["hwid"] = patch.hwid
        if patch.is_active is not None:
            updates["is_active"] = patch.is_active

        extra = patch.extra_metadata()
        if patch.metadata is not None or extra:
            metadata = dict(current.metadata)
            metadata.update(patch.metadata or {})
            metadata.update(extra)
            updates["metadata"] = metadata

        if patch.key is not None and patch.key != current.key:
            if self.allow_key_patch:
                updates["key"] = patch.key
            else:
                logger.warning(
                    f"Ignoring key change in patch for credential id={current.id} "
                    "(ALLOW_KEY_PATCH disabled)"
                )

        return updates
