"""
Tests for the in-memory credential store.
"""
import pytest

from hwid_api.core.errors import CredentialNotFound, KeyConflict
from hwid_api.services.credential_generator import new_credential
from hwid_api.services.credential_store import CredentialStore


def test_insert_then_find_returns_identical_record(store):
    """Inserted credentials are immediately found by their exact pair."""
    credential = new_credential(hwid="HWID-A")

    returned = store.insert(credential)
    found = store.find_by_key_and_hwid(credential.key, "HWID-A")

    assert returned is credential
    assert found == credential
    assert len(store) == 1
    assert credential.key in store


def test_find_requires_exact_hwid(store):
    credential = store.insert(new_credential(hwid="HWID-A"))

    with pytest.raises(CredentialNotFound):
        store.find_by_key_and_hwid(credential.key, "hwid-a")
    with pytest.raises(CredentialNotFound):
        store.find_by_key_and_hwid(credential.key, "HWID-A ")


def test_find_unknown_key_raises_not_found(store):
    with pytest.raises(CredentialNotFound):
        store.find_by_key_and_hwid("no-such-key", "HWID-A")


def test_insert_duplicate_key_raises_conflict(store):
    credential = store.insert(new_credential(hwid="HWID-A"))
    clone = credential.model_copy(update={"id": "other-id", "hwid": "HWID-B"})

    with pytest.raises(KeyConflict):
        store.insert(clone)
    assert len(store) == 1


def test_same_hwid_may_hold_several_keys(store):
    first = store.insert(new_credential(hwid="SHARED"))
    second = store.insert(new_credential(hwid="SHARED"))

    assert store.find_by_key_and_hwid(first.key, "SHARED") == first
    assert store.find_by_key_and_hwid(second.key, "SHARED") == second


def test_apply_patch_preserves_id_and_created_at(store):
    """id and createdAt survive a patch that names them."""
    credential = store.insert(new_credential(hwid="HWID-A"))

    updated = store.apply_patch(
        credential,
        {
            "id": "forged-id",
            "createdAt": "2000-01-01T00:00:00Z",
            "created_at": "2000-01-01T00:00:00Z",
            "isActive": False,
        },
    )

    assert updated.id == credential.id
    assert updated.created_at == credential.created_at
    assert updated.is_active is False
    assert "id" not in updated.metadata
    assert "createdAt" not in updated.metadata


def test_apply_patch_is_visible_to_next_lookup(store):
    credential = store.insert(new_credential(hwid="HWID-A"))

    store.apply_patch(credential, {"hwid": "HWID-B"})

    with pytest.raises(CredentialNotFound):
        store.find_by_key_and_hwid(credential.key, "HWID-A")
    assert store.find_by_key_and_hwid(credential.key, "HWID-B").hwid == "HWID-B"


def test_apply_patch_merges_metadata_and_extra_fields(store):
    credential = store.insert(new_credential(hwid="HWID-A"))

    first = store.apply_patch(credential, {"metadata": {"owner": "alice", "seat": 1}})
    second = store.apply_patch(first, {"metadata": {"seat": 2}, "plan": "pro"})

    assert second.metadata == {"owner": "alice", "seat": 2, "plan": "pro"}


def test_apply_patch_ignores_key_by_default(store):
    credential = store.insert(new_credential(hwid="HWID-A"))

    updated = store.apply_patch(credential, {"key": "replacement-key"})

    assert updated.key == credential.key
    assert "replacement-key" not in store


def test_apply_patch_replaces_key_when_allowed():
    store = CredentialStore(allow_key_patch=True)
    credential = store.insert(new_credential(hwid="HWID-A"))

    updated = store.apply_patch(credential, {"key": "replacement-key"})

    assert updated.key == "replacement-key"
    assert credential.key not in store
    assert store.find_by_key_and_hwid("replacement-key", "HWID-A").id == credential.id
    assert len(store) == 1


def test_apply_patch_rejects_key_collision_when_allowed():
    store = CredentialStore(allow_key_patch=True)
    first = store.insert(new_credential(hwid="HWID-A"))
    second = store.insert(new_credential(hwid="HWID-B"))

    with pytest.raises(KeyConflict):
        store.apply_patch(first, {"key": second.key})

    assert store.find_by_key_and_hwid(first.key, "HWID-A") == first
    assert store.find_by_key_and_hwid(second.key, "HWID-B") == second
    assert len(store) == 2


def test_apply_patch_on_removed_record_raises_not_found(store):
    credential = store.insert(new_credential(hwid="HWID-A"))
    store.remove(credential.key)

    with pytest.raises(CredentialNotFound):
        store.apply_patch(credential, {"isActive": False})
    assert len(store) == 0


def test_remove_deletes_permanently(store):
    credential = store.insert(new_credential(hwid="HWID-A"))

    removed = store.remove(credential.key)

    assert removed == credential
    assert credential.key not in store
    with pytest.raises(CredentialNotFound):
        store.find_by_key_and_hwid(credential.key, "HWID-A")
    with pytest.raises(CredentialNotFound):
        store.remove(credential.key)
