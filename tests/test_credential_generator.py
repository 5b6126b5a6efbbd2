"""
Tests for credential value generation.
"""
import re
import uuid
from unittest.mock import patch

import pytest

from hwid_api.core.errors import EntropySourceError
from hwid_api.services import credential_generator
from hwid_api.services.credential_generator import new_api_key, new_credential, new_hwid, new_id

HEX64 = re.compile(r"^[0-9a-f]{64}$")


def test_api_key_is_64_hex_chars():
    assert HEX64.match(new_api_key())


def test_api_keys_are_unique():
    """10,000 generated keys contain no duplicates."""
    keys = {new_api_key() for _ in range(10_000)}
    assert len(keys) == 10_000


def test_hwid_is_64_hex_chars_and_fresh():
    first = new_hwid()
    assert HEX64.match(first)
    assert first != new_hwid()


def test_id_is_uuid():
    value = new_id()
    assert str(uuid.UUID(value)) == value


def test_new_credential_generates_hwid_when_missing():
    credential = new_credential()

    assert HEX64.match(credential.hwid)
    assert HEX64.match(credential.key)
    assert credential.is_active is True
    assert credential.created_at.tzinfo is not None
    assert credential.metadata == {}


def test_new_credential_keeps_supplied_hwid():
    credential = new_credential(hwid="MY-DEVICE")
    assert credential.hwid == "MY-DEVICE"
    assert credential.key != credential.id


def test_entropy_failure_is_internal_fault():
    with patch.object(credential_generator.secrets, "token_hex", side_effect=OSError("no entropy")):
        with pytest.raises(EntropySourceError):
            new_api_key()
