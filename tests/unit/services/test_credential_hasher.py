"""
Unit tests for CredentialHasher
"""
import pytest

from src.app.services.credential_hasher import CredentialHasher


def test_hash_is_not_plaintext_and_verifies(hasher):
    digest = hasher.hash_sync("secret1")

    assert digest != "secret1"
    assert digest.startswith("$2")
    assert hasher.verify_sync("secret1", digest) is True
    assert hasher.verify_sync("secret2", digest) is False


def test_hash_is_salted(hasher):
    assert hasher.hash_sync("secret1") != hasher.hash_sync("secret1")


def test_empty_password_is_rejected(hasher):
    with pytest.raises(ValueError):
        hasher.hash_sync("")


def test_malformed_digest_does_not_raise(hasher):
    assert hasher.verify_sync("secret1", "not-a-bcrypt-hash") is False
    assert hasher.verify_sync("secret1", "") is False


def test_cost_factor_is_applied():
    hasher = CredentialHasher(rounds=5)
    digest = hasher.hash_sync("secret1")

    assert digest.split("$")[2] == "05"


def test_long_passwords_are_truncated_consistently(hasher):
    long_password = "p" * 100
    digest = hasher.hash_sync(long_password)

    assert hasher.verify_sync(long_password, digest) is True
    # bcrypt ignores everything past 72 bytes
    assert hasher.verify_sync("p" * 72, digest) is True


@pytest.mark.asyncio
async def test_async_hash_and_verify(hasher):
    digest = await hasher.hash("newpass1")

    assert await hasher.verify("newpass1", digest) is True
    assert await hasher.verify("wrong", digest) is False


@pytest.mark.asyncio
async def test_verify_dummy_always_fails(hasher):
    assert await hasher.verify_dummy("dummy_password") is False
    assert await hasher.verify_dummy("") is False
