from __future__ import annotations

from accounts.core.security import hash_password, needs_rehash, verify_password


def test_hash_password_is_salted_and_prefixed():
    first = hash_password("secret1")
    second = hash_password("secret1")

    assert first.startswith("argon2$")
    assert first != second
    assert "secret1" not in first


def test_verify_password_accepts_only_the_original_password():
    stored = hash_password("secret1")

    assert verify_password("secret1", stored) is True
    assert verify_password("secret2", stored) is False


def test_verify_password_rejects_missing_or_foreign_hashes():
    assert verify_password("secret1", None) is False
    assert verify_password("secret1", "") is False
    assert verify_password("secret1", "plain-text") is False
    assert verify_password("secret1", "argon2$not-a-hash") is False


def test_needs_rehash_flags_unknown_schemes():
    assert needs_rehash(hash_password("secret1")) is False
    assert needs_rehash("pbkdf2_sha256$1$abc$def") is True
