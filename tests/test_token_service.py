from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from accounts.core.config import get_settings
from accounts.core.errors import TokenInvalidError
from accounts.db.models import User
from accounts.repositories import token_blacklist
from accounts.repositories.token_blacklist import InMemoryTokenBlacklist, SQLTokenBlacklist, build_blacklist
from accounts.services.token_service import TokenService

SECRET = "unit-test-signing-secret-that-is-long-enough"


def _user() -> User:
    return User(id="user-1", email="ann@example.com", first_name="Ann", last_name="Lee", password_hash="x")


def _service(**kwargs) -> TokenService:
    kwargs.setdefault("blacklist", InMemoryTokenBlacklist())
    return TokenService(SECRET, algorithm="HS256", ttl_seconds=600, **kwargs)


def test_issue_then_validate_returns_identity():
    svc = _service()
    token = svc.issue(_user())

    identity = svc.validate(token)

    assert identity.email == "ann@example.com"
    assert identity.user_id == "user-1"
    assert identity.expires_at > datetime.now(timezone.utc)


def test_each_token_gets_its_own_id():
    svc = _service()
    first = svc.validate(svc.issue(_user()))
    second = svc.validate(svc.issue(_user()))

    assert first.token_id != second.token_id


def test_invalidated_token_is_rejected_before_expiry():
    svc = _service()
    token = svc.issue(_user())

    svc.invalidate(token)

    with pytest.raises(TokenInvalidError):
        svc.validate(token)


def test_invalidate_is_idempotent_and_scoped_to_one_token():
    svc = _service()
    token = svc.issue(_user())
    other = svc.issue(_user())

    svc.invalidate(token)
    svc.invalidate(token)

    assert len(svc.blacklist) == 1
    assert svc.validate(other).email == "ann@example.com"


def test_token_signed_with_another_secret_is_rejected():
    forged = TokenService("another-secret-that-is-also-long-enough", ttl_seconds=600, blacklist=InMemoryTokenBlacklist()).issue(_user())

    with pytest.raises(TokenInvalidError):
        _service().validate(forged)


def test_expired_token_is_rejected_and_not_blacklisted():
    svc = _service()
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    expired = jwt.encode(
        {
            "sub": "ann@example.com",
            "uid": "user-1",
            "jti": "old",
            "iat": int(past.timestamp()),
            "exp": int((past + timedelta(hours=1)).timestamp()),
        },
        SECRET,
        algorithm="HS256",
    )

    with pytest.raises(TokenInvalidError):
        svc.validate(expired)
    svc.invalidate(expired)
    assert len(svc.blacklist) == 0


@pytest.mark.parametrize("value", [None, "", "   ", "not-a-jwt"])
def test_malformed_tokens_are_rejected(value):
    with pytest.raises(TokenInvalidError):
        _service().validate(value)


def test_token_missing_identity_claims_is_rejected():
    now = datetime.now(timezone.utc)
    token = jwt.encode({"sub": "ann@example.com", "exp": int((now + timedelta(minutes=5)).timestamp())}, SECRET, algorithm="HS256")

    with pytest.raises(TokenInvalidError):
        _service().validate(token)


def test_memory_blacklist_purges_entries_after_natural_expiry(monkeypatch):
    blacklist = InMemoryTokenBlacklist()
    now = datetime.now(timezone.utc)
    blacklist.add("short", now + timedelta(seconds=30))
    blacklist.add("long", now + timedelta(hours=1))

    monkeypatch.setattr(token_blacklist, "_utcnow", lambda: now + timedelta(minutes=5))

    assert blacklist.purge_expired() == 1
    assert not blacklist.contains("short")
    assert blacklist.contains("long")


def test_memory_blacklist_handles_concurrent_inserts():
    blacklist = InMemoryTokenBlacklist()
    expires = datetime.now(timezone.utc) + timedelta(hours=1)

    def worker(offset: int) -> None:
        for i in range(200):
            blacklist.add(f"{offset}-{i}", expires)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(blacklist) == 8 * 200


def test_sql_blacklist_backend_rejects_logged_out_tokens(db_env):
    svc = _service(blacklist=SQLTokenBlacklist())
    token = svc.issue(_user())

    svc.invalidate(token)

    with pytest.raises(TokenInvalidError):
        svc.validate(token)
    # A fresh service sharing the same store sees the revocation too.
    with pytest.raises(TokenInvalidError):
        _service(blacklist=SQLTokenBlacklist()).validate(token)


def test_build_blacklist_selects_backend():
    assert isinstance(build_blacklist("memory"), InMemoryTokenBlacklist)
    assert isinstance(build_blacklist("sql"), SQLTokenBlacklist)
    with pytest.raises(ValueError):
        build_blacklist("redis")


def test_service_reads_defaults_from_settings(db_env, monkeypatch):
    monkeypatch.setenv("TOKEN_TTL_SECONDS", "120")
    monkeypatch.setenv("TOKEN_BLACKLIST_BACKEND", "sql")
    get_settings.cache_clear()

    svc = TokenService()

    assert svc.ttl_seconds == 120
    assert isinstance(svc.blacklist, SQLTokenBlacklist)
    assert svc.validate(svc.issue(_user())).email == "ann@example.com"
