"""
Smoke tests for the SQLRepository against a temporary SQLite database.
"""
from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from accounts.core.errors import DuplicateEmailError, StoreError
from accounts.repositories import sql_repository
from accounts.repositories.sql_repository import SQLRepository


def test_create_and_lookup_user(db_env):
    repo = SQLRepository()
    created = repo.create_user("alice@example.com", "hash", "Alice", "Smith")

    assert created.id
    assert created.created_at is not None
    assert repo.email_exists("alice@example.com")
    assert not repo.email_exists("ALICE@example.com")

    by_email = repo.get_user_by_email("alice@example.com")
    by_id = repo.get_user_by_id(created.id)
    assert by_email is not None and by_id is not None
    assert by_email.id == by_id.id == created.id
    assert by_email.first_name == "Alice"
    assert repo.count_users() == 1


def test_unique_constraint_surfaces_as_duplicate_email(db_env):
    repo = SQLRepository()
    repo.create_user("bob@example.com", "hash", "Bob", "Jones")

    with pytest.raises(DuplicateEmailError):
        repo.create_user("bob@example.com", "other", "Robert", "Jones")

    assert repo.count_users() == 1


def test_update_user_names_keeps_created_at(db_env):
    repo = SQLRepository()
    created = repo.create_user("carol@example.com", "hash", "Carol", "King")

    updated = repo.update_user_names("carol@example.com", last_name="Queen")

    assert updated is not None
    assert updated.first_name == "Carol"
    assert updated.last_name == "Queen"
    assert updated.created_at == repo.get_user_by_id(created.id).created_at
    assert repo.update_user_names("nobody@example.com", first_name="Nobody") is None


def test_update_user_password(db_env):
    repo = SQLRepository()
    repo.create_user("dave@example.com", "old-hash", "Dave", "Grohl")

    repo.update_user_password("dave@example.com", "new-hash")

    assert repo.get_user_by_email("dave@example.com").password_hash == "new-hash"


def test_list_users_is_ordered_by_creation(db_env):
    repo = SQLRepository()
    repo.create_user("first@example.com", "hash", "First", "User")
    repo.create_user("second@example.com", "hash", "Second", "User")

    assert [u.email for u in repo.list_users()] == ["first@example.com", "second@example.com"]


def test_revoked_tokens_are_purged_after_expiry(db_env):
    repo = SQLRepository()
    now = datetime.now(timezone.utc)
    repo.add_revoked_token("live", now + timedelta(hours=1))
    repo.add_revoked_token("stale", now - timedelta(minutes=1))
    repo.add_revoked_token("live", now + timedelta(hours=1))

    assert repo.is_token_revoked("live")
    assert repo.purge_revoked_tokens() == 1
    assert repo.is_token_revoked("live")
    assert not repo.is_token_revoked("stale")


def test_driver_errors_become_store_error(db_env, monkeypatch):
    @contextmanager
    def broken_session():
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))
        yield  # pragma: no cover

    monkeypatch.setattr(sql_repository, "get_session", broken_session)
    repo = SQLRepository()

    with pytest.raises(StoreError) as excinfo:
        repo.list_users()

    assert excinfo.value.status_code == 500
    assert "locked" not in excinfo.value.message
