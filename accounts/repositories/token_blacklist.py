"""Storage for tokens revoked before their natural expiry."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Dict, Protocol

from accounts.repositories.sql_repository import SQLRepository


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenBlacklist(Protocol):
    def add(self, token_id: str, expires_at: datetime) -> None: ...

    def contains(self, token_id: str) -> bool: ...

    def purge_expired(self) -> int: ...


class InMemoryTokenBlacklist:
    """Process-local revocation set guarded by a lock."""

    def __init__(self) -> None:
        self._entries: Dict[str, datetime] = {}
        self._lock = threading.Lock()

    def add(self, token_id: str, expires_at: datetime) -> None:
        now = _utcnow()
        with self._lock:
            self._purge_locked(now)
            if expires_at > now:
                self._entries[token_id] = expires_at

    def contains(self, token_id: str) -> bool:
        with self._lock:
            return token_id in self._entries

    def purge_expired(self) -> int:
        with self._lock:
            return self._purge_locked(_utcnow())

    def _purge_locked(self, now: datetime) -> int:
        expired = [key for key, expires_at in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class SQLTokenBlacklist:
    """Revocation set persisted in the revoked_tokens table (shared by every worker)."""

    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def add(self, token_id: str, expires_at: datetime) -> None:
        self.repository.purge_revoked_tokens()
        self.repository.add_revoked_token(token_id, expires_at)

    def contains(self, token_id: str) -> bool:
        return self.repository.is_token_revoked(token_id)

    def purge_expired(self) -> int:
        return self.repository.purge_revoked_tokens()


def build_blacklist(backend: str) -> TokenBlacklist:
    if backend == "memory":
        return InMemoryTokenBlacklist()
    if backend == "sql":
        return SQLTokenBlacklist()
    raise ValueError(f"Unknown token blacklist backend: {backend!r}")
