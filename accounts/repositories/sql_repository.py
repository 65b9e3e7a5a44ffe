"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from accounts.core.errors import DuplicateEmailError, StoreError
from accounts.db.models import RevokedToken, User
from accounts.db.session import get_session

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(action: str, **context) -> Iterator[None]:
    """Log storage failures with context and re-raise them as StoreError."""
    try:
        yield
    except SQLAlchemyError as exc:
        details = ", ".join(f"{key}={value}" for key, value in context.items())
        logger.exception("Database error while trying to %s (%s)", action, details)
        raise StoreError(f"Failed to {action}") from exc


class SQLRepository:
    """CRUD helpers wrapping the SQLAlchemy session."""

    # -------------------------- users --------------------------
    def get_user_by_id(self, user_id: str) -> Optional[User]:
        with _store_errors("load user", user_id=user_id), get_session() as session:
            return session.get(User, user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with _store_errors("load user", email=email), get_session() as session:
            stmt = select(User).where(User.email == email)
            return session.execute(stmt).scalar_one_or_none()

    def email_exists(self, email: str) -> bool:
        with _store_errors("check email", email=email), get_session() as session:
            stmt = select(User.id).where(User.email == email).limit(1)
            return session.execute(stmt).first() is not None

    def count_users(self) -> int:
        with _store_errors("count users"), get_session() as session:
            return int(session.execute(select(func.count()).select_from(User)).scalar_one())

    def list_users(self) -> list[User]:
        with _store_errors("retrieve users"), get_session() as session:
            stmt = select(User).order_by(User.created_at, User.email)
            return list(session.execute(stmt).scalars().all())

    def create_user(self, email: str, password_hash: str, first_name: str, last_name: str) -> User:
        now = datetime.now(timezone.utc)
        entity = User(
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            created_at=now,
            updated_at=now,
        )
        with _store_errors("create user", email=email), get_session() as session:
            session.add(entity)
            try:
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                raise DuplicateEmailError() from exc
            session.refresh(entity)
            return entity

    def update_user_password(self, email: str, password_hash: str) -> None:
        with _store_errors("update password", email=email), get_session() as session:
            stmt = (
                update(User)
                .where(User.email == email)
                .values(password_hash=password_hash, updated_at=datetime.now(timezone.utc))
            )
            session.execute(stmt)
            session.commit()

    def update_user_names(self, email: str, *, first_name: str | None = None, last_name: str | None = None) -> Optional[User]:
        with _store_errors("update user", email=email), get_session() as session:
            stmt = select(User).where(User.email == email)
            user = session.execute(stmt).scalar_one_or_none()
            if not user:
                return None
            if first_name is not None:
                user.first_name = first_name
            if last_name is not None:
                user.last_name = last_name
            user.updated_at = datetime.now(timezone.utc)
            session.commit()
            session.refresh(user)
            return user

    # -------------------------- revoked tokens --------------------------
    def add_revoked_token(self, jti: str, expires_at: datetime) -> None:
        entity = RevokedToken(jti=jti, expires_at=expires_at, revoked_at=datetime.now(timezone.utc))
        with _store_errors("revoke token"), get_session() as session:
            session.merge(entity)
            session.commit()

    def is_token_revoked(self, jti: str) -> bool:
        with _store_errors("check revoked token"), get_session() as session:
            return session.get(RevokedToken, jti) is not None

    def purge_revoked_tokens(self, now: datetime | None = None) -> int:
        cutoff = now or datetime.now(timezone.utc)
        with _store_errors("purge revoked tokens"), get_session() as session:
            result = session.execute(delete(RevokedToken).where(RevokedToken.expires_at < cutoff))
            session.commit()
            return int(result.rowcount or 0)
