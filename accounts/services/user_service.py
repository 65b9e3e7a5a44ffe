"""Administrative directory use cases (list, lookup, profile edits)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from accounts.core.errors import (
    CreatedAtImmutableError,
    EmailImmutableError,
    UserNotFoundError,
    ValidationError,
)
from accounts.db.models import User, as_utc
from accounts.domain.validation import is_blank, name_problem
from accounts.repositories.sql_repository import SQLRepository

logger = logging.getLogger(__name__)


class _Unset:
    """Marker for patch fields the caller did not send."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class UserPatch:
    """Partial update; UNSET and blank fields are left unchanged."""

    first_name: Any = UNSET
    last_name: Any = UNSET
    email: Any = UNSET
    created_at: Any = UNSET

    @staticmethod
    def is_set(value: Any) -> bool:
        return value is not UNSET


@dataclass(frozen=True)
class UserProfile:
    email: str
    first_name: str
    last_name: str
    created_at: Optional[datetime]

    @classmethod
    def from_user(cls, user: User) -> "UserProfile":
        return cls(
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            created_at=as_utc(user.created_at),
        )


class UserService:
    """Directory queries and profile updates enforcing field immutability."""

    def __init__(self, repository: SQLRepository | None = None) -> None:
        self.repository = repository or SQLRepository()

    def list_users(self) -> list[UserProfile]:
        logger.debug("Fetching all users from database")
        users = [UserProfile.from_user(user) for user in self.repository.list_users()]
        logger.info("Successfully retrieved %d users", len(users))
        return users

    def get_by_email(self, email: str) -> User:
        logger.debug("Searching for user with email: %s", email)
        if is_blank(email):
            logger.warning("Attempt to search user with blank email ID")
            raise ValidationError("Email ID is required")
        user = self.repository.get_user_by_email(email)
        if not user:
            logger.warning("User not found with email: %s", email)
            raise UserNotFoundError(f"User not found with email: {email}")
        return user

    def update_user(self, email: str, patch: Optional[UserPatch]) -> UserProfile:
        logger.debug("Attempting to update user with email: %s", email)
        if is_blank(email):
            logger.warning("Attempt to update user with blank email ID")
            raise ValidationError("Email ID is required")
        if patch is None:
            logger.warning("Attempt to update user %s without user details", email)
            raise ValidationError("User details are required")

        user = self.repository.get_user_by_email(email)
        if not user:
            logger.warning("User not found for update with email: %s", email)
            raise UserNotFoundError(f"User not found with email: {email}")

        if patch.is_set(patch.email) and not is_blank(patch.email) and patch.email != user.email:
            logger.warning("Attempt to modify email of user %s", user.email)
            raise EmailImmutableError()
        if patch.is_set(patch.created_at):
            logger.warning("Attempt to modify created date for user: %s", email)
            raise CreatedAtImmutableError()

        changes: dict[str, str] = {}
        for attr, label in (("first_name", "first name"), ("last_name", "last name")):
            value = getattr(patch, attr)
            if not patch.is_set(value) or is_blank(value):
                continue
            problem = name_problem(value, label)
            if problem:
                raise ValidationError(problem)
            if value != getattr(user, attr):
                changes[attr] = value

        if not changes:
            logger.info("No changes detected for user: %s", email)
            return UserProfile.from_user(user)

        updated = self.repository.update_user_names(user.email, **changes)
        if updated is None:
            raise UserNotFoundError(f"User not found with email: {email}")
        logger.info("Successfully updated user: %s", email)
        return UserProfile.from_user(updated)
