"""
Authentication and identity related use cases.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from accounts.core.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    NotAuthenticatedError,
    TokenInvalidError,
    UserNotFoundError,
    ValidationError,
)
from accounts.core.security import hash_password, needs_rehash, verify_password
from accounts.db.models import User
from accounts.domain.validation import email_problem, is_blank, name_problem, password_problem
from accounts.repositories.sql_repository import SQLRepository
from accounts.services.token_service import TokenService

logger = logging.getLogger(__name__)

PASSWORD_RESET_SUCCESS_MESSAGE = "Password has been successfully reset"


def _raise_first(*problems: Optional[str]) -> None:
    for problem in problems:
        if problem:
            raise ValidationError(problem)


@dataclass
class AuthService:
    """Handles registration, login, password reset and logout flows."""

    repository: Optional[SQLRepository] = None
    tokens: Optional[TokenService] = field(default=None, repr=False)

    def __post_init__(self):
        if self.repository is None:
            self.repository = SQLRepository()

    # -------------------------------------- registration --------------------------------------
    def signup(self, email: str, password: str, first_name: str, last_name: str) -> User:
        _raise_first(
            email_problem(email),
            password_problem(password),
            name_problem(first_name, "first name"),
            name_problem(last_name, "last name"),
        )
        # The unique constraint on users.email stays authoritative for concurrent signups.
        if self.repository.email_exists(email):
            logger.warning("Signup rejected, email already registered: %s", email)
            raise DuplicateEmailError()
        user = self.repository.create_user(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
        )
        logger.info("Registered user %s", user.email)
        return user

    # -------------------------------------- login --------------------------------------
    def authenticate(self, email: str, password: str) -> User:
        raw_email = (email or "").strip()
        if not raw_email or is_blank(password):
            raise InvalidCredentialsError()
        user = self.repository.get_user_by_email(raw_email)
        if not user or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt for %s", raw_email)
            raise InvalidCredentialsError()
        if needs_rehash(user.password_hash):
            self.repository.update_user_password(raw_email, hash_password(password))
        logger.info("Authenticated user %s", raw_email)
        return user

    # -------------------------------------- password reset --------------------------------------
    def reset_password(self, email: str, new_password: str) -> str:
        _raise_first(email_problem(email), password_problem(new_password))
        user = self.repository.get_user_by_email(email)
        if not user:
            logger.warning("Password reset requested for unknown email %s", email)
            raise UserNotFoundError()
        # No proof of the current password is asked for; knowing the email is enough.
        self.repository.update_user_password(user.email, hash_password(new_password))
        logger.info("Password reset for %s", user.email)
        return PASSWORD_RESET_SUCCESS_MESSAGE

    # -------------------------------------- logout --------------------------------------
    def logout(self, token: Optional[str]) -> None:
        if self.tokens is None:
            raise RuntimeError("AuthService.logout requires a TokenService")
        if is_blank(token):
            raise NotAuthenticatedError()
        try:
            identity = self.tokens.validate(token)
        except TokenInvalidError as exc:
            raise NotAuthenticatedError() from exc
        self.tokens.invalidate(token)
        logger.info("Logged out %s", identity.email)
