"""Request authentication helpers (bearer extraction, account checks)."""
from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from accounts.core.errors import NotAuthenticatedError
from accounts.db.models import User
from accounts.services.token_service import TokenIdentity, TokenService

_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    user: User
    token: str
    identity: TokenIdentity


# Account state predicates. Users carry no lock/expiry columns yet, so a stored
# user is always usable; the checks live here so routes never ask the entity.
def is_account_enabled(user: User) -> bool:
    return user is not None


def is_account_non_locked(user: User) -> bool:
    return user is not None


def is_account_non_expired(user: User) -> bool:
    return user is not None


def is_credentials_non_expired(user: User) -> bool:
    return bool(user is not None and user.password_hash)


def account_usable(user: User) -> bool:
    return (
        is_account_enabled(user)
        and is_account_non_locked(user)
        and is_account_non_expired(user)
        and is_credentials_non_expired(user)
    )


def bearer_token(credentials: HTTPAuthorizationCredentials | None = Depends(_bearer)) -> str | None:
    """Return the raw token from `Authorization: Bearer <token>`, if any."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    return credentials.credentials.strip() or None


def require_user(request: Request, token: str | None = Depends(bearer_token)) -> AuthenticatedUser:
    if not token:
        raise NotAuthenticatedError("Missing bearer token")
    tokens: TokenService = request.app.state.token_service
    identity = tokens.validate(token)
    user = request.app.state.repository.get_user_by_id(identity.user_id)
    if not user or user.email != identity.email:
        raise NotAuthenticatedError()
    if not account_usable(user):
        raise NotAuthenticatedError("Account is not active")
    return AuthenticatedUser(user=user, token=token, identity=identity)
