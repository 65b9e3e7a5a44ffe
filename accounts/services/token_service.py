"""Bearer token issuing, validation and revocation (signed JWTs)."""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from accounts.core.config import Settings, get_settings
from accounts.core.errors import TokenInvalidError
from accounts.db.models import User
from accounts.repositories.token_blacklist import TokenBlacklist, build_blacklist

logger = logging.getLogger(__name__)

_REQUIRED_CLAIMS = ["sub", "uid", "jti", "iat", "exp"]


@dataclass(frozen=True)
class TokenIdentity:
    email: str
    user_id: str
    token_id: str
    expires_at: datetime


def resolve_secret(settings: Settings) -> str:
    secret = (settings.jwt_secret or "").strip()
    if secret:
        return secret
    if settings.app_env == "prod":
        raise RuntimeError("JWT_SECRET must be configured when APP_ENV=prod.")
    logger.warning("JWT_SECRET not set; using a random per-process secret (tokens die with the process)")
    return secrets.token_urlsafe(48)


class TokenService:
    """Mints signed, time-bound tokens and rejects expired or revoked ones."""

    def __init__(
        self,
        secret: str | None = None,
        *,
        algorithm: str | None = None,
        ttl_seconds: int | None = None,
        blacklist: TokenBlacklist | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._secret = secret or resolve_secret(settings)
        self.algorithm = algorithm or settings.jwt_algorithm
        self.ttl_seconds = max(1, ttl_seconds if ttl_seconds is not None else settings.token_ttl_seconds)
        self.blacklist = blacklist if blacklist is not None else build_blacklist(settings.token_blacklist_backend)

    def issue(self, user: User) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": user.email,
            "uid": user.id,
            "jti": secrets.token_urlsafe(16),
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=self.ttl_seconds)).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def _decode(self, token: str | None, *, verify_exp: bool = True) -> dict:
        value = (token or "").strip()
        if not value:
            raise TokenInvalidError("Missing bearer token")
        try:
            return jwt.decode(
                value,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": _REQUIRED_CLAIMS, "verify_exp": verify_exp},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenInvalidError("Token has expired") from exc
        except jwt.InvalidTokenError as exc:
            raise TokenInvalidError() from exc

    @staticmethod
    def _identity(claims: dict) -> TokenIdentity:
        return TokenIdentity(
            email=str(claims["sub"]),
            user_id=str(claims["uid"]),
            token_id=str(claims["jti"]),
            expires_at=datetime.fromtimestamp(int(claims["exp"]), tz=timezone.utc),
        )

    def validate(self, token: str | None) -> TokenIdentity:
        identity = self._identity(self._decode(token))
        if self.blacklist.contains(identity.token_id):
            raise TokenInvalidError("Token has been revoked")
        return identity

    def invalidate(self, token: str | None) -> None:
        """Revoke a token ahead of its expiry; repeating the call is a no-op."""
        identity = self._identity(self._decode(token, verify_exp=False))
        if identity.expires_at <= datetime.now(timezone.utc):
            return
        self.blacklist.add(identity.token_id, identity.expires_at)
        logger.info("Token %s revoked for %s", identity.token_id, identity.email)
