"""Application factory for the accounts HTTP API."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from accounts.core.config import Settings, get_settings
from accounts.core.errors import AccountError
from accounts.db.create_tables import create_all
from accounts.repositories.sql_repository import SQLRepository
from accounts.routers import admin as admin_router
from accounts.routers import auth as auth_router
from accounts.services.auth_service import AuthService
from accounts.services.sample_data import load_sample_users
from accounts.services.token_service import TokenService
from accounts.services.user_service import UserService

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers for a JSON-only API."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("Content-Security-Policy", "default-src 'none'; frame-ancestors 'none'")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Cache-Control", "no-store")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def _validation_messages(exc: RequestValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
        messages.append(f"{location}: {message}" if location else message)
    return messages


def create_app(
    settings: Settings | None = None,
    *,
    repository: SQLRepository | None = None,
    token_service: TokenService | None = None,
    seed_sample_data: bool | None = None,
    create_schema: bool = True,
) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn (`--factory accounts.app:create_app`)."""
    settings = settings or get_settings()
    repository = repository or SQLRepository()
    tokens = token_service or TokenService(settings=settings)
    auth_service = AuthService(repository=repository, tokens=tokens)
    user_service = UserService(repository=repository)
    seed = settings.sample_data_enabled if seed_sample_data is None else seed_sample_data

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if create_schema:
            create_all()
        if seed:
            load_sample_users(auth_service, repository)
        else:
            logger.info("Sample data loading is disabled")
        yield

    app = FastAPI(title="Accounts API", lifespan=lifespan)
    app.state.settings = settings
    app.state.repository = repository
    app.state.token_service = tokens
    app.state.auth_service = auth_service
    app.state.user_service = user_service

    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    @app.exception_handler(AccountError)
    async def handle_account_error(request: Request, exc: AccountError):
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        messages = _validation_messages(exc)
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, messages)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder({"detail": messages}),
        )

    @app.get("/health")
    def health():
        return {"status": "ok"}

    app.include_router(auth_router.router)
    app.include_router(admin_router.router)
    return app
