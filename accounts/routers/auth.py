from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from accounts.services.auth_service import AuthService
from accounts.services.session_service import bearer_token
from accounts.services.token_service import TokenService
from accounts.routers.schemas import (
    LoginRequest,
    LoginResponse,
    PasswordResetRequest,
    RegisterRequest,
    RegisterResponse,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def _token_service(request: Request) -> TokenService:
    return request.app.state.token_service


@router.post("/register", response_model=RegisterResponse)
def register(body: RegisterRequest, request: Request):
    user = _auth_service(request).signup(body.email, body.password, body.first_name, body.last_name)
    return RegisterResponse(message="User registered successfully", email=user.email)


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, request: Request):
    user = _auth_service(request).authenticate(body.email, body.password)
    token = _token_service(request).issue(user)
    return LoginResponse(message="Login successfully", token=token, email=user.email)


@router.post("/password/reset", response_class=PlainTextResponse)
def reset_password(body: PasswordResetRequest, request: Request):
    return _auth_service(request).reset_password(body.email, body.password)


@router.post("/logout", response_class=PlainTextResponse)
def logout(request: Request, token: str | None = Depends(bearer_token)):
    _auth_service(request).logout(token)
    return "Logout successfully"
