"""Request/response bodies of the HTTP API (camelCase on the wire)."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from accounts.db.models import User, as_utc
from accounts.domain.validation import (
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    email_problem,
)
from accounts.services.user_service import UNSET, UserPatch, UserProfile


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _check_email(value: str) -> str:
    problem = email_problem(value)
    if problem:
        raise ValueError(problem)
    return value


class RegisterRequest(_CamelModel):
    email: str
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)
    first_name: str = Field(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    last_name: str = Field(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return _check_email(value)


class RegisterResponse(_CamelModel):
    message: str
    email: str


class LoginRequest(_CamelModel):
    email: str = ""
    password: str = ""


class LoginResponse(_CamelModel):
    message: str
    token: str
    email: str


class PasswordResetRequest(_CamelModel):
    email: str
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return _check_email(value)


class UserDetailsResponse(_CamelModel):
    email: str
    first_name: str
    last_name: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "UserDetailsResponse":
        return cls(
            email=profile.email,
            first_name=profile.first_name,
            last_name=profile.last_name,
            created_at=profile.created_at,
        )


class UserRecordResponse(UserDetailsResponse):
    id: str
    updated_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserRecordResponse":
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            created_at=as_utc(user.created_at),
            updated_at=as_utc(user.updated_at),
        )


class UpdateUserRequest(_CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_patch(self) -> UserPatch:
        """Keys that were omitted or sent as null stay UNSET."""
        values = {}
        for name in ("first_name", "last_name", "email", "created_at"):
            value = getattr(self, name)
            values[name] = value if name in self.model_fields_set and value is not None else UNSET
        return UserPatch(**values)
