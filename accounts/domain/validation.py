"""Domain helpers for validating account fields."""
from __future__ import annotations

import re

EMAIL_PATTERN = re.compile(r"[A-Z0-9._%+'-]+@[A-Z0-9-]+(\.[A-Z0-9-]+)*", re.IGNORECASE)

PASSWORD_MIN_LENGTH = 2
PASSWORD_MAX_LENGTH = 25
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 100


def is_blank(value: str | None) -> bool:
    return not (value or "").strip()


def is_valid_email(value: str | None) -> bool:
    """Return True when the address is non-empty and RFC-shaped."""
    if is_blank(value) or len(value) > EMAIL_MAX_LENGTH:
        return False
    return bool(EMAIL_PATTERN.fullmatch(value))


def length_between(value: str | None, minimum: int, maximum: int) -> bool:
    return minimum <= len(value or "") <= maximum


def email_problem(value: str | None) -> str | None:
    if is_blank(value):
        return "The email address is required."
    if not is_valid_email(value):
        return "The email address is invalid."
    return None


def password_problem(value: str | None) -> str | None:
    if is_blank(value):
        return "The password is required."
    if not length_between(value, PASSWORD_MIN_LENGTH, PASSWORD_MAX_LENGTH):
        return (
            f"The length of password must be between {PASSWORD_MIN_LENGTH} "
            f"and {PASSWORD_MAX_LENGTH} characters."
        )
    return None


def name_problem(value: str | None, label: str) -> str | None:
    if is_blank(value):
        return f"The {label} is required."
    if not length_between(value, NAME_MIN_LENGTH, NAME_MAX_LENGTH):
        return (
            f"The length of {label} must be between {NAME_MIN_LENGTH} "
            f"and {NAME_MAX_LENGTH} characters."
        )
    return None
