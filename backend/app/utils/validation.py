"""
Validation utilities for input validation and error handling.
"""
import re
from typing import Any, Iterable
from fastapi import HTTPException

from .object_id import is_valid_object_id

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def validate_required_fields(payload: Any, fields: Iterable[str], message: str) -> None:
    """Raise 400 with `message` when any of `fields` is missing or blank on `payload`."""
    for field in fields:
        if _is_blank(getattr(payload, field, None)):
            raise HTTPException(status_code=400, detail=message)


def validate_email(email: str) -> str:
    """Validate email format."""
    if not email or not isinstance(email, str):
        raise HTTPException(status_code=400, detail="Email is required")

    email = email.strip().lower()
    if len(email) > 255:
        raise HTTPException(status_code=400, detail="Email too long (max 255 characters)")

    if not EMAIL_PATTERN.match(email):
        raise HTTPException(status_code=400, detail="Invalid email format")

    return email


def validate_password(password: str) -> None:
    """Validate password strength."""
    if not password or not isinstance(password, str):
        raise HTTPException(status_code=400, detail="Password is required")

    if len(password) < 6:
        raise HTTPException(status_code=400, detail="Password must be at least 6 characters")

    if len(password) > 128:
        raise HTTPException(status_code=400, detail="Password too long (max 128 characters)")


def validate_object_id(value: Any, not_found_message: str) -> str:
    """A malformed id can never match a record, so it is reported as not found."""
    if not is_valid_object_id(value):
        raise HTTPException(status_code=404, detail=not_found_message)
    return value.lower()
