"""
Password Policy

Pure shape checks applied before any store access.
"""

import re
from typing import Any

SPECIAL_CHARACTERS = "!@#$%^&*()_+=-"
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 24

_SPECIAL_RE = re.compile(r"[!@#$%^&*()_+=\-]")
_DIGIT_RE = re.compile(r"[0-9]")
_LOWER_RE = re.compile(r"[a-z]")
_UPPER_RE = re.compile(r"[A-Z]")
_PHONE_RE = re.compile(r"[0-9]{3}-[0-9]{3}-[0-9]{4}")


def is_string_provided(value: Any) -> bool:
    """True for a non-empty, non-whitespace string."""
    return isinstance(value, str) and len(value.strip()) > 0


def is_valid_new_password(password: str) -> bool:
    """
    Check new password complexity.

    Rules:
    - 8 to 24 characters inclusive
    - at least one uppercase and one lowercase letter
    - at least one digit
    - at least one character from SPECIAL_CHARACTERS
    """
    return (
        is_string_provided(password)
        and MIN_PASSWORD_LENGTH <= len(password) <= MAX_PASSWORD_LENGTH
        and _SPECIAL_RE.search(password) is not None
        and _DIGIT_RE.search(password) is not None
        and _LOWER_RE.search(password) is not None
        and _UPPER_RE.search(password) is not None
    )


def is_valid_email(email: str) -> bool:
    return "@" in email


def is_valid_phone(phone: str) -> bool:
    """Phone must be grouped 3-3-4, e.g. 123-456-7890."""
    return _PHONE_RE.fullmatch(phone) is not None
