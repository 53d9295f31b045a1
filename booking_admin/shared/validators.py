"""Shared validation utilities"""

import re
from typing import Optional

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Firebase Auth rejects shorter passwords
MIN_PASSWORD_LENGTH = 6


def is_valid_email(email: Optional[str]) -> bool:
    return bool(email) and bool(EMAIL_PATTERN.match(email))


def validate_admin_credentials(email: str, password: str) -> Optional[str]:
    """
    Check bootstrap credentials before touching Firebase.

    Returns:
        An error message, or None when the pair is acceptable
    """
    if not is_valid_email(email):
        return "Invalid email format. Please provide a valid email address."
    if len(password or "") < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."
    return None


def split_skills(value) -> list[str]:
    """
    Normalise a skills field from a form.

    Accepts comma-separated text or a list; entries are trimmed and empty
    ones dropped, order preserved.
    """
    if value is None:
        return []
    if isinstance(value, str):
        parts = value.split(",")
    else:
        parts = list(value)
    return [part.strip() for part in parts if isinstance(part, str) and part.strip()]
