"""
utils/validation_utils.py

Purpose: Input validation

- Email and URL format checks
- Password strength check
- Email normalization
- Shared by request validation and the form configurations
"""

import re
from typing import Any
from urllib.parse import urlparse

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_blank(value: Any) -> bool:
    """
    True for None, empty strings and empty lists.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return False


def validate_email(email: str) -> bool:
    """
    Validates email format.

    Args:
        email: Email address

    Returns:
        True if the address looks like local@domain.tld
    """
    if not email or not isinstance(email, str):
        return False
    return bool(EMAIL_PATTERN.match(email.strip()))


def normalize_email(email: str) -> str:
    """
    Trims and lower-cases an email address so lookups are case-insensitive.
    """
    return email.strip().lower()


def validate_url(url: str) -> bool:
    """
    Validates an absolute http(s) URL with a dotted host.

    Args:
        url: URL string

    Returns:
        True if valid
    """
    if not url or not isinstance(url, str):
        return False

    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False

    if parsed.scheme not in ("http", "https"):
        return False

    host = parsed.hostname or ""
    return "." in host and not host.startswith(".") and not host.endswith(".")


def validate_password_strength(password: str) -> bool:
    """
    Password must mix upper-case, lower-case and digits.
    Length is checked separately by the min-length rule.
    """
    if not password or not isinstance(password, str):
        return False

    has_upper = re.search(r"[A-Z]", password) is not None
    has_lower = re.search(r"[a-z]", password) is not None
    has_digit = re.search(r"\d", password) is not None
    return has_upper and has_lower and has_digit
