"""Shared validation utilities"""

import re
from typing import Optional

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{3,150}$")


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Loosely validate a phone number.

    Keeps the caller's formatting but requires 7-15 digits, which covers
    local numbers as well as E.164.
    """
    if not phone:
        return phone

    phone = phone.strip()
    digits = re.sub(r"\D", "", phone)
    if not 7 <= len(digits) <= 15:
        raise ValueError("Phone number must contain between 7 and 15 digits")
    return phone


def normalize_username(username: str) -> str:
    """Usernames are unique case-insensitively, so they are stored lowercased"""
    username = username.strip()
    if not USERNAME_PATTERN.match(username):
        raise ValueError(
            "Username must be 3-150 characters of letters, digits, '.', '_' or '-'"
        )
    return username.lower()


def require_text(value: Optional[str]) -> Optional[str]:
    """Reject strings that are empty once surrounding whitespace is removed"""
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("Field cannot be blank")
    return value
