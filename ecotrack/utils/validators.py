"""
Input sanitization and credential validation helpers.
"""
import re
from dataclasses import dataclass, field
from typing import Any

from ecotrack.utils.constants import COMMON_PASSWORDS, MAX_EMAIL_LENGTH, MAX_TEXT_LENGTH

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 8


def sanitize_input(value: Any) -> Any:
    """
    Trim, strip angle brackets and cap free text at 255 characters.

    Non-string values are returned unchanged.
    """
    if not isinstance(value, str):
        return value
    return value.strip().replace("<", "").replace(">", "")[:MAX_TEXT_LENGTH]


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email)) and len(email) <= MAX_EMAIL_LENGTH


@dataclass
class PasswordCheck:
    """Outcome of a password policy check."""

    is_valid: bool
    is_common: bool
    feedback: list[str] = field(default_factory=list)


def check_password(password: str) -> PasswordCheck:
    """
    Check a password against the length, character class and common-password rules.

    Returns:
        PasswordCheck with one feedback line per failed rule
    """
    has_upper = re.search(r"[A-Z]", password) is not None
    has_lower = re.search(r"[a-z]", password) is not None
    has_digit = re.search(r"\d", password) is not None
    long_enough = len(password) >= MIN_PASSWORD_LENGTH

    feedback = []
    if not long_enough:
        feedback.append("Must be at least 8 characters")
    if not has_upper:
        feedback.append("Include at least one uppercase letter")
    if not has_lower:
        feedback.append("Include at least one lowercase letter")
    if not has_digit:
        feedback.append("Include at least one number")

    return PasswordCheck(
        is_valid=not feedback,
        is_common=password.lower() in COMMON_PASSWORDS,
        feedback=feedback,
    )
