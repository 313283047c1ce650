"""Shared utilities used across the salon booking package."""

import re

from salon_booking.config import settings


def normalize_phone(value: str) -> str:
    """Normalize a phone number by stripping everything except digits and a leading +.

    Examples:
        >>> normalize_phone("082 123 4567")
        '0821234567'
        >>> normalize_phone("+27 (82) 123-4567")
        '+27821234567'
    """
    value = value.strip()
    if value.startswith("+"):
        return "+" + re.sub(r"[^\d]", "", value[1:])
    return re.sub(r"[^\d]", "", value)


def is_valid_sa_phone(value: str) -> bool:
    """Accept 0 + 9 digits (local) or 27 + 9 digits (international)."""
    digits = normalize_phone(value).lstrip("+")
    if digits.startswith("27") and len(digits) == 11:
        return True
    if digits.startswith("0") and len(digits) == 10:
        return True
    return False


def to_international_phone(value: str) -> str:
    """Convert a local number to +<country code> form; unknown shapes pass through."""
    digits = normalize_phone(value).lstrip("+")
    country = settings.notifications.country_code
    if digits.startswith(country):
        return f"+{digits}"
    if digits.startswith("0"):
        return f"+{country}{digits[1:]}"
    return value
