"""Phone number normalization used as the lead dedup key."""

import re

_NON_DIGITS = re.compile(r"[^0-9]")


def normalize_phone_digits(phone: str | None) -> str:
    """Strip every character except ASCII digits from a phone number.

    This is the dedup key used by lead intake. No country-code handling is
    applied, so "050-1234567" and "0501234567" match but "+972501234567"
    does not.

    Examples:
        050-1234567     → 0501234567
        (050) 123 4567  → 0501234567

    Args:
        phone: Phone number in any format

    Returns:
        Digits only, empty string for None
    """
    if not phone:
        return ""
    return _NON_DIGITS.sub("", phone)
