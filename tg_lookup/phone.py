"""Normalize Ethiopian mobile numbers to +2519XXXXXXXX."""

import re

COUNTRY_CODE = "251"
TRUNK_PREFIX = "0"
MOBILE_PREFIX = "9"
LOCAL_LENGTH = 9

_NON_DIGITS = re.compile(r"\D+")


def normalize_phone(raw: str) -> str | None:
    """Return the canonical +2519XXXXXXXX form of raw, or None if rejected.

    Accepts 9XXXXXXXX, 09XXXXXXXX, 2519XXXXXXXX and +2519XXXXXXXX with any
    punctuation. Normalizing an already canonical number returns it unchanged.
    """
    digits = _NON_DIGITS.sub("", raw or "")
    if not digits:
        return None

    if digits.startswith(TRUNK_PREFIX):
        digits = digits[1:]

    if digits.startswith(COUNTRY_CODE):
        if len(digits) < len(COUNTRY_CODE) + LOCAL_LENGTH:
            return None
    elif len(digits) < LOCAL_LENGTH:
        return None
    local = digits[-LOCAL_LENGTH:]

    if not local.startswith(MOBILE_PREFIX):
        return None
    return f"+{COUNTRY_CODE}{local}"
