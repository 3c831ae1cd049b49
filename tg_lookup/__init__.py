"""Resolve phone numbers to Telegram profiles and profile photos."""

from tg_lookup.config import Settings
from tg_lookup.errors import (
    ConfigurationError,
    RequestValidationError,
    SessionNotInitialized,
)
from tg_lookup.lookup import run_lookup
from tg_lookup.models import LookupResult, PhoneInput, PhotoDescriptor, ResolvedUser
from tg_lookup.phone import normalize_phone

__all__ = [
    "ConfigurationError",
    "LookupResult",
    "PhoneInput",
    "PhotoDescriptor",
    "RequestValidationError",
    "ResolvedUser",
    "SessionNotInitialized",
    "Settings",
    "normalize_phone",
    "run_lookup",
]
