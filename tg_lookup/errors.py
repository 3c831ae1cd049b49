"""Request-level failures. Everything else ends up on a LookupResult."""


class ConfigurationError(RuntimeError):
    """Credentials or settings are missing or invalid."""


class SessionNotInitialized(ConfigurationError):
    """No usable Telegram session: never created, or not authorized."""


class RequestValidationError(ValueError):
    """The request body is not a usable lookup request."""
