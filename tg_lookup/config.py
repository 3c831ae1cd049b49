"""Service settings loaded from environment variables and .env."""

from pathlib import Path
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tg_lookup.errors import ConfigurationError, SessionNotInitialized

OUTPUT_INLINE = "inline"
OUTPUT_FILE = "file"

SIZE_SMALLEST = "smallest"
SIZE_FIRST = "first"

NAMES_OVERWRITE = "overwrite"
NAMES_PRESERVE = "preserve"


class Settings(BaseSettings):
    """Lookup service settings. Field names map to upper-case env vars."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_ignore_empty=True,
        str_strip_whitespace=True,
        extra="ignore",
        frozen=True,
    )

    # Telegram
    api_id: int | None = None
    api_hash: str = ""
    session_string: str = ""
    session_file: Path | None = None

    # Photo output
    output_mode: Literal["inline", "file"] = OUTPUT_INLINE
    public_base_url: str = ""
    photo_dir: Path = Path("public/photos")

    # Batching and housekeeping
    batch_size: int = Field(default=25, ge=1)
    batch_delay: float = Field(default=2.0, ge=0, description="Seconds between batches.")
    contact_limit: int = Field(default=2000, ge=0, description="Reset saved contacts above this count.")
    flood_wait_cap: float = Field(default=30.0, ge=0)
    cleanup_after_batch: bool = False

    # Import names and photo selection
    placeholder_name: str = "Imported"
    name_policy: Literal["overwrite", "preserve"] = NAMES_OVERWRITE
    photo_size_policy: Literal["smallest", "first"] = SIZE_SMALLEST

    optimize_photos: bool = True
    photo_max_dimension: int = Field(default=320, ge=1)
    photo_quality: int = Field(default=80, ge=1, le=95)

    @field_validator("output_mode", "name_policy", "photo_size_policy", mode="before")
    @classmethod
    def lower_choice(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("public_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Load settings from the process environment, or from environ if given.

        Malformed values raise ConfigurationError. Missing credentials are
        reported by require_credentials() so the app can still answer /.
        """
        try:
            if environ is None:
                return cls()
            values = {
                key.lower(): value
                for key, value in environ.items()
                if key.lower() in cls.model_fields and str(value).strip()
            }
            return cls(_env_file=None, **values)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc']).upper()}: {err['msg']}" for err in e.errors()
            )
            raise ConfigurationError(f"Invalid settings: {problems}") from None

    def require_credentials(self) -> None:
        if not self.api_id or not self.api_hash:
            raise ConfigurationError("API_ID or API_HASH environment variables are not set.")
        if not self.session_string:
            if self.session_file is None or not self.session_file.exists():
                raise SessionNotInitialized(
                    "Telegram session not initialized. Run generate_session.py and set SESSION_STRING."
                )
        if self.output_mode == OUTPUT_FILE and not self.public_base_url:
            raise ConfigurationError("PUBLIC_BASE_URL must be set when OUTPUT_MODE=file.")

    def photo_url(self, filename: str) -> str:
        return f"{self.public_base_url}/photos/{filename}"
