"""Application configuration using pydantic-settings.

Every tunable comes from the environment (or a local .env file) through the
``settings`` object; modules never read os.environ themselves.
"""

import warnings
from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRET_KEY = "change-me-in-production"
MIN_SECRET_KEY_LENGTH = 32


class Settings(BaseSettings):
    """DineOps settings. Field names map to upper-case environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database; SQLite tables are created on startup, other backends use Alembic
    database_url: str = "sqlite:///./data/dineops.db"

    # Bearer tokens
    secret_key: str = DEFAULT_SECRET_KEY
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Comma-separated origins, "*" allows any (development only)
    cors_origins: str = "http://localhost:3000,http://localhost:8000"

    # IANA zone used to expand a booking_date filter to a calendar day
    timezone: str = "UTC"

    # External image upload service (restaurant logo / background)
    image_upload_base_url: Optional[str] = None
    image_upload_path_prefix: str = "/uploads"
    image_upload_timeout: float = 15.0

    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    api_prefix: str = "/api"

    rate_limit_enabled: bool = True

    @field_validator("secret_key")
    @classmethod
    def warn_default_secret(cls, v: str) -> str:
        if v == DEFAULT_SECRET_KEY:
            warnings.warn(
                "SECRET_KEY is not set; tokens are signed with a public default.",
                UserWarning,
                stacklevel=2,
            )
        return v

    @field_validator("image_upload_path_prefix")
    @classmethod
    def normalize_path_prefix(cls, v: str) -> str:
        v = v.strip()
        if v and not v.startswith("/"):
            v = "/" + v
        return v.rstrip("/")

    @model_validator(mode="after")
    def require_real_secret_outside_debug(self) -> "Settings":
        """With DEBUG off the secret must be set and long enough."""
        if self.debug:
            return self
        if self.secret_key == DEFAULT_SECRET_KEY:
            raise ValueError("SECRET_KEY must be set when DEBUG is false")
        if len(self.secret_key) < MIN_SECRET_KEY_LENGTH:
            raise ValueError(
                f"SECRET_KEY must be at least {MIN_SECRET_KEY_LENGTH} characters when DEBUG is false "
                f"(got {len(self.secret_key)})"
            )
        return self

    @property
    def cors_origins_list(self) -> List[str]:
        if self.cors_origins.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()


settings = get_settings()
