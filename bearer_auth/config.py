"""Settings for bearer-token authentication, read from the environment."""

from __future__ import annotations

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class AuthSettings(BaseSettings):
    """Authentication settings.

    Environment variables use the ``AUTH_`` prefix; the issuer domain may
    also be given as ``CLERK_DOMAIN``.
    """

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    issuer_domain: str = Field(
        validation_alias=AliasChoices("AUTH_ISSUER_DOMAIN", "CLERK_DOMAIN", "issuer_domain"),
        min_length=1,
    )
    jwks_cache_ttl: float = Field(default=3600, gt=0)
    jwks_timeout: float = Field(default=5.0, gt=0)
    log_level: str = "info"

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.lower()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level
