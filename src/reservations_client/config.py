"""
Configuration module for the reservations API client.

Loads environment variables and provides the backend base URL plus the
request and logging settings shared by every client instance.
"""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field, field_validator


DEFAULT_API_BASE_URL = "http://localhost:5001"


class Settings(BaseSettings):
    """
    Client settings loaded from environment variables.

    Instances are frozen: build one at startup and hand it to
    ``ReservationsAPI``.

    Attributes:
        api_base_url: Base URL of the reservations backend
        api_timeout: Optional request timeout in seconds (None disables it)
        strict_status: Raise on non-2xx responses that carry no error field
        log_level: Minimum log level for the console handler
    """

    # Backend configuration
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        validation_alias=AliasChoices(
            "API_BASE_URL", "REACT_APP_API_BASE_URL", "api_base_url"
        ),
        description="Base URL of the reservations backend"
    )

    api_timeout: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("API_TIMEOUT", "api_timeout"),
        description="Request timeout in seconds, unset for no timeout"
    )

    strict_status: bool = Field(
        default=False,
        validation_alias=AliasChoices("API_STRICT_STATUS", "strict_status"),
        description="Treat non-2xx responses without an error field as failures"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
        description="Minimum log level"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended directly."""
        v = v.strip()
        if not v:
            raise ValueError("API base URL cannot be empty")
        return v.rstrip("/")

    @field_validator("api_timeout")
    @classmethod
    def validate_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v <= 0:
            raise ValueError("API timeout must be positive")
        return v


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get or create the global settings instance.

    The instance is read from the environment on first use and never
    reloaded afterwards.

    Returns:
        Settings instance with loaded configuration
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings
