"""Application configuration using pydantic-settings."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = "sqlite:///./preferences.db"

    # Preferences: what to do with a value outside a preference's allowed
    # values when the owning model does not choose ("raise" | "errors")
    PREFERENCE_ERROR_POLICY: str = "raise"

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize LOG_LEVEL to an uppercase Python logging level."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"LOG_LEVEL must be one of {valid}, got {v!r}")
        return v.upper()

    @field_validator("PREFERENCE_ERROR_POLICY", mode="before")
    @classmethod
    def validate_error_policy(cls, v: str) -> str:
        """Accept only the policies that can be named in configuration."""
        valid = {"raise", "errors"}
        if v.lower() not in valid:
            raise ValueError(f"PREFERENCE_ERROR_POLICY must be one of {valid}, got {v!r}")
        return v.lower()

    # App settings
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"


settings = Settings()
