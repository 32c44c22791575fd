"""Process settings loaded with pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """wtman settings read from WTMAN_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="WTMAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    verbose: bool = False
    no_color: bool = False

    # Shell used for `run` hook steps; falls back to $SHELL, then /bin/sh
    shell: str | None = None


# Global settings instance (lazy loaded)
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset global settings instance (for testing)."""
    global _settings
    _settings = None
