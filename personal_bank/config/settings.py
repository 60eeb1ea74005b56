"""
Configuration Management for Personal Bank

Uses pydantic-settings for type-safe configuration from environment variables.

All configuration is centralized here. Every setting has a working
default, so the application starts with no environment at all; a `.env`
file or `PERSONAL_BANK_*` variables override individual values.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PERSONAL_BANK_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path.home() / ".personal_bank",
        description="Directory holding one JSON file per storage key"
    )
    data_key: str = Field(
        default="mpb.data.v1",
        description="Key of the persisted ledger snapshot"
    )
    session_key: str = Field(
        default="mpb.session.v1",
        description="Key of the persisted session marker"
    )

    @field_validator('data_dir')
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        """Allow `~` in configured paths."""
        return v.expanduser()


class AuthSettings(BaseSettings):
    """
    Login gate configuration.

    This is a single fixed credential pair, not real authentication.
    """

    model_config = SettingsConfigDict(
        env_prefix="PERSONAL_BANK_AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    username: str = Field(
        default="Admin",
        min_length=1,
        description="The only accepted username"
    )
    password: str = Field(
        default="admin123",
        min_length=1,
        description="The only accepted password"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="PERSONAL_BANK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # History
    history_limit: int = Field(
        default=25,
        ge=1,
        le=500,
        description="Maximum number of transactions kept in history"
    )
    recent_activity_limit: int = Field(
        default=5,
        ge=1,
        description="Number of transactions shown as recent activity"
    )

    # Display
    currency: str = Field(
        default="USD",
        min_length=3,
        max_length=3,
        description="ISO currency code used when formatting amounts"
    )
    layout: str = Field(
        default="auto",
        pattern="^(auto|desktop|mobile)$",
        description="Dashboard layout"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    log_json: bool = Field(
        default=False,
        description="Render logs as JSON instead of console output"
    )

    # Offline assets
    assets_dir: Path = Field(
        default=Path(__file__).resolve().parents[2] / "app" / "static",
        description="Directory holding the app shell assets"
    )
    cache_version: str = Field(
        default="v1",
        description="Version suffix of the asset cache name"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator('currency')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        return v.upper()


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def auth(self) -> AuthSettings:
        return AuthSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
