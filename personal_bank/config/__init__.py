"""Configuration package."""

from personal_bank.config.settings import (
    AppSettings,
    AuthSettings,
    Settings,
    StorageSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "AuthSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
]
