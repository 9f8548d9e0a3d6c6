"""Configuration package."""

from trackie.config.settings import (
    AppSettings,
    GoogleSheetsSettings,
    ReminderSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "GoogleSheetsSettings",
    "ReminderSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
