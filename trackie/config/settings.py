"""
Configuration Management for Trackie

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The engine itself takes no configuration; only the services around it
(storage, reminders, display defaults) read from here.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GoogleSheetsSettings(BaseSettings):
    """Google Sheets storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_SHEETS_",
        extra="ignore"
    )

    credentials_path: str = Field(
        ...,
        description="Path to Google service account credentials JSON"
    )
    spreadsheet_id: str = Field(
        ...,
        description="ID of the Google Sheets spreadsheet to use"
    )

    # Sheet names within the spreadsheet
    subscriptions_sheet_name: str = Field(
        default="Subscriptions",
        description="Name of the sheet for subscriptions"
    )
    audit_sheet_name: str = Field(
        default="AuditLog",
        description="Name of the sheet for audit logs"
    )

    @field_validator('credentials_path')
    @classmethod
    def validate_credentials_path(cls, v: str) -> str:
        """Warn if credentials file doesn't exist (but don't fail - might be mounted later)."""
        if not Path(v).exists():
            import warnings
            warnings.warn(
                f"Google credentials file not found at {v}. "
                "Make sure it exists before running the application."
            )
        return v


class ReminderSettings(BaseSettings):
    """Daily reminder dispatch configuration."""

    model_config = SettingsConfigDict(
        env_prefix="REMINDERS_",
        extra="ignore"
    )

    enabled: bool = Field(
        default=True,
        description="Run the daily dispatcher at all"
    )
    sender_name: str = Field(
        default="TrackieChan",
        description="Product name used in subjects and sign-off"
    )
    greeting: str = Field(
        default="Hey!",
        description="First line of the reminder body"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Display defaults
    currency_code: str = Field(
        default="INR",
        min_length=3,
        max_length=3,
        description="The one currency all amounts are in"
    )
    currency_symbol: str = Field(
        default="₹",
        description="Symbol prefixed to formatted amounts"
    )
    default_brand_color: str = Field(
        default="#6B7280",
        pattern="^#[0-9A-Fa-f]{6}$",
        description="Color used when a name has no brand entry"
    )
    calendar_cell_preview_limit: int = Field(
        default=2,
        ge=1,
        le=10,
        description="Subscriptions shown per calendar cell before '+N'"
    )


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

    # Sub-settings are loaded lazily to allow partial configuration

    @property
    def google_sheets(self) -> GoogleSheetsSettings:
        return GoogleSheetsSettings()

    @property
    def reminders(self) -> ReminderSettings:
        return ReminderSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("google_sheets", "reminders", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
