"""Tests for configuration loading."""

import pytest

from trackie.config import AppSettings, ReminderSettings, get_settings, validate_all_settings


class TestSettings:
    """Tests for env-driven settings."""

    def test_app_defaults(self):
        settings = AppSettings()
        assert settings.currency_symbol == "₹"
        assert settings.calendar_cell_preview_limit == 2

    def test_reminder_env_prefix(self, monkeypatch):
        monkeypatch.setenv("REMINDERS_SENDER_NAME", "SubBot")
        assert ReminderSettings().sender_name == "SubBot"

    def test_validate_reports_missing_sheets_config(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_SHEETS_CREDENTIALS_PATH", raising=False)
        monkeypatch.delenv("GOOGLE_SHEETS_SPREADSHEET_ID", raising=False)
        get_settings.cache_clear()

        results = validate_all_settings()

        assert results["app"] is True
        assert results["reminders"] is True
        assert results["google_sheets"] is False
        assert "google_sheets_error" in results


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
