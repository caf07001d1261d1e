"""Unit tests for environment configuration."""

import pytest

from vault_trash.config import Settings, DEFAULT_TRASH_AUTO_DELETE_DAYS


class TestTrashAutoDeleteDays:
    """Test parsing of TRASH_AUTO_DELETE_DAYS."""

    def test_missing_uses_default(self, monkeypatch):
        monkeypatch.delenv("TRASH_AUTO_DELETE_DAYS", raising=False)

        assert Settings(_env_file=None).TRASH_AUTO_DELETE_DAYS == DEFAULT_TRASH_AUTO_DELETE_DAYS == 30

    @pytest.mark.parametrize("raw, expected", [
        ("30", 30),
        ("7", 7),
        ("0", 0),
        ("-5", -5),
        ("+7", 7),
        ("9223372036854775807", 2 ** 63 - 1),
    ])
    def test_integer_values(self, monkeypatch, raw, expected):
        monkeypatch.setenv("TRASH_AUTO_DELETE_DAYS", raw)

        assert Settings(_env_file=None).TRASH_AUTO_DELETE_DAYS == expected

    @pytest.mark.parametrize("raw", [
        "", "abc", "30days", "12.5",
        "1_000", " 7 ", "7\n", "+-3",
        "99999999999999999999", "9223372036854775808", "-9223372036854775809",
    ])
    def test_unparsable_values_fall_back_to_default(self, monkeypatch, raw):
        monkeypatch.setenv("TRASH_AUTO_DELETE_DAYS", raw)

        assert Settings(_env_file=None).TRASH_AUTO_DELETE_DAYS == 30


class TestSettingsDefaults:
    """Test defaults that the worker relies on."""

    def test_schedule_and_logging_defaults(self, monkeypatch):
        for name in ("TRASH_PURGE_CRON", "LOG_LEVEL", "LOG_JSON"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.TRASH_PURGE_CRON == "0 2 * * *"
        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_JSON is True
