from datetime import timedelta

import pytest
from pydantic import ValidationError

from passreset.core.config.settings import Settings, create_settings, env_file_for


def test_defaults():
    settings = Settings()

    assert settings.PASSWORD_RESET_TOKEN_VALIDITY_MINUTES == 60
    assert settings.PASSWORD_RESET_SAVE_MAX_ATTEMPTS == 3
    assert settings.PASSWORD_RESET_STORE_TIMEOUT_SECONDS is None
    assert settings.DATABASE_URL.startswith("sqlite+aiosqlite://")


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PASSWORD_RESET_TOKEN_VALIDITY_MINUTES", "15")
    monkeypatch.setenv("PASSWORD_RESET_STORE_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("LOG_JSON", "false")

    settings = create_settings()

    assert settings.PASSWORD_RESET_TOKEN_VALIDITY_MINUTES == 15
    assert settings.PASSWORD_RESET_STORE_TIMEOUT_SECONDS == 2.5
    assert settings.LOG_JSON is False


@pytest.mark.parametrize(
    "field, value",
    [
        ("PASSWORD_RESET_TOKEN_VALIDITY_MINUTES", 0),
        ("PASSWORD_RESET_SAVE_MAX_ATTEMPTS", 0),
        ("PASSWORD_RESET_STORE_TIMEOUT_SECONDS", -1),
        ("DATABASE_URL", "sqlite:///./sync.db"),
    ],
)
def test_invalid_values_are_rejected(field, value):
    with pytest.raises(ValidationError):
        Settings(**{field: value})


def test_assignment_is_validated():
    settings = Settings()

    with pytest.raises(ValidationError):
        settings.PASSWORD_RESET_TOKEN_VALIDITY_MINUTES = -5


def test_env_file_follows_app_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("PASSWORD_RESET_TOKEN_VALIDITY_MINUTES=20\n")
    (tmp_path / ".env.test").write_text("PASSWORD_RESET_TOKEN_VALIDITY_MINUTES=5\n")
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.delenv("PASSWORD_RESET_TOKEN_VALIDITY_MINUTES", raising=False)

    assert env_file_for("test").name == ".env.test"
    assert env_file_for("staging").name == ".env"
    assert create_settings().PASSWORD_RESET_TOKEN_VALIDITY_MINUTES == 5


def test_missing_env_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("PASSWORD_RESET_TOKEN_VALIDITY_MINUTES", raising=False)

    assert env_file_for("production") is None
    assert create_settings().PASSWORD_RESET_TOKEN_VALIDITY_MINUTES == 60
