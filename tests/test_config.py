import pytest
from pydantic import ValidationError

from debtsys.config import DEV_API_BASE_URL, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("APP_ENV", "API_BASE_URL", "API_TIMEOUT_SECONDS", "DEFAULT_USER_EMAIL", "ERROR_LOG_CAPACITY"):
        monkeypatch.delenv(name, raising=False)


def test_prod_requires_base_url():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, APP_ENV="prod")


def test_dev_falls_back_to_localhost():
    settings = Settings(_env_file=None)

    assert settings.app_env == "dev"
    assert settings.api_base_url == DEV_API_BASE_URL


def test_values_come_from_environment(monkeypatch):
    monkeypatch.setenv("APP_ENV", "PROD")
    monkeypatch.setenv("API_BASE_URL", "https://debts.example.com/ ")
    monkeypatch.setenv("API_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("DEFAULT_USER_EMAIL", "jane@example.com")

    settings = Settings(_env_file=None)
    assert settings.app_env == "prod"
    assert settings.api_base_url == "https://debts.example.com"
    assert settings.api_timeout_seconds == 5.0
    assert settings.default_user_email == "jane@example.com"


def test_unknown_environment_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, APP_ENV="staging", API_BASE_URL="http://x")


def test_error_log_capacity_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, API_BASE_URL="http://x", ERROR_LOG_CAPACITY=0)
