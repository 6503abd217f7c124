from __future__ import annotations

import pytest

from portfolio_api.core.container import Container
from portfolio_api.infrastructure.clients.email_sender import LoggingEmailSender, SmtpEmailSender
from portfolio_api.infrastructure.memory.accounts_repository import InMemoryAccountsRepository
from portfolio_api.shared.config import DEV_SESSION_SECRET, ConfigurationError, Settings, get_settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "APP_ENV",
        "STORAGE_BACKEND",
        "POSTGRES_DSN",
        "SESSION_SECRET",
        "SESSION_TTL_DAYS",
        "SESSION_COOKIE_SECURE",
        "CORS_ALLOW_ORIGINS",
        "SEED_DEMO_CONTENT",
        "LOG_LEVEL",
        "SMTP_HOST",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults_are_valid_for_development(clean_env):
    settings = get_settings()

    assert settings.storage_backend == "memory"
    assert settings.session_ttl_days == 7
    assert settings.password_hash_rounds == 12
    assert settings.totp_valid_window == 2
    assert settings.session_cookie_secure is False
    assert settings.cors_allow_origins == ("*",)


def test_env_overrides_are_parsed(clean_env):
    clean_env.setenv("STORAGE_BACKEND", " Memory ")
    clean_env.setenv("SESSION_TTL_DAYS", "3")
    clean_env.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")
    clean_env.setenv("SEED_DEMO_CONTENT", "yes")
    clean_env.setenv("LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.storage_backend == "memory"
    assert settings.session_ttl_days == 3
    assert settings.cors_allow_origins == ("https://a.example", "https://b.example")
    assert settings.seed_demo_content is True
    assert settings.log_level == "DEBUG"


def test_production_defaults_to_secure_cookie(clean_env):
    clean_env.setenv("APP_ENV", "production")
    clean_env.setenv("SESSION_SECRET", "a-real-secret")
    clean_env.setenv("SMTP_HOST", "smtp.example.com")

    assert get_settings().session_cookie_secure is True


def test_production_requires_real_secret(clean_env):
    clean_env.setenv("APP_ENV", "production")

    with pytest.raises(ConfigurationError):
        get_settings()


def test_non_numeric_setting_is_a_configuration_error(clean_env):
    clean_env.setenv("SESSION_TTL_DAYS", "seven")

    with pytest.raises(ConfigurationError):
        get_settings()


@pytest.mark.parametrize(
    "overrides",
    [
        {"storage_backend": "sqlite"},
        {"storage_backend": "postgres", "postgres_dsn": ""},
        {"session_secret": ""},
        {"app_env": "production", "session_secret": DEV_SESSION_SECRET},
        {"app_env": "production", "session_secret": "a-real-secret", "smtp_host": ""},
        {"session_ttl_days": 0},
        {"totp_valid_window": -1},
    ],
)
def test_validate_rejects_inconsistent_settings(overrides):
    with pytest.raises(ConfigurationError):
        Settings(**overrides).validate()


def test_container_rejects_unknown_backend_without_validation():
    with pytest.raises(ConfigurationError):
        Container(Settings(storage_backend="sqlite"))


def test_container_keeps_injected_collaborators():
    auth_port = InMemoryAccountsRepository()
    sender = LoggingEmailSender()

    container = Container(Settings(password_hash_rounds=4), auth_port=auth_port, email_sender=sender)

    assert container.auth_port is auth_port
    assert container.email_sender is sender
    assert container.content_port is not None


def test_production_container_delivers_through_smtp():
    settings = Settings(
        app_env="production",
        session_secret="a-real-secret",
        smtp_host="smtp.example.com",
        smtp_from="site@example.com",
    ).validate()

    assert isinstance(Container(settings).email_sender, SmtpEmailSender)


def test_development_sender_keeps_no_message_bodies():
    sender = LoggingEmailSender()

    sender.send(to="alice@example.com", subject="Reset your password", body="secret link")

    assert not hasattr(sender, "sent")
