from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()

STORAGE_BACKENDS = ("memory", "postgres")
DEV_SESSION_SECRET = "dev-only-session-secret-change-me"


class ConfigurationError(RuntimeError):
    """Settings are missing or inconsistent."""


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _bool(name: str, default: bool) -> bool:
    value = _env(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _list(name: str, default: str) -> tuple[str, ...]:
    value = _env(name, default) or ""
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    app_env: str = "development"
    storage_backend: str = "memory"
    postgres_dsn: str = ""
    session_secret: str = DEV_SESSION_SECRET
    session_ttl_days: int = 7
    session_cookie_name: str = "sid"
    session_cookie_secure: bool = False
    password_hash_rounds: int = 12
    password_min_length: int = 8
    totp_issuer: str = "Portfolio Admin"
    totp_valid_window: int = 2
    password_reset_ttl_minutes: int = 60
    public_base_url: str = "http://localhost:5000"
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_from: str = ""
    cors_allow_origins: tuple[str, ...] = ("*",)
    seed_demo_content: bool = False
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    def validate(self) -> "Settings":
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ConfigurationError(
                f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, got '{self.storage_backend}'."
            )
        if self.storage_backend == "postgres" and not self.postgres_dsn:
            raise ConfigurationError("POSTGRES_DSN is required when STORAGE_BACKEND=postgres.")
        if not self.session_secret:
            raise ConfigurationError("SESSION_SECRET is required.")
        if self.is_production and self.session_secret == DEV_SESSION_SECRET:
            raise ConfigurationError("SESSION_SECRET must be set in production.")
        if self.is_production and not self.smtp_host:
            raise ConfigurationError("SMTP_HOST must be set in production.")
        if self.session_ttl_days <= 0:
            raise ConfigurationError("SESSION_TTL_DAYS must be positive.")
        if self.totp_valid_window < 0:
            raise ConfigurationError("TOTP_VALID_WINDOW must not be negative.")
        return self


def get_settings() -> Settings:
    app_env = (_env("APP_ENV", "development") or "development").strip().lower()
    try:
        settings = Settings(
            app_env=app_env,
            storage_backend=(_env("STORAGE_BACKEND", "memory") or "memory").strip().lower(),
            postgres_dsn=_env("POSTGRES_DSN", "") or "",
            session_secret=_env("SESSION_SECRET") or DEV_SESSION_SECRET,
            session_ttl_days=int(_env("SESSION_TTL_DAYS", "7")),
            session_cookie_name=_env("SESSION_COOKIE_NAME", "sid") or "sid",
            session_cookie_secure=_bool("SESSION_COOKIE_SECURE", app_env == "production"),
            password_hash_rounds=int(_env("PASSWORD_HASH_ROUNDS", "12")),
            password_min_length=int(_env("PASSWORD_MIN_LENGTH", "8")),
            totp_issuer=_env("TOTP_ISSUER", "Portfolio Admin") or "Portfolio Admin",
            totp_valid_window=int(_env("TOTP_VALID_WINDOW", "2")),
            password_reset_ttl_minutes=int(_env("PASSWORD_RESET_TTL_MINUTES", "60")),
            public_base_url=_env("PUBLIC_BASE_URL", "http://localhost:5000") or "http://localhost:5000",
            smtp_host=_env("SMTP_HOST", "") or "",
            smtp_port=int(_env("SMTP_PORT", "587")),
            smtp_username=_env("SMTP_USERNAME", "") or "",
            smtp_password=_env("SMTP_PASSWORD", "") or "",
            smtp_from=_env("SMTP_FROM", "") or "",
            cors_allow_origins=_list("CORS_ALLOW_ORIGINS", "*"),
            seed_demo_content=_bool("SEED_DEMO_CONTENT", False),
            log_level=(_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        )
    except ValueError as exc:
        raise ConfigurationError(f"Invalid numeric setting: {exc}") from exc
    return settings.validate()
