from __future__ import annotations

import logging

from portfolio_api.application.ports.auth_port import AuthPort
from portfolio_api.application.ports.content_port import ContentPort
from portfolio_api.application.ports.email_sender_port import EmailSenderPort
from portfolio_api.infrastructure.clients.email_sender import LoggingEmailSender, SmtpEmailSender
from portfolio_api.infrastructure.db.seeds.seed_demo_content import seed_demo_content
from portfolio_api.infrastructure.memory.accounts_repository import InMemoryAccountsRepository
from portfolio_api.infrastructure.memory.content_repository import InMemoryContentRepository
from portfolio_api.infrastructure.security.password_hasher import PasswordHasher
from portfolio_api.infrastructure.security.session_token_service import JwtSessionTokenService
from portfolio_api.infrastructure.security.totp_provider import PyotpTotpProvider
from portfolio_api.shared.config import ConfigurationError, Settings


logger = logging.getLogger(__name__)


class Container:
    """Process-wide collaborators built once from explicit settings.

    The storage backend is picked from ``settings.storage_backend`` only;
    nothing here probes a connection to decide.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        auth_port: AuthPort | None = None,
        content_port: ContentPort | None = None,
        email_sender: EmailSenderPort | None = None,
    ):
        self.settings = settings
        if auth_port is None or content_port is None:
            auth_port, content_port = self._build_storage(settings, auth_port, content_port)
        self.auth_port = auth_port
        self.content_port = content_port
        self.email_sender = email_sender or self._build_email_sender(settings)
        self.password_hasher = PasswordHasher(rounds=settings.password_hash_rounds)
        self.session_tokens = JwtSessionTokenService(
            secret=settings.session_secret,
            ttl_days=settings.session_ttl_days,
        )
        self.totp = PyotpTotpProvider()

        if settings.seed_demo_content:
            seed_demo_content(self.content_port)

    @staticmethod
    def _build_storage(
        settings: Settings,
        auth_port: AuthPort | None,
        content_port: ContentPort | None,
    ) -> tuple[AuthPort, ContentPort]:
        if settings.storage_backend == "memory":
            logger.info("Using in-memory storage")
            return (
                auth_port or InMemoryAccountsRepository(),
                content_port or InMemoryContentRepository(),
            )
        if settings.storage_backend == "postgres":
            from portfolio_api.infrastructure.db.engine import create_schema, get_engine
            from portfolio_api.infrastructure.db.repositories.accounts_repository import (
                SqlAccountsRepository,
            )
            from portfolio_api.infrastructure.db.repositories.content_repository import (
                SqlContentRepository,
            )

            if not settings.postgres_dsn:
                raise ConfigurationError("POSTGRES_DSN is required when STORAGE_BACKEND=postgres.")
            engine = get_engine(settings.postgres_dsn)
            create_schema(engine)
            logger.info("Using PostgreSQL storage")
            return (
                auth_port or SqlAccountsRepository(engine),
                content_port or SqlContentRepository(engine),
            )
        raise ConfigurationError(f"Unknown storage backend '{settings.storage_backend}'.")

    @staticmethod
    def _build_email_sender(settings: Settings) -> EmailSenderPort:
        if not settings.smtp_host:
            return LoggingEmailSender()
        return SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_username,
            password=settings.smtp_password,
            from_address=settings.smtp_from or settings.smtp_username,
        )
