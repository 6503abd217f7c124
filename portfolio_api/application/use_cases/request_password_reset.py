from __future__ import annotations

import hashlib
import logging
import secrets
from datetime import timedelta
from urllib.parse import urlencode
from uuid import uuid4

from portfolio_api.application.dto.auth import RequestPasswordResetInput, RequestPasswordResetOutput
from portfolio_api.application.ports.auth_port import AuthPort
from portfolio_api.application.ports.email_sender_port import EmailSenderPort

from .auth_common import normalize_email, utcnow


logger = logging.getLogger(__name__)

GENERIC_RESET_MESSAGE = "If an account exists for that email, a reset link has been sent."


def hash_reset_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class RequestPasswordResetUseCase:
    """Issue a single-use reset token without revealing whether the email exists."""

    def __init__(
        self,
        *,
        auth_port: AuthPort,
        email_sender: EmailSenderPort,
        reset_url_base: str,
        token_ttl_minutes: int = 60,
    ):
        self._auth_port = auth_port
        self._email_sender = email_sender
        self._reset_url_base = reset_url_base.rstrip("/")
        self._token_ttl = timedelta(minutes=token_ttl_minutes)

    def execute(self, command: RequestPasswordResetInput) -> RequestPasswordResetOutput:
        email = normalize_email(command.email)
        user = self._auth_port.get_user_by_email(email=email) if email else None
        if user is None:
            logger.info("Password reset requested for an unknown email")
            return RequestPasswordResetOutput(message=GENERIC_RESET_MESSAGE)

        token = secrets.token_urlsafe(32)

        def _tx(auth_port: AuthPort) -> None:
            now = utcnow()
            # Only the newest link stays usable.
            auth_port.invalidate_password_reset_tokens(user_id=user.id, used_at=now)
            auth_port.create_password_reset_token(
                token_id=str(uuid4()),
                user_id=user.id,
                token_hash=hash_reset_token(token),
                expires_at=now + self._token_ttl,
                created_at=now,
            )

        self._auth_port.execute_in_transaction(_tx)

        link = f"{self._reset_url_base}/reset-password?{urlencode({'token': token})}"
        minutes = int(self._token_ttl.total_seconds() // 60)
        try:
            self._email_sender.send(
                to=user.email,
                subject="Reset your password",
                body=(
                    f"Hi {user.name},\n\n"
                    f"Use the link below to choose a new password. It expires in {minutes} minutes.\n\n"
                    f"{link}\n\n"
                    "If you did not ask for this, you can ignore this email.\n"
                ),
            )
        except Exception:
            # The token stays valid; the user can simply request another email.
            logger.exception("Failed to deliver password reset email for user %s", user.id)
        else:
            logger.info("Password reset email sent for user %s", user.id)
        return RequestPasswordResetOutput(message=GENERIC_RESET_MESSAGE)
