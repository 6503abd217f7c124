from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from portfolio_api.application.ports.email_sender_port import EmailSenderPort


logger = logging.getLogger(__name__)


class LoggingEmailSender(EmailSenderPort):
    """Development sender: logs recipient and subject, drops the body."""

    def send(self, *, to: str, subject: str, body: str) -> None:
        logger.info("Email to %s not delivered (no SMTP configured): %s", to, subject)


class SmtpEmailSender(EmailSenderPort):
    def __init__(
        self,
        *,
        host: str,
        port: int,
        username: str,
        password: str,
        from_address: str,
        timeout_seconds: float = 10,
    ):
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._from_address = from_address
        self._timeout = timeout_seconds

    def send(self, *, to: str, subject: str, body: str) -> None:
        message = EmailMessage()
        message["From"] = self._from_address
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
            smtp.starttls()
            if self._username:
                smtp.login(self._username, self._password)
            smtp.send_message(message)
        logger.info("Email sent to %s: %s", to, subject)
