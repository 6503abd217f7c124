from __future__ import annotations

import logging

from portfolio_api.application.dto.auth import LoginLocalInput, LoginOutput
from portfolio_api.application.ports.auth_port import AuthPort
from portfolio_api.application.ports.password_hasher_port import PasswordHasherPort
from portfolio_api.application.ports.session_token_port import SessionTokenPort
from portfolio_api.application.ports.totp_port import TotpPort
from portfolio_api.domain.exceptions import InvalidCredentialsError, InvalidTwoFactorCodeError

from .auth_common import build_public_profile, normalize_email, open_session


logger = logging.getLogger(__name__)

DEFAULT_TOTP_WINDOW = 2


class LoginLocalUseCase:
    """Password login with conditional TOTP step-up.

    The step-up is stateless: the caller resubmits email, password and code
    together, and the password is verified again on every attempt.
    """

    def __init__(
        self,
        *,
        auth_port: AuthPort,
        password_hasher: PasswordHasherPort,
        session_tokens: SessionTokenPort,
        totp: TotpPort,
        totp_window: int = DEFAULT_TOTP_WINDOW,
    ):
        self._auth_port = auth_port
        self._password_hasher = password_hasher
        self._session_tokens = session_tokens
        self._totp = totp
        self._totp_window = totp_window

    def execute(self, command: LoginLocalInput) -> LoginOutput:
        email = normalize_email(command.email)
        user = self._auth_port.get_user_by_email(email=email)
        if user is None or not self._password_hasher.verify(command.password, user.password_hash):
            logger.warning("Rejected login attempt")
            raise InvalidCredentialsError("Invalid credentials.")

        if user.requires_two_factor:
            code = (command.two_factor_code or "").strip()
            if not code:
                logger.info("Login for user %s requires a second factor", user.id)
                return LoginOutput(user=None, session=None, requires_two_factor=True)
            if not self._totp.verify_code(
                secret=user.two_factor_secret,
                code=code,
                window_steps=self._totp_window,
            ):
                logger.warning("Rejected second factor for user %s", user.id)
                raise InvalidTwoFactorCodeError("Invalid 2FA code.")

        session = open_session(
            user=user,
            auth_port=self._auth_port,
            session_tokens=self._session_tokens,
            user_agent=command.user_agent,
            ip=command.ip,
        )
        logger.info("User %s logged in", user.id)
        return LoginOutput(user=build_public_profile(user), session=session)
