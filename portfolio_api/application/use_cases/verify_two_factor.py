from __future__ import annotations

import logging

from portfolio_api.application.dto.auth import VerifyTwoFactorInput
from portfolio_api.application.ports.auth_port import AuthPort
from portfolio_api.application.ports.totp_port import TotpPort
from portfolio_api.domain.entities.user import UserPatch
from portfolio_api.domain.exceptions import InvalidTwoFactorCodeError

from .auth_common import require_user, utcnow
from .login_local import DEFAULT_TOTP_WINDOW


logger = logging.getLogger(__name__)


class VerifyTwoFactorUseCase:
    def __init__(self, *, auth_port: AuthPort, totp: TotpPort, totp_window: int = DEFAULT_TOTP_WINDOW):
        self._auth_port = auth_port
        self._totp = totp
        self._totp_window = totp_window

    def execute(self, command: VerifyTwoFactorInput) -> None:
        secret = command.secret.strip()
        code = command.code.strip()
        if not secret or not code:
            raise InvalidTwoFactorCodeError("Invalid token.")

        user = require_user(self._auth_port, command.user_id)
        if not self._totp.verify_code(secret=secret, code=code, window_steps=self._totp_window):
            raise InvalidTwoFactorCodeError("Invalid token.")

        self._auth_port.update_user(
            user_id=user.id,
            patch=UserPatch(two_factor_secret=secret, two_factor_enabled=True),
            updated_at=utcnow(),
        )
        logger.info("Two-factor authentication enabled for user %s", user.id)
