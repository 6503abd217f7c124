from __future__ import annotations

import logging

from portfolio_api.application.dto.auth import ChangePasswordInput
from portfolio_api.application.ports.auth_port import AuthPort
from portfolio_api.application.ports.password_hasher_port import PasswordHasherPort
from portfolio_api.domain.entities.user import UserPatch
from portfolio_api.domain.exceptions import InvalidCurrentPasswordError

from .auth_common import DEFAULT_PASSWORD_MIN_LENGTH, require_user, utcnow, validate_password


logger = logging.getLogger(__name__)


class ChangePasswordUseCase:
    def __init__(
        self,
        *,
        auth_port: AuthPort,
        password_hasher: PasswordHasherPort,
        password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH,
    ):
        self._auth_port = auth_port
        self._password_hasher = password_hasher
        self._password_min_length = password_min_length

    def execute(self, command: ChangePasswordInput) -> None:
        user = require_user(self._auth_port, command.user_id)
        if not self._password_hasher.verify(command.current_password, user.password_hash):
            raise InvalidCurrentPasswordError("Current password is incorrect.")
        validate_password(command.new_password, min_length=self._password_min_length)

        now = utcnow()
        self._auth_port.update_user(
            user_id=user.id,
            patch=UserPatch(password_hash=self._password_hasher.hash(command.new_password)),
            updated_at=now,
        )
        revoked = self._auth_port.revoke_user_sessions(
            user_id=user.id,
            revoked_at=now,
            keep_session_id=command.session_id,
        )
        logger.info("Password changed for user %s, %d other session(s) revoked", user.id, revoked)
