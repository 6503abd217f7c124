from __future__ import annotations

import logging

from portfolio_api.application.dto.auth import ResetPasswordInput
from portfolio_api.application.ports.auth_port import AuthPort
from portfolio_api.application.ports.password_hasher_port import PasswordHasherPort
from portfolio_api.domain.entities.user import UserPatch
from portfolio_api.domain.exceptions import PasswordResetTokenInvalidError

from .auth_common import DEFAULT_PASSWORD_MIN_LENGTH, utcnow, validate_password
from .request_password_reset import hash_reset_token


logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
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

    def execute(self, command: ResetPasswordInput) -> None:
        token = command.token.strip()
        if not token:
            raise PasswordResetTokenInvalidError("Invalid or expired reset token.")
        validate_password(command.new_password, min_length=self._password_min_length)
        password_hash = self._password_hasher.hash(command.new_password)
        token_hash = hash_reset_token(token)

        def _tx(auth_port: AuthPort) -> str:
            now = utcnow()
            reset_token = auth_port.get_password_reset_token_by_hash(token_hash=token_hash)
            if reset_token is None or not reset_token.is_usable(now):
                raise PasswordResetTokenInvalidError("Invalid or expired reset token.")
            if not auth_port.mark_password_reset_token_used(token_id=reset_token.id, used_at=now):
                raise PasswordResetTokenInvalidError("Invalid or expired reset token.")

            user = auth_port.update_user(
                user_id=reset_token.user_id,
                patch=UserPatch(password_hash=password_hash),
                updated_at=now,
            )
            if user is None:
                raise PasswordResetTokenInvalidError("Invalid or expired reset token.")
            auth_port.invalidate_password_reset_tokens(user_id=user.id, used_at=now)
            auth_port.revoke_user_sessions(user_id=user.id, revoked_at=now)
            return user.id

        user_id = self._auth_port.execute_in_transaction(_tx)
        logger.info("Password reset completed for user %s", user_id)
