from __future__ import annotations

import logging

from portfolio_api.application.ports.auth_port import AuthPort
from portfolio_api.domain.entities.user import UserPatch

from .auth_common import require_user, utcnow


logger = logging.getLogger(__name__)


class DisableTwoFactorUseCase:
    def __init__(self, *, auth_port: AuthPort):
        self._auth_port = auth_port

    def execute(self, *, user_id: str) -> None:
        user = require_user(self._auth_port, user_id)
        self._auth_port.update_user(
            user_id=user.id,
            patch=UserPatch(two_factor_secret=None, two_factor_enabled=False),
            updated_at=utcnow(),
        )
        logger.info("Two-factor authentication disabled for user %s", user.id)
