from __future__ import annotations

import logging

from portfolio_api.application.ports.auth_port import AuthPort
from portfolio_api.application.ports.session_token_port import SessionTokenPort

from .auth_common import utcnow


logger = logging.getLogger(__name__)


class LogoutSessionUseCase:
    def __init__(self, *, auth_port: AuthPort, session_tokens: SessionTokenPort):
        self._auth_port = auth_port
        self._session_tokens = session_tokens

    def execute(self, *, cookie_value: str | None) -> None:
        if not cookie_value:
            return
        token = self._session_tokens.unsign(signed_value=cookie_value)
        if token is None:
            return
        session = self._auth_port.get_session_by_token_hash(
            token_hash=self._session_tokens.hash_token(token=token)
        )
        if session is None or session.revoked_at is not None:
            return
        self._auth_port.revoke_session(session_id=session.id, revoked_at=utcnow())
        logger.info("User %s logged out", session.user_id)
