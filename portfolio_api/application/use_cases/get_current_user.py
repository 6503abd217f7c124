from __future__ import annotations

from portfolio_api.application.dto.auth import CurrentSession
from portfolio_api.application.ports.auth_port import AuthPort
from portfolio_api.application.ports.session_token_port import SessionTokenPort
from portfolio_api.domain.entities.user import User
from portfolio_api.domain.exceptions import NotAuthenticatedError

from .auth_common import utcnow


class GetCurrentUserUseCase:
    """Resolve a session cookie to a live user."""

    def __init__(self, *, auth_port: AuthPort, session_tokens: SessionTokenPort):
        self._auth_port = auth_port
        self._session_tokens = session_tokens

    def execute(self, *, cookie_value: str | None) -> tuple[User, CurrentSession]:
        if not cookie_value:
            raise NotAuthenticatedError("Not authenticated.")

        token = self._session_tokens.unsign(signed_value=cookie_value)
        if token is None:
            raise NotAuthenticatedError("Not authenticated.")

        session = self._auth_port.get_session_by_token_hash(
            token_hash=self._session_tokens.hash_token(token=token)
        )
        # Expiry is checked here even if the store never evicted the row.
        if session is None or not session.is_live(utcnow()):
            raise NotAuthenticatedError("Not authenticated.")

        user = self._auth_port.get_user_by_id(user_id=session.user_id)
        if user is None:
            raise NotAuthenticatedError("Not authenticated.")
        return user, CurrentSession(user_id=user.id, session_id=session.id)
