from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from threading import RLock
from typing import Callable, TypeVar

from portfolio_api.application.ports.auth_port import AuthPort
from portfolio_api.domain.entities.patch import changed_fields
from portfolio_api.domain.entities.user import AuthSession, PasswordResetToken, User, UserPatch
from portfolio_api.domain.exceptions import EmailAlreadyExistsError


T = TypeVar("T")


class InMemoryAccountsRepository(AuthPort):
    """Process-local credential store.

    A re-entrant lock serializes writers; execute_in_transaction holds it for
    the whole callback so check-then-insert sequences are atomic.
    """

    def __init__(self):
        self._lock = RLock()
        self._users: dict[str, User] = {}
        self._sessions: dict[str, AuthSession] = {}
        self._reset_tokens: dict[str, PasswordResetToken] = {}

    def execute_in_transaction(self, fn: Callable[[AuthPort], T]) -> T:
        with self._lock:
            return fn(self)

    def get_user_by_id(self, *, user_id: str) -> User | None:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_email(self, *, email: str) -> User | None:
        email_l = email.lower()
        with self._lock:
            for user in self._users.values():
                if user.email.lower() == email_l:
                    return user
        return None

    def create_user(
        self,
        *,
        user_id: str,
        name: str,
        email: str,
        password_hash: str,
        created_at: datetime,
    ) -> User:
        user = User(
            id=user_id,
            name=name,
            email=email.lower(),
            password_hash=password_hash,
            two_factor_secret=None,
            two_factor_enabled=False,
            created_at=created_at,
            updated_at=created_at,
        )
        with self._lock:
            if self.get_user_by_email(email=user.email) is not None:
                raise EmailAlreadyExistsError("User already exists.")
            self._users[user.id] = user
        return user

    def update_user(self, *, user_id: str, patch: UserPatch, updated_at: datetime) -> User | None:
        changes = changed_fields(patch)
        if "email" in changes:
            changes["email"] = changes["email"].lower()
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            updated = replace(user, **changes, updated_at=updated_at)
            self._users[user_id] = updated
            return updated

    def create_session(
        self,
        *,
        session_id: str,
        user_id: str,
        token_hash: str,
        expires_at: datetime,
        user_agent: str | None,
        ip: str | None,
        created_at: datetime,
    ) -> AuthSession:
        session = AuthSession(
            id=session_id,
            user_id=user_id,
            token_hash=token_hash,
            expires_at=expires_at,
            revoked_at=None,
            user_agent=user_agent,
            ip=ip,
            created_at=created_at,
        )
        with self._lock:
            self._sessions[session.id] = session
        return session

    def get_session_by_token_hash(self, *, token_hash: str) -> AuthSession | None:
        with self._lock:
            for session in self._sessions.values():
                if session.token_hash == token_hash:
                    return session
        return None

    def revoke_session(self, *, session_id: str, revoked_at: datetime) -> None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None and session.revoked_at is None:
                self._sessions[session_id] = replace(session, revoked_at=revoked_at)

    def revoke_user_sessions(
        self,
        *,
        user_id: str,
        revoked_at: datetime,
        keep_session_id: str | None = None,
    ) -> int:
        revoked = 0
        with self._lock:
            for session in list(self._sessions.values()):
                if session.user_id != user_id or session.id == keep_session_id:
                    continue
                if session.revoked_at is not None:
                    continue
                self._sessions[session.id] = replace(session, revoked_at=revoked_at)
                revoked += 1
        return revoked

    def create_password_reset_token(
        self,
        *,
        token_id: str,
        user_id: str,
        token_hash: str,
        expires_at: datetime,
        created_at: datetime,
    ) -> PasswordResetToken:
        token = PasswordResetToken(
            id=token_id,
            user_id=user_id,
            token_hash=token_hash,
            expires_at=expires_at,
            used_at=None,
            created_at=created_at,
        )
        with self._lock:
            self._reset_tokens[token.id] = token
        return token

    def get_password_reset_token_by_hash(self, *, token_hash: str) -> PasswordResetToken | None:
        with self._lock:
            for token in self._reset_tokens.values():
                if token.token_hash == token_hash:
                    return token
        return None

    def mark_password_reset_token_used(self, *, token_id: str, used_at: datetime) -> bool:
        with self._lock:
            token = self._reset_tokens.get(token_id)
            if token is None or token.used_at is not None:
                return False
            self._reset_tokens[token_id] = replace(token, used_at=used_at)
            return True

    def invalidate_password_reset_tokens(self, *, user_id: str, used_at: datetime) -> int:
        invalidated = 0
        with self._lock:
            for token in list(self._reset_tokens.values()):
                if token.user_id != user_id or token.used_at is not None:
                    continue
                self._reset_tokens[token.id] = replace(token, used_at=used_at)
                invalidated += 1
        return invalidated
