from __future__ import annotations

from datetime import datetime
from typing import Callable, Protocol, TypeVar

from portfolio_api.domain.entities.user import AuthSession, PasswordResetToken, User, UserPatch


TAuthResult = TypeVar("TAuthResult")


class AuthPort(Protocol):
    """Credential store: users, their sessions and password reset tokens.

    Emails are compared lower-cased; callers pass normalized emails.
    """

    def execute_in_transaction(self, fn: Callable[[AuthPort], TAuthResult]) -> TAuthResult:
        ...

    def get_user_by_id(self, *, user_id: str) -> User | None:
        ...

    def get_user_by_email(self, *, email: str) -> User | None:
        ...

    def create_user(
        self,
        *,
        user_id: str,
        name: str,
        email: str,
        password_hash: str,
        created_at: datetime,
    ) -> User:
        ...

    def update_user(self, *, user_id: str, patch: UserPatch, updated_at: datetime) -> User | None:
        ...

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
        ...

    def get_session_by_token_hash(self, *, token_hash: str) -> AuthSession | None:
        ...

    def revoke_session(self, *, session_id: str, revoked_at: datetime) -> None:
        ...

    def revoke_user_sessions(
        self,
        *,
        user_id: str,
        revoked_at: datetime,
        keep_session_id: str | None = None,
    ) -> int:
        ...

    def create_password_reset_token(
        self,
        *,
        token_id: str,
        user_id: str,
        token_hash: str,
        expires_at: datetime,
        created_at: datetime,
    ) -> PasswordResetToken:
        ...

    def get_password_reset_token_by_hash(self, *, token_hash: str) -> PasswordResetToken | None:
        ...

    def mark_password_reset_token_used(self, *, token_id: str, used_at: datetime) -> bool:
        ...

    def invalidate_password_reset_tokens(self, *, user_id: str, used_at: datetime) -> int:
        ...
