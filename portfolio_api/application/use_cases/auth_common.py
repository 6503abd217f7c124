from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from portfolio_api.application.dto.auth import IssuedSession, PublicProfile
from portfolio_api.application.ports.auth_port import AuthPort
from portfolio_api.application.ports.session_token_port import SessionTokenPort
from portfolio_api.domain.entities.user import User
from portfolio_api.domain.exceptions import NotAuthenticatedError


DEFAULT_PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 256


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_email(email: str) -> None:
    if not email:
        raise ValueError("email is required.")
    local, _, domain = email.partition("@")
    if not local or "." not in domain:
        raise ValueError("email is invalid.")


def validate_password(password: str, *, min_length: int) -> None:
    if len(password) < min_length:
        raise ValueError(f"password must have at least {min_length} characters.")
    if len(password) > PASSWORD_MAX_LENGTH:
        raise ValueError(f"password must have at most {PASSWORD_MAX_LENGTH} characters.")


def build_public_profile(user: User) -> PublicProfile:
    return PublicProfile(
        id=user.id,
        email=user.email,
        name=user.name,
        two_factor_enabled=user.two_factor_enabled,
    )


def open_session(
    *,
    user: User,
    auth_port: AuthPort,
    session_tokens: SessionTokenPort,
    user_agent: str | None,
    ip: str | None,
) -> IssuedSession:
    now = utcnow()
    token = session_tokens.generate_token()
    expires_at = session_tokens.expires_at(now=now)
    session = auth_port.create_session(
        session_id=str(uuid4()),
        user_id=user.id,
        token_hash=session_tokens.hash_token(token=token),
        expires_at=expires_at,
        user_agent=user_agent,
        ip=ip,
        created_at=now,
    )
    return IssuedSession(
        session_id=session.id,
        token=session_tokens.sign(token=token, expires_at=expires_at),
        expires_at=expires_at,
    )


def require_user(auth_port: AuthPort, user_id: str) -> User:
    user = auth_port.get_user_by_id(user_id=user_id)
    if user is None:
        raise NotAuthenticatedError("Not authenticated.")
    return user
