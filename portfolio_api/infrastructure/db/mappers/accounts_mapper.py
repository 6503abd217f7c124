from __future__ import annotations

from typing import Any, Mapping

from portfolio_api.domain.entities.user import AuthSession, PasswordResetToken, User


def _as_str(value: Any) -> str:
    return str(value)


def map_row_to_user(row: Mapping[str, Any]) -> User:
    return User(
        id=_as_str(row["id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        two_factor_secret=row.get("two_factor_secret"),
        two_factor_enabled=bool(row["two_factor_enabled"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def map_row_to_auth_session(row: Mapping[str, Any]) -> AuthSession:
    return AuthSession(
        id=_as_str(row["id"]),
        user_id=_as_str(row["user_id"]),
        token_hash=row["token_hash"],
        expires_at=row["expires_at"],
        revoked_at=row.get("revoked_at"),
        user_agent=row.get("user_agent"),
        ip=row.get("ip"),
        created_at=row["created_at"],
    )


def map_row_to_password_reset_token(row: Mapping[str, Any]) -> PasswordResetToken:
    return PasswordResetToken(
        id=_as_str(row["id"]),
        user_id=_as_str(row["user_id"]),
        token_hash=row["token_hash"],
        expires_at=row["expires_at"],
        used_at=row.get("used_at"),
        created_at=row["created_at"],
    )
