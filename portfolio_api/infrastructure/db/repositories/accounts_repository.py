from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator, TypeVar

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError

from portfolio_api.application.ports.auth_port import AuthPort
from portfolio_api.domain.entities.patch import changed_fields
from portfolio_api.domain.entities.user import UserPatch
from portfolio_api.domain.exceptions import EmailAlreadyExistsError
from portfolio_api.infrastructure.db.mappers.accounts_mapper import (
    map_row_to_auth_session,
    map_row_to_password_reset_token,
    map_row_to_user,
)


T = TypeVar("T")

USER_COLUMNS = "id, name, email, password_hash, two_factor_secret, two_factor_enabled, created_at, updated_at"
SESSION_COLUMNS = "id, user_id, token_hash, expires_at, revoked_at, user_agent, ip, created_at"
RESET_TOKEN_COLUMNS = "id, user_id, token_hash, expires_at, used_at, created_at"

USER_PATCH_COLUMNS = ("name", "email", "password_hash", "two_factor_secret", "two_factor_enabled")


class SqlAccountsRepository(AuthPort):
    def __init__(self, engine: Engine, *, connection: Connection | None = None):
        self._engine = engine
        self._connection = connection

    @contextmanager
    def _connect(self, *, write: bool = False) -> Iterator[Connection]:
        if self._connection is not None:
            yield self._connection
            return
        ctx = self._engine.begin() if write else self._engine.connect()
        with ctx as conn:
            yield conn

    def execute_in_transaction(self, fn: Callable[[AuthPort], T]) -> T:
        if self._connection is not None:
            return fn(self)
        with self._engine.begin() as conn:
            return fn(SqlAccountsRepository(self._engine, connection=conn))

    def get_user_by_id(self, *, user_id: str):
        sql = f"""
            SELECT {USER_COLUMNS}
            FROM public.users
            WHERE id = :user_id
            LIMIT 1
        """
        with self._connect() as conn:
            row = conn.execute(text(sql), {"user_id": user_id}).mappings().first()
        if row is None:
            return None
        return map_row_to_user(row)

    def get_user_by_email(self, *, email: str):
        sql = f"""
            SELECT {USER_COLUMNS}
            FROM public.users
            WHERE lower(email) = :email
            LIMIT 1
        """
        with self._connect() as conn:
            row = conn.execute(text(sql), {"email": email.lower()}).mappings().first()
        if row is None:
            return None
        return map_row_to_user(row)

    def create_user(
        self,
        *,
        user_id: str,
        name: str,
        email: str,
        password_hash: str,
        created_at: datetime,
    ):
        sql = f"""
            INSERT INTO public.users (
                id, name, email, password_hash, two_factor_secret, two_factor_enabled, created_at, updated_at
            ) VALUES (
                :id, :name, :email, :password_hash, NULL, false, :created_at, :created_at
            )
            RETURNING {USER_COLUMNS}
        """
        params = {
            "id": user_id,
            "name": name,
            "email": email.lower(),
            "password_hash": password_hash,
            "created_at": created_at,
        }
        try:
            with self._connect(write=True) as conn:
                row = conn.execute(text(sql), params).mappings().one()
        except IntegrityError as exc:
            raise EmailAlreadyExistsError("User already exists.") from exc
        return map_row_to_user(row)

    def update_user(self, *, user_id: str, patch: UserPatch, updated_at: datetime):
        changes = {
            key: value for key, value in changed_fields(patch).items() if key in USER_PATCH_COLUMNS
        }
        if "email" in changes:
            changes["email"] = changes["email"].lower()
        assignments = [f"{column} = :{column}" for column in changes]
        assignments.append("updated_at = :updated_at")
        sql = f"""
            UPDATE public.users
            SET {", ".join(assignments)}
            WHERE id = :user_id
            RETURNING {USER_COLUMNS}
        """
        params = {**changes, "updated_at": updated_at, "user_id": user_id}
        try:
            with self._connect(write=True) as conn:
                row = conn.execute(text(sql), params).mappings().first()
        except IntegrityError as exc:
            raise EmailAlreadyExistsError("Email already in use.") from exc
        if row is None:
            return None
        return map_row_to_user(row)

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
    ):
        sql = f"""
            INSERT INTO public.auth_sessions (
                id, user_id, token_hash, expires_at, revoked_at, user_agent, ip, created_at
            ) VALUES (
                :id, :user_id, :token_hash, :expires_at, NULL, :user_agent, :ip, :created_at
            )
            RETURNING {SESSION_COLUMNS}
        """
        params = {
            "id": session_id,
            "user_id": user_id,
            "token_hash": token_hash,
            "expires_at": expires_at,
            "user_agent": user_agent,
            "ip": ip,
            "created_at": created_at,
        }
        with self._connect(write=True) as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return map_row_to_auth_session(row)

    def get_session_by_token_hash(self, *, token_hash: str):
        sql = f"""
            SELECT {SESSION_COLUMNS}
            FROM public.auth_sessions
            WHERE token_hash = :token_hash
            LIMIT 1
        """
        with self._connect() as conn:
            row = conn.execute(text(sql), {"token_hash": token_hash}).mappings().first()
        if row is None:
            return None
        return map_row_to_auth_session(row)

    def revoke_session(self, *, session_id: str, revoked_at: datetime) -> None:
        sql = """
            UPDATE public.auth_sessions
            SET revoked_at = :revoked_at
            WHERE id = :session_id
              AND revoked_at IS NULL
        """
        with self._connect(write=True) as conn:
            conn.execute(text(sql), {"session_id": session_id, "revoked_at": revoked_at})

    def revoke_user_sessions(
        self,
        *,
        user_id: str,
        revoked_at: datetime,
        keep_session_id: str | None = None,
    ) -> int:
        sql = """
            UPDATE public.auth_sessions
            SET revoked_at = :revoked_at
            WHERE user_id = :user_id
              AND revoked_at IS NULL
              AND (CAST(:keep_session_id AS uuid) IS NULL OR id <> CAST(:keep_session_id AS uuid))
        """
        with self._connect(write=True) as conn:
            result = conn.execute(
                text(sql),
                {
                    "user_id": user_id,
                    "revoked_at": revoked_at,
                    "keep_session_id": keep_session_id,
                },
            )
        return result.rowcount

    def create_password_reset_token(
        self,
        *,
        token_id: str,
        user_id: str,
        token_hash: str,
        expires_at: datetime,
        created_at: datetime,
    ):
        sql = f"""
            INSERT INTO public.password_reset_tokens (
                id, user_id, token_hash, expires_at, used_at, created_at
            ) VALUES (
                :id, :user_id, :token_hash, :expires_at, NULL, :created_at
            )
            RETURNING {RESET_TOKEN_COLUMNS}
        """
        params = {
            "id": token_id,
            "user_id": user_id,
            "token_hash": token_hash,
            "expires_at": expires_at,
            "created_at": created_at,
        }
        with self._connect(write=True) as conn:
            row = conn.execute(text(sql), params).mappings().one()
        return map_row_to_password_reset_token(row)

    def get_password_reset_token_by_hash(self, *, token_hash: str):
        sql = f"""
            SELECT {RESET_TOKEN_COLUMNS}
            FROM public.password_reset_tokens
            WHERE token_hash = :token_hash
            LIMIT 1
        """
        with self._connect() as conn:
            row = conn.execute(text(sql), {"token_hash": token_hash}).mappings().first()
        if row is None:
            return None
        return map_row_to_password_reset_token(row)

    def mark_password_reset_token_used(self, *, token_id: str, used_at: datetime) -> bool:
        sql = """
            UPDATE public.password_reset_tokens
            SET used_at = :used_at
            WHERE id = :token_id
              AND used_at IS NULL
        """
        with self._connect(write=True) as conn:
            result = conn.execute(text(sql), {"token_id": token_id, "used_at": used_at})
        return result.rowcount == 1

    def invalidate_password_reset_tokens(self, *, user_id: str, used_at: datetime) -> int:
        sql = """
            UPDATE public.password_reset_tokens
            SET used_at = :used_at
            WHERE user_id = :user_id
              AND used_at IS NULL
        """
        with self._connect(write=True) as conn:
            result = conn.execute(text(sql), {"user_id": user_id, "used_at": used_at})
        return result.rowcount
