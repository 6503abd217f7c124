from __future__ import annotations

import hashlib
import secrets
from datetime import datetime, timedelta

import jwt

from portfolio_api.application.ports.session_token_port import SessionTokenPort


SESSION_TOKEN_TYPE = "session"


class JwtSessionTokenService(SessionTokenPort):
    """Opaque session tokens carried in an HS256-signed cookie value.

    The store only ever sees the sha256 of the token; the signature lets us
    reject tampered cookies before touching the store.
    """

    def __init__(self, *, secret: str, ttl_days: int):
        self._secret = secret
        self._ttl_days = ttl_days

    @property
    def ttl_seconds(self) -> int:
        return int(timedelta(days=self._ttl_days).total_seconds())

    def generate_token(self) -> str:
        return secrets.token_urlsafe(48)

    def hash_token(self, *, token: str) -> str:
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    def expires_at(self, *, now: datetime) -> datetime:
        return now + timedelta(days=self._ttl_days)

    def sign(self, *, token: str, expires_at: datetime) -> str:
        payload = {
            "sid": token,
            "type": SESSION_TOKEN_TYPE,
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm="HS256")

    def unsign(self, *, signed_value: str) -> str | None:
        try:
            payload = jwt.decode(signed_value, self._secret, algorithms=["HS256"])
        except jwt.PyJWTError:
            return None
        if payload.get("type") != SESSION_TOKEN_TYPE:
            return None
        token = payload.get("sid")
        if not token or not isinstance(token, str):
            return None
        return token
