from __future__ import annotations

from passlib.context import CryptContext

from portfolio_api.application.ports.password_hasher_port import PasswordHasherPort


DEFAULT_BCRYPT_ROUNDS = 12


class PasswordHasher(PasswordHasherPort):
    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self._ctx = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, plain_password: str) -> str:
        return self._ctx.hash(plain_password)

    def verify(self, plain_password: str, password_hash: str) -> bool:
        # A malformed stored hash is a data problem, not a login error.
        try:
            return self._ctx.verify(plain_password, password_hash)
        except (ValueError, TypeError):
            return False
