from __future__ import annotations

from datetime import datetime
from typing import Protocol


class SessionTokenPort(Protocol):
    def generate_token(self) -> str:
        ...

    def hash_token(self, *, token: str) -> str:
        ...

    def expires_at(self, *, now: datetime) -> datetime:
        ...

    def sign(self, *, token: str, expires_at: datetime) -> str:
        ...

    def unsign(self, *, signed_value: str) -> str | None:
        ...
