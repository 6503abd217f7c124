from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .patch import UNSET, _Unset


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str
    password_hash: str
    two_factor_secret: str | None
    two_factor_enabled: bool
    created_at: datetime
    updated_at: datetime

    @property
    def requires_two_factor(self) -> bool:
        # A stored secret without the flag is an unconfirmed enrollment.
        return self.two_factor_enabled and bool(self.two_factor_secret)


@dataclass(frozen=True)
class UserPatch:
    name: str | _Unset = UNSET
    email: str | _Unset = UNSET
    password_hash: str | _Unset = UNSET
    two_factor_secret: str | None | _Unset = UNSET
    two_factor_enabled: bool | _Unset = UNSET


@dataclass(frozen=True)
class AuthSession:
    id: str
    user_id: str
    token_hash: str
    expires_at: datetime
    revoked_at: datetime | None
    user_agent: str | None
    ip: str | None
    created_at: datetime

    def is_live(self, now: datetime) -> bool:
        return self.revoked_at is None and self.expires_at > now


@dataclass(frozen=True)
class PasswordResetToken:
    id: str
    user_id: str
    token_hash: str
    expires_at: datetime
    used_at: datetime | None
    created_at: datetime

    def is_usable(self, now: datetime) -> bool:
        return self.used_at is None and self.expires_at > now
