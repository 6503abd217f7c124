from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PublicProfile:
    id: str
    email: str
    name: str
    two_factor_enabled: bool


@dataclass(frozen=True)
class IssuedSession:
    session_id: str
    token: str
    expires_at: datetime


@dataclass(frozen=True)
class RegisterUserInput:
    name: str
    email: str
    password: str
    user_agent: str | None = None
    ip: str | None = None


@dataclass(frozen=True)
class LoginLocalInput:
    email: str
    password: str
    two_factor_code: str | None = None
    user_agent: str | None = None
    ip: str | None = None


@dataclass(frozen=True)
class AuthenticatedOutput:
    user: PublicProfile
    session: IssuedSession


@dataclass(frozen=True)
class LoginOutput:
    """Either a full login or the step-up signal, never both."""

    user: PublicProfile | None
    session: IssuedSession | None
    requires_two_factor: bool = False


@dataclass(frozen=True)
class CurrentSession:
    user_id: str
    session_id: str


@dataclass(frozen=True)
class TotpEnrollment:
    secret: str
    enrollment_uri: str


@dataclass(frozen=True)
class SetupTwoFactorOutput:
    secret: str
    qr_code: str
    manual_entry_key: str


@dataclass(frozen=True)
class VerifyTwoFactorInput:
    user_id: str
    code: str
    secret: str


@dataclass(frozen=True)
class ChangePasswordInput:
    user_id: str
    session_id: str | None
    current_password: str
    new_password: str


@dataclass(frozen=True)
class RequestPasswordResetInput:
    email: str


@dataclass(frozen=True)
class RequestPasswordResetOutput:
    message: str


@dataclass(frozen=True)
class ResetPasswordInput:
    token: str
    new_password: str


@dataclass(frozen=True)
class UpdateProfileInput:
    user_id: str
    name: str | None = None
    email: str | None = None
