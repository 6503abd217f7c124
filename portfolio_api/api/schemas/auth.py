from __future__ import annotations

from pydantic import Field

from .base import CamelModel


class RegisterRequest(CamelModel):
    name: str = Field(..., max_length=120)
    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=256)


class LoginRequest(CamelModel):
    email: str = Field(..., max_length=255)
    password: str = Field(..., max_length=256)
    two_factor_code: str | None = Field(default=None, max_length=16)


class UserProfileResponse(CamelModel):
    id: str
    email: str
    name: str
    two_factor_enabled: bool


class TwoFactorRequiredResponse(CamelModel):
    requires_two_factor: bool = True


class SetupTwoFactorResponse(CamelModel):
    secret: str
    qr_code: str
    manual_entry_key: str


class VerifyTwoFactorRequest(CamelModel):
    token: str = Field(..., max_length=16)
    secret: str = Field(..., max_length=128)


class ForgotPasswordRequest(CamelModel):
    email: str = Field(..., max_length=255)


class ForgotPasswordResponse(CamelModel):
    success: bool = True
    message: str


class ResetPasswordRequest(CamelModel):
    token: str = Field(..., max_length=256)
    new_password: str = Field(..., max_length=256)


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(..., max_length=256)
    new_password: str = Field(..., max_length=256)


class UpdateProfileRequest(CamelModel):
    name: str | None = Field(default=None, max_length=120)
    email: str | None = Field(default=None, max_length=255)
