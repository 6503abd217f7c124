from __future__ import annotations

from portfolio_api.application.dto.auth import SetupTwoFactorOutput
from portfolio_api.application.ports.totp_port import TotpPort
from portfolio_api.domain.entities.user import User


class SetupTwoFactorUseCase:
    """Start a TOTP enrollment.

    Nothing is persisted: the caller holds the secret and sends it back with
    a code to VerifyTwoFactorUseCase. Calling this twice simply yields a new
    secret; the user stays without 2FA until a verification succeeds.
    """

    def __init__(self, *, totp: TotpPort, issuer: str):
        self._totp = totp
        self._issuer = issuer

    def execute(self, *, user: User) -> SetupTwoFactorOutput:
        enrollment = self._totp.generate_secret(
            account_label=f"{self._issuer} ({user.email})",
            issuer_label=self._issuer,
        )
        qr_code = self._totp.render_enrollment_image(enrollment_uri=enrollment.enrollment_uri)
        return SetupTwoFactorOutput(
            secret=enrollment.secret,
            qr_code=qr_code,
            manual_entry_key=enrollment.secret,
        )
