from __future__ import annotations

import base64
import binascii
import io
from datetime import datetime

import pyotp
import qrcode
from qrcode.constants import ERROR_CORRECT_M

from portfolio_api.application.dto.auth import TotpEnrollment
from portfolio_api.application.ports.totp_port import TotpPort


TOTP_DIGITS = 6
TOTP_INTERVAL_SECONDS = 30


class PyotpTotpProvider(TotpPort):
    """RFC 6238 codes (SHA-1, 6 digits, 30 s steps) via pyotp."""

    def generate_secret(self, *, account_label: str, issuer_label: str) -> TotpEnrollment:
        secret = pyotp.random_base32()
        uri = pyotp.TOTP(secret, digits=TOTP_DIGITS, interval=TOTP_INTERVAL_SECONDS).provisioning_uri(
            name=account_label,
            issuer_name=issuer_label,
        )
        return TotpEnrollment(secret=secret, enrollment_uri=uri)

    def render_enrollment_image(self, *, enrollment_uri: str) -> str:
        qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, box_size=6, border=4)
        qr.add_data(enrollment_uri)
        qr.make(fit=True)
        image = qr.make_image(fill_color="black", back_color="white")
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
        return f"data:image/png;base64,{encoded}"

    def verify_code(
        self,
        *,
        secret: str,
        code: str,
        window_steps: int,
        at: datetime | None = None,
    ) -> bool:
        code = code.replace(" ", "").strip()
        if len(code) != TOTP_DIGITS or not code.isdigit():
            return False
        totp = pyotp.TOTP(secret, digits=TOTP_DIGITS, interval=TOTP_INTERVAL_SECONDS)
        try:
            return totp.verify(code, for_time=at, valid_window=window_steps)
        except (binascii.Error, ValueError):
            return False
