from __future__ import annotations

from datetime import datetime
from typing import Protocol

from portfolio_api.application.dto.auth import TotpEnrollment


class TotpPort(Protocol):
    def generate_secret(self, *, account_label: str, issuer_label: str) -> TotpEnrollment:
        ...

    def render_enrollment_image(self, *, enrollment_uri: str) -> str:
        ...

    def verify_code(
        self,
        *,
        secret: str,
        code: str,
        window_steps: int,
        at: datetime | None = None,
    ) -> bool:
        ...
