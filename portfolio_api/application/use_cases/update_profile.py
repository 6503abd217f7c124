from __future__ import annotations

import logging

from portfolio_api.application.dto.auth import PublicProfile, UpdateProfileInput
from portfolio_api.application.ports.auth_port import AuthPort
from portfolio_api.domain.entities.user import User, UserPatch
from portfolio_api.domain.exceptions import EmailAlreadyExistsError

from .auth_common import build_public_profile, normalize_email, require_user, utcnow, validate_email


logger = logging.getLogger(__name__)


class UpdateProfileUseCase:
    def __init__(self, *, auth_port: AuthPort):
        self._auth_port = auth_port

    def execute(self, command: UpdateProfileInput) -> PublicProfile:
        name = command.name.strip() if command.name is not None else None
        email = normalize_email(command.email) if command.email is not None else None

        if name is not None and not name:
            raise ValueError("name cannot be empty.")
        if email is not None:
            validate_email(email)

        def _tx(auth_port: AuthPort) -> User:
            user = require_user(auth_port, command.user_id)
            patch = UserPatch()
            if name is not None and name != user.name:
                patch = UserPatch(name=name)
            if email is not None and email != user.email:
                owner = auth_port.get_user_by_email(email=email)
                if owner is not None and owner.id != user.id:
                    raise EmailAlreadyExistsError("Email already in use.")
                patch = UserPatch(name=patch.name, email=email)
            if patch == UserPatch():
                return user
            updated = auth_port.update_user(user_id=user.id, patch=patch, updated_at=utcnow())
            return updated if updated is not None else user

        user = self._auth_port.execute_in_transaction(_tx)
        logger.info("Profile updated for user %s", user.id)
        return build_public_profile(user)
