from __future__ import annotations

import logging
from uuid import uuid4

from portfolio_api.application.dto.auth import AuthenticatedOutput, RegisterUserInput
from portfolio_api.application.ports.auth_port import AuthPort
from portfolio_api.application.ports.password_hasher_port import PasswordHasherPort
from portfolio_api.application.ports.session_token_port import SessionTokenPort
from portfolio_api.domain.entities.user import User
from portfolio_api.domain.exceptions import EmailAlreadyExistsError

from .auth_common import (
    DEFAULT_PASSWORD_MIN_LENGTH,
    build_public_profile,
    normalize_email,
    open_session,
    utcnow,
    validate_email,
    validate_password,
)


logger = logging.getLogger(__name__)


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        auth_port: AuthPort,
        password_hasher: PasswordHasherPort,
        session_tokens: SessionTokenPort,
        password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH,
    ):
        self._auth_port = auth_port
        self._password_hasher = password_hasher
        self._session_tokens = session_tokens
        self._password_min_length = password_min_length

    def execute(self, command: RegisterUserInput) -> AuthenticatedOutput:
        name = command.name.strip()
        email = normalize_email(command.email)

        if not name:
            raise ValueError("name is required.")
        validate_email(email)
        validate_password(command.password, min_length=self._password_min_length)

        password_hash = self._password_hasher.hash(command.password)

        def _tx(auth_port: AuthPort) -> User:
            if auth_port.get_user_by_email(email=email) is not None:
                raise EmailAlreadyExistsError("User already exists.")
            return auth_port.create_user(
                user_id=str(uuid4()),
                name=name,
                email=email,
                password_hash=password_hash,
                created_at=utcnow(),
            )

        user = self._auth_port.execute_in_transaction(_tx)
        session = open_session(
            user=user,
            auth_port=self._auth_port,
            session_tokens=self._session_tokens,
            user_agent=command.user_agent,
            ip=command.ip,
        )
        logger.info("Registered user %s", user.id)
        return AuthenticatedOutput(user=build_public_profile(user), session=session)
