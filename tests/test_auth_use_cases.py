from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from portfolio_api.application.dto.auth import (
    ChangePasswordInput,
    LoginLocalInput,
    RegisterUserInput,
    RequestPasswordResetInput,
    ResetPasswordInput,
    TotpEnrollment,
    UpdateProfileInput,
    VerifyTwoFactorInput,
)
from portfolio_api.application.use_cases.change_password import ChangePasswordUseCase
from portfolio_api.application.use_cases.disable_two_factor import DisableTwoFactorUseCase
from portfolio_api.application.use_cases.get_current_user import GetCurrentUserUseCase
from portfolio_api.application.use_cases.login_local import LoginLocalUseCase
from portfolio_api.application.use_cases.logout_session import LogoutSessionUseCase
from portfolio_api.application.use_cases.register_user import RegisterUserUseCase
from portfolio_api.application.use_cases.request_password_reset import (
    GENERIC_RESET_MESSAGE,
    RequestPasswordResetUseCase,
    hash_reset_token,
)
from portfolio_api.application.use_cases.reset_password import ResetPasswordUseCase
from portfolio_api.application.use_cases.setup_two_factor import SetupTwoFactorUseCase
from portfolio_api.application.use_cases.update_profile import UpdateProfileUseCase
from portfolio_api.application.use_cases.verify_two_factor import VerifyTwoFactorUseCase
from portfolio_api.domain.entities.user import UserPatch
from portfolio_api.domain.exceptions import (
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InvalidCurrentPasswordError,
    InvalidTwoFactorCodeError,
    NotAuthenticatedError,
    PasswordResetTokenInvalidError,
)
from portfolio_api.infrastructure.memory.accounts_repository import InMemoryAccountsRepository


VALID_CODE = "123456"


class FakePasswordHasher:
    def hash(self, plain_password: str) -> str:
        return f"hashed::{plain_password}"

    def verify(self, plain_password: str, password_hash: str) -> bool:
        return password_hash == f"hashed::{plain_password}"


class FakeSessionTokens:
    def __init__(self):
        self._counter = 0

    def generate_token(self) -> str:
        self._counter += 1
        return f"token-{self._counter}"

    def hash_token(self, *, token: str) -> str:
        return f"hash::{token}"

    def expires_at(self, *, now: datetime) -> datetime:
        return now + timedelta(days=7)

    def sign(self, *, token: str, expires_at: datetime) -> str:
        return f"signed::{token}"

    def unsign(self, *, signed_value: str) -> str | None:
        if not signed_value.startswith("signed::"):
            return None
        return signed_value[len("signed::"):]


class FakeTotp:
    def generate_secret(self, *, account_label: str, issuer_label: str) -> TotpEnrollment:
        return TotpEnrollment(
            secret="JBSWY3DPEHPK3PXP",
            enrollment_uri=f"otpauth://totp/{account_label}?secret=JBSWY3DPEHPK3PXP&issuer={issuer_label}",
        )

    def render_enrollment_image(self, *, enrollment_uri: str) -> str:
        return f"data:image/png;base64,{len(enrollment_uri)}"

    def verify_code(self, *, secret: str, code: str, window_steps: int, at=None) -> bool:
        return bool(secret) and code == VALID_CODE


class FakeEmailSender:
    def __init__(self, *, fail: bool = False):
        self.fail = fail
        self.sent: list[tuple[str, str, str]] = []

    def send(self, *, to: str, subject: str, body: str) -> None:
        if self.fail:
            raise ConnectionError("smtp down")
        self.sent.append((to, subject, body))


def _register(auth_port, *, email: str = "alice@example.com", password: str = "hunter2!x"):
    use_case = RegisterUserUseCase(
        auth_port=auth_port,
        password_hasher=FakePasswordHasher(),
        session_tokens=FakeSessionTokens(),
    )
    return use_case.execute(RegisterUserInput(name="Alice", email=email, password=password))


def _login_use_case(auth_port, session_tokens=None) -> LoginLocalUseCase:
    return LoginLocalUseCase(
        auth_port=auth_port,
        password_hasher=FakePasswordHasher(),
        session_tokens=session_tokens or FakeSessionTokens(),
        totp=FakeTotp(),
    )


def _enable_two_factor(auth_port, user_id: str) -> None:
    VerifyTwoFactorUseCase(auth_port=auth_port, totp=FakeTotp()).execute(
        VerifyTwoFactorInput(user_id=user_id, code=VALID_CODE, secret="JBSWY3DPEHPK3PXP")
    )


def test_register_user_creates_user_and_session():
    auth_port = InMemoryAccountsRepository()

    output = _register(auth_port, email="  Alice@Example.COM ")

    assert output.user.email == "alice@example.com"
    assert output.user.two_factor_enabled is False
    stored = auth_port.get_user_by_id(user_id=output.user.id)
    assert stored.password_hash == "hashed::hunter2!x"
    assert output.session.token == "signed::token-1"
    assert auth_port.get_session_by_token_hash(token_hash="hash::token-1") is not None


def test_register_user_rejects_duplicate_email_case_insensitively():
    auth_port = InMemoryAccountsRepository()
    _register(auth_port)

    with pytest.raises(EmailAlreadyExistsError):
        _register(auth_port, email="ALICE@example.com")


@pytest.mark.parametrize(
    ("name", "email", "password"),
    [
        ("", "a@example.com", "longenough"),
        ("Alice", "not-an-email", "longenough"),
        ("Alice", "a@example.com", "short"),
    ],
)
def test_register_user_validates_input(name, email, password):
    use_case = RegisterUserUseCase(
        auth_port=InMemoryAccountsRepository(),
        password_hasher=FakePasswordHasher(),
        session_tokens=FakeSessionTokens(),
    )

    with pytest.raises(ValueError):
        use_case.execute(RegisterUserInput(name=name, email=email, password=password))


def test_login_local_returns_profile_and_session():
    auth_port = InMemoryAccountsRepository()
    registered = _register(auth_port)

    output = _login_use_case(auth_port).execute(
        LoginLocalInput(email="ALICE@example.com", password="hunter2!x", user_agent="pytest", ip="127.0.0.1")
    )

    assert output.requires_two_factor is False
    assert output.user.id == registered.user.id
    assert output.session is not None


@pytest.mark.parametrize(
    ("email", "password"),
    [("alice@example.com", "wrong-password"), ("nobody@example.com", "hunter2!x")],
)
def test_login_local_rejects_bad_credentials_generically(email, password):
    auth_port = InMemoryAccountsRepository()
    _register(auth_port)

    with pytest.raises(InvalidCredentialsError, match="Invalid credentials."):
        _login_use_case(auth_port).execute(LoginLocalInput(email=email, password=password))


def test_login_local_requires_second_factor_without_opening_session():
    auth_port = InMemoryAccountsRepository()
    registered = _register(auth_port)
    _enable_two_factor(auth_port, registered.user.id)

    output = _login_use_case(auth_port).execute(LoginLocalInput(email="alice@example.com", password="hunter2!x"))

    assert output.requires_two_factor is True
    assert output.user is None
    assert output.session is None
    # Only the session opened at registration exists.
    assert len(auth_port._sessions) == 1


def test_login_local_rejects_wrong_second_factor():
    auth_port = InMemoryAccountsRepository()
    registered = _register(auth_port)
    _enable_two_factor(auth_port, registered.user.id)

    with pytest.raises(InvalidTwoFactorCodeError):
        _login_use_case(auth_port).execute(
            LoginLocalInput(email="alice@example.com", password="hunter2!x", two_factor_code="000000")
        )


def test_login_local_still_checks_password_on_step_up():
    auth_port = InMemoryAccountsRepository()
    registered = _register(auth_port)
    _enable_two_factor(auth_port, registered.user.id)

    with pytest.raises(InvalidCredentialsError):
        _login_use_case(auth_port).execute(
            LoginLocalInput(email="alice@example.com", password="wrong-password", two_factor_code=VALID_CODE)
        )


def test_login_local_accepts_valid_second_factor():
    auth_port = InMemoryAccountsRepository()
    registered = _register(auth_port)
    _enable_two_factor(auth_port, registered.user.id)

    output = _login_use_case(auth_port).execute(
        LoginLocalInput(email="alice@example.com", password="hunter2!x", two_factor_code=VALID_CODE)
    )

    assert output.user.two_factor_enabled is True
    assert output.session is not None


def test_secret_without_enabled_flag_does_not_gate_login():
    auth_port = InMemoryAccountsRepository()
    registered = _register(auth_port)
    auth_port.update_user(
        user_id=registered.user.id,
        patch=UserPatch(two_factor_secret="JBSWY3DPEHPK3PXP"),
        updated_at=datetime.now(timezone.utc),
    )

    output = _login_use_case(auth_port).execute(LoginLocalInput(email="alice@example.com", password="hunter2!x"))

    assert output.requires_two_factor is False
    assert output.session is not None


def test_get_current_user_resolves_live_session_and_rejects_logout():
    auth_port = InMemoryAccountsRepository()
    session_tokens = FakeSessionTokens()
    registered = RegisterUserUseCase(
        auth_port=auth_port,
        password_hasher=FakePasswordHasher(),
        session_tokens=session_tokens,
    ).execute(RegisterUserInput(name="Alice", email="alice@example.com", password="hunter2!x"))
    current_user = GetCurrentUserUseCase(auth_port=auth_port, session_tokens=session_tokens)

    user, current = current_user.execute(cookie_value=registered.session.token)
    assert user.id == registered.user.id
    assert current.session_id == registered.session.session_id

    logout = LogoutSessionUseCase(auth_port=auth_port, session_tokens=session_tokens)
    logout.execute(cookie_value=registered.session.token)
    logout.execute(cookie_value=registered.session.token)
    logout.execute(cookie_value=None)

    with pytest.raises(NotAuthenticatedError):
        current_user.execute(cookie_value=registered.session.token)


@pytest.mark.parametrize("cookie_value", [None, "", "garbage", "signed::unknown-token"])
def test_get_current_user_rejects_missing_or_unknown_cookie(cookie_value):
    use_case = GetCurrentUserUseCase(auth_port=InMemoryAccountsRepository(), session_tokens=FakeSessionTokens())

    with pytest.raises(NotAuthenticatedError):
        use_case.execute(cookie_value=cookie_value)


def test_get_current_user_rejects_expired_session_even_if_stored():
    auth_port = InMemoryAccountsRepository()
    registered = _register(auth_port)
    session = auth_port.get_session_by_token_hash(token_hash="hash::token-1")
    auth_port._sessions[session.id] = replace(
        session,
        expires_at=datetime.now(timezone.utc) - timedelta(seconds=1),
    )

    use_case = GetCurrentUserUseCase(auth_port=auth_port, session_tokens=FakeSessionTokens())
    with pytest.raises(NotAuthenticatedError):
        use_case.execute(cookie_value=registered.session.token)


def test_setup_two_factor_returns_secret_and_persists_nothing():
    auth_port = InMemoryAccountsRepository()
    registered = _register(auth_port)
    user = auth_port.get_user_by_id(user_id=registered.user.id)

    output = SetupTwoFactorUseCase(totp=FakeTotp(), issuer="Portfolio Admin").execute(user=user)

    assert output.secret == "JBSWY3DPEHPK3PXP"
    assert output.manual_entry_key == output.secret
    assert output.qr_code.startswith("data:image/png;base64,")
    stored = auth_port.get_user_by_id(user_id=user.id)
    assert stored.two_factor_secret is None
    assert stored.two_factor_enabled is False


def test_verify_two_factor_rejects_wrong_code_without_mutation():
    auth_port = InMemoryAccountsRepository()
    registered = _register(auth_port)
    use_case = VerifyTwoFactorUseCase(auth_port=auth_port, totp=FakeTotp())

    with pytest.raises(InvalidTwoFactorCodeError, match="Invalid token."):
        use_case.execute(VerifyTwoFactorInput(user_id=registered.user.id, code="999999", secret="JBSWY3DPEHPK3PXP"))

    stored = auth_port.get_user_by_id(user_id=registered.user.id)
    assert stored.two_factor_enabled is False
    assert stored.two_factor_secret is None


def test_verify_then_disable_two_factor():
    auth_port = InMemoryAccountsRepository()
    registered = _register(auth_port)
    _enable_two_factor(auth_port, registered.user.id)

    stored = auth_port.get_user_by_id(user_id=registered.user.id)
    assert stored.two_factor_enabled is True
    assert stored.two_factor_secret == "JBSWY3DPEHPK3PXP"

    DisableTwoFactorUseCase(auth_port=auth_port).execute(user_id=registered.user.id)

    stored = auth_port.get_user_by_id(user_id=registered.user.id)
    assert stored.two_factor_enabled is False
    assert stored.two_factor_secret is None


def test_change_password_rejects_wrong_current_password():
    auth_port = InMemoryAccountsRepository()
    registered = _register(auth_port)
    use_case = ChangePasswordUseCase(auth_port=auth_port, password_hasher=FakePasswordHasher())

    with pytest.raises(InvalidCurrentPasswordError):
        use_case.execute(
            ChangePasswordInput(
                user_id=registered.user.id,
                session_id=registered.session.session_id,
                current_password="nope-nope",
                new_password="brand-new-pass",
            )
        )
    assert auth_port.get_user_by_id(user_id=registered.user.id).password_hash == "hashed::hunter2!x"


def test_change_password_revokes_other_sessions_only():
    auth_port = InMemoryAccountsRepository()
    session_tokens = FakeSessionTokens()
    registered = RegisterUserUseCase(
        auth_port=auth_port,
        password_hasher=FakePasswordHasher(),
        session_tokens=session_tokens,
    ).execute(RegisterUserInput(name="Alice", email="alice@example.com", password="hunter2!x"))
    other = _login_use_case(auth_port, session_tokens).execute(
        LoginLocalInput(email="alice@example.com", password="hunter2!x")
    )

    ChangePasswordUseCase(auth_port=auth_port, password_hasher=FakePasswordHasher()).execute(
        ChangePasswordInput(
            user_id=registered.user.id,
            session_id=registered.session.session_id,
            current_password="hunter2!x",
            new_password="brand-new-pass",
        )
    )

    current_user = GetCurrentUserUseCase(auth_port=auth_port, session_tokens=session_tokens)
    user, _ = current_user.execute(cookie_value=registered.session.token)
    assert user.password_hash == "hashed::brand-new-pass"
    with pytest.raises(NotAuthenticatedError):
        current_user.execute(cookie_value=other.session.token)


def test_request_password_reset_is_generic_for_unknown_email():
    sender = FakeEmailSender()
    use_case = RequestPasswordResetUseCase(
        auth_port=InMemoryAccountsRepository(),
        email_sender=sender,
        reset_url_base="http://localhost:5000",
    )

    output = use_case.execute(RequestPasswordResetInput(email="ghost@example.com"))

    assert output.message == GENERIC_RESET_MESSAGE
    assert sender.sent == []


def _extract_token(body: str) -> str:
    marker = "reset-password?token="
    start = body.index(marker) + len(marker)
    return body[start:].split()[0]


def test_password_reset_flow_is_single_use_and_revokes_sessions():
    auth_port = InMemoryAccountsRepository()
    session_tokens = FakeSessionTokens()
    registered = RegisterUserUseCase(
        auth_port=auth_port,
        password_hasher=FakePasswordHasher(),
        session_tokens=session_tokens,
    ).execute(RegisterUserInput(name="Alice", email="alice@example.com", password="hunter2!x"))
    sender = FakeEmailSender()

    output = RequestPasswordResetUseCase(
        auth_port=auth_port,
        email_sender=sender,
        reset_url_base="http://localhost:5000/",
    ).execute(RequestPasswordResetInput(email="Alice@Example.com"))

    assert output.message == GENERIC_RESET_MESSAGE
    assert len(sender.sent) == 1
    to, _, body = sender.sent[0]
    assert to == "alice@example.com"
    assert "http://localhost:5000/reset-password?token=" in body
    token = _extract_token(body)

    reset = ResetPasswordUseCase(auth_port=auth_port, password_hasher=FakePasswordHasher())
    reset.execute(ResetPasswordInput(token=token, new_password="another-pass"))

    assert auth_port.get_user_by_id(user_id=registered.user.id).password_hash == "hashed::another-pass"
    with pytest.raises(NotAuthenticatedError):
        GetCurrentUserUseCase(auth_port=auth_port, session_tokens=session_tokens).execute(
            cookie_value=registered.session.token
        )
    with pytest.raises(PasswordResetTokenInvalidError):
        reset.execute(ResetPasswordInput(token=token, new_password="third-pass!"))


def test_new_reset_request_supersedes_earlier_links():
    auth_port = InMemoryAccountsRepository()
    _register(auth_port)
    sender = FakeEmailSender()
    request = RequestPasswordResetUseCase(
        auth_port=auth_port,
        email_sender=sender,
        reset_url_base="http://localhost:5000",
    )
    request.execute(RequestPasswordResetInput(email="alice@example.com"))
    request.execute(RequestPasswordResetInput(email="alice@example.com"))
    older, newer = (_extract_token(body) for _, _, body in sender.sent)

    reset = ResetPasswordUseCase(auth_port=auth_port, password_hasher=FakePasswordHasher())
    with pytest.raises(PasswordResetTokenInvalidError):
        reset.execute(ResetPasswordInput(token=older, new_password="another-pass"))
    reset.execute(ResetPasswordInput(token=newer, new_password="another-pass"))

    assert auth_port.get_user_by_email(email="alice@example.com").password_hash == "hashed::another-pass"


def test_successful_reset_consumes_every_outstanding_token():
    auth_port = InMemoryAccountsRepository()
    user = _register(auth_port).user
    now = datetime.now(timezone.utc)
    for token in ("first-token", "second-token"):
        auth_port.create_password_reset_token(
            token_id=token,
            user_id=user.id,
            token_hash=hash_reset_token(token),
            expires_at=now + timedelta(minutes=30),
            created_at=now,
        )

    reset = ResetPasswordUseCase(auth_port=auth_port, password_hasher=FakePasswordHasher())
    reset.execute(ResetPasswordInput(token="second-token", new_password="another-pass"))

    with pytest.raises(PasswordResetTokenInvalidError):
        reset.execute(ResetPasswordInput(token="first-token", new_password="takeover-pass"))
    assert auth_port.get_user_by_id(user_id=user.id).password_hash == "hashed::another-pass"


def test_accounts_store_rejects_duplicate_email_with_domain_error():
    auth_port = InMemoryAccountsRepository()
    _register(auth_port)

    with pytest.raises(EmailAlreadyExistsError):
        auth_port.create_user(
            user_id="other",
            name="Impostor",
            email="ALICE@example.com",
            password_hash="hashed::x",
            created_at=datetime.now(timezone.utc),
        )


def test_reset_password_rejects_expired_token():
    auth_port = InMemoryAccountsRepository()
    _register(auth_port)
    sender = FakeEmailSender()
    RequestPasswordResetUseCase(
        auth_port=auth_port,
        email_sender=sender,
        reset_url_base="http://localhost:5000",
        token_ttl_minutes=0,
    ).execute(RequestPasswordResetInput(email="alice@example.com"))
    token = _extract_token(sender.sent[0][2])

    with pytest.raises(PasswordResetTokenInvalidError):
        ResetPasswordUseCase(auth_port=auth_port, password_hasher=FakePasswordHasher()).execute(
            ResetPasswordInput(token=token, new_password="another-pass")
        )


def test_request_password_reset_survives_email_failure():
    auth_port = InMemoryAccountsRepository()
    _register(auth_port)

    output = RequestPasswordResetUseCase(
        auth_port=auth_port,
        email_sender=FakeEmailSender(fail=True),
        reset_url_base="http://localhost:5000",
    ).execute(RequestPasswordResetInput(email="alice@example.com"))

    assert output.message == GENERIC_RESET_MESSAGE
    assert len(auth_port._reset_tokens) == 1


def test_update_profile_changes_name_and_normalizes_email():
    auth_port = InMemoryAccountsRepository()
    registered = _register(auth_port)

    profile = UpdateProfileUseCase(auth_port=auth_port).execute(
        UpdateProfileInput(user_id=registered.user.id, name="Alice B.", email=" New@Example.com ")
    )

    assert profile.name == "Alice B."
    assert profile.email == "new@example.com"
    stored = auth_port.get_user_by_id(user_id=registered.user.id)
    assert stored.updated_at >= stored.created_at


def test_update_profile_allows_own_email_and_rejects_taken_email():
    auth_port = InMemoryAccountsRepository()
    alice = _register(auth_port)
    _register(auth_port, email="bob@example.com")
    use_case = UpdateProfileUseCase(auth_port=auth_port)

    profile = use_case.execute(UpdateProfileInput(user_id=alice.user.id, email="ALICE@example.com"))
    assert profile.email == "alice@example.com"

    with pytest.raises(EmailAlreadyExistsError):
        use_case.execute(UpdateProfileInput(user_id=alice.user.id, email="bob@example.com"))


def test_update_profile_rejects_blank_name():
    auth_port = InMemoryAccountsRepository()
    registered = _register(auth_port)

    with pytest.raises(ValueError):
        UpdateProfileUseCase(auth_port=auth_port).execute(UpdateProfileInput(user_id=registered.user.id, name="  "))
