from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Header, HTTPException, Request, Response

from portfolio_api.api.deps import (
    get_change_password_use_case,
    get_container,
    get_current_session,
    get_current_user,
    get_disable_two_factor_use_case,
    get_login_local_use_case,
    get_logout_session_use_case,
    get_register_user_use_case,
    get_request_password_reset_use_case,
    get_reset_password_use_case,
    get_session_cookie,
    get_setup_two_factor_use_case,
    get_update_profile_use_case,
    get_verify_two_factor_use_case,
)
from portfolio_api.api.schemas.auth import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    SetupTwoFactorResponse,
    TwoFactorRequiredResponse,
    UpdateProfileRequest,
    UserProfileResponse,
    VerifyTwoFactorRequest,
)
from portfolio_api.api.schemas.base import SuccessResponse
from portfolio_api.application.dto.auth import (
    ChangePasswordInput,
    CurrentSession,
    IssuedSession,
    LoginLocalInput,
    PublicProfile,
    RegisterUserInput,
    RequestPasswordResetInput,
    ResetPasswordInput,
    UpdateProfileInput,
    VerifyTwoFactorInput,
)
from portfolio_api.application.use_cases.auth_common import build_public_profile
from portfolio_api.application.use_cases.change_password import ChangePasswordUseCase
from portfolio_api.application.use_cases.disable_two_factor import DisableTwoFactorUseCase
from portfolio_api.application.use_cases.login_local import LoginLocalUseCase
from portfolio_api.application.use_cases.logout_session import LogoutSessionUseCase
from portfolio_api.application.use_cases.register_user import RegisterUserUseCase
from portfolio_api.application.use_cases.request_password_reset import RequestPasswordResetUseCase
from portfolio_api.application.use_cases.reset_password import ResetPasswordUseCase
from portfolio_api.application.use_cases.setup_two_factor import SetupTwoFactorUseCase
from portfolio_api.application.use_cases.update_profile import UpdateProfileUseCase
from portfolio_api.application.use_cases.verify_two_factor import VerifyTwoFactorUseCase
from portfolio_api.core.container import Container
from portfolio_api.domain.entities.user import User
from portfolio_api.domain.exceptions import (
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    InvalidCurrentPasswordError,
    InvalidTwoFactorCodeError,
    NotAuthenticatedError,
    PasswordResetTokenInvalidError,
)


router = APIRouter(prefix="/api/auth", tags=["auth"])


def _set_session_cookie(response: Response, container: Container, session: IssuedSession) -> None:
    response.set_cookie(
        key=container.settings.session_cookie_name,
        value=session.token,
        httponly=True,
        samesite="lax",
        secure=container.settings.session_cookie_secure,
        max_age=_cookie_max_age_seconds(session.expires_at),
        path="/",
    )


def _clear_session_cookie(response: Response, container: Container) -> None:
    response.delete_cookie(
        key=container.settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=container.settings.session_cookie_secure,
        path="/",
    )


def _cookie_max_age_seconds(expires_at: datetime) -> int:
    now = datetime.now(timezone.utc)
    return max(int((expires_at - now).total_seconds()), 0)


def _client_ip(request: Request, x_forwarded_for: str | None) -> str | None:
    if x_forwarded_for:
        return x_forwarded_for.split(",")[0].strip()
    return request.client.host if request.client else None


def _profile_response(profile: PublicProfile) -> UserProfileResponse:
    return UserProfileResponse(
        id=profile.id,
        email=profile.email,
        name=profile.name,
        two_factor_enabled=profile.two_factor_enabled,
    )


@router.post("/register", response_model=UserProfileResponse, status_code=201)
def register_user(
    req: RegisterRequest,
    request: Request,
    response: Response,
    user_agent: str | None = Header(default=None),
    x_forwarded_for: str | None = Header(default=None),
    container: Container = Depends(get_container),
    use_case: RegisterUserUseCase = Depends(get_register_user_use_case),
):
    try:
        output = use_case.execute(
            RegisterUserInput(
                name=req.name,
                email=req.email,
                password=req.password,
                user_agent=user_agent,
                ip=_client_ip(request, x_forwarded_for),
            )
        )
    except EmailAlreadyExistsError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    _set_session_cookie(response, container, output.session)
    return _profile_response(output.user)


@router.post("/login", response_model=UserProfileResponse | TwoFactorRequiredResponse)
def login_local(
    req: LoginRequest,
    request: Request,
    response: Response,
    user_agent: str | None = Header(default=None),
    x_forwarded_for: str | None = Header(default=None),
    container: Container = Depends(get_container),
    use_case: LoginLocalUseCase = Depends(get_login_local_use_case),
):
    try:
        output = use_case.execute(
            LoginLocalInput(
                email=req.email,
                password=req.password,
                two_factor_code=req.two_factor_code,
                user_agent=user_agent,
                ip=_client_ip(request, x_forwarded_for),
            )
        )
    except InvalidCredentialsError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    except InvalidTwoFactorCodeError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    if output.requires_two_factor:
        return TwoFactorRequiredResponse()
    _set_session_cookie(response, container, output.session)
    return _profile_response(output.user)


@router.post("/logout", response_model=SuccessResponse)
def logout_session(
    response: Response,
    cookie_value: str | None = Depends(get_session_cookie),
    container: Container = Depends(get_container),
    use_case: LogoutSessionUseCase = Depends(get_logout_session_use_case),
):
    use_case.execute(cookie_value=cookie_value)
    _clear_session_cookie(response, container)
    return SuccessResponse()


@router.get("/user", response_model=UserProfileResponse)
def current_user(user: User = Depends(get_current_user)):
    return _profile_response(build_public_profile(user))


@router.post("/setup-2fa", response_model=SetupTwoFactorResponse)
def setup_two_factor(
    user: User = Depends(get_current_user),
    use_case: SetupTwoFactorUseCase = Depends(get_setup_two_factor_use_case),
):
    output = use_case.execute(user=user)
    return SetupTwoFactorResponse(
        secret=output.secret,
        qr_code=output.qr_code,
        manual_entry_key=output.manual_entry_key,
    )


@router.post("/verify-2fa", response_model=SuccessResponse)
def verify_two_factor(
    req: VerifyTwoFactorRequest,
    user: User = Depends(get_current_user),
    use_case: VerifyTwoFactorUseCase = Depends(get_verify_two_factor_use_case),
):
    try:
        use_case.execute(VerifyTwoFactorInput(user_id=user.id, code=req.token, secret=req.secret))
    except InvalidTwoFactorCodeError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except NotAuthenticatedError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    return SuccessResponse()


@router.post("/disable-2fa", response_model=SuccessResponse)
def disable_two_factor(
    user: User = Depends(get_current_user),
    use_case: DisableTwoFactorUseCase = Depends(get_disable_two_factor_use_case),
):
    try:
        use_case.execute(user_id=user.id)
    except NotAuthenticatedError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    return SuccessResponse()


@router.post("/forgot-password", response_model=ForgotPasswordResponse)
def forgot_password(
    req: ForgotPasswordRequest,
    use_case: RequestPasswordResetUseCase = Depends(get_request_password_reset_use_case),
):
    output = use_case.execute(RequestPasswordResetInput(email=req.email))
    return ForgotPasswordResponse(message=output.message)


@router.post("/reset-password", response_model=SuccessResponse)
def reset_password(
    req: ResetPasswordRequest,
    use_case: ResetPasswordUseCase = Depends(get_reset_password_use_case),
):
    try:
        use_case.execute(ResetPasswordInput(token=req.token, new_password=req.new_password))
    except PasswordResetTokenInvalidError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return SuccessResponse()


@router.post("/change-password", response_model=SuccessResponse)
def change_password(
    req: ChangePasswordRequest,
    current: tuple[User, CurrentSession] = Depends(get_current_session),
    use_case: ChangePasswordUseCase = Depends(get_change_password_use_case),
):
    user, session = current
    try:
        use_case.execute(
            ChangePasswordInput(
                user_id=user.id,
                session_id=session.session_id,
                current_password=req.current_password,
                new_password=req.new_password,
            )
        )
    except InvalidCurrentPasswordError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except NotAuthenticatedError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    return SuccessResponse()


@router.post("/update-profile", response_model=UserProfileResponse)
def update_profile(
    req: UpdateProfileRequest,
    user: User = Depends(get_current_user),
    use_case: UpdateProfileUseCase = Depends(get_update_profile_use_case),
):
    try:
        profile = use_case.execute(UpdateProfileInput(user_id=user.id, name=req.name, email=req.email))
    except EmailAlreadyExistsError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except NotAuthenticatedError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc
    return _profile_response(profile)
