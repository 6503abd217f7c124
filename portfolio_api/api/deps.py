from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from portfolio_api.application.dto.auth import CurrentSession
from portfolio_api.application.use_cases.change_password import ChangePasswordUseCase
from portfolio_api.application.use_cases.disable_two_factor import DisableTwoFactorUseCase
from portfolio_api.application.use_cases.get_current_user import GetCurrentUserUseCase
from portfolio_api.application.use_cases.login_local import LoginLocalUseCase
from portfolio_api.application.use_cases.logout_session import LogoutSessionUseCase
from portfolio_api.application.use_cases.manage_content import (
    ManageBlogPostsUseCase,
    ManageExperiencesUseCase,
    ManageProjectsUseCase,
    ManageServicesUseCase,
    ManageSkillsUseCase,
)
from portfolio_api.application.use_cases.newsletter import (
    ListSubscribersUseCase,
    SubscribeNewsletterUseCase,
    UnsubscribeNewsletterUseCase,
)
from portfolio_api.application.use_cases.register_user import RegisterUserUseCase
from portfolio_api.application.use_cases.request_password_reset import RequestPasswordResetUseCase
from portfolio_api.application.use_cases.reset_password import ResetPasswordUseCase
from portfolio_api.application.use_cases.setup_two_factor import SetupTwoFactorUseCase
from portfolio_api.application.use_cases.submit_contact_message import (
    ListContactMessagesUseCase,
    SubmitContactMessageUseCase,
)
from portfolio_api.application.use_cases.update_profile import UpdateProfileUseCase
from portfolio_api.application.use_cases.verify_two_factor import VerifyTwoFactorUseCase
from portfolio_api.core.container import Container
from portfolio_api.domain.entities.user import User
from portfolio_api.domain.exceptions import NotAuthenticatedError


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_session_cookie(request: Request, container: Container = Depends(get_container)) -> str | None:
    return request.cookies.get(container.settings.session_cookie_name)


def get_register_user_use_case(container: Container = Depends(get_container)) -> RegisterUserUseCase:
    return RegisterUserUseCase(
        auth_port=container.auth_port,
        password_hasher=container.password_hasher,
        session_tokens=container.session_tokens,
        password_min_length=container.settings.password_min_length,
    )


def get_login_local_use_case(container: Container = Depends(get_container)) -> LoginLocalUseCase:
    return LoginLocalUseCase(
        auth_port=container.auth_port,
        password_hasher=container.password_hasher,
        session_tokens=container.session_tokens,
        totp=container.totp,
        totp_window=container.settings.totp_valid_window,
    )


def get_logout_session_use_case(container: Container = Depends(get_container)) -> LogoutSessionUseCase:
    return LogoutSessionUseCase(auth_port=container.auth_port, session_tokens=container.session_tokens)


def get_get_current_user_use_case(container: Container = Depends(get_container)) -> GetCurrentUserUseCase:
    return GetCurrentUserUseCase(auth_port=container.auth_port, session_tokens=container.session_tokens)


def get_setup_two_factor_use_case(container: Container = Depends(get_container)) -> SetupTwoFactorUseCase:
    return SetupTwoFactorUseCase(totp=container.totp, issuer=container.settings.totp_issuer)


def get_verify_two_factor_use_case(container: Container = Depends(get_container)) -> VerifyTwoFactorUseCase:
    return VerifyTwoFactorUseCase(
        auth_port=container.auth_port,
        totp=container.totp,
        totp_window=container.settings.totp_valid_window,
    )


def get_disable_two_factor_use_case(container: Container = Depends(get_container)) -> DisableTwoFactorUseCase:
    return DisableTwoFactorUseCase(auth_port=container.auth_port)


def get_change_password_use_case(container: Container = Depends(get_container)) -> ChangePasswordUseCase:
    return ChangePasswordUseCase(
        auth_port=container.auth_port,
        password_hasher=container.password_hasher,
        password_min_length=container.settings.password_min_length,
    )


def get_request_password_reset_use_case(
    container: Container = Depends(get_container),
) -> RequestPasswordResetUseCase:
    return RequestPasswordResetUseCase(
        auth_port=container.auth_port,
        email_sender=container.email_sender,
        reset_url_base=container.settings.public_base_url,
        token_ttl_minutes=container.settings.password_reset_ttl_minutes,
    )


def get_reset_password_use_case(container: Container = Depends(get_container)) -> ResetPasswordUseCase:
    return ResetPasswordUseCase(
        auth_port=container.auth_port,
        password_hasher=container.password_hasher,
        password_min_length=container.settings.password_min_length,
    )


def get_update_profile_use_case(container: Container = Depends(get_container)) -> UpdateProfileUseCase:
    return UpdateProfileUseCase(auth_port=container.auth_port)


def get_manage_skills_use_case(container: Container = Depends(get_container)) -> ManageSkillsUseCase:
    return ManageSkillsUseCase(content_port=container.content_port)


def get_manage_services_use_case(container: Container = Depends(get_container)) -> ManageServicesUseCase:
    return ManageServicesUseCase(content_port=container.content_port)


def get_manage_projects_use_case(container: Container = Depends(get_container)) -> ManageProjectsUseCase:
    return ManageProjectsUseCase(content_port=container.content_port)


def get_manage_experiences_use_case(
    container: Container = Depends(get_container),
) -> ManageExperiencesUseCase:
    return ManageExperiencesUseCase(content_port=container.content_port)


def get_manage_blog_posts_use_case(container: Container = Depends(get_container)) -> ManageBlogPostsUseCase:
    return ManageBlogPostsUseCase(content_port=container.content_port)


def get_submit_contact_message_use_case(
    container: Container = Depends(get_container),
) -> SubmitContactMessageUseCase:
    return SubmitContactMessageUseCase(content_port=container.content_port)


def get_list_contact_messages_use_case(
    container: Container = Depends(get_container),
) -> ListContactMessagesUseCase:
    return ListContactMessagesUseCase(content_port=container.content_port)


def get_subscribe_newsletter_use_case(
    container: Container = Depends(get_container),
) -> SubscribeNewsletterUseCase:
    return SubscribeNewsletterUseCase(content_port=container.content_port)


def get_unsubscribe_newsletter_use_case(
    container: Container = Depends(get_container),
) -> UnsubscribeNewsletterUseCase:
    return UnsubscribeNewsletterUseCase(content_port=container.content_port)


def get_list_subscribers_use_case(container: Container = Depends(get_container)) -> ListSubscribersUseCase:
    return ListSubscribersUseCase(content_port=container.content_port)


def get_current_session(
    cookie_value: str | None = Depends(get_session_cookie),
    use_case: GetCurrentUserUseCase = Depends(get_get_current_user_use_case),
) -> tuple[User, CurrentSession]:
    try:
        return use_case.execute(cookie_value=cookie_value)
    except NotAuthenticatedError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc


def get_current_user(
    current: tuple[User, CurrentSession] = Depends(get_current_session),
) -> User:
    return current[0]
