from __future__ import annotations


class DomainError(Exception):
    """Base for domain errors."""


class EmailAlreadyExistsError(DomainError):
    """Another user already owns the email."""


class InvalidCredentialsError(DomainError):
    """Email or password did not match."""


class InvalidTwoFactorCodeError(DomainError):
    """Submitted one-time code did not verify."""


class NotAuthenticatedError(DomainError):
    """No live session for the request."""


class InvalidCurrentPasswordError(DomainError):
    """Current password did not match the stored hash."""


class PasswordResetTokenInvalidError(DomainError):
    """Reset token is unknown, expired or already used."""


class UserNotFoundError(DomainError):
    """User referenced by a session or token no longer exists."""


class ContentNotFoundError(DomainError):
    """Requested content item does not exist."""


class ContentInputError(DomainError):
    """Invalid content payload."""


class SlugAlreadyExistsError(DomainError):
    """Another blog post already uses the slug."""


class AlreadySubscribedError(DomainError):
    """Email already has an active newsletter subscription."""
