from __future__ import annotations

import logging
from uuid import uuid4

from portfolio_api.application.ports.content_port import ContentPort
from portfolio_api.domain.entities.content import NewsletterSubscriber
from portfolio_api.domain.exceptions import AlreadySubscribedError, ContentInputError

from .auth_common import normalize_email, utcnow, validate_email


logger = logging.getLogger(__name__)


def _subscriber_email(raw: str) -> str:
    email = normalize_email(raw)
    try:
        validate_email(email)
    except ValueError as exc:
        raise ContentInputError(str(exc)) from exc
    return email


class SubscribeNewsletterUseCase:
    """Subscribe an email, reactivating it if it unsubscribed earlier."""

    def __init__(self, *, content_port: ContentPort):
        self._content_port = content_port

    def execute(self, *, email: str, name: str | None = None) -> NewsletterSubscriber:
        email = _subscriber_email(email)
        name = name.strip() if name and name.strip() else None
        now = utcnow()

        existing = self._content_port.get_subscriber_by_email(email=email)
        if existing is not None:
            if existing.is_active:
                raise AlreadySubscribedError("Email is already subscribed.")
            subscriber = self._content_port.reactivate_subscriber(
                subscriber_id=existing.id,
                name=name if name is not None else existing.name,
                now=now,
            )
            logger.info("Newsletter subscriber %s reactivated", subscriber.id)
            return subscriber

        subscriber = self._content_port.create_subscriber(
            subscriber_id=str(uuid4()),
            email=email,
            name=name,
            now=now,
        )
        logger.info("Newsletter subscriber %s created", subscriber.id)
        return subscriber


class UnsubscribeNewsletterUseCase:
    def __init__(self, *, content_port: ContentPort):
        self._content_port = content_port

    def execute(self, *, email: str) -> bool:
        return self._content_port.unsubscribe(email=normalize_email(email), now=utcnow())


class ListSubscribersUseCase:
    def __init__(self, *, content_port: ContentPort):
        self._content_port = content_port

    def execute(self) -> list[NewsletterSubscriber]:
        return self._content_port.list_active_subscribers()
