from __future__ import annotations

import logging
from dataclasses import replace
from uuid import uuid4

from portfolio_api.application.ports.content_port import ContentPort
from portfolio_api.domain.entities.content import ContactMessage, ContactMessageDraft
from portfolio_api.domain.exceptions import ContentInputError

from .auth_common import normalize_email, utcnow, validate_email
from .manage_content import require_text


logger = logging.getLogger(__name__)


class SubmitContactMessageUseCase:
    def __init__(self, *, content_port: ContentPort):
        self._content_port = content_port

    def execute(self, draft: ContactMessageDraft) -> ContactMessage:
        for field_name in ("name", "subject", "message"):
            require_text(getattr(draft, field_name), field_name)
        email = normalize_email(draft.email)
        try:
            validate_email(email)
        except ValueError as exc:
            raise ContentInputError(str(exc)) from exc

        phone = draft.phone.strip() if draft.phone else None
        message = self._content_port.create_contact_message(
            message_id=str(uuid4()),
            draft=replace(draft, email=email, phone=phone or None),
            now=utcnow(),
        )
        logger.info("Contact message %s received", message.id)
        return message


class ListContactMessagesUseCase:
    def __init__(self, *, content_port: ContentPort):
        self._content_port = content_port

    def execute(self) -> list[ContactMessage]:
        return self._content_port.list_contact_messages()
