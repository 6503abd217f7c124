from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from portfolio_api.api.deps import (
    get_current_user,
    get_list_contact_messages_use_case,
    get_list_subscribers_use_case,
    get_submit_contact_message_use_case,
    get_subscribe_newsletter_use_case,
    get_unsubscribe_newsletter_use_case,
)
from portfolio_api.api.schemas.base import SuccessResponse
from portfolio_api.api.schemas.content import (
    ContactMessageCreatedResponse,
    ContactMessageRequest,
    ContactMessageResponse,
    SubscribeRequest,
    SubscriberResponse,
    UnsubscribeRequest,
)
from portfolio_api.application.use_cases.newsletter import (
    ListSubscribersUseCase,
    SubscribeNewsletterUseCase,
    UnsubscribeNewsletterUseCase,
)
from portfolio_api.application.use_cases.submit_contact_message import (
    ListContactMessagesUseCase,
    SubmitContactMessageUseCase,
)
from portfolio_api.domain.entities.content import ContactMessageDraft
from portfolio_api.domain.entities.user import User
from portfolio_api.domain.exceptions import AlreadySubscribedError, ContentInputError


router = APIRouter(prefix="/api", tags=["inbox"])


@router.post("/contact", response_model=ContactMessageCreatedResponse, status_code=201)
def submit_contact_message(
    req: ContactMessageRequest,
    use_case: SubmitContactMessageUseCase = Depends(get_submit_contact_message_use_case),
):
    try:
        message = use_case.execute(
            ContactMessageDraft(
                name=req.name,
                email=req.email,
                subject=req.subject,
                message=req.message,
                phone=req.phone,
            )
        )
    except ContentInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ContactMessageCreatedResponse(id=message.id)


@router.get("/contact", response_model=list[ContactMessageResponse])
def list_contact_messages(
    _user: User = Depends(get_current_user),
    use_case: ListContactMessagesUseCase = Depends(get_list_contact_messages_use_case),
):
    return [ContactMessageResponse(**vars(message)) for message in use_case.execute()]


@router.post("/newsletter/subscribe", response_model=SubscriberResponse, status_code=201)
def subscribe(
    req: SubscribeRequest,
    use_case: SubscribeNewsletterUseCase = Depends(get_subscribe_newsletter_use_case),
):
    try:
        subscriber = use_case.execute(email=req.email, name=req.name)
    except AlreadySubscribedError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ContentInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return SubscriberResponse(**vars(subscriber))


@router.post("/newsletter/unsubscribe", response_model=SuccessResponse)
def unsubscribe(
    req: UnsubscribeRequest,
    use_case: UnsubscribeNewsletterUseCase = Depends(get_unsubscribe_newsletter_use_case),
):
    return SuccessResponse(success=use_case.execute(email=req.email))


@router.get("/newsletter/subscribers", response_model=list[SubscriberResponse])
def list_subscribers(
    _user: User = Depends(get_current_user),
    use_case: ListSubscribersUseCase = Depends(get_list_subscribers_use_case),
):
    return [SubscriberResponse(**vars(subscriber)) for subscriber in use_case.execute()]
