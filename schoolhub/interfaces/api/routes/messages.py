"""Routes for direct messages, threads and the notification feed.

Fixed paths are declared before ``/{message_id}`` so they are matched first.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from schoolhub.application.use_cases.messages import (
    count_unread as count_unread_uc,
    delete_message as delete_message_uc,
    get_message as get_message_uc,
    get_notifications as get_notifications_uc,
    get_thread as get_thread_uc,
    list_contacts as list_contacts_uc,
    list_inbox as list_inbox_uc,
    list_sent as list_sent_uc,
    mark_message_read as mark_message_read_uc,
    mark_thread_read as mark_thread_read_uc,
    reply_to_message as reply_to_message_uc,
    send_message as send_message_uc,
)
from schoolhub.domain.entities import User
from schoolhub.infrastructure.database import get_db
from schoolhub.interfaces.api.dependencies import get_current_user
from schoolhub.interfaces.api.routes_helpers import DOMAIN_ERRORS, to_http_exception
from schoolhub.interfaces.api.schemas import (
    MessageCreate,
    MessageRead,
    NotificationFeedRead,
    ReplyCreate,
    ThreadReadResult,
    UnreadCountRead,
    UserSummaryRead,
)

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("/inbox", response_model=list[MessageRead])
def list_inbox(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[MessageRead]:
    return [MessageRead.from_entity(message) for message in list_inbox_uc(db, actor=current_user)]


@router.get("/sent", response_model=list[MessageRead])
def list_sent(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[MessageRead]:
    return [MessageRead.from_entity(message) for message in list_sent_uc(db, actor=current_user)]


@router.get("/unread-count", response_model=UnreadCountRead)
def read_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UnreadCountRead:
    return UnreadCountRead(count=count_unread_uc(db, actor=current_user))


@router.get("/users/list", response_model=list[UserSummaryRead])
def list_contacts(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[UserSummaryRead]:
    """Users the caller may start a conversation with."""

    return [UserSummaryRead.from_entity(user) for user in list_contacts_uc(db, actor=current_user)]


@router.get("/notifications", response_model=NotificationFeedRead)
def read_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationFeedRead:
    feed = get_notifications_uc(db, actor=current_user)
    return NotificationFeedRead.model_validate(feed)


@router.patch("/thread/{thread_id}/read", response_model=ThreadReadResult)
def mark_thread_read(
    thread_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ThreadReadResult:
    """Mark every message of the thread addressed to the caller as read."""

    try:
        updated = mark_thread_read_uc(db, thread_id, actor=current_user)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return ThreadReadResult(thread_id=thread_id, updated=updated)


@router.post("/", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
def send_message(
    payload: MessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageRead:
    """Start a new thread; only teachers may do so."""

    try:
        message = send_message_uc(
            db,
            actor=current_user,
            recipient_id=payload.recipient_id,
            subject=payload.subject,
            body=payload.body,
        )
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return MessageRead.from_entity(message)


@router.get("/{message_id}", response_model=MessageRead)
def read_message(
    message_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageRead:
    try:
        message = get_message_uc(db, message_id, actor=current_user)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return MessageRead.from_entity(message)


@router.patch("/{message_id}/read", response_model=MessageRead)
def mark_message_read(
    message_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageRead:
    try:
        message = mark_message_read_uc(db, message_id, actor=current_user)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return MessageRead.from_entity(message)


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_message(
    message_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    try:
        delete_message_uc(db, message_id, actor=current_user)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{message_id}/thread", response_model=list[MessageRead])
def read_thread(
    message_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[MessageRead]:
    """Return the whole conversation, oldest first, marking the caller's messages read."""

    try:
        messages = get_thread_uc(db, message_id, actor=current_user)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return [MessageRead.from_entity(message) for message in messages]


@router.post(
    "/{message_id}/reply",
    response_model=MessageRead,
    status_code=status.HTTP_201_CREATED,
)
def reply_to_message(
    message_id: int,
    payload: ReplyCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageRead:
    try:
        reply = reply_to_message_uc(db, message_id, actor=current_user, body=payload.body)
    except DOMAIN_ERRORS as exc:
        raise to_http_exception(exc) from exc
    return MessageRead.from_entity(reply)
