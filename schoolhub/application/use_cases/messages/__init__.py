"""Use cases for direct messages and threads."""

from .mailbox import (
    count_unread,
    delete_message,
    get_message,
    list_contacts,
    list_inbox,
    list_sent,
    mark_message_read,
    send_message,
)
from .notifications import NotificationFeed, NotificationItem, get_notifications
from .threads import (
    get_thread,
    mark_thread_read,
    normalize_thread_ids,
    reply_subject,
    reply_to_message,
    resolve_thread,
)

__all__ = [
    "NotificationFeed",
    "NotificationItem",
    "count_unread",
    "delete_message",
    "get_message",
    "get_notifications",
    "get_thread",
    "list_contacts",
    "list_inbox",
    "list_sent",
    "mark_message_read",
    "mark_thread_read",
    "normalize_thread_ids",
    "reply_subject",
    "reply_to_message",
    "resolve_thread",
    "send_message",
]
