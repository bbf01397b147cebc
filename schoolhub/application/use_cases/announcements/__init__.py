"""Use cases for announcements: visibility, read state and engagement."""

from .engagement import get_announcement_engagement
from .manage import (
    create_announcement,
    delete_announcement,
    toggle_pin,
    update_announcement,
)
from .read_state import get_announcement, mark_announcement_read
from .visibility import ensure_can_view, list_announcements, resolve_recipient_ids

__all__ = [
    "create_announcement",
    "delete_announcement",
    "ensure_can_view",
    "get_announcement",
    "get_announcement_engagement",
    "list_announcements",
    "mark_announcement_read",
    "resolve_recipient_ids",
    "toggle_pin",
    "update_announcement",
]
