"""Tests for behaviour carried by domain entities."""

import pytest

from schoolhub.domain.entities import (
    Announcement,
    AnnouncementEngagement,
    AnnouncementRecipient,
    AnnouncementVisibility,
    Message,
    User,
    UserRole,
)


def _recipient(user_id: int, read: bool) -> AnnouncementRecipient:
    return AnnouncementRecipient(announcement_id=1, user_id=user_id, read=read)


def test_engagement_percentage_rounds():
    engagement = AnnouncementEngagement(
        read_by=[_recipient(1, True), _recipient(2, True)],
        unread_by=[_recipient(3, False)],
    )

    assert engagement.total_recipients == 3
    assert engagement.read_count == 2
    assert engagement.unread_count == 1
    assert engagement.read_percentage == 67


def test_engagement_without_recipients_is_zero():
    engagement = AnnouncementEngagement(read_by=[], unread_by=[])

    assert engagement.total_recipients == 0
    assert engagement.read_percentage == 0


def test_effective_thread_id_falls_back_to_own_id():
    legacy = Message(id=7, subject="s", body="b", sender_id=1, recipient_id=2)
    reply = Message(id=8, subject="s", body="b", sender_id=2, recipient_id=1, thread_id=7)

    assert legacy.effective_thread_id == 7
    assert reply.effective_thread_id == 7


def test_counterpart_of_requires_participant():
    message = Message(id=1, subject="s", body="b", sender_id=1, recipient_id=2)

    assert message.counterpart_of(1) == 2
    assert message.counterpart_of(2) == 1
    with pytest.raises(ValueError):
        message.counterpart_of(3)


def test_missing_recipient_row_counts_as_unread():
    announcement = Announcement(
        id=1,
        title="t",
        body="b",
        visibility=AnnouncementVisibility.ALL,
        created_by=1,
        recipients=[_recipient(2, True)],
    )
    author = User(id=1, email="a@school.org", password="x", role=UserRole.TEACHER)
    other = User(id=5, email="o@school.org", password="x", role=UserRole.TEACHER)

    assert announcement.is_read_by(2) is True
    assert announcement.is_read_by(3) is False
    assert announcement.can_be_managed_by(author)
    assert not announcement.can_be_managed_by(other)
