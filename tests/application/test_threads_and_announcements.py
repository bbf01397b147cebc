"""Use case level tests that exercise the database directly."""

from __future__ import annotations

from pathlib import Path

import pytest

from schoolhub.application.use_cases.announcements import (
    create_announcement,
    update_announcement,
)
from schoolhub.application.use_cases.messages import (
    normalize_thread_ids,
    reply_subject,
    resolve_thread,
)
from schoolhub.application.use_cases.uploads import UploadedFile
from schoolhub.config import Settings, get_settings
from schoolhub.domain.entities import AnnouncementVisibility
from schoolhub.infrastructure.models import MessageModel
from schoolhub.infrastructure.repositories import AnnouncementRepository


def test_reply_subject_is_not_prefixed_twice():
    assert reply_subject("Exams") == "Re: Exams"
    assert reply_subject("Re: Exams") == "Re: Exams"
    assert reply_subject("RE: Exams") == "RE: Exams"


def test_normalize_thread_ids_rewrites_legacy_roots(db_session, make_user):
    ana = make_user("ana@school.org", name="Ana", department="Math")
    ben = make_user("ben@school.org", name="Ben", department="Math")
    legacy = [
        MessageModel(subject=f"Old {index}", body="b", sender_id=ana.id, recipient_id=ben.id)
        for index in range(2)
    ]
    db_session.add_all(legacy)
    db_session.commit()

    assert normalize_thread_ids(db_session) == 2
    assert normalize_thread_ids(db_session) == 0
    for model in legacy:
        db_session.refresh(model)
        assert model.thread_id == model.id
    assert [message.id for message in resolve_thread(db_session, legacy[0].id)] == [legacy[0].id]


def test_empty_link_clears_announcement_link(db_session, admin):
    announcement = create_announcement(
        db_session,
        actor=admin,
        title="Trip",
        body="Details",
        link="https://school.org/trip",
    )

    updated = update_announcement(db_session, announcement.id, actor=admin, link="")

    assert updated.link is None


def test_failed_update_removes_the_new_attachment(db_session, admin, monkeypatch):
    announcement = create_announcement(db_session, actor=admin, title="Trip", body="Details")

    def failing_update(self, *args, **kwargs):
        raise RuntimeError("database unavailable")

    monkeypatch.setattr(AnnouncementRepository, "update", failing_update)
    with pytest.raises(RuntimeError):
        update_announcement(
            db_session,
            announcement.id,
            actor=admin,
            attachment=UploadedFile(
                filename="plan.pdf", content_type="application/pdf", data=b"%PDF-1.4"
            ),
        )

    stored = Path(get_settings().upload_dir) / "announcements"
    assert not stored.exists() or list(stored.iterdir()) == []


def test_announcement_for_all_clears_department(db_session, admin):
    announcement = create_announcement(
        db_session,
        actor=admin,
        title="Trip",
        body="Details",
        visibility=AnnouncementVisibility.ALL,
        department="Math",
    )

    assert announcement.department is None


def test_azure_backend_requires_credentials():
    with pytest.raises(ValueError):
        Settings(
            database_url="sqlite://",
            secret_key="k",
            storage_backend="azure",
        )
