"""Integration tests for direct messages, threads and read state."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from schoolhub.infrastructure.models import MessageModel


@pytest.fixture()
def teachers(make_user):
    ana = make_user("ana@school.org", name="Ana", department="Math")
    ben = make_user("ben@school.org", name="Ben", department="Science")
    return ana, ben


def _send(client, headers, recipient_id, subject="Planning", body="Shall we meet?"):
    response = client.post(
        "/api/messages/",
        json={"recipient_id": recipient_id, "subject": subject, "body": body},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


def _reply(client, headers, message_id, body):
    response = client.post(
        f"/api/messages/{message_id}/reply", json={"body": body}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()


def test_new_message_is_its_own_thread_root(client: TestClient, teachers, auth_headers) -> None:
    ana, ben = teachers

    message = _send(client, auth_headers(ana), ben.id)

    assert message["thread_id"] == message["id"]
    assert message["parent_message_id"] is None
    assert message["read"] is False
    assert message["sender"]["name"] == "Ana"


def test_reply_chain_forms_a_single_ordered_thread(
    client: TestClient, teachers, auth_headers
) -> None:
    ana, ben = teachers
    first = _send(client, auth_headers(ana), ben.id, subject="Exams")
    second = _reply(client, auth_headers(ben), first["id"], "Sure")
    third = _reply(client, auth_headers(ana), second["id"], "Great")

    assert second["recipient_id"] == ana.id
    assert second["sender_id"] == ben.id
    assert second["thread_id"] == first["id"]
    assert second["parent_message_id"] == first["id"]
    assert second["subject"] == "Re: Exams"
    assert third["recipient_id"] == ben.id
    assert third["thread_id"] == first["id"]
    assert third["subject"] == "Re: Exams"

    for start in (first["id"], third["id"]):
        thread = client.get(f"/api/messages/{start}/thread", headers=auth_headers(ana))
        assert thread.status_code == 200
        assert [item["id"] for item in thread.json()] == [first["id"], second["id"], third["id"]]


def test_outsiders_cannot_reply_or_read_threads(
    client: TestClient, teachers, make_user, auth_headers
) -> None:
    ana, ben = teachers
    carl = make_user("carl@school.org", name="Carl", department="Math")
    first = _send(client, auth_headers(ana), ben.id)

    reply = client.post(
        f"/api/messages/{first['id']}/reply", json={"body": "hi"}, headers=auth_headers(carl)
    )
    thread = client.get(f"/api/messages/{first['id']}/thread", headers=auth_headers(carl))
    thread_read = client.patch(
        f"/api/messages/thread/{first['id']}/read", headers=auth_headers(carl)
    )

    assert reply.status_code == 403
    assert thread.status_code == 403
    assert thread_read.status_code == 403


def test_reply_requires_a_body(client: TestClient, teachers, auth_headers) -> None:
    ana, ben = teachers
    first = _send(client, auth_headers(ana), ben.id)

    response = client.post(
        f"/api/messages/{first['id']}/reply", json={"body": "   "}, headers=auth_headers(ben)
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Reply body is required"}


def test_mark_read_is_idempotent_and_keeps_first_timestamp(
    client: TestClient, teachers, auth_headers
) -> None:
    ana, ben = teachers
    message = _send(client, auth_headers(ana), ben.id)

    first = client.patch(f"/api/messages/{message['id']}/read", headers=auth_headers(ben))
    second = client.patch(f"/api/messages/{message['id']}/read", headers=auth_headers(ben))

    assert first.status_code == 200
    assert second.status_code == 200
    assert first.json()["read"] is True
    assert first.json()["read_at"] is not None
    assert second.json()["read_at"] == first.json()["read_at"]


def test_only_the_recipient_can_mark_a_message_read(
    client: TestClient, teachers, auth_headers
) -> None:
    ana, ben = teachers
    message = _send(client, auth_headers(ana), ben.id)

    response = client.patch(f"/api/messages/{message['id']}/read", headers=auth_headers(ana))

    assert response.status_code == 403


def test_thread_read_reports_updated_count(client: TestClient, teachers, auth_headers) -> None:
    ana, ben = teachers
    first = _send(client, auth_headers(ana), ben.id)
    second = _reply(client, auth_headers(ben), first["id"], "Answer")
    _reply(client, auth_headers(ana), second["id"], "Follow up")

    response = client.patch(
        f"/api/messages/thread/{first['id']}/read", headers=auth_headers(ben)
    )
    repeated = client.patch(
        f"/api/messages/thread/{first['id']}/read", headers=auth_headers(ben)
    )

    assert response.json() == {"thread_id": first["id"], "updated": 2}
    assert repeated.json()["updated"] == 0
    unread = client.get("/api/messages/unread-count", headers=auth_headers(ben))
    assert unread.json() == {"count": 0}


def test_thread_read_for_unknown_thread_is_not_found(
    client: TestClient, teachers, auth_headers
) -> None:
    ana, _ = teachers

    response = client.patch("/api/messages/thread/4242/read", headers=auth_headers(ana))

    assert response.status_code == 404


def test_thread_read_by_reply_id_is_not_found(
    client: TestClient, teachers, auth_headers
) -> None:
    ana, ben = teachers
    first = _send(client, auth_headers(ana), ben.id)
    second = _reply(client, auth_headers(ben), first["id"], "Answer")

    response = client.patch(
        f"/api/messages/thread/{second['id']}/read", headers=auth_headers(ana)
    )

    assert response.status_code == 404
    unread = client.get("/api/messages/unread-count", headers=auth_headers(ana))
    assert unread.json() == {"count": 1}


def test_opening_a_thread_marks_it_read_for_the_caller(
    client: TestClient, teachers, auth_headers
) -> None:
    ana, ben = teachers
    first = _send(client, auth_headers(ana), ben.id)

    client.get(f"/api/messages/{first['id']}/thread", headers=auth_headers(ben))

    assert client.get("/api/messages/unread-count", headers=auth_headers(ben)).json() == {
        "count": 0
    }


def test_send_rules(client: TestClient, teachers, admin, auth_headers) -> None:
    ana, ben = teachers

    from_admin = client.post(
        "/api/messages/",
        json={"recipient_id": ana.id, "subject": "Hi", "body": "Hello"},
        headers=auth_headers(admin),
    )
    to_self = client.post(
        "/api/messages/",
        json={"recipient_id": ana.id, "subject": "Hi", "body": "Hello"},
        headers=auth_headers(ana),
    )
    to_nobody = client.post(
        "/api/messages/",
        json={"recipient_id": 999, "subject": "Hi", "body": "Hello"},
        headers=auth_headers(ana),
    )
    to_admin = client.post(
        "/api/messages/",
        json={"recipient_id": admin.id, "subject": "Hi", "body": "Hello"},
        headers=auth_headers(ana),
    )

    assert from_admin.status_code == 403
    assert to_self.status_code == 400
    assert to_nobody.status_code == 404
    assert to_admin.status_code == 201


def test_admin_can_reply_to_a_teacher(client: TestClient, teachers, admin, auth_headers) -> None:
    ana, _ = teachers
    question = _send(client, auth_headers(ana), admin.id, subject="Leave request")

    answer = _reply(client, auth_headers(admin), question["id"], "Approved")

    assert answer["recipient_id"] == ana.id
    assert answer["thread_id"] == question["id"]


def test_message_bodies_are_sanitized(client: TestClient, teachers, auth_headers) -> None:
    ana, ben = teachers

    message = _send(
        client,
        auth_headers(ana),
        ben.id,
        body='<p onclick="steal()">Hi</p><script>alert(1)</script>',
    )

    assert "<script" not in message["body"]
    assert "onclick" not in message["body"]
    assert "Hi" in message["body"]


def test_reply_to_legacy_root_normalizes_thread(
    client: TestClient, teachers, auth_headers, db_session
) -> None:
    ana, ben = teachers
    legacy = MessageModel(
        subject="Old", body="Before threads", sender_id=ana.id, recipient_id=ben.id
    )
    db_session.add(legacy)
    db_session.commit()
    assert legacy.thread_id is None

    reply = _reply(client, auth_headers(ben), legacy.id, "Still relevant")

    assert reply["thread_id"] == legacy.id
    db_session.expire_all()
    assert db_session.get(MessageModel, legacy.id).thread_id == legacy.id
    thread = client.get(f"/api/messages/{reply['id']}/thread", headers=auth_headers(ana))
    assert [item["id"] for item in thread.json()] == [legacy.id, reply["id"]]


def test_inbox_sent_contacts_and_delete(
    client: TestClient, teachers, admin, auth_headers
) -> None:
    ana, ben = teachers
    message = _send(client, auth_headers(ana), ben.id)

    inbox = client.get("/api/messages/inbox", headers=auth_headers(ben)).json()
    sent = client.get("/api/messages/sent", headers=auth_headers(ana)).json()
    contacts = client.get("/api/messages/users/list", headers=auth_headers(ana)).json()
    admin_contacts = client.get("/api/messages/users/list", headers=auth_headers(admin)).json()

    assert [item["id"] for item in inbox] == [message["id"]]
    assert [item["id"] for item in sent] == [message["id"]]
    assert {contact["id"] for contact in contacts} == {ben.id, admin.id}
    assert admin_contacts == []

    opened = client.get(f"/api/messages/{message['id']}", headers=auth_headers(ben))
    assert opened.json()["read"] is True

    deleted = client.delete(f"/api/messages/{message['id']}", headers=auth_headers(ana))
    assert deleted.status_code == 204
    missing = client.get(f"/api/messages/{message['id']}", headers=auth_headers(ben))
    assert missing.status_code == 404


def test_notifications_list_unread_messages_and_announcements(
    client: TestClient, teachers, admin, auth_headers
) -> None:
    ana, ben = teachers
    _send(client, auth_headers(ana), ben.id, subject="Ping")
    client.post(
        "/api/announcements/",
        data={"title": "Staff meeting", "body": "Friday", "visibility": "ALL"},
        headers=auth_headers(admin),
    )

    feed = client.get("/api/messages/notifications", headers=auth_headers(ben)).json()

    assert feed["unread_messages"] == 1
    assert feed["unread_announcements"] == 1
    assert feed["total_unread"] == 2
    assert {item["type"] for item in feed["notifications"]} == {"message", "announcement"}

