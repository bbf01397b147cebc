"""Integration tests for teacher profiles and the dashboard."""

from __future__ import annotations

from fastapi.testclient import TestClient

from schoolhub.domain.entities import UserRole


def test_admin_manages_teacher_profiles(client: TestClient, admin, make_user, auth_headers) -> None:
    headers = auth_headers(admin)
    account = make_user("ana@school.org", role=UserRole.TEACHER)

    created = client.post(
        "/api/teachers/",
        json={"user_id": account.id, "name": "Ana", "department": "Math", "position": "Head"},
        headers=headers,
    )
    assert created.status_code == 201, created.text
    teacher = created.json()
    assert teacher["email"] == "ana@school.org"
    assert teacher["status"] == "ACTIVE"

    duplicate = client.post(
        "/api/teachers/",
        json={"user_id": account.id, "name": "Ana", "department": "Math", "position": "Head"},
        headers=headers,
    )
    assert duplicate.status_code == 409

    updated = client.put(
        f"/api/teachers/{teacher['id']}",
        json={"department": "Science", "status": "INACTIVE"},
        headers=headers,
    ).json()
    assert updated["department"] == "Science"
    assert updated["status"] == "INACTIVE"
    assert updated["name"] == "Ana"

    listed = client.get("/api/teachers/", headers=auth_headers(account)).json()
    assert [item["id"] for item in listed] == [teacher["id"]]

    assert client.delete(f"/api/teachers/{teacher['id']}", headers=headers).status_code == 204
    assert client.get(f"/api/teachers/{teacher['id']}", headers=headers).status_code == 404


def test_teacher_profile_requires_teacher_account(
    client: TestClient, admin, auth_headers
) -> None:
    response = client.post(
        "/api/teachers/",
        json={"user_id": admin.id, "name": "Boss", "department": "Office", "position": "Admin"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 400


def test_teachers_cannot_edit_profiles(client: TestClient, make_user, auth_headers) -> None:
    teacher = make_user("ana@school.org", name="Ana", department="Math")

    response = client.put(
        f"/api/teachers/{teacher.teacher_profile.id}",
        json={"department": "Art"},
        headers=auth_headers(teacher),
    )

    assert response.status_code == 403


def test_dashboard_for_admin_and_teacher(client: TestClient, admin, make_user, auth_headers) -> None:
    ana = make_user("ana@school.org", name="Ana", department="Math")
    ben = make_user("ben@school.org", name="Ben", department="Science")
    client.post(
        "/api/announcements/",
        data={"title": "Welcome", "body": "New term"},
        headers=auth_headers(admin),
    )
    client.post(
        "/api/messages/",
        json={"recipient_id": ana.id, "subject": "Hello", "body": "Coffee?"},
        headers=auth_headers(ben),
    )

    admin_view = client.get("/api/dashboard/", headers=auth_headers(admin)).json()
    teacher_view = client.get("/api/dashboard/", headers=auth_headers(ana)).json()

    assert admin_view["role"] == "ADMIN"
    assert admin_view["stats"] == {
        "teacher_count": 2,
        "total_users": 3,
        "total_teachers": 2,
        "total_announcements": 1,
        "total_documents": 0,
    }
    assert [item["title"] for item in admin_view["latest_announcements"]] == ["Welcome"]
    assert teacher_view["role"] == "TEACHER"
    assert teacher_view["unread_messages"] == 1
    assert [item["title"] for item in teacher_view["announcements"]] == ["Welcome"]
    assert [item["subject"] for item in teacher_view["recent_messages"]] == ["Hello"]
