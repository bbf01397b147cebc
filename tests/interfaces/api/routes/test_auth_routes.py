"""Integration tests for authentication and account administration."""

from __future__ import annotations

from fastapi.testclient import TestClient

from schoolhub.domain.entities import UserRole

PASSWORD = "Password123"


def test_login_returns_token_and_user(client: TestClient, make_user) -> None:
    make_user("ana@school.org", name="Ana", department="Math")

    response = client.post(
        "/api/auth/login", json={"email": "ana@school.org", "password": PASSWORD}
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["token_type"] == "bearer"
    assert payload["access_token"]
    assert payload["user"]["email"] == "ana@school.org"
    assert payload["user"]["role"] == "TEACHER"
    assert payload["user"]["teacher_profile"]["department"] == "Math"


def test_login_with_wrong_password_is_rejected(client: TestClient, make_user) -> None:
    make_user("ana@school.org")

    response = client.post(
        "/api/auth/login", json={"email": "ana@school.org", "password": "wrong-pass"}
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_oauth_token_flow_and_refreshed_header(client: TestClient, make_user) -> None:
    make_user("ana@school.org")

    token_response = client.post(
        "/api/auth/token",
        data={"username": "ana@school.org", "password": PASSWORD},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert token_response.status_code == 200
    token = token_response.json()["access_token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "ana@school.org"
    assert me.headers.get("X-Refreshed-Token")


def test_requests_without_token_are_unauthorized(client: TestClient) -> None:
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert "error" in response.json()


def test_admin_creates_users_and_duplicates_conflict(
    client: TestClient, admin, auth_headers
) -> None:
    headers = auth_headers(admin)
    payload = {"email": "new@school.org", "password": PASSWORD, "role": "TEACHER"}

    created = client.post("/api/auth/users", json=payload, headers=headers)
    assert created.status_code == 201
    assert created.json()["role"] == "TEACHER"

    duplicate = client.post("/api/auth/users", json=payload, headers=headers)
    assert duplicate.status_code == 409
    assert duplicate.json() == {"error": "User already exists"}

    listed = client.get("/api/auth/users", headers=headers)
    assert {user["email"] for user in listed.json()} == {"admin@school.org", "new@school.org"}


def test_teachers_cannot_manage_users(client: TestClient, make_user, auth_headers) -> None:
    teacher = make_user("ana@school.org")

    response = client.post(
        "/api/auth/users",
        json={"email": "x@school.org", "password": PASSWORD, "role": "ADMIN"},
        headers=auth_headers(teacher),
    )

    assert response.status_code == 403


def test_invalid_payload_returns_validation_error(
    client: TestClient, admin, auth_headers
) -> None:
    response = client.post(
        "/api/auth/users",
        json={"email": "not-an-email", "password": PASSWORD},
        headers=auth_headers(admin),
    )

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation error"
    assert body["details"]


def test_reset_password_enforces_length_and_revokes_tokens(
    client: TestClient, admin, make_user, auth_headers
) -> None:
    teacher = make_user("ana@school.org", role=UserRole.TEACHER)
    old_headers = auth_headers(teacher)
    assert client.get("/api/auth/me", headers=old_headers).status_code == 200

    too_short = client.post(
        "/api/auth/reset-password",
        json={"user_id": teacher.id, "new_password": "short"},
        headers=auth_headers(admin),
    )
    assert too_short.status_code == 400

    reset = client.post(
        "/api/auth/reset-password",
        json={"user_id": teacher.id, "new_password": "BrandNew123"},
        headers=auth_headers(admin),
    )
    assert reset.status_code == 200
    assert reset.json() == {"message": "Password reset successfully"}

    assert client.get("/api/auth/me", headers=old_headers).status_code == 401
    login = client.post(
        "/api/auth/login", json={"email": "ana@school.org", "password": "BrandNew123"}
    )
    assert login.status_code == 200


def test_reset_password_for_unknown_user_is_not_found(
    client: TestClient, admin, auth_headers
) -> None:
    response = client.post(
        "/api/auth/reset-password",
        json={"user_id": 999, "new_password": "BrandNew123"},
        headers=auth_headers(admin),
    )

    assert response.status_code == 404


def test_logout_and_health(client: TestClient, make_user, auth_headers) -> None:
    teacher = make_user("ana@school.org")

    assert client.post("/api/auth/logout", headers=auth_headers(teacher)).json() == {
        "message": "Logged out successfully"
    }
    assert client.get("/api/health").json() == {"status": "ok"}
