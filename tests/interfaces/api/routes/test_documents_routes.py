"""Integration tests for documents and folders."""

from __future__ import annotations

from fastapi.testclient import TestClient


def _upload(client, headers, *, name="plan.pdf", content=b"%PDF-1.4 plan", mime="application/pdf", **fields):
    data = {"title": "Lesson plan", "category": "Planning", **fields}
    return client.post(
        "/api/documents/",
        data=data,
        files={"file": (name, content, mime)},
        headers=headers,
    )


def test_upload_list_download_and_delete(client: TestClient, admin, make_user, auth_headers) -> None:
    teacher = make_user("ana@school.org", name="Ana", department="Math")

    created = _upload(client, auth_headers(admin), description="Term 1")
    assert created.status_code == 201, created.text
    document = created.json()
    assert document["file_name"] == "plan.pdf"
    assert document["file_size"] == len(b"%PDF-1.4 plan")
    assert document["mime_type"] == "application/pdf"
    assert document["file_path"].startswith("/uploads/documents/")

    listed = client.get("/api/documents/", headers=auth_headers(teacher)).json()
    filtered = client.get(
        "/api/documents/", params={"category": "Other"}, headers=auth_headers(teacher)
    ).json()
    categories = client.get("/api/documents/meta/categories", headers=auth_headers(teacher))
    assert [item["id"] for item in listed] == [document["id"]]
    assert filtered == []
    assert categories.json() == ["Planning"]

    download = client.get(
        f"/api/documents/{document['id']}/download", headers=auth_headers(teacher)
    )
    assert download.status_code == 200
    assert download.content == b"%PDF-1.4 plan"
    assert download.headers["content-type"].startswith("application/pdf")

    deleted = client.delete(f"/api/documents/{document['id']}", headers=auth_headers(admin))
    assert deleted.status_code == 204
    assert client.get(
        f"/api/documents/{document['id']}", headers=auth_headers(admin)
    ).status_code == 404


def test_upload_rejects_disallowed_and_oversized_files(
    client: TestClient, admin, auth_headers
) -> None:
    wrong_type = _upload(
        client, auth_headers(admin), name="run.exe", content=b"MZ", mime="application/x-msdownload"
    )
    too_large = _upload(
        client, auth_headers(admin), name="big.txt", content=b"x" * (64 * 1024 + 1), mime="text/plain"
    )

    assert wrong_type.status_code == 400
    assert "Allowed types" in wrong_type.json()["error"]
    assert too_large.status_code == 413


def test_only_admins_upload_or_edit(client: TestClient, make_user, auth_headers) -> None:
    teacher = make_user("ana@school.org", name="Ana", department="Math")

    response = _upload(client, auth_headers(teacher))

    assert response.status_code == 403


def test_update_document_moves_between_folders(client: TestClient, admin, auth_headers) -> None:
    headers = auth_headers(admin)
    folder = client.post("/api/folders/", json={"name": "Math"}, headers=headers).json()
    document = _upload(client, headers, folder_id=str(folder["id"])).json()
    assert document["folder_id"] == folder["id"]

    renamed = client.put(
        f"/api/documents/{document['id']}", json={"title": "Plan v2"}, headers=headers
    ).json()
    assert renamed["title"] == "Plan v2"
    assert renamed["folder_id"] == folder["id"]

    moved = client.put(
        f"/api/documents/{document['id']}", json={"folder_id": None}, headers=headers
    ).json()
    assert moved["folder_id"] is None


def test_upload_into_missing_folder_is_not_found(client: TestClient, admin, auth_headers) -> None:
    response = _upload(client, auth_headers(admin), folder_id="999")

    assert response.status_code == 404


def test_folder_tree_rules(client: TestClient, admin, auth_headers) -> None:
    headers = auth_headers(admin)
    root = client.post("/api/folders/", json={"name": "Year 1"}, headers=headers).json()
    child = client.post(
        "/api/folders/", json={"name": "Term 1", "parent_id": root["id"]}, headers=headers
    ).json()

    duplicate = client.post(
        "/api/folders/", json={"name": "Term 1", "parent_id": root["id"]}, headers=headers
    )
    assert duplicate.status_code == 409

    cycle = client.put(
        f"/api/folders/{root['id']}", json={"parent_id": child["id"]}, headers=headers
    )
    assert cycle.status_code == 400

    contents = client.get(f"/api/folders/{root['id']}", headers=headers).json()
    assert [folder["id"] for folder in contents["subfolders"]] == [child["id"]]
    assert contents["documents"] == []

    top_level = client.get("/api/folders/", headers=headers).json()
    assert [folder["id"] for folder in top_level] == [root["id"]]

    not_empty = client.delete(f"/api/folders/{root['id']}", headers=headers)
    assert not_empty.status_code == 409

    assert client.delete(f"/api/folders/{child['id']}", headers=headers).status_code == 204
    assert client.delete(f"/api/folders/{root['id']}", headers=headers).status_code == 204


def test_folder_with_documents_cannot_be_deleted(client: TestClient, admin, auth_headers) -> None:
    headers = auth_headers(admin)
    folder = client.post("/api/folders/", json={"name": "Forms"}, headers=headers).json()
    _upload(client, headers, folder_id=str(folder["id"]))

    response = client.delete(f"/api/folders/{folder['id']}", headers=headers)

    assert response.status_code == 409
    assert response.json() == {"error": "Folder is not empty"}
