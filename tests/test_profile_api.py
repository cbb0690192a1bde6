"""Integration tests for profile endpoints and the activities they produce."""

from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import TEST_UPLOAD_DIR, register_and_login

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def _latest(client: TestClient, headers: dict[str, str]) -> dict:
    return client.get("/activity/recent", params={"limit": 1}, headers=headers).json()[
        "activities"
    ][0]


def test_read_profile_of_new_youth(client: TestClient) -> None:
    headers = register_and_login(client)

    response = client.get("/profile/me", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["job_status"] == "unemployed"
    assert body["skills"] == []
    assert body["experience"] == []


def test_employer_cannot_use_youth_profile(client: TestClient) -> None:
    headers = register_and_login(client, email="hr@example.com", role="employer")

    assert client.get("/profile/me", headers=headers).status_code == 403


def test_admin_accounts_cannot_self_register(client: TestClient) -> None:
    response = client.post(
        "/auth/register",
        json={
            "first_name": "Eve",
            "last_name": "Admin",
            "email": "eve@example.com",
            "password": "Secret123",
            "role": "admin",
        },
    )

    assert response.status_code == 400


def test_update_profile_logs_changed_fields(client: TestClient) -> None:
    headers = register_and_login(client)

    response = client.put(
        "/profile/me",
        json={"bio": "Aspiring developer", "location": "Bulawayo", "first_name": "Rudo"},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["location"] == "Bulawayo"
    assert client.get("/users/me", headers=headers).json()["first_name"] == "Rudo"

    latest = _latest(client, headers)
    assert latest["activity_type"] == "profile_update"
    assert latest["description"] == "Updated: bio, first_name, location"
    assert latest["metadata"] == {"changes": ["bio", "first_name", "location"]}


def test_update_profile_rejects_blank_name(client: TestClient) -> None:
    headers = register_and_login(client)

    response = client.put("/profile/me", json={"first_name": "  "}, headers=headers)

    assert response.status_code == 400
    assert _latest(client, headers)["activity_type"] == "login"


def test_skill_add_and_remove(client: TestClient) -> None:
    headers = register_and_login(client)

    created = client.post(
        "/profile/skills", json={"name": "Python", "level": "advanced"}, headers=headers
    )
    assert created.status_code == 201
    skill_id = created.json()["skill_id"]
    added = _latest(client, headers)
    assert added["activity_type"] == "skill_add"
    assert added["description"] == "Added skill: Python (advanced)"

    removed = client.delete(f"/profile/skills/{skill_id}", headers=headers)
    assert removed.status_code == 204
    assert _latest(client, headers)["description"] == "Removed skill: Python"

    missing = client.delete(f"/profile/skills/{skill_id}", headers=headers)
    assert missing.status_code == 404


def test_experience_lifecycle(client: TestClient) -> None:
    headers = register_and_login(client)

    created = client.post(
        "/profile/experience",
        json={"role": "Developer", "company": "Acme", "start_date": "2023-01-01"},
        headers=headers,
    )
    assert created.status_code == 201
    experience_id = created.json()["id"]
    assert _latest(client, headers)["description"] == "Added experience: Developer at Acme"

    updated = client.put(
        f"/profile/experience/{experience_id}",
        json={"role": "Senior Developer"},
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["company"] == "Acme"
    latest = _latest(client, headers)
    assert latest["activity_type"] == "experience_update"
    assert latest["metadata"] == {"company": "Acme", "role": "Senior Developer"}

    deleted = client.delete(f"/profile/experience/{experience_id}", headers=headers)
    assert deleted.status_code == 204
    assert _latest(client, headers)["activity_type"] == "experience_delete"
    assert client.get("/profile/me", headers=headers).json()["experience"] == []


def test_education_lifecycle(client: TestClient) -> None:
    headers = register_and_login(client)

    created = client.post(
        "/profile/education",
        json={"institution": "University of Zimbabwe", "degree": "BSc Computer Science"},
        headers=headers,
    )
    assert created.status_code == 201
    education_id = created.json()["id"]
    assert _latest(client, headers)["description"] == (
        "Added education: BSc Computer Science at University of Zimbabwe"
    )

    updated = client.put(
        f"/profile/education/{education_id}", json={"degree": "MSc"}, headers=headers
    )
    assert updated.status_code == 200
    assert _latest(client, headers)["activity_type"] == "education_update"

    assert client.delete(f"/profile/education/{education_id}", headers=headers).status_code == 204
    assert _latest(client, headers)["activity_type"] == "education_delete"
    assert client.put(
        f"/profile/education/{education_id}", json={"degree": "PhD"}, headers=headers
    ).status_code == 404


def test_experience_rejects_inverted_dates(client: TestClient) -> None:
    headers = register_and_login(client)

    response = client.post(
        "/profile/experience",
        json={
            "role": "Developer",
            "company": "Acme",
            "start_date": "2024-01-01",
            "end_date": "2023-01-01",
        },
        headers=headers,
    )

    assert response.status_code == 422


def test_profile_picture_upload_replaces_previous_file(client: TestClient) -> None:
    headers = register_and_login(client)

    first = client.post(
        "/profile/picture", files={"file": ("me.png", PNG_BYTES, "image/png")}, headers=headers
    )
    assert first.status_code == 200
    first_url = first.json()["profile_picture_url"]
    assert first_url.startswith("/uploads/profile-pictures/")
    first_path = TEST_UPLOAD_DIR / first_url.removeprefix("/uploads/")
    assert first_path.exists()

    second = client.post(
        "/profile/picture", files={"file": ("me2.jpg", b"jpeg-bytes", "image/jpeg")}, headers=headers
    )
    assert second.status_code == 200
    assert not first_path.exists()

    latest = _latest(client, headers)
    assert latest["activity_type"] == "profile_picture_upload"
    assert latest["metadata"]["filename"].endswith(".jpg")


def test_cv_upload_validates_extension(client: TestClient) -> None:
    headers = register_and_login(client)

    rejected = client.post(
        "/profile/cv", files={"file": ("cv.exe", b"MZ", "application/octet-stream")}, headers=headers
    )
    assert rejected.status_code == 400

    accepted = client.post(
        "/profile/cv", files={"file": ("cv.pdf", b"%PDF-1.4", "application/pdf")}, headers=headers
    )
    assert accepted.status_code == 200
    assert accepted.json()["cv_url"].endswith(".pdf")
    assert _latest(client, headers)["activity_type"] == "cv_upload"
