"""Integration tests for the activity endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import register_and_login


def test_recent_activity_requires_authentication(client: TestClient) -> None:
    response = client.get("/activity/recent")
    assert response.status_code == 401


def test_registration_and_login_appear_in_feed(client: TestClient) -> None:
    headers = register_and_login(client)

    response = client.get("/activity/recent", headers=headers)

    assert response.status_code == 200
    activities = response.json()["activities"]
    assert [item["activity_type"] for item in activities] == ["login", "account_created"]
    welcome = activities[1]
    assert welcome["title"] == "Welcome to DYPSE!"
    assert welcome["description"] == "Your account has been created successfully"
    assert set(welcome) == {
        "id",
        "user_id",
        "activity_type",
        "title",
        "description",
        "metadata",
        "created_at",
    }


def test_recent_activity_is_scoped_to_the_caller(client: TestClient) -> None:
    first = register_and_login(client, email="first@example.com")
    second = register_and_login(client, email="second@example.com")
    client.put("/profile/me", json={"bio": "Hello"}, headers=first)

    first_types = [
        item["activity_type"]
        for item in client.get("/activity/recent", headers=first).json()["activities"]
    ]
    second_items = client.get("/activity/recent", headers=second).json()["activities"]

    assert "profile_update" in first_types
    assert "profile_update" not in [item["activity_type"] for item in second_items]
    assert len({item["user_id"] for item in second_items}) == 1


def test_recent_activity_honours_limit_and_types(client: TestClient) -> None:
    headers = register_and_login(client)
    client.put("/profile/me", json={"bio": "Hello"}, headers=headers)
    client.put("/profile/me", json={"location": "Harare"}, headers=headers)

    limited = client.get("/activity/recent", params={"limit": 1}, headers=headers)
    filtered = client.get(
        "/activity/recent",
        params={"types": "profile_update,account_created"},
        headers=headers,
    )

    assert len(limited.json()["activities"]) == 1
    assert [item["activity_type"] for item in filtered.json()["activities"]] == [
        "profile_update",
        "profile_update",
        "account_created",
    ]


def test_unknown_type_filter_returns_400(client: TestClient) -> None:
    headers = register_and_login(client)

    response = client.get("/activity/recent", params={"types": "bogus"}, headers=headers)

    assert response.status_code == 400
    assert "bogus" in response.json()["detail"]


def test_activity_stats(client: TestClient) -> None:
    headers = register_and_login(client)
    client.post("/profile/skills", json={"name": "Python"}, headers=headers)
    client.post("/profile/skills", json={"name": "SQL"}, headers=headers)

    response = client.get("/activity/stats", params={"days": 7}, headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["period"] == "7 days"
    assert body["stats"]["skill_add"] == 2
    assert body["stats"]["account_created"] == 1
    assert body["stats"]["login"] == 1


def test_activity_stats_default_and_bounds(client: TestClient) -> None:
    headers = register_and_login(client)

    assert client.get("/activity/stats", headers=headers).json()["period"] == "30 days"
    assert client.get("/activity/stats", params={"days": 0}, headers=headers).status_code == 422
    assert client.get("/activity/stats", params={"days": 366}, headers=headers).status_code == 422
