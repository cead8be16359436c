# tests/test_users.py
"""Tests for profile endpoints."""

from fastapi import status

from blog_platform.services import user_service
from tests.conftest import DEFAULT_PASSWORD, register


def test_get_public_profile(alice, client) -> None:
    _, user = alice

    response = client.get(f"/api/users/{user['_id']}")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["_id"] == user["_id"]
    assert data["username"] == "alice"
    assert "hashedPassword" not in data
    assert "password" not in data


def test_get_missing_profile_is_404(client) -> None:
    response = client.get("/api/users/999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["message"] == "User not found"


def test_own_profile_requires_session(alice, client) -> None:
    assert client.get("/api/users/profile").status_code == status.HTTP_401_UNAUTHORIZED

    response = alice[0].get("/api/users/profile")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["_id"] == alice[1]["_id"]


def test_update_profile(alice) -> None:
    client, _ = alice

    response = client.put(
        "/api/users/profile",
        json={
            "username": "alice2",
            "email": "Alice2@Example.com",
            "bio": "Hello there",
            "profilePicture": "https://img.example.com/me.png",
        },
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["username"] == "alice2"
    assert data["email"] == "alice2@example.com"
    assert data["bio"] == "Hello there"
    assert data["profilePicture"] == "https://img.example.com/me.png"

    assert client.get("/api/auth/me").json()["username"] == "alice2"


def test_update_profile_blank_fields_keep_values_but_bio_can_be_cleared(alice) -> None:
    client, user = alice
    client.put("/api/users/profile", json={"bio": "something"})

    data = client.put(
        "/api/users/profile",
        json={"username": "", "email": "", "profilePicture": "", "bio": ""},
    ).json()
    assert data["username"] == user["username"]
    assert data["email"] == user["email"]
    assert data["profilePicture"] == user["profilePicture"]
    assert data["bio"] == ""


def test_update_profile_to_taken_identity_conflicts(alice, bob) -> None:
    client, _ = alice

    taken_email = client.put("/api/users/profile", json={"email": "bob@example.com"})
    assert taken_email.status_code == status.HTTP_400_BAD_REQUEST
    assert taken_email.json()["message"] == "Email already in use"

    taken_name = client.put("/api/users/profile", json={"username": "bob"})
    assert taken_name.status_code == status.HTTP_400_BAD_REQUEST
    assert taken_name.json()["message"] == "Username already taken"


def test_update_profile_race_on_unique_index_is_conflict(alice, bob, monkeypatch) -> None:
    client, _ = alice

    async def passes_check(*args, **kwargs) -> None:
        return None

    monkeypatch.setattr(user_service, "ensure_unique_identity", passes_check)

    response = client.put("/api/users/profile", json={"username": "bob"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["message"] == "Email or username already in use"

    # сессия после rollback рабочая, имя не поменялось
    assert client.get("/api/users/profile").json()["username"] == "alice"


def test_update_profile_with_own_values_is_allowed(alice) -> None:
    client, user = alice
    response = client.put(
        "/api/users/profile",
        json={"username": user["username"], "email": user["email"]},
    )
    assert response.status_code == status.HTTP_200_OK


def test_change_password(alice, make_client) -> None:
    client, user = alice

    response = client.put(
        "/api/users/password",
        json={"currentPassword": DEFAULT_PASSWORD, "newPassword": "new-secret-456"},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"message": "Password updated successfully"}

    other = make_client()
    old = other.post("/api/auth/login", json={"email": user["email"], "password": DEFAULT_PASSWORD})
    assert old.status_code == status.HTTP_401_UNAUTHORIZED
    new = other.post("/api/auth/login", json={"email": user["email"], "password": "new-secret-456"})
    assert new.status_code == status.HTTP_200_OK


def test_change_password_wrong_current(alice) -> None:
    response = alice[0].put(
        "/api/users/password",
        json={"currentPassword": "wrong-one", "newPassword": "new-secret-456"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["message"] == "Current password is incorrect"


def test_change_password_rejects_short_new_password(alice) -> None:
    response = alice[0].put(
        "/api/users/password",
        json={"currentPassword": DEFAULT_PASSWORD, "newPassword": "123"},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST


def test_change_password_requires_session(client) -> None:
    register(client, "carol")
    client.post("/api/auth/logout")
    response = client.put(
        "/api/users/password",
        json={"currentPassword": DEFAULT_PASSWORD, "newPassword": "new-secret-456"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
