from __future__ import annotations

import asyncio

import pytest

from taskboard.services import user as user_service


def test_create_user_hides_password(client):
    response = client.post("/api/users", json={
        "username": "ivanov",
        "password": "secret",
        "email": "ivanov@example.com",
        "fullName": "Ivan Ivanov",
    })

    assert response.status_code == 201
    body = response.json()
    assert body["username"] == "ivanov"
    assert body["email"] == "ivanov@example.com"
    assert body["fullName"] == "Ivan Ivanov"
    assert "password" not in body
    assert "hashedPassword" not in body


def test_empty_email_normalizes_to_null(client, make_user):
    user = make_user(email="")

    assert user["email"] is None


def test_invalid_email_and_short_username(client):
    response = client.post("/api/users", json={
        "username": "ab", "password": "secret", "email": "not-an-email"})

    assert response.status_code == 400
    fields = {detail["field"] for detail in response.json()["details"]}
    assert fields == {"username", "email"}


def test_duplicate_username_is_rejected(client, make_user):
    make_user("ivanov")

    response = client.post("/api/users", json={"username": "ivanov", "password": "other"})

    assert response.status_code == 400
    assert "error" in response.json()


def test_users_sorted_by_username(client, make_user):
    make_user("zed")
    make_user("amy")

    names = [u["username"] for u in client.get("/api/users").json()]

    assert names == ["amy", "zed"]


def test_partial_update(client, make_user):
    user = make_user("ivanov", fullName="Ivan")

    response = client.put(f"/api/users/{user['id']}", json={"email": "i@example.com"})

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "i@example.com"
    assert body["fullName"] == "Ivan"
    assert body["username"] == "ivanov"


def test_rename_to_taken_username_is_rejected(client, make_user):
    make_user("ivanov")
    petrov = make_user("petrov")

    response = client.put(f"/api/users/{petrov['id']}", json={"username": "ivanov"})

    assert response.status_code == 400


def test_delete_user_unassigns_tasks(client, make_user, make_task):
    user = make_user("ivanov")
    task = make_task(assignedToUserId=user["id"])

    response = client.delete(f"/api/users/{user['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "User deleted successfully"}
    assert client.get(f"/api/users/{user['id']}").status_code == 404
    assert client.get(f"/api/tasks/{task['id']}").json()["assignedToUserId"] is None


def test_missing_user(client):
    assert client.get("/api/users/10").json() == {"error": "User not found"}
    assert client.delete("/api/users/10").status_code == 404
    assert client.get("/api/users/ten").status_code == 400


def _stored_hash(session_factory, user_id: int) -> str:
    async def _load():
        async with session_factory() as db:
            return await user_service.get_user(db, user_id)

    user = asyncio.run(_load())
    return user["hashed_password"] if isinstance(user, dict) else user.hashed_password


@pytest.mark.parametrize("password", ["x" * 100, "пароль" * 7, "秘密" * 40])
def test_long_password_is_accepted_and_hashed(client, session_factory, password_matches, password):
    response = client.post("/api/users", json={"username": "longpw", "password": password})

    assert response.status_code == 201, response.text
    hashed = _stored_hash(session_factory, response.json()["id"])
    assert password_matches(password, hashed)
    # пароли с общим 72-байтным началом не совпадают
    assert not password_matches(password[:-1] + "!", hashed)


def test_update_to_long_password(client, make_user, session_factory, password_matches):
    user = make_user("ivanov")
    password = "п" * 100

    response = client.put(f"/api/users/{user['id']}", json={"password": password})

    assert response.status_code == 200, response.text
    hashed = _stored_hash(session_factory, user["id"])
    assert password_matches(password, hashed)
    assert not password_matches("secret", hashed)


def test_password_over_100_chars_is_rejected(client):
    response = client.post("/api/users", json={"username": "longpw", "password": "x" * 101})

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "password"


def test_concurrent_duplicate_username_is_a_conflict(client, make_user, monkeypatch):
    make_user("ivanov")

    async def _checked_before_insert(db, username, own_id=None):
        return None

    # проверка уже пройдена, а строку успел записать другой запрос
    monkeypatch.setattr(user_service, "_ensure_unique_username", _checked_before_insert)

    response = client.post("/api/users", json={"username": "ivanov", "password": "other"})

    assert response.status_code == 400
    assert response.json() == {"error": "User with this username already exists"}
    assert len(client.get("/api/users").json()) == 1
