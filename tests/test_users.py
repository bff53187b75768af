import pytest
from fastapi.testclient import TestClient

from .utils import auth_headers, create_user


def test_admin_creates_and_lists_users(client: TestClient, admin_headers):
    user_id = create_user(client, admin_headers, "frank", role="project_lead")

    resp = client.get("/api/users", headers=admin_headers)
    assert resp.status_code == 200
    users = {u["username"]: u for u in resp.json()}
    assert set(users) == {"admin", "frank"}
    assert users["frank"]["id"] == user_id
    assert users["frank"]["role"] == "project_lead"
    assert users["frank"]["email"] == "frank@example.com"
    for user in users.values():
        assert "hashed_password" not in user
        assert "password" not in user


@pytest.mark.parametrize(
    "payload",
    [
        {"username": "admin", "email": "other@example.com"},
        {"username": "other", "email": "admin@pixelforge.com"},
    ],
)
def test_duplicate_username_or_email_conflicts(client: TestClient, admin_headers, payload):
    resp = client.post(
        "/api/users", json={**payload, "password": "secret123"}, headers=admin_headers
    )
    assert resp.status_code == 409
    assert resp.json() == {"error": "Username or email already exists"}


@pytest.mark.parametrize(
    "payload",
    [
        {"username": "ab", "email": "ab@example.com", "password": "secret123"},
        {"username": "valid", "email": "not-an-email", "password": "secret123"},
        {"username": "valid", "email": "valid@example.com", "password": "123"},
        # 40 characters, 80 bytes
        {"username": "valid", "email": "valid@example.com", "password": "ж" * 40},
        {"username": "valid", "email": "valid@example.com", "password": "secret123", "role": "root"},
    ],
)
def test_create_user_validates_input(client: TestClient, admin_headers, payload):
    resp = client.post("/api/users", json=payload, headers=admin_headers)
    assert resp.status_code == 422
    assert resp.json()["error"]


@pytest.mark.parametrize("role", ["project_lead", "developer"])
def test_non_admin_cannot_manage_users(client: TestClient, admin_headers, role):
    create_user(client, admin_headers, "grace", role=role)
    headers = auth_headers(client, "grace")

    list_resp = client.get("/api/users", headers=headers)
    assert list_resp.status_code == 403
    assert list_resp.json() == {"error": "Insufficient permissions"}

    create_resp = client.post(
        "/api/users",
        json={"username": "mallory", "email": "m@example.com", "password": "secret123"},
        headers=headers,
    )
    assert create_resp.status_code == 403


def test_available_users_lists_developers_by_username(client: TestClient, admin_headers):
    create_user(client, admin_headers, "zoe")
    create_user(client, admin_headers, "adam")
    create_user(client, admin_headers, "lead", role="project_lead")

    resp = client.get("/api/users/available", headers=auth_headers(client, "lead"))
    assert resp.status_code == 200
    assert [u["username"] for u in resp.json()] == ["adam", "zoe"]
    assert all(u["role"] == "developer" for u in resp.json())


def test_developer_cannot_list_available_users(client: TestClient, admin_headers):
    create_user(client, admin_headers, "dev")
    resp = client.get("/api/users/available", headers=auth_headers(client, "dev"))
    assert resp.status_code == 403
