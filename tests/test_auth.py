from datetime import timedelta

import jwt
from fastapi.testclient import TestClient
from pydantic import SecretStr

from pixelforge.core.security import create_access_token

from .utils import ADMIN_PASSWORD, DEFAULT_PASSWORD, auth_headers, create_user, login


def test_login_returns_token_and_user(client: TestClient):
    resp = login(client, "admin", ADMIN_PASSWORD)
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["token"]
    assert body["token_type"] == "bearer"
    assert body["user"]["username"] == "admin"
    assert body["user"]["role"] == "admin"
    assert "hashed_password" not in body["user"]
    assert "password" not in body["user"]


def test_token_carries_identity_and_24h_expiry(client: TestClient, settings):
    token = login(client, "admin", ADMIN_PASSWORD).json()["token"]
    claims = jwt.decode(token, settings.jwt_secret.get_secret_value(), algorithms=["HS256"])
    assert claims["username"] == "admin"
    assert claims["role"] == "admin"
    assert claims["exp"] - claims["iat"] == 24 * 60 * 60


def test_unknown_user_and_wrong_password_are_indistinguishable(client: TestClient, admin_headers):
    create_user(client, admin_headers, "dana")

    wrong_password = login(client, "dana", "not-the-password")
    unknown_user = login(client, "nobody", "not-the-password")

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {"error": "Invalid credentials"}


def test_oauth2_token_endpoint(client: TestClient):
    resp = client.post(
        "/api/auth/token",
        data={"username": "admin", "password": ADMIN_PASSWORD},
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["token_type"] == "bearer"

    me = client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {resp.json()['access_token']}"}
    )
    assert me.status_code == 200
    assert me.json()["username"] == "admin"


def test_missing_token_requires_authentication(client: TestClient):
    resp = client.get("/api/projects")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Authentication required"}
    assert resp.headers["WWW-Authenticate"] == "Bearer"


def test_garbage_token_is_rejected(client: TestClient):
    resp = client.get("/api/projects", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid or expired token"}


def test_expired_token_is_rejected(client: TestClient, settings):
    token = create_access_token(
        {"sub": "00000000-0000-0000-0000-000000000001", "username": "x", "role": "admin"},
        settings,
        expires_delta=timedelta(seconds=-5),
    )
    resp = client.get("/api/projects", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid or expired token"}


def test_token_signed_with_other_key_is_rejected(client: TestClient, settings):
    forged = settings.model_copy(
        update={"jwt_secret": SecretStr("another-secret-key-0123456789-abcdefgh")}
    )
    token = create_access_token(
        {"sub": "00000000-0000-0000-0000-000000000001", "username": "x", "role": "admin"},
        forged,
    )
    resp = client.get("/api/users", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_token_with_unknown_role_is_rejected(client: TestClient, settings):
    token = create_access_token(
        {"sub": "00000000-0000-0000-0000-000000000001", "username": "x", "role": "root"},
        settings,
    )
    resp = client.get("/api/projects", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_change_password(client: TestClient, admin_headers):
    create_user(client, admin_headers, "erin")
    headers = auth_headers(client, "erin")

    bad = client.post(
        "/api/auth/change-password",
        json={"current_password": "wrong", "new_password": "brand-new"},
        headers=headers,
    )
    assert bad.status_code == 400
    assert bad.json()["error"] == "Current password is incorrect"

    ok = client.post(
        "/api/auth/change-password",
        json={"current_password": DEFAULT_PASSWORD, "new_password": "brand-new"},
        headers=headers,
    )
    assert ok.status_code == 200, ok.text

    assert login(client, "erin", DEFAULT_PASSWORD).status_code == 401
    assert login(client, "erin", "brand-new").status_code == 200


def test_change_password_enforces_minimum_length(client: TestClient, admin_headers):
    resp = client.post(
        "/api/auth/change-password",
        json={"current_password": ADMIN_PASSWORD, "new_password": "123"},
        headers=admin_headers,
    )
    assert resp.status_code == 422
    assert "new_password" in resp.json()["error"]


def test_change_password_rejects_more_than_72_bytes(client: TestClient, admin_headers):
    resp = client.post(
        "/api/auth/change-password",
        json={"current_password": ADMIN_PASSWORD, "new_password": "a" * 73},
        headers=admin_headers,
    )
    assert resp.status_code == 422
    assert "new_password" in resp.json()["error"]

    resp = client.post(
        "/api/auth/change-password",
        json={"current_password": ADMIN_PASSWORD, "new_password": "é" * 37},
        headers=admin_headers,
    )
    assert resp.status_code == 422
    assert "72 bytes" in resp.json()["error"]
