from fastapi.testclient import TestClient

ADMIN_PASSWORD = "admin123"
DEFAULT_PASSWORD = "secret123"


def login(client: TestClient, username: str, password: str):
    return client.post("/api/auth/login", json={"username": username, "password": password})


def auth_headers(client: TestClient, username: str, password: str = DEFAULT_PASSWORD) -> dict[str, str]:
    resp = login(client, username, password)
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


def create_user(
    client: TestClient,
    admin_headers: dict[str, str],
    username: str,
    role: str = "developer",
    password: str = DEFAULT_PASSWORD,
) -> str:
    payload = {
        "username": username,
        "email": f"{username}@example.com",
        "password": password,
        "role": role,
    }
    resp = client.post("/api/users", json=payload, headers=admin_headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


def create_project(client: TestClient, admin_headers: dict[str, str], name: str = "Nexus") -> str:
    payload = {"name": name, "description": "Test project", "deadline": "2030-01-31"}
    resp = client.post("/api/projects", json=payload, headers=admin_headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


def assign(client: TestClient, headers: dict[str, str], project_id: str, user_id: str):
    return client.post(
        f"/api/projects/{project_id}/assignments", json={"user_id": user_id}, headers=headers
    )


def upload(
    client: TestClient,
    headers: dict[str, str],
    project_id: str,
    name: str = "notes.txt",
    content: bytes = b"x" * 1024,
    content_type: str = "text/plain",
):
    return client.post(
        f"/api/projects/{project_id}/documents",
        files={"file": (name, content, content_type)},
        headers=headers,
    )
