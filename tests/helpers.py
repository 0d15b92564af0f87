# tests/helpers.py

from fastapi.testclient import TestClient

TEST_PASSWORD = "Abc123"


def register(client: TestClient, email: str = "t@example.com", name: str = "Test", password: str = TEST_PASSWORD):
    """Register through the API and return (token, user) from the envelope"""
    response = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    assert response.status_code == 201, response.json()
    data = response.json()["data"]
    return data["token"], data["user"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
