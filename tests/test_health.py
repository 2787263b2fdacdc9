# tests/test_health.py
from fastapi import status
from fastapi.testclient import TestClient


def test_health_ok(client: TestClient) -> None:
    """Verify that the health endpoint reports ok."""
    r = client.get("/health")
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"status": "ok"}


def test_root_describes_service(client: TestClient) -> None:
    """Verify that the root endpoint names the service and its docs."""
    r = client.get("/")
    assert r.status_code == status.HTTP_200_OK
    body = r.json()
    assert body["docs"] == "/docs"
    assert "version" in body
