"""Smoke test for the FastAPI healthcheck."""

from fastapi.testclient import TestClient


def test_healthcheck(client: TestClient) -> None:
    """The /health endpoint should return a success payload."""

    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
