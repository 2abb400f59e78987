from __future__ import annotations

from fastapi.testclient import TestClient
from httpx import AsyncClient


def test_root_returns_greeting(offline_client: TestClient) -> None:
    response = offline_client.get("/")

    assert response.status_code == 200
    assert response.json() == {"success": "Hello World"}


def test_request_id_is_echoed(offline_client: TestClient) -> None:
    response = offline_client.get("/", headers={"X-Request-ID": "req-42"})

    assert response.headers["X-Request-ID"] == "req-42"


def test_request_id_is_generated_when_absent(offline_client: TestClient) -> None:
    response = offline_client.get("/")

    assert response.headers["X-Request-ID"]


async def test_health_endpoint_reports_database(async_client: AsyncClient) -> None:
    response = await async_client.get("/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["service"]
    assert payload["status"] == "ok"
    assert payload["datastores"]["database"] == {"status": "ok"}
