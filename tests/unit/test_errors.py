from __future__ import annotations

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from assessmenttasks.api.errors import ApiError, persistence_failure
from assessmenttasks.domain.services import auth_service
from assessmenttasks.domain.services.assessments import AssessmentService
from assessmenttasks.domain.services.errors import PersistenceError


def test_api_error_without_code_has_message_only() -> None:
    assert ApiError(404, "Assessment not found").to_body() == {"message": "Assessment not found"}


def test_persistence_failure_body_is_structured() -> None:
    body = persistence_failure("Error creating assessment").to_body()

    assert body["message"] == "Error creating assessment"
    assert body["error"]["code"] == "persistence_error"


async def test_store_failure_is_reported_without_internals(
    async_client: AsyncClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    async def broken_list(self: AssessmentService) -> list:
        raise PersistenceError("Could not read assessments") from OperationalError(
            "SELECT * FROM assessments", {}, Exception("disk I/O error at /var/lib/secret")
        )

    monkeypatch.setattr(AssessmentService, "list_all", broken_list)

    response = await async_client.get("/assessments")

    assert response.status_code == 500
    body = response.json()
    assert body["message"] == "Error fetching assessments"
    assert body["error"]["code"] == "persistence_error"
    assert "secret" not in response.text
    assert "SELECT" not in response.text


async def test_register_store_failure_returns_500(
    async_client: AsyncClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    async def broken_register(self: auth_service.AuthService, **_: object) -> str:
        raise PersistenceError("Could not store user")

    monkeypatch.setattr(auth_service.AuthService, "register_user", broken_register)

    response = await async_client.post(
        "/register", json={"username": "a", "password": "b", "email": "c@example.com"}
    )

    assert response.status_code == 500
    assert response.json()["message"] == "Error registering user"


async def test_structurally_invalid_body_is_422(async_client: AsyncClient) -> None:
    response = await async_client.post("/login", json={"email": "a@example.com"})

    assert response.status_code == 422
    body = response.json()
    assert body["message"] == "Invalid request body"
    assert body["error"]["code"] == "validation_error"
    assert body["error"]["details"]


@pytest.mark.filterwarnings("error::DeprecationWarning:assessmenttasks")
async def test_validation_handler_emits_no_deprecation(async_client: AsyncClient) -> None:
    response = await async_client.post("/assessments", json=["not", "an", "object"])

    assert response.status_code == 422
