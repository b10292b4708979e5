import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from gymdesk.adapters.configuration.config import settings
from gymdesk.domain.exceptions import (
    InvalidInputException,
    RenewalPreconditionException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
)
from gymdesk.shared.middleware.exception_middleware import AsyncExceptionMiddleware


@pytest.fixture
async def failing_api():
    app = FastAPI()
    app.add_middleware(AsyncExceptionMiddleware)

    @app.get("/not-found")
    async def not_found():
        raise ResourceNotFoundException(detail="Client not found", resource_id=9)

    @app.get("/conflict")
    async def conflict():
        raise ResourceAlreadyExistsException(detail="User 'x' already exists")

    @app.get("/invalid")
    async def invalid():
        raise InvalidInputException(detail="Invalid payment", fields={"client_id": "unknown"})

    @app.get("/precondition")
    async def precondition():
        raise RenewalPreconditionException(detail="Client and payment belong to different gyms")

    @app.get("/database")
    async def database():
        raise OperationalError("SELECT 1", {}, Exception("connection lost"))

    @app.get("/boom")
    async def boom():
        raise RuntimeError("unexpected")

    @app.get("/ok")
    async def ok():
        return {"ok": True}

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.mark.parametrize(
    "path, status_code, code",
    [
        ("/not-found", 404, "RESOURCE_NOT_FOUND"),
        ("/conflict", 409, "RESOURCE_ALREADY_EXISTS"),
        ("/invalid", 400, "INVALID_INPUT"),
        ("/precondition", 500, "RENEWAL_PRECONDITION_FAILED"),
        ("/database", 500, "DATABASE_ERROR"),
        ("/boom", 500, "INTERNAL_SERVER_ERROR"),
    ],
)
async def test_errors_are_mapped_to_status_codes(failing_api, path, status_code, code):
    response = await failing_api.get(path)

    assert response.status_code == status_code
    assert response.json()["code"] == code


async def test_invalid_input_lists_fields(failing_api):
    body = (await failing_api.get("/invalid")).json()
    assert body["errors"] == {"client_id": "unknown"}
    assert body["detail"] == "Invalid payment: client_id: unknown"


async def test_internal_details_are_hidden_in_production(failing_api, monkeypatch):
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")

    assert (await failing_api.get("/precondition")).json()["detail"] == "Internal server error"
    assert (await failing_api.get("/database")).json()["detail"] == "Internal database error"
    assert (await failing_api.get("/boom")).json()["detail"] == "Internal server error"
    # client errors keep their message
    assert (await failing_api.get("/not-found")).json()["detail"] == "Client not found (ID: 9)"


async def test_successful_responses_carry_process_time(failing_api):
    response = await failing_api.get("/ok")
    assert response.status_code == 200
    assert "X-Process-Time" in response.headers
