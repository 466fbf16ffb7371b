"""
Tests for the uniform error envelope and request observability.
"""

import json
import logging
import pytest
from starlette.requests import Request
from fleetops.app.core.exceptions import (
    ResourceNotFoundError, InvalidStateTransitionError, generic_exception_handler
)


def make_request(path="/api/boom"):
    return Request({
        "type": "http",
        "method": "GET",
        "path": path,
        "headers": [],
        "query_string": b"",
    })


def test_not_found_error_message():
    error = ResourceNotFoundError("Trip", "abc")
    assert error.status_code == 404
    assert error.message == "Trip with ID abc not found"


def test_invalid_transition_details():
    error = InvalidStateTransitionError("Payout", "paid", "pending")
    assert error.status_code == 400
    assert error.details == {"resource": "Payout", "current_status": "paid", "expected_status": "pending"}


@pytest.mark.asyncio
async def test_generic_handler_hides_internals_and_logs(mocker):
    logger = mocker.patch("fleetops.app.core.exceptions.logger")

    response = await generic_exception_handler(make_request(), RuntimeError("db password is hunter2"))

    assert response.status_code == 500
    body = json.loads(response.body)
    assert body == {
        "error_code": "ERR_INTERNAL_SERVER",
        "message": "An internal server error occurred",
        "details": {}
    }
    logger.error.assert_called_once()


@pytest.mark.asyncio
async def test_validation_errors_use_envelope(client, admin_headers):
    response = await client.post("/api/vehicles", headers=admin_headers, json={"make": "Tata"})

    assert response.status_code == 422
    body = response.json()
    assert body["error_code"] == "ERR_VALIDATION"
    assert body["details"]["errors"]


@pytest.mark.asyncio
async def test_unknown_route_uses_envelope(client):
    response = await client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json()["error_code"] == "ERR_NOT_FOUND"


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Correlation-ID": "req-123"})

    assert response.headers["X-Correlation-ID"] == "req-123"
    assert "X-Process-Time" in response.headers


@pytest.mark.asyncio
async def test_each_request_is_logged_with_path_and_status(client, caplog):
    caplog.set_level(logging.INFO, logger="fleetops.requests")

    await client.get("/health", headers={"X-Correlation-ID": "req-456"})
    await client.get("/api/does-not-exist")

    records = [r for r in caplog.records if r.name == "fleetops.requests"]
    assert len(records) == 2

    ok, missing = (r.getMessage() for r in records)
    assert "GET /health -> 200" in ok
    assert "cid=req-456" in ok
    assert "GET /api/does-not-exist -> 404" in missing
    assert records[0].levelno == logging.INFO
    assert records[1].levelno == logging.WARNING
