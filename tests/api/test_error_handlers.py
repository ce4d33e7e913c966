"""
tests.api.test_error_handlers

Purpose:
    End-to-end tests: exceptions raised from routes come back as the stable
    ErrorResponse envelope (or an empty body for a gone client).
"""

from __future__ import annotations

import logging

import pytest
from fastapi import Request

from backend.api.contracts.error_contract import DEFAULT_GLOBAL_MESSAGE, ErrorCode
from backend.api.errors import BadRequestError, PrepError
from backend.api.logging.request_context import bind_query_id
from backend.api.security.exceptions import AccessDeniedException, InvalidTokenException


@pytest.fixture()
def failing_app(app_factory):
    app = app_factory(print_stack_trace=False)

    @app.get("/v1/bad-input")
    def bad_input():
        raise BadRequestError("Invalid input", code="E100")

    @app.get("/v1/crash")
    def crash():
        raise RuntimeError("NullPointer at line 12")

    @app.get("/v1/denied")
    def denied():
        raise AccessDeniedException("user lacks PERM_SYSTEM_MANAGE_DATASOURCE")

    @app.get("/v1/expired")
    def expired():
        raise InvalidTokenException("token expired")

    @app.get("/v1/prep")
    def prep():
        raise PrepError("msg.dp.alert.rule.failed", "column 'price' not found")

    @app.get("/v1/items/{item_id}")
    def item(item_id: int):
        return {"item_id": item_id}

    @app.get("/v1/stream")
    def stream(request: Request):
        bind_query_id("q-from-route", request=request)
        raise BrokenPipeError(32, "Broken pipe")

    @app.get("/v1/stream-async")
    async def stream_async():
        bind_query_id("q-async")
        raise BrokenPipeError(32, "Broken pipe")

    @app.get("/v1/reset")
    def reset():
        raise ConnectionResetError("Connection reset")

    return app


def test_declared_status_error(client_factory, failing_app) -> None:
    r = client_factory(failing_app).get("/v1/bad-input", headers={"X-Request-Id": "req-1"})

    assert r.status_code == 400, r.text
    assert r.json() == {"code": "E100", "message": "Invalid input", "details": "Invalid input"}
    assert r.headers["x-request-id"] == "req-1"


def test_unknown_error_is_500_and_handled_once(client_factory, failing_app, caplog) -> None:
    with caplog.at_level(logging.ERROR):
        r = client_factory(failing_app).get("/v1/crash", headers={"X-Request-Id": "req-9"})

    assert r.status_code == 500
    assert r.headers["x-request-id"] == "req-9"
    error_records = [
        rec for rec in caplog.records
        if rec.levelno >= logging.ERROR and "NullPointer at line 12" in rec.getMessage()
    ]
    assert len(error_records) == 1
    assert r.json() == {
        "code": None,
        "message": DEFAULT_GLOBAL_MESSAGE,
        "details": "NullPointer at line 12",
    }


def test_security_errors_are_normalized(client_factory, failing_app) -> None:
    client = client_factory(failing_app)

    r = client.get("/v1/denied")
    assert r.status_code == 403
    assert r.json()["code"] == ErrorCode.ACCESS_DENIED.value
    assert r.json()["details"] == "user lacks PERM_SYSTEM_MANAGE_DATASOURCE"

    r = client.get("/v1/expired")
    assert r.status_code == 401
    assert r.json()["code"] == ErrorCode.INVALID_TOKEN.value


def test_prep_error(client_factory, failing_app) -> None:
    r = client_factory(failing_app).get("/v1/prep")

    assert r.status_code == 500
    assert r.json() == {
        "code": ErrorCode.PREP_ERROR.value,
        "message": DEFAULT_GLOBAL_MESSAGE,
        "details": "msg.dp.alert.rule.failed: column 'price' not found",
    }


def test_argument_type_mismatch_is_bad_request(client_factory, failing_app) -> None:
    r = client_factory(failing_app).get("/v1/items/not-a-number")

    assert r.status_code == 400, r.text
    data = r.json()
    assert data["code"] == ErrorCode.BAD_REQUEST.value
    assert data["details"].startswith("item_id: ")


def test_unknown_route_uses_error_envelope(client) -> None:
    r = client.get("/v1/does-not-exist")

    assert r.status_code == 404
    assert r.json() == {
        "code": ErrorCode.NOT_FOUND.value,
        "message": "Resource not found",
        "details": "404: Not Found",
    }


def test_other_io_error_does_not_cancel(client_factory, failing_app, canceller) -> None:
    client = client_factory(failing_app)
    r = client.get("/v1/reset")

    assert r.status_code == 500
    assert r.json()["details"] == "Connection reset"
    assert canceller.cancelled == []


def test_async_route_bound_query_id_is_cancelled(client_factory, failing_app, canceller) -> None:
    r = client_factory(failing_app).get("/v1/stream-async")

    assert r.content == b""
    assert canceller.cancelled == ["q-async"]


def test_broken_pipe_suppresses_body_and_cancels_bound_query(
    client_factory, failing_app, canceller
) -> None:
    r = client_factory(failing_app).get("/v1/stream")

    assert r.status_code == 503
    assert r.content == b""
    assert canceller.cancelled == ["q-from-route"]


def test_client_supplied_query_id_header_is_ignored(app_factory, client_factory, canceller) -> None:
    app = app_factory()

    @app.get("/v1/export")
    def export():
        raise BrokenPipeError(32, "Broken pipe")

    r = client_factory(app).get("/v1/export", headers={"X-Query-Id": "someone-elses-query"})

    assert r.content == b""
    assert canceller.cancelled == []


def test_broken_pipe_without_query_id(app_factory, client_factory, canceller) -> None:
    app = app_factory()

    @app.get("/v1/export")
    def export():
        raise BrokenPipeError(32, "Broken pipe")

    r = client_factory(app).get("/v1/export")

    assert r.content == b""
    assert canceller.cancelled == []
