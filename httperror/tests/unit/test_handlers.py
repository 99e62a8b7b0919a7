"""Unit tests for the FastAPI exception handlers."""

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from httperror.shared.errors import (
    HttpError,
    build_error_response,
    register_exception_handlers,
    setup_exception_handlers,
)


@pytest.fixture
def app() -> FastAPI:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/missing")
    def missing():
        raise HttpError.not_found()

    @app.get("/login")
    def login():
        raise HttpError.bad_login("Invalid credentials")

    @app.get("/boom")
    def boom():
        raise HttpError.bug("db password=hunter2 rejected", ConnectionResetError("reset"))

    @app.get("/crash")
    def crash():
        raise RuntimeError("secret internals")

    @app.get("/todo")
    def todo():
        raise NotImplementedError

    @app.get("/forbidden")
    def forbidden():
        raise HTTPException(status_code=403, detail="nope")

    @app.get("/private")
    def private():
        raise HTTPException(
            status_code=401, detail="Login required", headers={"WWW-Authenticate": "Bearer"}
        )

    @app.post("/orders")
    def create_order():
        raise HTTPException(status_code=409, detail={"field": "sku", "reason": "duplicate"})

    @app.get("/accounts")
    def accounts(pin: int):
        return {"pin": pin}

    @app.get("/items/{item_id}")
    def read_item(item_id: int):
        return {"item_id": item_id}

    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


class TestHttpErrorHandler:
    """Tests for raised HttpError values."""

    def test_client_error_response(self, client):
        response = client.get("/missing")

        assert response.status_code == 404
        assert response.headers["X-Error-Code"] == "NOT_FOUND"
        assert response.json() == {
            "error": "NOT_FOUND",
            "message": "No such resource",
            "status": 404,
            "trace_id": "",
        }

    def test_bug_response_hides_internal_detail(self, client):
        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json()["message"] == "Internal service error"
        assert "hunter2" not in response.text
        assert "reset" not in response.text

    def test_server_error_logs_cause_chain(self, client, log_records):
        client.get("/boom")

        errors = [r for r in log_records if r["level"].name == "ERROR"]
        assert len(errors) == 1
        extra = errors[0]["extra"]
        assert extra["status"] == 500
        assert extra["path"] == "/boom"
        assert extra["method"] == "GET"
        assert "InternalError: db password=hunter2 rejected" in extra["cause_chain"]
        assert "ConnectionResetError: reset" in extra["cause_chain"]

    def test_client_error_logs_at_debug_by_default(self, client, log_records):
        client.get("/login")

        events = [r for r in log_records if r["extra"].get("event") == "http.error"]
        assert [r["level"].name for r in events] == ["DEBUG"]

    def test_custom_error_code_header(self, client, monkeypatch):
        monkeypatch.setenv("ERRORS_ERROR_CODE_HEADER", "X-Problem")

        response = client.get("/login")

        assert response.headers["X-Problem"] == "UNAUTHORIZED"
        assert "X-Error-Code" not in response.headers

    def test_trace_id_can_be_omitted(self, client, monkeypatch):
        monkeypatch.setenv("ERRORS_INCLUDE_TRACE_ID", "false")

        response = client.get("/missing")

        assert "trace_id" not in response.json()


class TestFrameworkErrors:
    """Tests for errors raised by FastAPI/Starlette themselves."""

    def test_validation_error_is_bad_request(self, client):
        response = client.get("/items/abc")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request parameters"
        assert "abc" not in response.text

    def test_validation_log_leaves_out_rejected_input(self, client, log_records):
        response = client.get("/accounts", params={"pin": "hunter2-secret"})

        assert response.status_code == 400
        [record] = [r for r in log_records if r["extra"].get("event") == "http.error"]
        chain = record["extra"]["cause_chain"]
        assert "InternalError: Request validation failed: query.pin: int_parsing" in chain
        assert not any("hunter2-secret" in line for line in chain)

    def test_valid_request_is_untouched(self, client):
        response = client.get("/items/7")

        assert response.status_code == 200
        assert response.json() == {"item_id": 7}

    def test_http_exception_keeps_status_and_detail(self, client):
        response = client.get("/forbidden")

        assert response.status_code == 403
        assert response.json()["message"] == "nope"
        assert response.json()["error"] == "FORBIDDEN"

    def test_http_exception_structured_detail_uses_status_phrase(self, client):
        response = client.post("/orders")

        assert response.status_code == 409
        assert response.json()["message"] == "Conflict"
        assert "duplicate" not in response.text

    def test_http_exception_headers_are_kept(self, client):
        response = client.get("/private")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.headers["X-Error-Code"] == "UNAUTHORIZED"

    def test_unknown_route(self, client):
        response = client.get("/no-such-route")

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"


class TestUnhandledErrors:
    """Tests for the catch-all handler."""

    def test_unexpected_exception_is_internal_error(self, client):
        response = client.get("/crash")

        assert response.status_code == 500
        assert response.json()["message"] == "Internal service error"
        assert "secret internals" not in response.text

    def test_mapped_exception_keeps_status(self, client):
        response = client.get("/todo")

        assert response.status_code == 501
        assert response.json()["message"] == "Not implemented"


class TestBuildErrorResponse:
    """Tests for build_error_response outside a request."""

    def test_renders_status_and_body(self, trace_id):
        response = build_error_response(HttpError.feature_unavailable("Maintenance"))

        assert response.status_code == 503
        assert response.headers["x-error-code"] == "SERVICE_UNAVAILABLE"
        assert b'"trace_id":"trace-abc123"' in response.body

    def test_empty_header_name_disables_header(self, monkeypatch):
        monkeypatch.setenv("ERRORS_ERROR_CODE_HEADER", "")

        response = build_error_response(HttpError.bad_request("x"))

        assert "x-error-code" not in response.headers


def test_register_alias():
    assert register_exception_handlers is setup_exception_handlers


def test_handlers_are_registered():
    app = FastAPI()
    setup_exception_handlers(app)

    assert HttpError in app.exception_handlers
    assert Exception in app.exception_handlers
