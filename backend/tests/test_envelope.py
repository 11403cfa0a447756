from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field

from cirec_admin.domain_errors import DomainError
from cirec_admin.envelope import build_domain_error_response, install_exception_handlers, ok


class _Probe(BaseModel):
    count: int = Field(ge=1)


def _probe_app() -> FastAPI:
    app = FastAPI()
    install_exception_handlers(app)

    @app.get("/domain")
    def _domain():
        raise DomainError(code="ROUTE_PROBLEM", http_status=409, message="route failed", details={"source": "test"})

    @app.get("/http")
    def _http():
        raise HTTPException(status_code=404, detail="Thing not found")

    @app.post("/validated")
    def _validated(payload: _Probe):
        return ok(payload.count)

    @app.get("/crash")
    def _crash():
        raise RuntimeError("secret internals")

    return app


def test_ok_envelope_shape() -> None:
    assert ok() == {"success": True}
    assert ok([1], message="done", total=1) == {"success": True, "message": "done", "data": [1], "total": 1}


def test_domain_error_payload_contains_stable_code() -> None:
    response = build_domain_error_response(
        DomainError(code="PROBE_ERROR", http_status=409, message="probe failed", details={"probe": True})
    )

    assert response.status_code == 409
    body = response.body.decode("utf-8")
    assert '"success":false' in body
    assert '"message":"probe failed"' in body
    assert '"code":"PROBE_ERROR"' in body
    assert '"details":{"probe":true}' in body


def test_domain_error_payload_omits_details_when_none() -> None:
    response = build_domain_error_response(DomainError(code="NO_DETAILS", http_status=400, message="bad"))

    assert '"details"' not in response.body.decode("utf-8")


def test_handlers_render_every_failure_as_envelope() -> None:
    client = TestClient(_probe_app(), raise_server_exceptions=False)

    domain = client.get("/domain")
    assert domain.status_code == 409
    assert domain.json() == {
        "success": False,
        "message": "route failed",
        "code": "ROUTE_PROBLEM",
        "details": {"source": "test"},
    }

    http = client.get("/http")
    assert http.status_code == 404
    assert http.json() == {"success": False, "message": "Thing not found"}

    unknown = client.get("/does-not-exist")
    assert unknown.status_code == 404
    assert unknown.json()["success"] is False


def test_validation_errors_are_bad_requests() -> None:
    client = TestClient(_probe_app(), raise_server_exceptions=False)

    response = client.post("/validated", json={"count": 0})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["code"] == "VALIDATION_ERROR"
    assert body["message"].startswith("count:")


def test_unexpected_errors_do_not_leak_internals() -> None:
    client = TestClient(_probe_app(), raise_server_exceptions=False)

    response = client.get("/crash")

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Internal server error", "code": "INTERNAL_ERROR"}
