# tests/test_api_errors.py
import logging

from fastapi.testclient import TestClient

import propeval.api.http as http
from propeval.domain.errors import ComputationFault
from fixtures.properties import baseline_payload


def test_missing_required_field_returns_400(client):
    bad_payload = baseline_payload()
    del bad_payload["monthlyRent"]  # missing on purpose

    r = client.post("/api/analyze", json=bad_payload)
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert "Missing required fields" in body["error"]
    assert body["fields"] == ["monthlyRent"]


def test_non_positive_price_returns_400(client):
    r = client.post("/api/analyze", json=baseline_payload() | {"price": -5})
    assert r.status_code == 400
    assert r.json()["fields"] == ["price"]


def test_non_object_body_returns_400(client):
    r = client.post("/api/analyze", json=[1, 2, 3])
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": "Property payload must be a JSON object"}


def test_malformed_json_returns_400(client):
    r = client.post(
        "/api/analyze",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["success"] is False


def test_internal_fault_returns_500(client, monkeypatch):
    def _fault(payload):
        raise ComputationFault("non-finite metrics: cap_rate")

    monkeypatch.setattr(http, "analyze_property", _fault)
    r = client.post("/api/analyze", json=baseline_payload())
    assert r.status_code == 500
    assert r.json() == {"success": False, "error": "Internal server error during analysis"}


def test_unknown_route_returns_404(client):
    r = client.get("/api/analyses")
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Endpoint not found"}


def test_request_is_logged_when_handler_raises(monkeypatch):
    events = []

    def _record(logger, event, level=logging.INFO, exc_info=False, **context):
        events.append((event, context))

    def _explode(moment):
        raise RuntimeError("clock broke")

    monkeypatch.setattr(http, "log_event", _record)
    monkeypatch.setattr(http, "iso_timestamp", _explode)

    with TestClient(http.app, raise_server_exceptions=False) as client:
        r = client.get("/api/health")
    assert r.status_code == 500

    access = [ctx for event, ctx in events if event == "http_request"]
    assert len(access) == 1
    assert access[0]["path"] == "/api/health"
    assert access[0]["status"] == 500
    assert "duration_ms" in access[0]
