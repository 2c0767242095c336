"""Tests for request ID tracing, security headers and log formatting."""
import json
import logging

from src.logging_config import JSONFormatter, RequestIDFilter
from src.middleware.request_id import request_id_var


async def test_response_includes_request_id(client):
    """Every response should have X-Request-ID header."""
    resp = await client.get("/health")
    rid = resp.headers["x-request-id"]
    assert len(rid) == 36  # UUID format


async def test_client_request_id_honored(client):
    resp = await client.get("/health", headers={"X-Request-ID": "my-trace-12345"})
    assert resp.headers["x-request-id"] == "my-trace-12345"


async def test_oversized_client_request_id_replaced(client):
    resp = await client.get("/health", headers={"X-Request-ID": "x" * 200})
    assert len(resp.headers["x-request-id"]) == 36


async def test_security_headers_present(client):
    resp = await client.get("/health")
    assert resp.headers["x-content-type-options"] == "nosniff"
    assert resp.headers["x-frame-options"] == "DENY"
    assert "strict-origin" in resp.headers["referrer-policy"]
    assert "max-age=31536000" in resp.headers["strict-transport-security"]


async def test_private_endpoints_no_cache(client, auth):
    resp = await client.get("/api/v1/me/lost-pets", headers=auth)
    assert "no-store" in resp.headers.get("cache-control", "")
    resp = await client.post("/api/v1/auth/login", json={"email": "x@x.com", "password": "wrong-pass"})
    assert "no-store" in resp.headers.get("cache-control", "")


async def test_public_feed_cacheable(client):
    resp = await client.get("/api/v1/adoption-pets")
    assert "no-store" not in resp.headers.get("cache-control", "")


async def test_health_and_ready(client):
    resp = await client.get("/health")
    assert resp.json()["status"] == "ok"
    resp = await client.get("/ready")
    assert resp.json() == {"ready": True}


def _record(msg: str = "hola") -> logging.LogRecord:
    return logging.LogRecord("mascotas", logging.INFO, __file__, 1, msg, None, None)


def test_request_id_filter_defaults_to_dash():
    record = _record()
    RequestIDFilter().filter(record)
    assert record.request_id == "-"


def test_request_id_filter_uses_context():
    token = request_id_var.set("req-42")
    try:
        record = _record()
        RequestIDFilter().filter(record)
    finally:
        request_id_var.reset(token)
    assert record.request_id == "req-42"


def test_json_formatter():
    record = _record("listing approved")
    record.request_id = "req-7"
    line = json.loads(JSONFormatter().format(record))
    assert line["message"] == "listing approved"
    assert line["level"] == "INFO"
    assert line["request_id"] == "req-7"
