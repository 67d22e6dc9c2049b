"""Tests for health check endpoint."""

import pytest
import json
from io import BytesIO
from unittest.mock import Mock
from http.server import BaseHTTPRequestHandler
from api.health import handler, health_status


class MockSocket:
    def __init__(self, request_line: bytes):
        self.request_line = request_line

    def makefile(self, *args, **kwargs):
        return BytesIO(self.request_line)

    def sendall(self, data):
        pass

    def close(self):
        pass


def _call(method: str):
    h = handler(MockSocket(f"{method} /api/health HTTP/1.1\r\n\r\n".encode()), ("127.0.0.1", 8000), None)
    h.wfile = BytesIO()
    h.send_response = Mock()
    h.send_header = Mock()
    h.end_headers = Mock()

    getattr(h, f"do_{method}")()

    h.wfile.seek(0)
    return h.send_response.call_args[0][0], json.loads(h.wfile.read().decode('utf-8'))


@pytest.mark.unit
def test_health_handler_class():
    assert issubclass(handler, BaseHTTPRequestHandler)


@pytest.mark.unit
def test_health_get_request():
    """Test GET with Supabase credentials present."""
    status_code, body = _call("GET")

    assert status_code == 200
    assert body["status"] == "ok"
    assert body["service"] == "housekeeping-backend"
    assert body["checks"] == {"supabase_configured": True}
    assert body["report_default_range_days"] == 30


@pytest.mark.unit
def test_health_post_request():
    status_code, body = _call("POST")

    assert status_code == 200
    assert body["status"] == "ok"


@pytest.mark.unit
def test_health_degraded_without_credentials(monkeypatch):
    """Test that missing Supabase credentials report a degraded service."""
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)

    status_code, body = health_status()

    assert status_code == 503
    assert body["status"] == "degraded"
    assert body["checks"]["supabase_configured"] is False
