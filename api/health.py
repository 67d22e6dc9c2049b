"""Health check endpoint."""

from http.server import BaseHTTPRequestHandler
import json
import os

from src.services.report_fetcher import REPORT_DEFAULT_RANGE_DAYS

SERVICE_NAME = "housekeeping-backend"


def health_status() -> tuple[int, dict]:
    """Status code and payload; degraded when report reads cannot reach Supabase."""
    supabase_configured = bool(
        os.environ.get("SUPABASE_URL") and os.environ.get("SUPABASE_SERVICE_ROLE_KEY")
    )
    payload = {
        "status": "ok" if supabase_configured else "degraded",
        "service": SERVICE_NAME,
        "checks": {"supabase_configured": supabase_configured},
        "report_default_range_days": REPORT_DEFAULT_RANGE_DAYS,
    }
    return (200 if supabase_configured else 503), payload


class handler(BaseHTTPRequestHandler):
    """Health check handler for Vercel serverless function."""

    def do_GET(self):
        status_code, payload = health_status()
        self.send_response(status_code)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        self.wfile.write(json.dumps(payload).encode('utf-8'))

    def do_POST(self):
        """Same as GET for health checks."""
        self.do_GET()
