"""Tests for the health check endpoint."""

import json

from webtools.catalog import get_all_tools


def test_healthz_ok(client):
    """Test that the health endpoint returns 200 with correct JSON."""
    response = client.get("/healthz")

    assert response.status_code == 200
    assert response.content_type == "application/json"

    data = json.loads(response.data)
    assert data == {"status": "ok", "tools": len(get_all_tools())}
