"""Tests for mcp_server helpers."""

import json
import time

import pytest
from pydantic import ValidationError

from mcp_analogy_memory import mcp_server
from mcp_analogy_memory.models.mcp_inputs import AnalogyParams


class TestInjectLatency:
    def test_disabled_leaves_response_untouched(self, monkeypatch):
        monkeypatch.setattr(mcp_server.settings.debug, "latency_metrics", False)
        assert mcp_server._inject_latency({"ok": True}, time.perf_counter()) == {"ok": True}

    def test_enabled_adds_latency(self, monkeypatch):
        monkeypatch.setattr(mcp_server.settings.debug, "latency_metrics", True)
        response = mcp_server._inject_latency({"ok": True}, time.perf_counter())
        assert response["latency_ms"] >= 0


def test_validation_error_payload_is_json_serialisable():
    with pytest.raises(ValidationError) as exc_info:
        AnalogyParams(problem_description="x", max_results=0)

    payload = mcp_server._validation_error(exc_info.value)
    assert payload["success"] is False
    assert payload["error"] == "Validation error"
    assert payload["details"][0]["loc"] == ["max_results"]
    json.dumps(payload)


class TestMain:
    def test_stdio_transport(self, monkeypatch):
        calls = []
        monkeypatch.setenv("MCP_TRANSPORT_MODE", "stdio")
        monkeypatch.setattr(mcp_server.mcp, "run", lambda **kwargs: calls.append(kwargs))
        mcp_server.main()
        assert calls == [{"transport": "stdio"}]

    def test_http_transport(self, monkeypatch):
        calls = []
        monkeypatch.delenv("MCP_TRANSPORT_MODE", raising=False)
        monkeypatch.setenv("MCP_SERVER_PORT", "9123")
        monkeypatch.setattr(mcp_server.mcp, "run", lambda **kwargs: calls.append(kwargs))
        mcp_server.main()
        assert calls == [{"transport": "http", "host": "0.0.0.0", "port": 9123, "stateless_http": True}]
