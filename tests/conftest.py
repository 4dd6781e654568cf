from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from konnect_mcp.api import KonnectClient
from konnect_mcp.config import KonnectConfig


def raw_request(**overrides: Any) -> dict[str, Any]:
    """A raw api-requests record with sensible defaults."""
    record = {
        "request_id": "req-1",
        "request_start": "2025-06-01T10:00:00Z",
        "http_method": "GET",
        "request_uri": "/orders",
        "status_code": 200,
        "consumer": "cp1:alice",
        "gateway_service": "cp1:orders",
        "route": "cp1:orders-route",
        "latencies_response_ms": 100,
        "latencies_kong_gateway_ms": 10,
        "latencies_upstream_ms": 90,
        "client_ip": "10.0.0.1",
        "trace_id": "trace-1",
    }
    record.update(overrides)
    return {k: v for k, v in record.items() if v is not None}


def api_requests_payload(results: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "meta": {
            "size": len(results),
            "time_range": {"start": "2025-06-01T09:00:00Z", "end": "2025-06-01T10:00:00Z"},
        },
        "results": results,
    }


class RecordingHandler:
    """httpx MockTransport handler that records requests and replies from a callable."""

    def __init__(self, reply: Callable[[httpx.Request], httpx.Response]):
        self.reply = reply
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.reply(request)

    @property
    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def config() -> KonnectConfig:
    return KonnectConfig(api_key="kpat_test", region="eu")


@pytest.fixture
def make_client(config: KonnectConfig):
    def _make(reply: Callable[[httpx.Request], httpx.Response]) -> tuple[KonnectClient, RecordingHandler]:
        handler = RecordingHandler(reply)
        return KonnectClient(config, transport=httpx.MockTransport(handler)), handler

    return _make
