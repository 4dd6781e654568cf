"""
Canonical view of API request records returned by the analytics backend.

Raw records are sparse: any field may be missing and the status code may be
reported under a legacy alias. Everything downstream (distributions,
statistics) works on CanonicalRecord only.
"""

import math
from dataclasses import asdict, dataclass
from typing import Any, Iterable

import pandas as pd

ANONYMOUS_CONSUMER = "anonymous"
UNKNOWN_SERVICE = "unknown"
UNKNOWN_ROUTE = "unknown"

# Status code lookup order; first present value wins
STATUS_CODE_FIELDS = ("status_code", "response_http_status")

FRAME_COLUMNS = [
    "request_id",
    "timestamp",
    "http_method",
    "uri",
    "status_code",
    "consumer_id",
    "service_id",
    "route_id",
    "latency_total_ms",
    "latency_gateway_ms",
    "latency_upstream_ms",
    "client_ip",
    "trace_id",
]


@dataclass(frozen=True)
class CanonicalRecord:
    request_id: str | None
    timestamp: str | None
    http_method: str | None
    uri: str | None
    status_code: int
    consumer_id: str
    service_id: str
    route_id: str | None
    latency_total_ms: float | None
    latency_gateway_ms: float | None
    latency_upstream_ms: float | None
    client_ip: str | None
    trace_id: str | None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


def _to_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _to_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    # NaN and infinities count as missing
    return number if math.isfinite(number) else None


def resolve_status_code(raw: dict[str, Any]) -> int:
    """Primary status field, then the legacy alias, then 0."""
    for field in STATUS_CODE_FIELDS:
        code = _to_int(raw.get(field))
        if code is not None:
            return code
    return 0


def normalize(raw: dict[str, Any]) -> CanonicalRecord:
    """Map one raw backend record to its canonical shape."""
    consumer = raw.get("consumer")
    service = raw.get("gateway_service")
    return CanonicalRecord(
        request_id=raw.get("request_id"),
        timestamp=raw.get("request_start"),
        http_method=raw.get("http_method"),
        uri=raw.get("request_uri"),
        status_code=resolve_status_code(raw),
        consumer_id=consumer if consumer is not None else ANONYMOUS_CONSUMER,
        service_id=service if service is not None else UNKNOWN_SERVICE,
        route_id=raw.get("route"),
        latency_total_ms=_to_float(raw.get("latencies_response_ms")),
        latency_gateway_ms=_to_float(raw.get("latencies_kong_gateway_ms")),
        latency_upstream_ms=_to_float(raw.get("latencies_upstream_ms")),
        client_ip=raw.get("client_ip"),
        trace_id=raw.get("trace_id"),
    )


def normalize_all(raws: Iterable[dict[str, Any]]) -> list[CanonicalRecord]:
    return [normalize(raw) for raw in raws]


def to_frame(records: list[CanonicalRecord]) -> "pd.DataFrame":
    """Build a DataFrame with one row per record, in input order."""
    if not records:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    return pd.DataFrame([asdict(r) for r in records], columns=FRAME_COLUMNS)


# =============================================================================
# Output projections
# =============================================================================


def _latency(record: CanonicalRecord) -> dict[str, Any]:
    return {
        "totalMs": record.latency_total_ms,
        "gatewayMs": record.latency_gateway_ms,
        "upstreamMs": record.latency_upstream_ms,
    }


def _rate_limit_unit(raw: dict[str, Any], unit: str) -> dict[str, Any]:
    return {
        "enabled": raw.get(f"ratelimit_enabled_{unit}"),
        "limit": raw.get(f"ratelimit_limit_{unit}"),
        "remaining": raw.get(f"ratelimit_remaining_{unit}"),
    }


def format_request_summary(record: CanonicalRecord) -> dict[str, Any]:
    """Short per-request view used by the single-entity tools."""
    return {
        "timestamp": record.timestamp,
        "httpMethod": record.http_method,
        "uri": record.uri,
        "statusCode": record.status_code,
        "consumerId": record.consumer_id,
        "serviceId": record.service_id,
        "routeId": record.route_id,
        "latency": _latency(record),
        "clientIp": record.client_ip,
        "traceId": record.trace_id,
    }


def format_request(raw: dict[str, Any], record: CanonicalRecord) -> dict[str, Any]:
    """Full per-request view, renaming every field the backend reports."""
    return {
        "requestId": record.request_id,
        "timestamp": record.timestamp,
        "httpMethod": record.http_method,
        "uri": record.uri,
        "statusCode": record.status_code,
        "consumerId": record.consumer_id,
        "serviceId": record.service_id,
        "routeId": record.route_id,
        "latency": _latency(record),
        "clientIp": record.client_ip,
        "apiProduct": raw.get("api_product"),
        "apiProductVersion": raw.get("api_product_version"),
        "applicationId": raw.get("application"),
        "authType": raw.get("auth_type"),
        "headers": {
            "host": raw.get("header_host"),
            "userAgent": raw.get("header_user_agent"),
        },
        "dataPlane": {
            "nodeId": raw.get("data_plane_node"),
            "version": raw.get("data_plane_node_version"),
        },
        "controlPlane": {
            "id": raw.get("control_plane"),
            "group": raw.get("control_plane_group"),
        },
        "rateLimiting": {
            "enabled": raw.get("ratelimit_enabled"),
            "limit": raw.get("ratelimit_limit"),
            "remaining": raw.get("ratelimit_remaining"),
            "reset": raw.get("ratelimit_reset"),
            "byTimeUnit": {
                unit: _rate_limit_unit(raw, unit) for unit in ("second", "minute", "hour", "day", "month", "year")
            },
        },
        "service": {
            "port": raw.get("service_port"),
            "protocol": raw.get("service_protocol"),
        },
        "requestBodySize": raw.get("request_body_size"),
        "responseBodySize": raw.get("response_body_size"),
        "responseHeaders": {
            "contentType": raw.get("response_header_content_type"),
            "contentLength": raw.get("response_header_content_length"),
        },
        "traceId": record.trace_id,
        "upstreamUri": raw.get("upstream_uri"),
        "upstreamStatus": raw.get("upstream_status"),
    }
