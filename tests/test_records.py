"""Unit tests for the canonical record normalizer."""

import pytest

from conftest import raw_request
from konnect_mcp.analytics.records import (
    ANONYMOUS_CONSUMER,
    FRAME_COLUMNS,
    UNKNOWN_SERVICE,
    format_request,
    format_request_summary,
    normalize,
    normalize_all,
    resolve_status_code,
    to_frame,
)


class TestStatusCodeResolution:
    """Test cases for the status code fallback chain."""

    def test_primary_field_wins(self):
        assert resolve_status_code({"status_code": 404, "response_http_status": 500}) == 404

    def test_falls_back_to_legacy_field(self):
        assert resolve_status_code({"response_http_status": 502}) == 502

    def test_null_primary_falls_back(self):
        assert resolve_status_code({"status_code": None, "response_http_status": 503}) == 503

    def test_missing_both_is_zero(self):
        assert resolve_status_code({}) == 0

    def test_string_codes_are_coerced(self):
        assert resolve_status_code({"status_code": "201"}) == 201

    def test_garbage_counts_as_absent(self):
        assert resolve_status_code({"status_code": "n/a", "response_http_status": 418}) == 418


class TestNormalize:
    """Test cases for normalize()."""

    def test_full_record(self):
        record = normalize(raw_request())
        assert record.request_id == "req-1"
        assert record.timestamp == "2025-06-01T10:00:00Z"
        assert record.http_method == "GET"
        assert record.uri == "/orders"
        assert record.status_code == 200
        assert record.consumer_id == "cp1:alice"
        assert record.service_id == "cp1:orders"
        assert record.route_id == "cp1:orders-route"
        assert record.latency_total_ms == 100.0
        assert record.latency_gateway_ms == 10.0
        assert record.latency_upstream_ms == 90.0
        assert record.client_ip == "10.0.0.1"
        assert record.trace_id == "trace-1"

    def test_placeholders_for_missing_owners(self):
        record = normalize(raw_request(consumer=None, gateway_service=None, route=None))
        assert record.consumer_id == ANONYMOUS_CONSUMER == "anonymous"
        assert record.service_id == UNKNOWN_SERVICE == "unknown"
        assert record.route_id is None

    def test_missing_status_is_not_success(self):
        record = normalize(raw_request(status_code=None))
        assert record.status_code == 0
        assert not record.is_success

    def test_missing_latency_stays_none(self):
        assert normalize(raw_request(latencies_response_ms=None)).latency_total_ms is None

    @pytest.mark.parametrize("value", ["NaN", "Infinity", "-inf", float("nan"), float("inf")])
    def test_non_finite_latency_is_missing(self, value):
        record = normalize(raw_request(latencies_response_ms=value, latencies_upstream_ms=value))
        assert record.latency_total_ms is None
        assert record.latency_upstream_ms is None

    def test_infinite_status_code_is_missing(self):
        assert normalize(raw_request(status_code=float("inf"))).status_code == 0

    def test_record_is_immutable(self):
        record = normalize(raw_request())
        with pytest.raises(AttributeError):
            record.status_code = 500

    def test_normalize_all_keeps_order(self):
        records = normalize_all([raw_request(request_id="a"), raw_request(request_id="b")])
        assert [r.request_id for r in records] == ["a", "b"]


class TestFrame:
    def test_empty_frame_has_columns(self):
        frame = to_frame([])
        assert list(frame.columns) == FRAME_COLUMNS
        assert frame.empty

    def test_frame_rows_follow_records(self):
        frame = to_frame(normalize_all([raw_request(status_code=500), raw_request(status_code=201)]))
        assert frame["status_code"].tolist() == [500, 201]


class TestProjections:
    def test_summary_projection(self):
        summary = format_request_summary(normalize(raw_request()))
        assert summary["statusCode"] == 200
        assert summary["latency"] == {"totalMs": 100.0, "gatewayMs": 10.0, "upstreamMs": 90.0}
        assert summary["traceId"] == "trace-1"

    def test_detail_projection_renames_extended_fields(self):
        raw = raw_request(
            response_http_status=200,
            header_user_agent="curl/8.0",
            ratelimit_limit_minute=60,
            ratelimit_remaining_minute=59,
            data_plane_node="dp-1",
            upstream_status="200",
        )
        detail = format_request(raw, normalize(raw))
        assert detail["requestId"] == "req-1"
        assert detail["headers"]["userAgent"] == "curl/8.0"
        assert detail["rateLimiting"]["byTimeUnit"]["minute"] == {"enabled": None, "limit": 60, "remaining": 59}
        assert set(detail["rateLimiting"]["byTimeUnit"]) == {"second", "minute", "hour", "day", "month", "year"}
        assert detail["dataPlane"]["nodeId"] == "dp-1"
        assert detail["upstreamStatus"] == "200"
