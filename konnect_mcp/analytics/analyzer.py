"""
API request analytics tool implementations.

Each tool runs exactly one backend query: resolve the time window, build the
filters, fetch, normalize, then aggregate into a report.
"""

import logging
from typing import Any

from konnect_mcp.analytics import aggregation, stats
from konnect_mcp.analytics.filters import build_filters, filters_to_audit
from konnect_mcp.analytics.records import format_request, format_request_summary, normalize_all
from konnect_mcp.analytics.time_window import resolve
from konnect_mcp.api import KonnectClient
from konnect_mcp.parameters import (
    AnalyzeFailedRequestsParameters,
    GetConsumerRequestsParameters,
    GetServiceRequestsParameters,
    QueryApiRequestsParameters,
)

logger = logging.getLogger("konnect_mcp.analytics")

SAMPLE_FAILED_REQUESTS = 10


def _time_range(meta: dict[str, Any]) -> dict[str, Any]:
    time_range = meta.get("time_range") or {}
    return {"start": time_range.get("start"), "end": time_range.get("end")}


async def query_api_requests(client: KonnectClient, params: QueryApiRequestsParameters) -> dict[str, Any]:
    """Query API requests with arbitrary filters and summarize them."""
    window = resolve(params.time_range)
    filters = build_filters(params.filter_args())

    raws, meta = await client.query_api_requests(window, filters, params.max_results)
    records = normalize_all(raws)
    logger.debug(f"query_api_requests: {len(records)} records for {window.window.value}")

    return {
        "metadata": {
            "totalRequests": meta.get("size", len(records)),
            "timeRange": _time_range(meta),
            "timeWindow": window.describe(),
            "filters": filters_to_audit(filters),
        },
        "summary": {
            **stats.compute(records).to_dict(),
            "statusCodeDistribution": aggregation.distribution(records, aggregation.STATUS_CODE),
        },
        "requests": [format_request(raw, record) for raw, record in zip(raws, records)],
        "recommendations": [
            "Use 'get_consumer_requests' tool with consumerId from top failing consumers for more details",
            "Check 'query_api_requests' with specific status codes for deeper investigation",
        ],
    }


async def get_consumer_requests(client: KonnectClient, params: GetConsumerRequestsParameters) -> dict[str, Any]:
    """Requests made by one consumer, with service-level breakdown."""
    window = resolve(params.time_range)
    filters = build_filters(params.filter_args())

    raws, meta = await client.query_api_requests(window, filters, params.max_results)
    records = normalize_all(raws)

    return {
        "metadata": {
            "consumerId": params.consumer_id,
            "totalRequests": len(records),
            "timeRange": _time_range(meta),
            "timeWindow": window.describe(),
            "filters": {
                "successOnly": params.success_only,
                "failureOnly": params.failure_only,
                "predicates": filters_to_audit(filters),
            },
        },
        "statistics": {
            **stats.compute(records).to_dict(),
            "statusCodeDistribution": aggregation.distribution(records, aggregation.STATUS_CODE),
            "serviceDistribution": aggregation.distribution(records, aggregation.SERVICE, nested=True),
        },
        "requests": [format_request_summary(r) for r in records],
    }


async def get_service_requests(client: KonnectClient, params: GetServiceRequestsParameters) -> dict[str, Any]:
    """Requests handled by one gateway service, with consumer and route breakdowns."""
    window = resolve(params.time_range)
    filters = build_filters(params.filter_args())

    raws, meta = await client.query_api_requests(window, filters, params.max_results)
    records = normalize_all(raws)

    return {
        "metadata": {
            "serviceId": params.service_id,
            "totalRequests": len(records),
            "timeRange": _time_range(meta),
            "timeWindow": window.describe(),
            "filters": {
                "successOnly": params.success_only,
                "failureOnly": params.failure_only,
                "predicates": filters_to_audit(filters),
            },
        },
        "statistics": {
            **stats.compute(records).to_dict(),
            "statusCodeDistribution": aggregation.distribution(records, aggregation.STATUS_CODE),
            "consumerDistribution": aggregation.distribution(records, aggregation.CONSUMER, nested=True),
            "routeDistribution": aggregation.distribution(records, aggregation.ROUTE, nested=True),
        },
        "requests": [format_request_summary(r) for r in records],
    }


async def analyze_failed_requests(client: KonnectClient, params: AnalyzeFailedRequestsParameters) -> dict[str, Any]:
    """Break down 4xx/5xx traffic by status, consumer, service, route and method."""
    window = resolve(params.time_range)
    filters = build_filters(params.filter_args())

    raws, meta = await client.query_api_requests(window, filters, params.max_results)
    records = normalize_all(raws)

    return {
        "metadata": {
            "totalFailedRequests": len(records),
            "timeRange": _time_range(meta),
            "timeWindow": window.describe(),
            "filters": filters_to_audit(filters),
            "distinctConsumers": len({r.consumer_id for r in records}),
        },
        "statistics": {
            **stats.compute(records).to_dict(),
            "latencyPercentilesMs": stats.latency_percentiles(records),
        },
        "statusCodeDistribution": aggregation.distribution(records, aggregation.STATUS_CODE),
        "topFailingConsumers": aggregation.distribution(
            records, aggregation.CONSUMER, nested=True, limit=params.top_n
        ),
        "serviceDistribution": aggregation.distribution(records, aggregation.SERVICE, nested=True),
        "routeDistribution": aggregation.distribution(records, aggregation.ROUTE),
        "methodDistribution": aggregation.distribution(records, aggregation.METHOD),
        "sampleRequests": [format_request_summary(r) for r in records[:SAMPLE_FAILED_REQUESTS]],
        "recommendations": [
            "Use 'get_consumer_requests' with a consumerId from topFailingConsumers for per-consumer details",
            "Use 'get_service_requests' with a serviceId from serviceDistribution to see which consumers are affected",
            "Use 'list_plugins' to check rate limiting or auth plugins on the failing services",
        ],
    }
