"""
MCP tool definitions for all Konnect tools.

Each entry ties a tool name to its category, description, argument model and
handler. The category selects the troubleshooting tips shown on failure.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from mcp.types import Tool

from konnect_mcp.analytics import analyzer
from konnect_mcp.inventory import configuration, control_planes
from konnect_mcp.parameters import (
    AnalyzeFailedRequestsParameters,
    CheckControlPlaneGroupMembershipParameters,
    GetConsumerRequestsParameters,
    GetControlPlaneParameters,
    GetServiceRequestsParameters,
    ListControlPlaneGroupMembershipsParameters,
    ListControlPlanesParameters,
    ListCoreEntitiesParameters,
    QueryApiRequestsParameters,
    ToolParameters,
)

ANALYTICS = "analytics"
CONFIGURATION = "configuration"
CONTROL_PLANES = "control_planes"


@dataclass(frozen=True)
class ToolSpec:
    name: str
    category: str
    description: str
    parameters: type[ToolParameters]
    handler: Callable[[Any, Any], Awaitable[dict[str, Any]]]

    def to_tool(self) -> Tool:
        return Tool(name=self.name, description=self.description, inputSchema=self.parameters.input_schema())


TOOL_SPECS: list[ToolSpec] = [
    # =========================================================================
    # API request analytics
    # =========================================================================
    ToolSpec(
        name="query_api_requests",
        category=ANALYTICS,
        description="Query and analyze Kong API Gateway requests with customizable filters. "
        "Filters on status codes (include or exclude), HTTP methods, consumers, services and routes "
        "within a relative time range (15M, 1H, 6H, 12H, 24H, 7D). "
        "Returns request metadata, a summary (average latency, success rate, status code distribution) "
        "and per-request details: latency breakdown, rate limiting, headers, data/control plane, upstream info. "
        "Example: 5xx errors in the last hour: statusCodes=[500, 502, 503, 504], timeRange='1H'.",
        parameters=QueryApiRequestsParameters,
        handler=analyzer.query_api_requests,
    ),
    ToolSpec(
        name="get_consumer_requests",
        category=ANALYTICS,
        description="Retrieve and analyze API requests made by a specific consumer. "
        "The consumerId must have the form 'controlPlaneId:consumerId'. "
        "Returns average latency, success rate, status code distribution and a per-service breakdown "
        "(with status codes per service), plus the matching requests. "
        "Use successOnly or failureOnly (not both) to restrict to 2XX or 4XX/5XX requests.",
        parameters=GetConsumerRequestsParameters,
        handler=analyzer.get_consumer_requests,
    ),
    ToolSpec(
        name="get_service_requests",
        category=ANALYTICS,
        description="Retrieve and analyze API requests handled by a specific gateway service. "
        "The serviceId must have the form 'controlPlaneId:serviceId'. "
        "Returns average latency, success rate, status code distribution, and per-consumer and per-route "
        "breakdowns (with status codes per group), plus the matching requests. "
        "Use successOnly or failureOnly (not both) to restrict to 2XX or 4XX/5XX requests.",
        parameters=GetServiceRequestsParameters,
        handler=analyzer.get_service_requests,
    ),
    ToolSpec(
        name="analyze_failed_requests",
        category=ANALYTICS,
        description="Analyze failed (4XX and 5XX) API requests in a time range. "
        "Returns status code, service, route and HTTP method distributions, the top failing consumers "
        "(topN, default 5) with their status codes, latency percentiles and a sample of failed requests. "
        "Tip: follow up with get_consumer_requests or get_service_requests on the top offenders.",
        parameters=AnalyzeFailedRequestsParameters,
        handler=analyzer.analyze_failed_requests,
    ),
    # =========================================================================
    # Control plane configuration
    # =========================================================================
    ToolSpec(
        name="list_services",
        category=CONFIGURATION,
        description="List all services associated with a control plane. "
        "Returns service id, name, host, port, protocol, path, timeouts, TLS settings and tags.",
        parameters=ListCoreEntitiesParameters,
        handler=configuration.list_services,
    ),
    ToolSpec(
        name="list_routes",
        category=CONFIGURATION,
        description="List all routes associated with a control plane. "
        "Returns route id, name, protocols, methods, hosts, paths, the service it points to and tags.",
        parameters=ListCoreEntitiesParameters,
        handler=configuration.list_routes,
    ),
    ToolSpec(
        name="list_consumers",
        category=CONFIGURATION,
        description="List all consumers associated with a control plane. "
        "Returns consumer id, username, custom id and tags.",
        parameters=ListCoreEntitiesParameters,
        handler=configuration.list_consumers,
    ),
    ToolSpec(
        name="list_plugins",
        category=CONFIGURATION,
        description="List all plugins associated with a control plane. "
        "Returns plugin id, name, configuration, protocols and scoping "
        "(consumer, service, route, or global when none is set).",
        parameters=ListCoreEntitiesParameters,
        handler=configuration.list_plugins,
    ),
    # =========================================================================
    # Control planes
    # =========================================================================
    ToolSpec(
        name="list_control_planes",
        category=CONTROL_PLANES,
        description="List all control planes in your organization, with optional filters on name, "
        "cluster type, cloud gateway capability and labels. "
        "Use the returned controlPlaneId with the configuration tools.",
        parameters=ListControlPlanesParameters,
        handler=control_planes.list_control_planes,
    ),
    ToolSpec(
        name="get_control_plane",
        category=CONTROL_PLANES,
        description="Get detailed information about a specific control plane: endpoints, cluster type, "
        "cloud gateway capability and labels.",
        parameters=GetControlPlaneParameters,
        handler=control_planes.get_control_plane,
    ),
    ToolSpec(
        name="list_control_plane_group_memberships",
        category=CONTROL_PLANES,
        description="List all control planes that are members of a control plane group, "
        "with their membership status and configuration conflicts.",
        parameters=ListControlPlaneGroupMembershipsParameters,
        handler=control_planes.list_control_plane_group_memberships,
    ),
    ToolSpec(
        name="check_control_plane_group_membership",
        category=CONTROL_PLANES,
        description="Check whether a control plane is a member of any control plane group, "
        "and report the group and membership status.",
        parameters=CheckControlPlaneGroupMembershipParameters,
        handler=control_planes.check_control_plane_group_membership,
    ),
]

_SPECS_BY_NAME = {spec.name: spec for spec in TOOL_SPECS}


def get_all_tool_definitions() -> list[Tool]:
    """Return all MCP tool definitions advertised by the server."""
    return [spec.to_tool() for spec in TOOL_SPECS]


def get_tool_spec(name: str) -> ToolSpec | None:
    return _SPECS_BY_NAME.get(name)
