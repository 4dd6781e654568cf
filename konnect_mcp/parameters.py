"""
Argument models for every Konnect tool.

Arguments arrive as flat camelCase JSON objects. Each model validates ranges
and enums, and its JSON schema is what the server advertises as the tool's
inputSchema.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from konnect_mcp.analytics.filters import FilterArgs
from konnect_mcp.analytics.time_window import DEFAULT_TIME_WINDOW, RelativeTimeWindow

StatusCode = Annotated[int, Field(ge=100, le=599)]

TIME_RANGE_DESCRIPTION = "Time range for data retrieval (15M = 15 minutes, 1H = 1 hour, etc.)"
CONTROL_PLANE_ID_DESCRIPTION = "Control Plane ID (obtainable from list_control_planes tool)"
OFFSET_DESCRIPTION = "Offset token for pagination (from previous response)"


class ToolParameters(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @classmethod
    def input_schema(cls) -> dict[str, Any]:
        schema = cls.model_json_schema(by_alias=True)
        schema.pop("title", None)
        schema.pop("description", None)
        return schema


# =============================================================================
# Analytics
# =============================================================================


class QueryApiRequestsParameters(ToolParameters):
    time_range: RelativeTimeWindow = Field(default=DEFAULT_TIME_WINDOW, description=TIME_RANGE_DESCRIPTION)
    status_codes: list[StatusCode] | None = Field(
        default=None, description="Filter by specific HTTP status codes (e.g. [200, 201, 404])"
    )
    exclude_status_codes: list[StatusCode] | None = Field(
        default=None, description="Exclude specific HTTP status codes (e.g. [400, 401, 500])"
    )
    http_methods: list[str] | None = Field(
        default=None, description="Filter by HTTP methods (e.g. ['GET', 'POST', 'DELETE'])"
    )
    consumer_ids: list[str] | None = Field(default=None, description="Filter by consumer IDs")
    service_ids: list[str] | None = Field(default=None, description="Filter by service IDs")
    route_ids: list[str] | None = Field(default=None, description="Filter by route IDs (from list_routes tool)")
    max_results: int = Field(default=100, ge=1, le=1000, description="Number of items to return per page")

    def filter_args(self) -> FilterArgs:
        return FilterArgs(
            status_codes=self.status_codes,
            exclude_status_codes=self.exclude_status_codes,
            http_methods=self.http_methods,
            consumer_ids=self.consumer_ids,
            service_ids=self.service_ids,
            route_ids=self.route_ids,
        )


class _SingleEntityParameters(ToolParameters):
    time_range: RelativeTimeWindow = Field(default=DEFAULT_TIME_WINDOW, description=TIME_RANGE_DESCRIPTION)
    success_only: bool = Field(default=False, description="Show only successful (2xx) requests")
    failure_only: bool = Field(default=False, description="Show only failed (4xx and 5xx) requests")
    max_results: int = Field(default=100, ge=1, le=1000, description="Number of items to return per page")

    @model_validator(mode="after")
    def _check_outcome_flags(self):
        # build_filters alone would keep only successOnly
        if self.success_only and self.failure_only:
            raise ValueError("successOnly and failureOnly are mutually exclusive; set at most one of them")
        return self


class GetConsumerRequestsParameters(_SingleEntityParameters):
    consumer_id: str = Field(
        min_length=1,
        description="Consumer ID to filter by, in the form 'controlPlaneId:consumerId' "
        "(obtainable from analyze_failed_requests or query_api_requests tools)",
    )

    def filter_args(self) -> FilterArgs:
        return FilterArgs(
            consumer_ids=[self.consumer_id],
            success_only=self.success_only,
            failure_only=self.failure_only,
        )


class GetServiceRequestsParameters(_SingleEntityParameters):
    service_id: str = Field(
        min_length=1,
        description="Gateway service ID to filter by, in the form 'controlPlaneId:serviceId' "
        "(obtainable from list_services or query_api_requests tools)",
    )

    def filter_args(self) -> FilterArgs:
        return FilterArgs(
            service_ids=[self.service_id],
            success_only=self.success_only,
            failure_only=self.failure_only,
        )


class AnalyzeFailedRequestsParameters(ToolParameters):
    time_range: RelativeTimeWindow = Field(default=DEFAULT_TIME_WINDOW, description=TIME_RANGE_DESCRIPTION)
    service_ids: list[str] | None = Field(default=None, description="Only analyze failures of these service IDs")
    route_ids: list[str] | None = Field(default=None, description="Only analyze failures of these route IDs")
    max_results: int = Field(default=1000, ge=1, le=1000, description="Number of failed requests to analyze")
    top_n: int = Field(default=5, ge=1, le=50, description="Number of top failing consumers to report")

    def filter_args(self) -> FilterArgs:
        return FilterArgs(service_ids=self.service_ids, route_ids=self.route_ids, failure_only=True)


# =============================================================================
# Configuration
# =============================================================================


class ListCoreEntitiesParameters(ToolParameters):
    control_plane_id: str = Field(min_length=1, description=CONTROL_PLANE_ID_DESCRIPTION)
    size: int = Field(default=100, ge=1, le=1000, description="Number of items to return")
    offset: str | None = Field(default=None, description=OFFSET_DESCRIPTION)


# =============================================================================
# Control planes
# =============================================================================


class ListControlPlanesParameters(ToolParameters):
    page_size: int = Field(default=10, ge=1, le=1000, description="Number of control planes per page")
    page_number: int | None = Field(default=None, ge=1, description="Page number to retrieve")
    filter_name: str | None = Field(default=None, description="Filter control planes by name (contains)")
    filter_cluster_type: str | None = Field(
        default=None, description="Filter by cluster type (e.g., 'CLUSTER_TYPE_HYBRID', 'CLUSTER_TYPE_K8S_INGRESS_CONTROLLER')"
    )
    filter_cloud_gateway: bool | None = Field(default=None, description="Filter by cloud gateway capability")
    labels: str | None = Field(default=None, description="Filter by labels (format: 'key:value,existCheck')")
    sort: str | None = Field(default=None, description="Sort field and direction (e.g. 'name,created_at desc')")


class GetControlPlaneParameters(ToolParameters):
    control_plane_id: str = Field(min_length=1, description=CONTROL_PLANE_ID_DESCRIPTION)


class ListControlPlaneGroupMembershipsParameters(ToolParameters):
    group_id: str = Field(
        min_length=1, description="Control plane group ID (the ID of the control plane that acts as the group)"
    )
    page_size: int = Field(default=10, ge=1, le=1000, description="Number of members to return per page")
    page_after: str | None = Field(default=None, description="Cursor for pagination after a specific item")


class CheckControlPlaneGroupMembershipParameters(ToolParameters):
    control_plane_id: str = Field(
        min_length=1, description="Control plane ID to check (can be obtained from list_control_planes tool)"
    )
