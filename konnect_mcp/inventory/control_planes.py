"""
Control plane and control plane group listings.
"""

from typing import Any

from konnect_mcp.api import KonnectClient
from konnect_mcp.parameters import (
    CheckControlPlaneGroupMembershipParameters,
    GetControlPlaneParameters,
    ListControlPlaneGroupMembershipsParameters,
    ListControlPlanesParameters,
)
from konnect_mcp.utils import safe_get


def _format_control_plane(cp: dict[str, Any]) -> dict[str, Any]:
    config = cp.get("config") or {}
    return {
        "controlPlaneId": cp.get("id"),
        "name": cp.get("name"),
        "description": cp.get("description"),
        "type": cp.get("type"),
        "clusterType": cp.get("cluster_type", config.get("cluster_type")),
        "controlPlaneEndpoint": cp.get("control_plane_endpoint", config.get("control_plane_endpoint")),
        "telemetryEndpoint": cp.get("telemetry_endpoint", config.get("telemetry_endpoint")),
        "hasCloudGateway": cp.get("has_cloud_gateway", config.get("cloud_gateway")),
        "labels": cp.get("labels"),
        "metadata": {"createdAt": cp.get("created_at"), "updatedAt": cp.get("updated_at")},
    }


async def list_control_planes(client: KonnectClient, params: ListControlPlanesParameters) -> dict[str, Any]:
    result = await client.list_control_planes(
        page_size=params.page_size,
        page_number=params.page_number,
        filter_name=params.filter_name,
        filter_cluster_type=params.filter_cluster_type,
        filter_cloud_gateway=params.filter_cloud_gateway,
        labels=params.labels,
        sort=params.sort,
    )
    return {
        "metadata": {
            "pageSize": params.page_size,
            "pageNumber": params.page_number or 1,
            "totalPages": safe_get(result, "meta", "page_count"),
            "totalCount": safe_get(result, "meta", "total_count"),
            "filters": {
                "name": params.filter_name,
                "clusterType": params.filter_cluster_type,
                "cloudGateway": params.filter_cloud_gateway,
                "labels": params.labels,
            },
            "sort": params.sort,
        },
        "controlPlanes": [_format_control_plane(cp) for cp in result.get("data") or []],
        "usage": {
            "instructions": "Use the controlPlaneId from these results with other tools like list_services, list_routes, etc.",
            "pagination": "For more results, increment pageNumber or increase pageSize",
        },
    }


async def get_control_plane(client: KonnectClient, params: GetControlPlaneParameters) -> dict[str, Any]:
    result = await client.get_control_plane(params.control_plane_id)
    cp = result.get("data", result)
    return {
        "controlPlaneDetails": _format_control_plane(cp),
        "relatedTools": [
            "Use list_services to see services configured in this control plane",
            "Use list_routes to see routes configured in this control plane",
            "Use query_api_requests to analyze traffic for this control plane",
        ],
    }


async def list_control_plane_group_memberships(
    client: KonnectClient, params: ListControlPlaneGroupMembershipsParameters
) -> dict[str, Any]:
    result = await client.list_control_plane_group_memberships(params.group_id, params.page_size, params.page_after)
    members = []
    for member in result.get("data") or []:
        status = member.get("cp_group_member_status") or {}
        members.append(
            {
                "controlPlaneId": member.get("id"),
                "name": member.get("name"),
                "description": member.get("description"),
                "type": member.get("type"),
                "clusterType": member.get("cluster_type"),
                "membershipStatus": {
                    "status": status.get("status"),
                    "message": status.get("message"),
                    "conflicts": status.get("conflicts") or [],
                },
                "metadata": {"createdAt": member.get("created_at"), "updatedAt": member.get("updated_at")},
            }
        )
    return {
        "metadata": {
            "groupId": params.group_id,
            "pageSize": params.page_size,
            "pageAfter": params.page_after,
            "nextPageAfter": safe_get(result, "meta", "next_page", "after"),
            "totalCount": safe_get(result, "meta", "total_count", default=0),
        },
        "members": members,
        "relatedTools": [
            "Use check_control_plane_group_membership to verify if a specific control plane is a member",
            "Use get_control_plane to get more details about a specific member",
        ],
    }


async def check_control_plane_group_membership(
    client: KonnectClient, params: CheckControlPlaneGroupMembershipParameters
) -> dict[str, Any]:
    result = await client.check_control_plane_group_membership(params.control_plane_id)
    membership = result.get("data", result)
    return {
        "controlPlaneId": params.control_plane_id,
        "groupMembership": {
            "isMember": membership.get("is_member"),
            "groupId": membership.get("group_id"),
            "groupName": membership.get("group_name"),
            "status": membership.get("status"),
            "message": membership.get("message"),
            "conflicts": membership.get("conflicts") or [],
        },
        "relatedTools": [
            "Use list_control_plane_group_memberships to see all members of this group",
            "Use get_control_plane to get more details about this control plane",
        ],
    }
