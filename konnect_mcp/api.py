"""
Konnect API client.

One authenticated httpx client per process. Failures are raised as one of
three KonnectError subclasses depending on where the request failed.
"""

import json
import logging
from typing import Any, Sequence

import httpx

from konnect_mcp.analytics.filters import FilterPredicate, filters_to_wire
from konnect_mcp.analytics.time_window import TimeWindowDescriptor
from konnect_mcp.config import KonnectConfig
from konnect_mcp.utils import truncate_string

logger = logging.getLogger("konnect_mcp.api")

MAX_ERROR_DETAIL_LENGTH = 200


class KonnectError(Exception):
    """Base class for Konnect API failures."""


class KonnectAPIError(KonnectError):
    """The API answered with a non-success status."""

    def __init__(self, status_code: int, detail: str | None = None):
        self.status_code = status_code
        self.detail = detail
        message = f"API Error (Status {status_code})"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class KonnectNetworkError(KonnectError):
    """The request was sent but no response came back."""

    def __init__(self, reason: str | None = None):
        self.reason = reason
        super().__init__(
            "Network Error: No response received from Kong API. "
            "Please check your network connection and API endpoint configuration."
        )


class KonnectRequestError(KonnectError):
    """The request could not be built or sent."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Request Error: {reason}. Please check your request parameters and try again.")


def _error_detail(response: httpx.Response) -> str | None:
    """Extract a readable error detail from an error response body."""
    try:
        payload = response.json()
    except ValueError:
        text = response.text
        return truncate_string(text, MAX_ERROR_DETAIL_LENGTH) if text else None

    if isinstance(payload, dict):
        return payload.get("message") or json.dumps(payload)
    if isinstance(payload, str):
        return truncate_string(payload, MAX_ERROR_DETAIL_LENGTH)
    return json.dumps(payload)


class KonnectClient:
    """Authenticated client for the Konnect v2 API."""

    def __init__(self, config: KonnectConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={
                "Authorization": f"Bearer {config.api_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            timeout=config.timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "KonnectClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json_body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make an API call and return the decoded JSON object.

        Args:
            method: HTTP method.
            endpoint: Path relative to the base URL, with a leading slash.
            json_body: Optional request body.
            params: Optional query parameters; None values are dropped.

        Raises:
            KonnectAPIError: Non-2xx response, or a body that is not a JSON object.
            KonnectNetworkError: No response received.
            KonnectRequestError: The request could not be built or sent.
        """
        query = {k: v for k, v in (params or {}).items() if v is not None}
        try:
            request = self._client.build_request(method, endpoint, json=json_body, params=query or None)
        except (TypeError, ValueError, httpx.InvalidURL) as e:
            logger.error(f"Could not build request for {endpoint}: {e}")
            raise KonnectRequestError(str(e)) from e

        logger.info(f"Making request to: {request.url}")
        try:
            response = await self._client.send(request)
        except httpx.UnsupportedProtocol as e:
            logger.error(f"API request error: {e}")
            raise KonnectRequestError(str(e)) from e
        except httpx.TransportError as e:
            logger.error(f"API request error: {e}")
            raise KonnectNetworkError(str(e)) from e

        logger.info(f"Received response with status: {response.status_code}")
        if response.is_error:
            error = KonnectAPIError(response.status_code, _error_detail(response))
            logger.error(str(error))
            raise error

        if not response.content:
            return {}
        try:
            payload = response.json()
        except ValueError as e:
            raise KonnectAPIError(response.status_code, f"invalid JSON in response body: {e}") from e
        if not isinstance(payload, dict):
            raise KonnectAPIError(
                response.status_code, f"expected a JSON object in response body, got {type(payload).__name__}"
            )
        return payload

    # =========================================================================
    # Analytics
    # =========================================================================

    async def query_api_requests(
        self,
        time_window: TimeWindowDescriptor,
        filters: Sequence[FilterPredicate] = (),
        limit: int = 100,
    ) -> tuple[list[dict[str, Any]], dict[str, Any]]:
        """Run one time-windowed, filtered API request query.

        Returns:
            (raw records, response metadata)
        """
        body = {
            "time_range": time_window.to_wire(),
            "filters": filters_to_wire(filters),
            "size": limit,
        }
        result = await self.request("POST", "/api-requests", json_body=body)
        return result.get("results") or [], result.get("meta") or {}

    # =========================================================================
    # Control planes
    # =========================================================================

    async def list_control_planes(
        self,
        page_size: int = 10,
        page_number: int | None = None,
        filter_name: str | None = None,
        filter_cluster_type: str | None = None,
        filter_cloud_gateway: bool | None = None,
        labels: str | None = None,
        sort: str | None = None,
    ) -> dict[str, Any]:
        params = {
            "page[size]": page_size,
            "page[number]": page_number,
            "filter[name][contains]": filter_name,
            "filter[cluster_type][eq]": filter_cluster_type,
            "filter[cloud_gateway]": None if filter_cloud_gateway is None else str(filter_cloud_gateway).lower(),
            "labels": labels,
            "sort": sort,
        }
        return await self.request("GET", "/control-planes", params=params)

    async def get_control_plane(self, control_plane_id: str) -> dict[str, Any]:
        return await self.request("GET", f"/control-planes/{control_plane_id}")

    async def list_control_plane_group_memberships(
        self, group_id: str, page_size: int = 10, page_after: str | None = None
    ) -> dict[str, Any]:
        params = {"page[size]": page_size, "page[after]": page_after}
        return await self.request("GET", f"/control-planes/{group_id}/group-memberships", params=params)

    async def check_control_plane_group_membership(self, control_plane_id: str) -> dict[str, Any]:
        return await self.request("GET", f"/control-planes/{control_plane_id}/group-member-status")

    # =========================================================================
    # Core entities
    # =========================================================================

    async def list_core_entities(
        self, control_plane_id: str, entity: str, size: int = 100, offset: str | None = None
    ) -> dict[str, Any]:
        """List services, routes, consumers or plugins of a control plane."""
        endpoint = f"/control-planes/{control_plane_id}/core-entities/{entity}"
        return await self.request("GET", endpoint, params={"size": size, "offset": offset})
