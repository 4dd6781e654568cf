"""
Core entity listings (services, routes, consumers, plugins) of a control plane.
"""

from typing import Any, Callable

from konnect_mcp.api import KonnectClient
from konnect_mcp.parameters import ListCoreEntitiesParameters
from konnect_mcp.utils import safe_get


def _timestamps(entity: dict[str, Any]) -> dict[str, Any]:
    return {"createdAt": entity.get("created_at"), "updatedAt": entity.get("updated_at")}


def _format_service(service: dict[str, Any]) -> dict[str, Any]:
    return {
        "serviceId": service.get("id"),
        "name": service.get("name"),
        "host": service.get("host"),
        "port": service.get("port"),
        "protocol": service.get("protocol"),
        "path": service.get("path"),
        "retries": service.get("retries"),
        "connectTimeout": service.get("connect_timeout"),
        "writeTimeout": service.get("write_timeout"),
        "readTimeout": service.get("read_timeout"),
        "tags": service.get("tags"),
        "clientCertificate": service.get("client_certificate"),
        "tlsVerify": service.get("tls_verify"),
        "tlsVerifyDepth": service.get("tls_verify_depth"),
        "caCertificates": service.get("ca_certificates"),
        "enabled": service.get("enabled"),
        "metadata": _timestamps(service),
    }


def _format_route(route: dict[str, Any]) -> dict[str, Any]:
    return {
        "routeId": route.get("id"),
        "name": route.get("name"),
        "protocols": route.get("protocols"),
        "methods": route.get("methods"),
        "hosts": route.get("hosts"),
        "paths": route.get("paths"),
        "httpsRedirectStatusCode": route.get("https_redirect_status_code"),
        "regexPriority": route.get("regex_priority"),
        "stripPath": route.get("strip_path"),
        "preserveHost": route.get("preserve_host"),
        "requestBuffering": route.get("request_buffering"),
        "responseBuffering": route.get("response_buffering"),
        "tags": route.get("tags"),
        "serviceId": safe_get(route, "service", "id"),
        "enabled": route.get("enabled"),
        "metadata": _timestamps(route),
    }


def _format_consumer(consumer: dict[str, Any]) -> dict[str, Any]:
    return {
        "consumerId": consumer.get("id"),
        "username": consumer.get("username"),
        "customId": consumer.get("custom_id"),
        "tags": consumer.get("tags"),
        "enabled": consumer.get("enabled"),
        "metadata": _timestamps(consumer),
    }


def _format_plugin(plugin: dict[str, Any]) -> dict[str, Any]:
    scope_ids = {
        "consumerId": safe_get(plugin, "consumer", "id"),
        "serviceId": safe_get(plugin, "service", "id"),
        "routeId": safe_get(plugin, "route", "id"),
    }
    return {
        "pluginId": plugin.get("id"),
        "name": plugin.get("name"),
        "enabled": plugin.get("enabled"),
        "config": plugin.get("config"),
        "protocols": plugin.get("protocols"),
        "tags": plugin.get("tags"),
        "scoping": {
            **scope_ids,
            "global": not (plugin.get("consumer") or plugin.get("service") or plugin.get("route")),
        },
        "metadata": _timestamps(plugin),
    }


async def _list_entities(
    client: KonnectClient,
    params: ListCoreEntitiesParameters,
    entity: str,
    formatter: Callable[[dict[str, Any]], dict[str, Any]],
    related_tools: list[str],
) -> dict[str, Any]:
    result = await client.list_core_entities(params.control_plane_id, entity, params.size, params.offset)
    return {
        "metadata": {
            "controlPlaneId": params.control_plane_id,
            "size": params.size,
            "offset": params.offset,
            "nextOffset": result.get("offset"),
            "totalCount": result.get("total"),
        },
        entity: [formatter(item) for item in result.get("data") or []],
        "relatedTools": related_tools,
    }


async def list_services(client: KonnectClient, params: ListCoreEntitiesParameters) -> dict[str, Any]:
    return await _list_entities(
        client,
        params,
        "services",
        _format_service,
        [
            "Use list_routes to find routes that point to these services",
            "Use list_plugins to see plugins configured for these services",
            "Use get_service_requests to analyze traffic for one of these services",
        ],
    )


async def list_routes(client: KonnectClient, params: ListCoreEntitiesParameters) -> dict[str, Any]:
    return await _list_entities(
        client,
        params,
        "routes",
        _format_route,
        [
            "Use query_api_requests with specific routeIds to analyze traffic",
            "Use list_services to find details about the services these routes connect to",
            "Use list_plugins to see plugins configured for these routes",
        ],
    )


async def list_consumers(client: KonnectClient, params: ListCoreEntitiesParameters) -> dict[str, Any]:
    return await _list_entities(
        client,
        params,
        "consumers",
        _format_consumer,
        [
            "Use get_consumer_requests to analyze traffic for a specific consumer",
            "Use list_plugins to see plugins configured for these consumers",
            "Use analyze_failed_requests to identify consumers with high error rates",
        ],
    )


async def list_plugins(client: KonnectClient, params: ListCoreEntitiesParameters) -> dict[str, Any]:
    return await _list_entities(
        client,
        params,
        "plugins",
        _format_plugin,
        [
            "Use list_services and list_routes to find entities these plugins are applied to",
            "Use query_api_requests to analyze traffic affected by these plugins",
        ],
    )
