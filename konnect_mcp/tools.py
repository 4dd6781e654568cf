"""
MCP tool registration and dispatch for the Konnect server.

Successful calls return the report as pretty-printed JSON text. Failures are
returned as error results carrying the message and troubleshooting tips for
the tool's category; nothing is raised to the transport.
"""

import json
import logging
from typing import Any

from mcp.server import Server
from mcp.types import CallToolResult, TextContent, Tool
from pydantic import ValidationError

from konnect_mcp.api import KonnectClient, KonnectError
from konnect_mcp.tool_definitions import ANALYTICS, CONFIGURATION, CONTROL_PLANES, get_all_tool_definitions, get_tool_spec

logger = logging.getLogger("konnect_mcp.tools")

TROUBLESHOOTING_TIPS = {
    ANALYTICS: [
        "Verify your API key is valid and has permission to read API request analytics",
        "Check that the parameters provided are valid (timeRange, status codes between 100 and 599, "
        "IDs in the form 'controlPlaneId:entityId')",
        "Ensure your network connection to the Kong API is working properly",
    ],
    CONFIGURATION: [
        "Verify your API key is valid and has permission to read the control plane configuration",
        "Check that the controlPlaneId exists (use list_control_planes) and that the offset token is current",
        "Ensure your network connection to the Kong API is working properly",
    ],
    CONTROL_PLANES: [
        "Verify your API key is valid and has permission to list control planes in this region",
        "Check that the control plane or group ID and the paging parameters are valid",
        "Ensure your network connection to the Kong API is working properly",
    ],
}

DEFAULT_TIPS = [
    "Verify your API key is valid and has sufficient permissions",
    "Check that the tool name and parameters provided are valid",
    "Ensure your network connection to the Kong API is working properly",
]


def _describe_validation_error(error: ValidationError) -> str:
    problems = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "arguments"
        problems.append(f"{location}: {err['msg']}")
    return "Invalid arguments - " + "; ".join(problems)


def format_error(message: str, category: str | None = None) -> str:
    tips = TROUBLESHOOTING_TIPS.get(category, DEFAULT_TIPS)
    lines = "\n".join(f"{i}. {tip}" for i, tip in enumerate(tips, start=1))
    return f"Error: {message}\n\nTroubleshooting tips:\n{lines}"


def error_result(message: str, category: str | None = None) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=format_error(message, category))], isError=True)


async def execute_tool(client: KonnectClient, name: str, arguments: dict[str, Any] | None) -> CallToolResult:
    """Validate arguments, run one tool and wrap its report or failure."""
    spec = get_tool_spec(name)
    if spec is None:
        return error_result(f"Unknown tool: {name}")

    try:
        params = spec.parameters.model_validate(arguments or {})
    except ValidationError as e:
        logger.warning(f"{name}: invalid arguments: {e.error_count()} error(s)")
        return error_result(_describe_validation_error(e), spec.category)

    try:
        report = await spec.handler(client, params)
    except KonnectError as e:
        logger.warning(f"{name} failed: {e}")
        return error_result(str(e), spec.category)

    return CallToolResult(content=[TextContent(type="text", text=json.dumps(report, indent=2))])


def register_tools(server: Server, client: KonnectClient) -> None:
    """Register all Konnect tools with the MCP server.

    Args:
        server: The MCP Server instance to register tools with.
        client: Shared API client used by every tool call.
    """

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """Return the list of available tools."""
        return get_all_tool_definitions()

    # Arguments are validated by the pydantic models in execute_tool
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
        """Handle tool invocations."""
        return await execute_tool(client, name, arguments)
