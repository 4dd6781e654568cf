"""
Konnect MCP Server entry point.

Run with: python -m konnect_mcp
"""

import argparse
import asyncio
import logging
import sys

from mcp.server import Server
from mcp.server.stdio import stdio_server

from konnect_mcp import SERVER_NAME, __version__
from konnect_mcp.api import KonnectClient
from konnect_mcp.config import KonnectConfig, Region
from konnect_mcp.tools import register_tools


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="konnect-mcp",
        description="Serve read-only Kong Konnect analytics and inventory tools over MCP stdio",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  KONNECT_ACCESS_TOKEN   Konnect personal or system access token
  KONNECT_REGION         us, eu, au, me or in (default: us)
  KONNECT_BASE_URL       Override the regional API base URL

Examples:
  KONNECT_ACCESS_TOKEN=kpat_... python -m konnect_mcp
  python -m konnect_mcp --region eu --log-level DEBUG
""",
    )
    parser.add_argument(
        "--region",
        choices=[r.value for r in Region],
        default=None,
        help="Konnect region (overrides KONNECT_REGION)",
    )
    parser.add_argument("--base-url", default=None, help="API base URL (overrides the regional default)")
    parser.add_argument("--timeout", type=float, default=None, help="Per-request timeout in seconds (default: 30)")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for messages written to stderr",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(args)


def setup_logging(level: str) -> None:
    # stdout carries the MCP protocol
    logging.basicConfig(
        level=getattr(logging, level),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def run_server(config: KonnectConfig) -> None:
    """Run the MCP server."""
    app = Server(SERVER_NAME, version=__version__)

    async with KonnectClient(config) as client:
        register_tools(app, client)

        # stdio_server is an async context manager
        async with stdio_server() as (read_stream, write_stream):
            logging.getLogger("konnect_mcp").info(f"Kong Konnect MCP Server is running against {config.base_url}")
            await app.run(read_stream, write_stream, app.create_initialization_options())


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the Konnect MCP server."""
    args = parse_args(argv)
    setup_logging(args.log_level)
    try:
        config = KonnectConfig.from_env(region=args.region, base_url_override=args.base_url, timeout_seconds=args.timeout)
        asyncio.run(run_server(config))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        print(f"Error starting MCP server: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
