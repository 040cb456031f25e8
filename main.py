#!/usr/bin/env python3
"""
Entry point for the TianGong MCP server.

Usage:
    python main.py                                  # stdio transport
    python main.py --mode rest --port 9593 --endpoint /rest
    tiangong-mcp-server --x-api-key <key>

Every option can also come from the environment (MODE, PORT, ENDPOINT, HOST,
X_API_KEY) or a .env file. Exit status is 1 on any startup failure.
"""

import logging
import sys

import click
from dotenv import load_dotenv

from config.config import load_settings
from config.logging_config import setup_logging
from server.mcp_server import build_mcp_server
from server.router import ToolRouter
from server.transports import DEFAULT_ENDPOINT, DEFAULT_PORT, run_rest, run_stdio

# Must run before click reads envvar defaults
load_dotenv()

logger = logging.getLogger(__name__)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--mode",
    type=click.Choice(["stdio", "rest"]),
    default="stdio",
    envvar="MODE",
    show_default=True,
    help="Wire transport.",
)
@click.option(
    "--port",
    type=click.IntRange(1, 65535),
    default=DEFAULT_PORT,
    envvar="PORT",
    show_default=True,
    help="REST transport port.",
)
@click.option(
    "--endpoint",
    default=DEFAULT_ENDPOINT,
    envvar="ENDPOINT",
    show_default=True,
    help="REST transport path.",
)
@click.option(
    "--host",
    default="0.0.0.0",
    envvar="HOST",
    show_default=True,
    help="REST transport bind address.",
)
@click.option(
    "--x-api-key",
    "--x_api_key",
    "x_api_key",
    default=None,
    envvar="X_API_KEY",
    help="API key sent to the search backend. May instead arrive per request.",
)
def cli(mode: str, port: int, endpoint: str, host: str, x_api_key: str) -> None:
    """Serve the TianGong search and agent tools over MCP."""
    setup_logging()

    settings = load_settings(x_api_key=x_api_key)
    if not settings.x_api_key:
        logger.info("No process-wide X_API_KEY; expecting a key with each request")

    router = ToolRouter(settings)
    server = build_mcp_server(router)

    if mode == "rest":
        run_rest(server, host=host, port=port, endpoint=endpoint)
    else:
        run_stdio(server)


def main() -> None:
    try:
        cli.main(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    except click.Abort:
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except Exception:
        logger.exception("Fatal error running server")
        sys.exit(1)


if __name__ == "__main__":
    main()
