"""
Wire transports for the MCP server.

- stdio: newline-delimited JSON-RPC on stdin/stdout
- rest: streamable HTTP at a configurable path, stateless with plain JSON
  responses, served by FastAPI + uvicorn
"""

import contextlib
import logging
from typing import AsyncIterator

import anyio
import uvicorn
from fastapi import FastAPI
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager

logger = logging.getLogger(__name__)

DEFAULT_PORT = 9593
DEFAULT_ENDPOINT = "/rest"


async def serve_stdio(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        logger.info("TianGong AI MCP Server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run_stdio(server: Server) -> None:
    anyio.run(serve_stdio, server)


class _McpEndpoint:
    """ASGI app forwarding every request on the MCP path to the session manager."""

    def __init__(self, session_manager: StreamableHTTPSessionManager):
        self.session_manager = session_manager

    async def __call__(self, scope, receive, send) -> None:
        await self.session_manager.handle_request(scope, receive, send)


def build_rest_app(server: Server, endpoint: str = DEFAULT_ENDPOINT) -> FastAPI:
    """
    FastAPI app exposing ``server`` at ``endpoint``.

    Each POST is handled on its own (stateless), so concurrent calls never
    share a session.
    """
    if not endpoint.startswith("/"):
        endpoint = f"/{endpoint}"

    session_manager = StreamableHTTPSessionManager(
        app=server,
        json_response=True,
        stateless=True,
    )

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with session_manager.run():
            logger.info(f"TianGong AI MCP Server accepting requests at {endpoint}")
            yield

    app = FastAPI(
        title="TianGong MCP Server",
        description="MCP tools for ESG search, academic search and the Elle agent",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.get("/")
    async def root():
        """Health check endpoint."""
        return {
            "service": server.name,
            "status": "running",
            "endpoints": {
                "mcp": f"{endpoint} - MCP JSON-RPC over streamable HTTP",
            },
        }

    app.add_route(endpoint, _McpEndpoint(session_manager), methods=["GET", "POST", "DELETE"])
    return app


def run_rest(server: Server, host: str, port: int = DEFAULT_PORT, endpoint: str = DEFAULT_ENDPOINT) -> None:
    """Serve until interrupted. uvicorn exits with status 1 if it cannot bind."""
    app = build_rest_app(server, endpoint)
    logger.info(f"Starting REST transport on {host}:{port}{endpoint}")
    uvicorn.run(app, host=host, port=port)
