"""
MCP binding for the dispatch router.

Registers the router's two entry points on an MCP SDK low-level server:
- tools/list returns the live ToolDescriptors with their JSON schemas as-is
- tools/call forwards name, arguments and the request's auth context

The low-level server is used instead of decorator-generated tools because the
schemas are hand-written and the router owns validation and the error
envelope. The SDK's own input validation is therefore turned off.
"""

import logging
from functools import partial
from typing import Any, Dict, List, Optional

import anyio
from mcp import types
from mcp.server.lowlevel import Server

from server.router import ToolRouter

logger = logging.getLogger(__name__)

SERVER_NAME = "TianGong-MCP-Server"
SERVER_VERSION = "1.0.0"


def _meta_auth(meta: Any) -> Dict[str, Any]:
    """Auth values a client attached under ``params._meta.auth``."""
    if meta is None:
        return {}
    extra = meta.model_dump() if hasattr(meta, "model_dump") else dict(meta)
    auth = extra.get("auth")
    return dict(auth) if isinstance(auth, dict) else {}


def request_auth_context(server: Server) -> Dict[str, Any]:
    """
    Collect the auth values of the request being handled.

    Sources, later ones winning: ``params._meta.auth`` and, on the HTTP
    transport, the ``x-api-key`` header.
    """
    try:
        ctx = server.request_context
    except LookupError:
        return {}

    auth = _meta_auth(ctx.meta)

    http_request = getattr(ctx, "request", None)
    headers = getattr(http_request, "headers", None)
    if headers is not None:
        header_key = headers.get("x-api-key")
        if header_key:
            auth["x-api-key"] = header_key

    return auth


def build_mcp_server(router: ToolRouter) -> Server:
    server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return [
            types.Tool(
                name=descriptor.name,
                description=descriptor.description,
                inputSchema=descriptor.input_schema,
            )
            for descriptor in router.list_tools()
        ]

    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> types.CallToolResult:
        auth_context = request_auth_context(server)
        # Adapters block on network I/O; keep the event loop free for other requests
        result = await anyio.to_thread.run_sync(
            partial(router.call_tool, name, arguments, auth_context)
        )
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=block.text) for block in result.content],
            isError=result.is_error,
        )

    logger.info(f"MCP server ready with tools: {[d.name for d in router.list_tools()]}")
    return server
