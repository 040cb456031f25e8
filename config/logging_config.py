"""Centralized logging configuration for the MCP server.

This module configures Python logging so that:
- Application logs are emitted with timestamps and module names.
- Everything goes to stderr; stdout carries the stdio transport and a stray
  log line there would corrupt the JSON-RPC stream.
- HTTP client libraries (httpx, httpcore, requests, urllib3) log
  request/response details only when LOG_LEVEL is DEBUG.
- LangGraph SDK logs and MCP SDK / uvicorn logs have their own level knobs.

Use LOG_LEVEL env var to control the base level (default: INFO).
"""

import logging
import os
import sys
from typing import Iterable


HTTP_LOGGERS: Iterable[str] = (
    "httpx",
    "httpcore",
    "urllib3",
    "requests",
)

LANGGRAPH_LOGGERS: Iterable[str] = (
    "langgraph",
    "langgraph_sdk",
)

SERVER_LOGGERS: Iterable[str] = (
    "mcp",
    "mcp.server",
    "uvicorn",
    "uvicorn.error",
)


def _level_from_env(var: str, default: str) -> int:
    level_name = os.getenv(var, default).upper()
    return getattr(logging, level_name, logging.INFO)


def setup_logging() -> None:
    """Configure root logging on stderr.

    Idempotent: safe to call from multiple entry points.
    """
    level = _level_from_env("LOG_LEVEL", "INFO")

    root = logging.getLogger()

    # If no handlers are configured yet, set a default format.
    if not root.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
            stream=sys.stderr,
        )
    else:
        root.setLevel(level)

    # HTTP clients: only promote to DEBUG when global LOG_LEVEL is DEBUG.
    if level <= logging.DEBUG:
        for name in HTTP_LOGGERS:
            logging.getLogger(name).setLevel(logging.DEBUG)
    else:
        for name in HTTP_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    langgraph_level = _level_from_env("LANGGRAPH_LOG_LEVEL", "WARNING")
    for name in LANGGRAPH_LOGGERS:
        logging.getLogger(name).setLevel(langgraph_level)

    mcp_level = _level_from_env("MCP_LOG_LEVEL", "INFO")
    for name in SERVER_LOGGERS:
        logging.getLogger(name).setLevel(mcp_level)
