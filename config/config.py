# config/config.py

"""Process-wide settings for the MCP server.

Values are resolved once at startup with the precedence:
explicit runtime parameter > environment variable (.env included) > default.

The resulting Settings object is frozen and passed by reference into the
router and the adapters. Nothing mutates it after startup.
"""

import os
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_REGION = "us-east-1"
DEFAULT_REQUEST_TIMEOUT = 60.0

# setting name -> environment variable
ENV_VARS: Dict[str, str] = {
    "base_url": "BASE_URL",
    "anon_key": "SUPABASE_ANON_KEY",
    "region": "X_REGION",
    "remote_deployment_url": "REMOTE_DEPLOYMENT_URL",
    "remote_api_key": "REMOTE_LANGSMITH_API_KEY",
    "x_api_key": "X_API_KEY",
    "request_timeout": "REQUEST_TIMEOUT",
    "enabled_tools": "ENABLED_TOOLS",
}


class Settings(BaseModel):
    """Immutable configuration shared by every request."""

    model_config = ConfigDict(frozen=True)

    base_url: str = ""
    anon_key: str = ""
    region: str = DEFAULT_REGION
    remote_deployment_url: str = ""
    remote_api_key: str = ""
    x_api_key: str = ""
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)
    # Empty means "use the default live set" (see tools.registry.live_tool_names)
    enabled_tools: Tuple[str, ...] = ()


def _parse_tool_list(raw: Any) -> Tuple[str, ...]:
    if isinstance(raw, str):
        return tuple(name.strip() for name in raw.split(",") if name.strip())
    return tuple(raw)


def _parse_timeout(raw: Any) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError):
        raise RuntimeError(f"REQUEST_TIMEOUT must be a number of seconds, got {raw!r}")


def load_settings(**overrides: Optional[Any]) -> Settings:
    """
    Resolve settings from overrides, then the environment, then defaults.

    Overrides whose value is None are ignored so that unset CLI options fall
    through to the environment.

    Raises:
        RuntimeError: If a value is malformed (e.g. a non-numeric timeout).
    """
    load_dotenv()

    unknown = set(overrides) - set(ENV_VARS)
    if unknown:
        raise RuntimeError(f"Unknown settings: {sorted(unknown)}")

    values: Dict[str, Any] = {}
    for name, env_var in ENV_VARS.items():
        value = overrides.get(name)
        if value is None:
            value = os.getenv(env_var)
        if value is None or value == "":
            continue
        values[name] = value

    if "request_timeout" in values:
        values["request_timeout"] = _parse_timeout(values["request_timeout"])
        if values["request_timeout"] <= 0:
            raise RuntimeError("REQUEST_TIMEOUT must be greater than zero")
    if "enabled_tools" in values:
        values["enabled_tools"] = _parse_tool_list(values["enabled_tools"])
    if "base_url" in values:
        values["base_url"] = values["base_url"].rstrip("/")

    return Settings(**values)
