"""
Dispatch router: the protocol-facing core of the server.

For each tools/call the router:
1. resolves the API key (process-wide key first, then the request's auth context)
2. checks that arguments were sent
3. matches the tool name against the live tools (exact, case-sensitive)
4. validates the tool's arguments
5. runs the tool's adapter
6. wraps the adapter's text, or any failure, into the {content, isError} envelope

No exception leaves call_tool; every failure becomes an error envelope.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from config.config import Settings
from models.errors import (
    InvalidArgumentTypeError,
    MissingArgumentsError,
    MissingCredentialError,
    ToolInvocationError,
    UnsupportedToolError,
)
from models.schemas import TextBlock, ToolDescriptor, ToolInvocationResult
from tools.registry import TOOL_REGISTRY, ToolSpec, live_tool_names

logger = logging.getLogger(__name__)

API_KEY_NAME = "X_API_KEY"


def _normalize_key(key: str) -> str:
    return key.strip().lower().replace("-", "_")


def get_auth_value(auth_context: Optional[Mapping[str, Any]], key: str) -> Optional[str]:
    """
    Look up ``key`` in a request's auth context.

    Matching ignores case and treats ``-`` and ``_`` alike, so X_API_KEY,
    x_api_key and the HTTP header spelling x-api-key all match.
    """
    if not auth_context:
        return None
    wanted = _normalize_key(key)
    for name, value in auth_context.items():
        if _normalize_key(name) == wanted and isinstance(value, str) and value.strip():
            return value.strip()
    return None


def success_result(text: str) -> ToolInvocationResult:
    return ToolInvocationResult(content=[TextBlock(text=text)], is_error=False)


def error_result(error: BaseException) -> ToolInvocationResult:
    """The single conversion from a failure to an error envelope."""
    message = str(error) or error.__class__.__name__
    return ToolInvocationResult(content=[TextBlock(text=f"Error: {message}")], is_error=True)


class ToolRouter:
    def __init__(self, settings: Settings, registry: Mapping[str, ToolSpec] = TOOL_REGISTRY):
        self.settings = settings
        self.registry = registry
        self.live_names = live_tool_names(settings, registry)

    def list_tools(self) -> List[ToolDescriptor]:
        return [self.registry[name].descriptor for name in self.live_names]

    def resolve_api_key(self, auth_context: Optional[Mapping[str, Any]] = None) -> str:
        api_key = self.settings.x_api_key or get_auth_value(auth_context, API_KEY_NAME)
        if not api_key:
            raise MissingCredentialError(API_KEY_NAME)
        return api_key

    def _dispatch(
        self,
        name: str,
        arguments: Optional[Dict[str, Any]],
        auth_context: Optional[Mapping[str, Any]],
    ) -> str:
        api_key = self.resolve_api_key(auth_context)

        if arguments is None:
            raise MissingArgumentsError()
        if not isinstance(arguments, dict):
            raise InvalidArgumentTypeError("arguments", "an object")

        if name not in self.live_names:
            raise UnsupportedToolError(name)
        spec = self.registry[name]

        spec.validate(arguments)
        return spec.invoke(self.settings, api_key, arguments)

    def call_tool(
        self,
        name: str,
        arguments: Optional[Dict[str, Any]],
        auth_context: Optional[Mapping[str, Any]] = None,
    ) -> ToolInvocationResult:
        logger.info(f"Tool call: {name}")
        try:
            text = self._dispatch(name, arguments, auth_context)
        except ToolInvocationError as e:
            logger.warning(f"Tool {name} failed: {e}")
            return error_result(e)
        except Exception as e:
            logger.exception(f"Unexpected error in tool {name}")
            return error_result(e)

        logger.info(f"Tool {name} succeeded ({len(text)} chars)")
        return success_result(text)
