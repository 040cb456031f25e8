"""
Failure taxonomy for tool invocations.

Every failure raised while handling a tools/call request is one of these (or an
unexpected exception). The router turns all of them into an error envelope;
none of them reaches the transport.
"""

from typing import Optional


class ToolInvocationError(Exception):
    """Base class for failures reported back to the caller as isError results."""


class MissingCredentialError(ToolInvocationError):
    def __init__(self, key_name: str = "X_API_KEY"):
        super().__init__(f"{key_name} not set")


class MissingArgumentsError(ToolInvocationError):
    def __init__(self):
        super().__init__("No arguments provided")


class UnsupportedToolError(ToolInvocationError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unsupported tool: {name}")


class InvalidArgumentTypeError(ToolInvocationError):
    """An argument is missing or has the wrong JSON type."""

    def __init__(self, field: str, expected: str):
        self.field = field
        self.expected = expected
        super().__init__(f"Invalid arguments: '{field}' must be {expected}")


class ConfigurationError(ToolInvocationError):
    """A setting required by the invoked tool was not configured."""


class RemoteHttpError(ToolInvocationError):
    """The remote service answered with a non-2xx status."""

    def __init__(self, status: int, reason: Optional[str] = ""):
        self.status = status
        self.reason = reason or ""
        super().__init__(f"HTTP error: {status} {self.reason}".rstrip())


class ResponseParseError(ToolInvocationError):
    """The remote service answered with a body that is not valid JSON."""


class ProtocolError(ToolInvocationError):
    """The remote service answered, but without a field its contract requires."""


class NetworkError(ToolInvocationError):
    """Connection-level failure: refused, reset, DNS, or timed out."""
