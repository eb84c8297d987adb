"""Custom exception hierarchy for the ARC MCP server.

All application-specific exceptions inherit from ArcMCPError,
which carries an error code for HTTP error response mapping.
"""

from __future__ import annotations


class ArcMCPError(Exception):
    """Base exception for all ARC MCP errors."""

    def __init__(self, message: str, *, code: str = "INTERNAL_ERROR") -> None:
        super().__init__(message)
        self.code = code


class GatewayError(ArcMCPError):
    """Errors in the HTTP transport layer (bad body, missing credentials)."""

    def __init__(self, message: str, *, code: str = "GATEWAY_ERROR") -> None:
        super().__init__(message, code=code)


class LifecycleError(ArcMCPError):
    """Dispatch core started twice, or stopped while not running."""

    def __init__(self, message: str, *, code: str = "LIFECYCLE_ERROR") -> None:
        super().__init__(message, code=code)


class DispatchError(ArcMCPError):
    """Errors raised while resolving or executing a tool."""

    def __init__(
        self, message: str, *, tool_id: str, code: str = "DISPATCH_ERROR"
    ) -> None:
        super().__init__(message, code=code)
        self.tool_id = tool_id


class UnauthorizedError(DispatchError):
    """Security gate refused the execution. The handler was not invoked."""

    def __init__(self, tool_id: str, reason: str = "") -> None:
        message = f"Not authorized to execute tool {tool_id}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, tool_id=tool_id, code="UNAUTHORIZED")
        self.reason = reason


class ToolNotFoundError(DispatchError):
    """No descriptor is registered under the requested id."""

    def __init__(self, tool_id: str) -> None:
        super().__init__(f"Tool {tool_id} not found", tool_id=tool_id, code="TOOL_NOT_FOUND")


class ToolValidationError(DispatchError):
    """Arguments do not conform to the tool's parameter schema."""

    def __init__(self, tool_id: str, violations: list[str]) -> None:
        super().__init__(
            f"Invalid input for tool {tool_id}: " + "; ".join(violations),
            tool_id=tool_id,
            code="INVALID_INPUT",
        )
        self.violations = violations


class ToolExecutionError(DispatchError):
    """The tool handler itself failed."""

    def __init__(self, tool_id: str, message: str) -> None:
        super().__init__(message, tool_id=tool_id, code="EXECUTION_ERROR")


class ToolTimeoutError(DispatchError):
    """The handler did not finish before the execution deadline."""

    def __init__(self, tool_id: str, timeout_s: float) -> None:
        super().__init__(
            f"Tool {tool_id} timed out after {timeout_s:g}s",
            tool_id=tool_id,
            code="TIMEOUT",
        )
        self.timeout_s = timeout_s
