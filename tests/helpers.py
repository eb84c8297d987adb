"""Test helpers shared across test modules."""

from __future__ import annotations

from typing import Any

from src.tools.base import ToolDescriptor, ToolHandler, ToolInput, ToolOutput


async def echo_handler(arguments: ToolInput) -> ToolOutput:
    return arguments


def make_descriptor(
    tool_id: str = "echo.test",
    handler: ToolHandler = echo_handler,
    *,
    version: str = "1.0.0",
    parameters: dict[str, Any] | None = None,
) -> ToolDescriptor:
    kwargs: dict[str, Any] = {}
    if parameters is not None:
        kwargs["parameters"] = parameters
    return ToolDescriptor(
        id=tool_id,
        name=tool_id,
        description=f"Test tool {tool_id}",
        handler=handler,
        version=version,
        **kwargs,
    )
