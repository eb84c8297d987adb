from __future__ import annotations

import threading

import structlog

from src.tools.base import ToolDescriptor
from src.tools.schema import check_schema

logger = structlog.get_logger()


class ToolRegistry:
    """Registry of tool descriptors keyed by tool id.

    Re-registering an id replaces the earlier descriptor (last-write-wins);
    the catalog relies on this so later tool groups can override earlier ones.
    Writes take a lock so late registration is safe next to concurrent reads;
    reads work on a snapshot and never observe a half-applied registration.
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolDescriptor] = {}
        self._lock = threading.Lock()

    def register(self, descriptor: ToolDescriptor) -> None:
        """Insert or replace the descriptor under descriptor.id.

        Raises ValueError if the parameter schema is not a valid object schema.
        """
        check_schema(descriptor.parameters)
        with self._lock:
            previous = self._tools.get(descriptor.id)
            if previous is not None:
                # dict assignment keeps the first insertion slot.
                logger.warning(
                    "tool_replaced",
                    tool_id=descriptor.id,
                    old_version=previous.version,
                    new_version=descriptor.version,
                )
            self._tools[descriptor.id] = descriptor
        logger.info("tool_registered", tool_id=descriptor.id, group=descriptor.group.value)

    def get(self, tool_id: str) -> ToolDescriptor | None:
        """Get a descriptor by id. Returns None if not found."""
        return self._tools.get(tool_id)

    def list_tools(self) -> list[ToolDescriptor]:
        """Return all descriptors in registration order."""
        with self._lock:
            return list(self._tools.values())

    def get_tools_schema(self) -> list[dict]:
        """Return every descriptor in its serializable form (no handlers)."""
        return [tool.to_schema() for tool in self.list_tools()]

    def __contains__(self, tool_id: object) -> bool:
        return tool_id in self._tools

    def __len__(self) -> int:
        return len(self._tools)
