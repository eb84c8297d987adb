from __future__ import annotations

import copy
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

ToolInput = dict[str, Any]
ToolOutput = dict[str, Any]
ToolHandler = Callable[[ToolInput], Awaitable[ToolOutput]]


class ToolGroup(StrEnum):
    """Catalog the tool was registered from. Informational only."""

    api = "api"
    generator = "generator"
    deployment = "deployment"
    docs = "docs"
    custom = "custom"


@dataclass(frozen=True)
class ToolDescriptor:
    """Immutable record describing a tool: identity, input schema, and handler.

    id is namespaced (domain.category.name) and unique within a registry.
    parameters is a JSON Schema object (type / properties / required) that
    callers use for input UX; the dispatch core may validate against it.
    """

    id: str
    name: str
    description: str
    handler: ToolHandler = field(repr=False, compare=False)
    version: str = "1.0.0"
    parameters: dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )
    group: ToolGroup = ToolGroup.custom

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Tool id must be a non-empty string")
        # parameters is a private copy of the caller's dict.
        object.__setattr__(self, "parameters", copy.deepcopy(self.parameters))

    def to_schema(self) -> dict[str, Any]:
        """JSON-serializable view of the descriptor, without the handler.

        The parameters dict is a copy; mutating it leaves the descriptor unchanged.
        """
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "group": self.group.value,
            "parameters": copy.deepcopy(self.parameters),
        }
