"""Shared pytest fixtures for the ARC MCP server tests.

Everything is in-process: no network, no database. Each test gets its own
registry / context store / dispatch core, so cores never leak state.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from src.gateway.dispatch import DispatchCore
from src.security.gate import SecurityGate
from src.session.context_store import ContextStore
from src.tools.registry import ToolRegistry


@pytest.fixture()
def registry() -> ToolRegistry:
    return ToolRegistry()


@pytest.fixture()
def context_store() -> ContextStore:
    return ContextStore()


@pytest.fixture()
def build_core(registry, context_store) -> Callable[..., DispatchCore]:
    """Factory for a DispatchCore over the test registry; override gate/timeout per test."""

    def _build(
        *,
        security_gate: SecurityGate | None = None,
        execution_timeout_s: float = 5.0,
        validate_input: bool = True,
    ) -> DispatchCore:
        return DispatchCore(
            registry=registry,
            security_gate=security_gate or SecurityGate(),
            context_store=context_store,
            execution_timeout_s=execution_timeout_s,
            validate_input=validate_input,
        )

    return _build


@pytest.fixture()
def core(build_core) -> DispatchCore:
    return build_core()
