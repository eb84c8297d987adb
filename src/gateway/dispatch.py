"""Core dispatch: authorize → resolve → validate → execute under a deadline.

DispatchCore is the only protocol surface the HTTP gateway depends on.
Failures surface as DispatchError subclasses carrying tool_id and a stable
code; the gateway maps codes to status. No failure is retried here.
"""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Any

import structlog

from src.infra.errors import (
    DispatchError,
    LifecycleError,
    ToolExecutionError,
    ToolNotFoundError,
    ToolTimeoutError,
    ToolValidationError,
    UnauthorizedError,
)
from src.security.gate import SecurityGate
from src.session.context_store import ContextStore
from src.tools.builtins import register_builtins
from src.tools.registry import ToolRegistry
from src.tools.schema import validate_arguments

if TYPE_CHECKING:
    from src.config.settings import Settings
    from src.tools.base import ToolDescriptor, ToolOutput

logger = structlog.get_logger()

DEFAULT_EXECUTION_TIMEOUT_S: float = 30.0


class DispatchCore:
    """Owns the tool registry, security gate and context store of one server instance.

    Each execute_tool call is independent; concurrent calls only share the
    registry (read-mostly) and the context store (internally locked).
    """

    def __init__(
        self,
        *,
        registry: ToolRegistry,
        security_gate: SecurityGate,
        context_store: ContextStore,
        execution_timeout_s: float = DEFAULT_EXECUTION_TIMEOUT_S,
        validate_input: bool = True,
    ) -> None:
        if execution_timeout_s <= 0:
            raise ValueError(f"execution_timeout_s must be > 0, got {execution_timeout_s}")
        self._registry = registry
        self._gate = security_gate
        self._contexts = context_store
        self._execution_timeout_s = execution_timeout_s
        self._validate_input = validate_input
        self._running = False

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def security_gate(self) -> SecurityGate:
        return self._gate

    @property
    def context_store(self) -> ContextStore:
        return self._contexts

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Mark the core as serving. Raises LifecycleError if already running."""
        if self._running:
            raise LifecycleError("Dispatch core is already running")
        self._running = True
        logger.info("dispatch_started", tools=len(self._registry))

    async def stop(self) -> None:
        """Mark the core as stopped. Raises LifecycleError if not running."""
        if not self._running:
            raise LifecycleError("Dispatch core is not running")
        self._running = False
        logger.info("dispatch_stopped")

    def register_tool(self, descriptor: ToolDescriptor) -> None:
        """Late registration; replaces any descriptor with the same id."""
        self._registry.register(descriptor)

    def list_tools(self) -> list[ToolDescriptor]:
        return self._registry.list_tools()

    async def execute_tool(
        self,
        tool_id: str,
        arguments: dict[str, Any],
        *,
        timeout_s: float | None = None,
    ) -> ToolOutput:
        """Run a tool's handler on behalf of a caller.

        Raises UnauthorizedError, ToolNotFoundError, ToolValidationError,
        ToolTimeoutError or ToolExecutionError. The handler is never invoked
        when authorization, lookup or validation fails.
        """
        # 1. Authorization
        decision = self._gate.check_tool_execution(tool_id, arguments)
        if not decision.allowed:
            logger.warning("tool_execution_denied", tool_id=tool_id, reason=decision.reason)
            raise UnauthorizedError(tool_id, decision.reason)

        # 2. Lookup
        descriptor = self._registry.get(tool_id)
        if descriptor is None:
            logger.info("tool_not_found", tool_id=tool_id)
            raise ToolNotFoundError(tool_id)

        # 3. Validation
        if self._validate_input:
            violations = validate_arguments(descriptor.parameters, arguments)
            if violations:
                logger.info("tool_input_invalid", tool_id=tool_id, violations=violations)
                raise ToolValidationError(tool_id, violations)

        # 4. Execute under deadline
        deadline = self._execution_timeout_s if timeout_s is None else timeout_s
        if deadline <= 0:
            raise ValueError(f"timeout_s must be > 0, got {deadline}")

        started = time.monotonic()
        try:
            async with asyncio.timeout(deadline) as scope:
                result = await descriptor.handler(arguments)
        except TimeoutError as e:
            if scope.expired():
                logger.warning("tool_execution_timeout", tool_id=tool_id, timeout_s=deadline)
                raise ToolTimeoutError(tool_id, deadline) from None
            logger.warning("tool_execution_failed", tool_id=tool_id, error=str(e))
            raise ToolExecutionError(tool_id, str(e) or type(e).__name__) from e
        except DispatchError:
            raise
        except Exception as e:
            logger.warning("tool_execution_failed", tool_id=tool_id, error=str(e))
            raise ToolExecutionError(tool_id, str(e) or type(e).__name__) from e

        logger.info(
            "tool_executed",
            tool_id=tool_id,
            duration_ms=round((time.monotonic() - started) * 1000, 1),
        )
        return result


def build_dispatch_core(settings: Settings) -> DispatchCore:
    """Assemble a DispatchCore from settings with the built-in tool catalog registered."""
    registry = ToolRegistry()
    register_builtins(registry, settings)
    return DispatchCore(
        registry=registry,
        security_gate=SecurityGate.from_settings(settings.security),
        context_store=ContextStore(
            max_sessions=settings.context.max_sessions,
            idle_ttl_s=settings.context.idle_ttl_s,
        ),
        execution_timeout_s=settings.dispatch.execution_timeout_s,
        validate_input=settings.dispatch.validate_input,
    )
