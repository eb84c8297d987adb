from __future__ import annotations

import json
import math
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.config.settings import get_settings
from src.gateway.dispatch import DispatchCore, build_dispatch_core
from src.gateway.protocol import (
    ContextRemovedResponse,
    ContextResponse,
    ErrorResponse,
    ServerInfo,
    ToolListResponse,
    ToolSchema,
)
from src.infra.errors import ArcMCPError, GatewayError, ToolValidationError
from src.infra.logging import bind_request_context, setup_logging

logger = structlog.get_logger()

TIMEOUT_HEADER = "x-timeout-seconds"
REQUEST_ID_HEADER = "x-request-id"

# Client-error status per error code; anything unlisted maps to 400.
_STATUS_BY_CODE: dict[str, int] = {
    "AUTHENTICATION_REQUIRED": 401,
    "UNAUTHORIZED": 403,
    "TOOL_NOT_FOUND": 404,
    "TIMEOUT": 408,
    "INVALID_INPUT": 422,
    "EXECUTION_ERROR": 400,
    "INVALID_BODY": 400,
    "INVALID_HEADER": 400,
}


def status_for(error: ArcMCPError) -> int:
    return _STATUS_BY_CODE.get(error.code, 400)


def create_app(dispatch_core: DispatchCore | None = None) -> FastAPI:
    """Build the HTTP gateway.

    With dispatch_core=None the lifespan assembles one from settings;
    tests pass a pre-built core instead.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        settings = get_settings()
        setup_logging(
            json_output=settings.logging.json_output, log_level=settings.logging.level
        )

        core = dispatch_core or build_dispatch_core(settings)
        await core.start()
        app.state.dispatch_core = core
        logger.info(
            "gateway_started",
            host=settings.gateway.host,
            port=settings.gateway.port,
            tools=len(core.list_tools()),
        )

        try:
            yield
        finally:
            await core.stop()
            logger.info("gateway_stopped")

    app = FastAPI(title="ARC MCP Gateway", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def _request_context(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        bind_request_context(request_id, path=request.url.path)
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.exception_handler(ArcMCPError)
    async def _handle_arc_error(request: Request, exc: ArcMCPError) -> JSONResponse:
        status = status_for(exc)
        logger.warning(
            "request_error",
            path=request.url.path,
            code=exc.code,
            status=status,
            error=str(exc),
        )
        body = ErrorResponse(
            error=str(exc),
            code=exc.code,
            tool_id=getattr(exc, "tool_id", None),
            violations=exc.violations if isinstance(exc, ToolValidationError) else None,
        )
        return JSONResponse(status_code=status, content=body.model_dump(exclude_none=True))

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/mcp/info")
    async def info(request: Request) -> ServerInfo:
        _authenticate(request)
        return ServerInfo()

    @app.get("/mcp/tools")
    async def list_tools(request: Request) -> ToolListResponse:
        core = _authenticate(request)
        return ToolListResponse(
            tools=[ToolSchema(**tool.to_schema()) for tool in core.list_tools()]
        )

    @app.post("/mcp/execute/{tool_id}")
    async def execute(tool_id: str, request: Request) -> Any:
        core = _authenticate(request)
        arguments = await _read_arguments(request)
        timeout_s = _read_timeout(request)
        return await core.execute_tool(tool_id, arguments, timeout_s=timeout_s)

    @app.get("/mcp/context/{session_id}")
    async def get_context(session_id: str, request: Request) -> ContextResponse:
        core = _authenticate(request)
        context = core.context_store.get_context(session_id)
        return ContextResponse(session_id=session_id, state=context.get_all())

    @app.delete("/mcp/context/{session_id}")
    async def remove_context(session_id: str, request: Request) -> ContextRemovedResponse:
        core = _authenticate(request)
        removed = core.context_store.remove_context(session_id)
        return ContextRemovedResponse(session_id=session_id, removed=removed)

    return app


def _authenticate(request: Request) -> DispatchCore:
    """Run transport authentication; return the app's dispatch core on success."""
    core: DispatchCore = request.app.state.dispatch_core
    if not core.security_gate.authenticate_request(request.headers):
        logger.info("request_unauthenticated", path=request.url.path)
        raise GatewayError("Missing or invalid credentials", code="AUTHENTICATION_REQUIRED")
    return core


async def _read_arguments(request: Request) -> dict[str, Any]:
    """Decode the request body as a JSON object. An empty body means no arguments."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise GatewayError(f"Invalid JSON: {e}", code="INVALID_BODY") from e
    if not isinstance(data, dict):
        raise GatewayError(
            f"Request body must be a JSON object (got {type(data).__name__})",
            code="INVALID_BODY",
        )
    return data


def _read_timeout(request: Request) -> float | None:
    raw = request.headers.get(TIMEOUT_HEADER)
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError as e:
        raise GatewayError(
            f"{TIMEOUT_HEADER} must be a number (got '{raw}')", code="INVALID_HEADER"
        ) from e
    if not math.isfinite(value) or value <= 0:
        raise GatewayError(f"{TIMEOUT_HEADER} must be > 0 (got {raw})", code="INVALID_HEADER")
    return value


app = create_app()


def main() -> None:
    """Run the gateway with uvicorn on the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.gateway.host, port=settings.gateway.port)


if __name__ == "__main__":
    main()
