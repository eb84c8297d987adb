"""Tests for structlog setup and per-request log context."""

from __future__ import annotations

import logging

import pytest
import structlog

from src.infra.logging import SERVICE_NAME, _add_service, bind_request_context, setup_logging


@pytest.fixture(autouse=True)
def _clean_context():
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


def test_service_added_to_events() -> None:
    assert _add_service(None, "info", {"event": "x"}) == {"event": "x", "service": SERVICE_NAME}


def test_explicit_service_kept() -> None:
    assert _add_service(None, "info", {"service": "other"})["service"] == "other"


def test_bind_request_context_replaces_previous() -> None:
    bind_request_context("req-1", path="/mcp/tools")
    bind_request_context("req-2")

    assert structlog.contextvars.get_contextvars() == {"request_id": "req-2"}


def test_uvicorn_loggers_follow_level() -> None:
    setup_logging(json_output=False, log_level="warning")

    assert logging.getLogger("uvicorn.access").level == logging.WARNING


def test_unknown_level_rejected() -> None:
    with pytest.raises(KeyError):
        setup_logging(log_level="LOUD")
