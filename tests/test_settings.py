"""Tests for environment-driven settings and their validators."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.config.settings import (
    ContextSettings,
    DispatchSettings,
    GatewaySettings,
    LoggingSettings,
    SecuritySettings,
    Settings,
    split_csv,
)


class TestDefaults:
    def test_root_defaults(self) -> None:
        s = Settings()
        assert s.gateway.port == 3000
        assert s.security.auth_mode == "allow_all"
        assert s.dispatch.execution_timeout_s == 30.0
        assert s.dispatch.validate_input is True
        assert s.context.max_sessions == 10_000
        assert s.context.idle_ttl_s == 0.0
        assert s.logging.level == "INFO"


class TestEnvOverrides:
    def test_gateway_port_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("GATEWAY_PORT", "8080")
        assert GatewaySettings().port == 8080

    def test_dispatch_timeout_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("DISPATCH_EXECUTION_TIMEOUT_S", "2.5")
        monkeypatch.setenv("DISPATCH_VALIDATE_INPUT", "false")
        s = DispatchSettings()
        assert s.execution_timeout_s == 2.5
        assert s.validate_input is False

    def test_security_mode_normalized(self, monkeypatch) -> None:
        monkeypatch.setenv("SECURITY_AUTH_MODE", "  Bearer ")
        assert SecuritySettings().auth_mode == "bearer"

    def test_log_level_normalized(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert LoggingSettings().level == "DEBUG"


class TestValidators:
    def test_invalid_auth_mode(self) -> None:
        with pytest.raises(ValidationError, match="SECURITY_AUTH_MODE must be one of"):
            SecuritySettings(auth_mode="oauth")

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValidationError, match="LOG_LEVEL must be one of"):
            LoggingSettings(level="TRACE")

    def test_non_positive_timeout(self) -> None:
        with pytest.raises(ValidationError):
            DispatchSettings(execution_timeout_s=0)

    def test_non_positive_max_sessions(self) -> None:
        with pytest.raises(ValidationError):
            ContextSettings(max_sessions=0)

    def test_port_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            GatewaySettings(port=70000)


class TestSplitCsv:
    def test_strips_and_drops_empty(self) -> None:
        assert split_csv(" a, b ,,c ") == frozenset({"a", "b", "c"})

    def test_empty(self) -> None:
        assert split_csv("") == frozenset()
