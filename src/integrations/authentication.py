"""Simulated ARC authentication service client.

Stands in for the ARC Authentication microservice; returns canned results.
"""

from __future__ import annotations

import secrets
from typing import Any

import structlog

logger = structlog.get_logger()


class AuthenticationService:
    def __init__(
        self, base_url: str = "http://localhost:3001", *, token_ttl_s: int = 3600
    ) -> None:
        self._base_url = base_url
        self._token_ttl_s = token_ttl_s

    async def login(self, credentials: dict[str, Any] | None) -> dict[str, Any]:
        username = (credentials or {}).get("username")
        if not username:
            return {"success": False, "error": "credentials.username is required"}
        logger.info("auth_login", username=username, upstream=self._base_url)
        return {
            "success": True,
            "token": f"tok-{secrets.token_hex(16)}",
            "expiresIn": self._token_ttl_s,
            "user": {"id": "123", "username": username},
        }

    async def logout(self, token: str | None) -> dict[str, Any]:
        logger.info("auth_logout", has_token=bool(token))
        return {"success": True}

    async def refresh_token(self, token: str | None) -> dict[str, Any]:
        if not token:
            return {"success": False, "error": "token is required"}
        return {
            "success": True,
            "token": f"tok-{secrets.token_hex(16)}",
            "expiresIn": self._token_ttl_s,
        }

    async def verify_token(self, token: str | None) -> dict[str, Any]:
        if not token:
            return {"success": True, "valid": False}
        return {
            "success": True,
            "valid": True,
            "user": {"id": "123", "username": "example-user"},
        }
