"""Security gate: the single chokepoint for access-control decisions.

Two independent checks:
- authenticate_request gates transport access (credentials on the request).
- authorize_tool_execution gates each tool call (tool id + raw arguments).

Both delegate to injected policy callables so a deployment can swap in real
credential and permission checks without changing the two-method contract.
The allow-all policies are explicit placeholders selected by configuration.
Decisions are computed fresh on every call and never cached.
"""

from __future__ import annotations

import hmac
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import structlog

from src.config.settings import SecuritySettings, split_csv

logger = structlog.get_logger()

_BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class AuthorizationDecision:
    """Outcome of a single per-tool authorization check."""

    allowed: bool
    reason: str = ""


AuthorizationPolicy = Callable[[str, Mapping[str, Any]], AuthorizationDecision]
RequestAuthenticator = Callable[[Mapping[str, str]], bool]


def allow_all(tool_id: str, arguments: Mapping[str, Any]) -> AuthorizationDecision:
    """Placeholder policy: authorize every tool call."""
    return AuthorizationDecision(allowed=True)


def allow_all_requests(headers: Mapping[str, str]) -> bool:
    """Placeholder authenticator: accept every request."""
    return True


class ToolPermissionPolicy:
    """Allow-list / deny-list permission matrix over tool ids.

    A tool is denied if it is in denied_tools, or if allowed_tools is
    non-empty and does not contain it. Entries ending in ".*" match a
    namespace prefix, e.g. "arc.deployment.*".
    """

    def __init__(
        self,
        *,
        allowed_tools: Iterable[str] = (),
        denied_tools: Iterable[str] = (),
    ) -> None:
        self._allowed = frozenset(allowed_tools)
        self._denied = frozenset(denied_tools)

    @staticmethod
    def _matches(tool_id: str, patterns: frozenset[str]) -> bool:
        if tool_id in patterns:
            return True
        return any(
            p.endswith(".*") and tool_id.startswith(p[:-1]) for p in patterns
        )

    def __call__(self, tool_id: str, arguments: Mapping[str, Any]) -> AuthorizationDecision:
        if self._matches(tool_id, self._denied):
            return AuthorizationDecision(allowed=False, reason="tool is denied by policy")
        if self._allowed and not self._matches(tool_id, self._allowed):
            return AuthorizationDecision(allowed=False, reason="tool is not in the allow-list")
        return AuthorizationDecision(allowed=True)


class BearerTokenAuthenticator:
    """Require an 'Authorization: Bearer <token>' header.

    With no configured tokens any non-empty bearer token is accepted;
    otherwise the token must equal one of them (constant-time compare).
    """

    def __init__(self, tokens: Iterable[str] = ()) -> None:
        self._tokens = tuple(tokens)

    def __call__(self, headers: Mapping[str, str]) -> bool:
        authorization = _get_header(headers, "authorization")
        if not authorization or not authorization.startswith(_BEARER_PREFIX):
            return False
        token = authorization[len(_BEARER_PREFIX):].strip()
        if not token:
            return False
        if not self._tokens:
            return True
        return any(
            hmac.compare_digest(token.encode(), expected.encode())
            for expected in self._tokens
        )


def _get_header(headers: Mapping[str, str], name: str) -> str | None:
    """Case-insensitive header lookup for plain dicts and Starlette Headers alike."""
    value = headers.get(name)
    if value is not None:
        return value
    for key, val in headers.items():
        if key.lower() == name:
            return val
    return None


class SecurityGate:
    """Composes a per-tool authorization policy and a request authenticator."""

    def __init__(
        self,
        *,
        policy: AuthorizationPolicy = allow_all,
        authenticator: RequestAuthenticator = allow_all_requests,
    ) -> None:
        self._policy = policy
        self._authenticator = authenticator

    @classmethod
    def from_settings(cls, settings: SecuritySettings) -> SecurityGate:
        allowed = split_csv(settings.allowed_tools)
        denied = split_csv(settings.denied_tools)
        policy: AuthorizationPolicy = allow_all
        if allowed or denied:
            policy = ToolPermissionPolicy(allowed_tools=allowed, denied_tools=denied)

        authenticator: RequestAuthenticator = allow_all_requests
        if settings.auth_mode == "bearer":
            authenticator = BearerTokenAuthenticator(split_csv(settings.api_tokens))
        else:
            logger.warning(
                "security_allow_all_requests",
                msg="SECURITY_AUTH_MODE=allow_all: inbound requests are not authenticated",
            )
        return cls(policy=policy, authenticator=authenticator)

    def check_tool_execution(
        self, tool_id: str, arguments: Mapping[str, Any]
    ) -> AuthorizationDecision:
        """Full authorization decision for one tool call."""
        return self._policy(tool_id, arguments)

    def authorize_tool_execution(self, tool_id: str, arguments: Mapping[str, Any]) -> bool:
        return self.check_tool_execution(tool_id, arguments).allowed

    def authenticate_request(self, headers: Mapping[str, str]) -> bool:
        """Check that an inbound transport request carries acceptable credentials."""
        return self._authenticator(headers)
