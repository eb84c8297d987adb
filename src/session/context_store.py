"""Per-session scratch state kept for the lifetime of the server process.

ContextStore is the sole owner of SessionContext instances. Contexts are
created lazily on first access and live until removed, evicted as the least
recently used entry once max_sessions is exceeded, or (when idle_ttl_s > 0)
purged after sitting idle for longer than the TTL.
"""

from __future__ import annotations

import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from typing import Any

import structlog

logger = structlog.get_logger()

_MISSING = object()


class SessionContext:
    """Key/value state for one session. Access only through ContextStore handles."""

    def __init__(self, session_id: str, *, now: float = 0.0) -> None:
        self.session_id = session_id
        self.last_accessed = now
        self._state: dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._state.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._state[key] = value

    def delete(self, key: str) -> bool:
        """Remove key; return whether it was present."""
        return self._state.pop(key, _MISSING) is not _MISSING

    def get_all(self) -> dict[str, Any]:
        """Snapshot copy of the state; mutating it does not touch the context."""
        return dict(self._state)

    def __len__(self) -> int:
        return len(self._state)


class ContextStore:
    """Thread-safe session id -> SessionContext mapping with LRU and idle expiry."""

    def __init__(
        self,
        *,
        max_sessions: int = 10_000,
        idle_ttl_s: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_sessions <= 0:
            raise ValueError(f"max_sessions must be > 0, got {max_sessions}")
        if idle_ttl_s < 0:
            raise ValueError(f"idle_ttl_s must be >= 0, got {idle_ttl_s}")
        self._contexts: OrderedDict[str, SessionContext] = OrderedDict()
        self._max_sessions = max_sessions
        self._idle_ttl_s = idle_ttl_s
        self._clock = clock
        self._lock = threading.Lock()

    def get_context(self, session_id: str) -> SessionContext:
        """Return the session's context, creating an empty one if absent. Never fails."""
        with self._lock:
            now = self._clock()
            self._purge_expired_locked(now)
            context = self._contexts.get(session_id)
            if context is None:
                context = SessionContext(session_id, now=now)
                self._contexts[session_id] = context
                logger.debug("context_created", session_id=session_id)
                self._evict_overflow_locked()
            else:
                self._contexts.move_to_end(session_id)
                context.last_accessed = now
            return context

    def remove_context(self, session_id: str) -> bool:
        """Delete the session's context. True only if a context was removed."""
        with self._lock:
            removed = self._contexts.pop(session_id, None) is not None
        if removed:
            logger.debug("context_removed", session_id=session_id)
        return removed

    def purge_expired(self) -> int:
        """Drop contexts idle for longer than idle_ttl_s. Returns how many were dropped."""
        with self._lock:
            return self._purge_expired_locked(self._clock())

    def session_ids(self) -> list[str]:
        """Session ids from least to most recently used."""
        with self._lock:
            return list(self._contexts)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._contexts

    def __len__(self) -> int:
        return len(self._contexts)

    def _purge_expired_locked(self, now: float) -> int:
        if self._idle_ttl_s <= 0:
            return 0
        # LRU order is also last_accessed order, so expired sessions form a prefix.
        expired: list[str] = []
        for sid, ctx in self._contexts.items():
            if now - ctx.last_accessed <= self._idle_ttl_s:
                break
            expired.append(sid)
        for sid in expired:
            del self._contexts[sid]
            logger.info("context_expired", session_id=sid, idle_ttl_s=self._idle_ttl_s)
        return len(expired)

    def _evict_overflow_locked(self) -> None:
        while len(self._contexts) > self._max_sessions:
            sid, _ = self._contexts.popitem(last=False)
            logger.info("context_evicted", session_id=sid, max_sessions=self._max_sessions)
