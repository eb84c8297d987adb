"""In-memory ARC documentation index with keyword search.

The index is seeded with a fixed set of entries per category; no pages
are fetched.
"""

from __future__ import annotations

import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass

import structlog

logger = structlog.get_logger()

DOC_CATEGORIES = ("api", "infrastructure", "ui", "saas")

TITLE_HIT_SCORE = 5
CONTENT_HIT_SCORE = 1
PHRASE_BONUS_SCORE = 3
SNIPPET_CONTEXT_CHARS = 100
SNIPPET_FALLBACK_CHARS = 200
MAX_CACHE_ENTRIES = 1024


@dataclass(frozen=True)
class DocEntry:
    title: str
    url: str
    category: str
    content: str


@dataclass(frozen=True)
class DocSearchResult:
    title: str
    url: str
    category: str
    snippet: str
    score: int

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "url": self.url,
            "category": self.category,
            "snippet": self.snippet,
            "score": self.score,
        }


_SEED_ENTRIES: dict[str, list[tuple[str, str, str]]] = {
    "api": [
        (
            "Authentication Service",
            "authentication.html",
            "The Authentication Service provides user authentication and "
            "authorization capabilities for ARC applications.",
        ),
        (
            "Notification Service",
            "notification.html",
            "The Notification Service enables sending notifications across "
            "multiple channels in ARC applications.",
        ),
    ],
    "infrastructure": [
        (
            "Deployment Guide",
            "deployment.html",
            "This guide explains how to deploy ARC applications to various "
            "cloud environments.",
        ),
    ],
    "ui": [
        (
            "UI Components",
            "components.html",
            "ARC provides a set of reusable UI components for building "
            "consistent user interfaces.",
        ),
    ],
    "saas": [
        (
            "Multi-tenancy",
            "multi-tenancy.html",
            "ARC supports multi-tenancy for building SaaS applications with "
            "isolated tenant data.",
        ),
    ],
}


class DocumentationService:
    """Keyword search over the seeded documentation index."""

    def __init__(
        self,
        base_url: str = "https://sourcefuse.github.io/arc-docs/",
        *,
        cache_ttl_s: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self._cache_ttl_s = cache_ttl_s  # 0 disables the result cache
        self._clock = clock
        self._cache: OrderedDict[tuple[str, str, int], tuple[float, list[DocSearchResult]]] = (
            OrderedDict()
        )
        self._index: dict[str, DocEntry] = {}
        for category in DOC_CATEGORIES:
            self._index_category(category)

    def _index_category(self, category: str) -> None:
        prefix = f"{self._base_url}arc-{category}-docs/"
        entries = [
            DocEntry(title=title, url=f"{prefix}{page}", category=category, content=content)
            for title, page, content in _SEED_ENTRIES.get(category, [])
        ]
        for entry in entries:
            self._index[entry.url] = entry
        logger.debug("docs_category_indexed", category=category, entries=len(entries))

    def __len__(self) -> int:
        return len(self._index)

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    async def search(
        self, query: str, category: str = "all", max_results: int = 5
    ) -> list[DocSearchResult]:
        """Score entries by term hits; title hits outweigh content hits.

        A full-phrase content match adds a bonus for every term that hits
        the content. Results are sorted by score, highest first.
        """
        key = (query.lower(), category, max_results)
        if self._cache_ttl_s > 0:
            cached = self._cache.get(key)
            if cached is not None and self._clock() - cached[0] < self._cache_ttl_s:
                logger.debug("docs_cache_hit", query=query, category=category)
                return list(cached[1])

        results = self._rank(query, category)[:max_results]
        if self._cache_ttl_s > 0:
            self._store_cached(key, results)
        return list(results)

    def _store_cached(self, key: tuple[str, str, int], results: list[DocSearchResult]) -> None:
        now = self._clock()
        # Entries are kept in write order, so expired ones form a prefix.
        while self._cache:
            written_at, _ = next(iter(self._cache.values()))
            if now - written_at < self._cache_ttl_s:
                break
            self._cache.popitem(last=False)
        self._cache[key] = (now, results)
        self._cache.move_to_end(key)
        while len(self._cache) > MAX_CACHE_ENTRIES:
            self._cache.popitem(last=False)

    def _rank(self, query: str, category: str) -> list[DocSearchResult]:
        phrase = query.lower()
        terms = phrase.split()
        results: list[DocSearchResult] = []

        for url, entry in self._index.items():
            if category != "all" and entry.category != category:
                continue

            title = entry.title.lower()
            content = entry.content.lower()
            score = 0
            for term in terms:
                if term in title:
                    score += TITLE_HIT_SCORE
                if term in content:
                    score += CONTENT_HIT_SCORE
                    if phrase in content:
                        score += PHRASE_BONUS_SCORE

            if score <= 0:
                continue

            results.append(
                DocSearchResult(
                    title=entry.title,
                    url=url,
                    category=entry.category,
                    snippet=_snippet(entry.content, phrase),
                    score=score,
                )
            )

        results.sort(key=lambda r: r.score, reverse=True)
        return results


def _snippet(content: str, phrase: str) -> str:
    position = content.lower().find(phrase) if phrase else -1
    if position >= 0:
        start = max(0, position - SNIPPET_CONTEXT_CHARS)
        end = min(len(content), position + len(phrase) + SNIPPET_CONTEXT_CHARS)
        return content[start:end] + "..."
    return content[:SNIPPET_FALLBACK_CHARS] + "..."
