"""Tests for DocumentationService keyword scoring and snippets."""

from __future__ import annotations

import pytest

from src.integrations.documentation import DocumentationService


@pytest.fixture()
def docs() -> DocumentationService:
    return DocumentationService("https://docs.example/")


class TestIndex:
    def test_seeded_entries(self, docs: DocumentationService) -> None:
        assert len(docs) == 5

    def test_base_url_gets_trailing_slash(self) -> None:
        svc = DocumentationService("https://docs.example")
        assert len(svc) == 5


class TestSearch:
    @pytest.mark.asyncio
    async def test_title_and_content_scoring(self, docs: DocumentationService) -> None:
        results = await docs.search("notification")

        top = results[0]
        assert top.title == "Notification Service"
        # title hit 5 + content hit 1 + phrase bonus 3
        assert top.score == 9
        assert top.url == "https://docs.example/arc-api-docs/notification.html"

    @pytest.mark.asyncio
    async def test_sorted_by_score(self, docs: DocumentationService) -> None:
        results = await docs.search("arc applications")
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)

    @pytest.mark.asyncio
    async def test_category_filter(self, docs: DocumentationService) -> None:
        results = await docs.search("arc", category="ui")
        assert [r.category for r in results] == ["ui"]

    @pytest.mark.asyncio
    async def test_max_results(self, docs: DocumentationService) -> None:
        results = await docs.search("arc", max_results=2)
        assert len(results) == 2

    @pytest.mark.asyncio
    async def test_no_match(self, docs: DocumentationService) -> None:
        assert await docs.search("kubernetes helm") == []

    @pytest.mark.asyncio
    async def test_snippet_around_phrase(self, docs: DocumentationService) -> None:
        results = await docs.search("multi-tenancy")
        assert results[0].snippet.endswith("...")
        assert "multi-tenancy" in results[0].snippet.lower()

    @pytest.mark.asyncio
    async def test_to_dict(self, docs: DocumentationService) -> None:
        result = (await docs.search("deployment"))[0].to_dict()
        assert set(result) == {"title", "url", "category", "snippet", "score"}


class _FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestResultCache:
    @pytest.mark.asyncio
    async def test_disabled_by_default(self, docs: DocumentationService) -> None:
        first = await docs.search("deployment")
        second = await docs.search("deployment")
        assert first == second
        assert first is not second

    @pytest.mark.asyncio
    async def test_cached_until_expiry(self, monkeypatch) -> None:
        clock = _FakeClock()
        svc = DocumentationService("https://docs.example/", cache_ttl_s=60, clock=clock)
        calls: list[str] = []
        original_rank = svc._rank

        def counting_rank(query, category):
            calls.append(query)
            return original_rank(query, category)

        monkeypatch.setattr(svc, "_rank", counting_rank)

        await svc.search("Deployment")
        await svc.search("deployment")
        assert calls == ["Deployment"]

        clock.now = 61
        await svc.search("deployment")
        assert calls == ["Deployment", "deployment"]

    @pytest.mark.asyncio
    async def test_cache_key_includes_category(self) -> None:
        svc = DocumentationService("https://docs.example/", cache_ttl_s=60)
        assert len(await svc.search("arc", category="ui")) == 1
        assert len(await svc.search("arc")) == 5

    @pytest.mark.asyncio
    async def test_expired_entries_dropped_on_write(self) -> None:
        clock = _FakeClock()
        svc = DocumentationService("https://docs.example/", cache_ttl_s=1, clock=clock)
        for i in range(500):
            await svc.search(f"arc {i}")
        assert svc.cache_size == 500

        clock.now = 10_000
        await svc.search("deployment")

        assert svc.cache_size == 1

    @pytest.mark.asyncio
    async def test_cache_bounded(self, monkeypatch) -> None:
        monkeypatch.setattr("src.integrations.documentation.MAX_CACHE_ENTRIES", 3)
        svc = DocumentationService("https://docs.example/", cache_ttl_s=60)
        for i in range(10):
            await svc.search(f"arc {i}")

        assert svc.cache_size == 3
