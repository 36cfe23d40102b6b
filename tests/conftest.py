import asyncio
from typing import Any, Dict, List, Optional, Tuple

import pytest

from newswire.client import NewsClient
from newswire.models import Article, ProviderResult
from newswire.normalizer import normalize_article
from newswire.providers import ProviderCapabilities
from newswire.registry import ProviderRegistry

CAPPED = ProviderCapabilities(supports_pagination=False, max_page_size=10, result_ceiling=10)
PAGINATED = ProviderCapabilities(supports_pagination=True, max_page_size=100)


def make_articles(count: int, provider: str = "fake", prefix: str = "Story") -> List[Article]:
    return [
        normalize_article(
            {
                "title": f"{prefix} {idx}",
                "description": f"Description {idx}",
                "url": f"https://news.example.com/{prefix.lower()}/{idx}",
                "publishedAt": "2024-05-01T10:00:00Z",
                "source": {"name": "Example", "url": "https://news.example.com"},
            },
            provider,
        )
        for idx in range(count)
    ]


class FakeProvider:
    """In-memory provider recording every call it receives."""

    def __init__(
        self,
        name: str,
        capabilities: ProviderCapabilities = PAGINATED,
        articles: Optional[List[Article]] = None,
        total: int = 0,
        ready: bool = True,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ) -> None:
        self.name = name
        self.capabilities = capabilities
        self.articles = articles if articles is not None else make_articles(30, name)
        self.total = total
        self.ready = ready
        self.error = error
        self.delay = delay
        self.search_calls: List[Tuple[str, Dict[str, Any]]] = []
        self.headline_calls: List[Dict[str, Any]] = []
        self.closed = False

    @property
    def is_ready(self) -> bool:
        return self.ready

    async def search_news(self, query: str, **kwargs: Any) -> ProviderResult:
        self.search_calls.append((query, kwargs))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return ProviderResult(
            provider=self.name,
            total_results=self.total,
            articles=self.articles[: kwargs.get("max_results", 10)],
        )

    async def get_top_headlines(self, **kwargs: Any) -> ProviderResult:
        self.headline_calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return ProviderResult(
            provider=self.name,
            total_results=self.total,
            articles=self.articles[: kwargs.get("max_results", 10)],
        )

    async def aclose(self) -> None:
        self.closed = True


def build_client(*providers: FakeProvider) -> NewsClient:
    registry = ProviderRegistry()
    for provider in providers:
        registry.register(provider)
    return NewsClient(registry)


@pytest.fixture
def capped_provider():
    return FakeProvider("gnews", CAPPED, articles=make_articles(8, "gnews"), total=54)


@pytest.fixture
def paginated_provider():
    return FakeProvider("newsapi", PAGINATED, articles=make_articles(30, "newsapi"), total=50)


@pytest.fixture
def news_client(capped_provider, paginated_provider):
    return build_client(capped_provider, paginated_provider)
