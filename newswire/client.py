"""Aggregation client presenting uniform page/limit semantics over every provider."""

from __future__ import annotations

import asyncio
import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from .config import NewsSettings
from .enums import validate_options
from .errors import InvalidQueryError
from .models import Article, NewsPage, Pagination
from .providers import NewsProvider
from .registry import ProviderRegistry

LOGGER = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass
class QueryCacheEntry:
    """Articles fetched for one query key.

    An entry starts empty and is populated by exactly one provider fetch;
    later page requests only re-slice ``articles``.
    """

    articles: List[Article] = field(default_factory=list)
    total_articles: int = 0
    last_fetch_size: int = 0
    has_more: bool = True
    populated: bool = False


def parse_positive_int(value: Any, reason: str) -> int:
    if isinstance(value, bool):
        raise InvalidQueryError(value, reason)
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            raise InvalidQueryError(value, reason) from None
    else:
        raise InvalidQueryError(value, reason)
    if number < 1:
        raise InvalidQueryError(value, reason)
    return number


def build_pagination(
    page: int,
    limit: int,
    total_results: int,
    actual_results: int,
    has_next_page: bool,
    client_side: bool,
) -> Pagination:
    total_pages = math.ceil(total_results / limit) if total_results > 0 else 1
    has_previous_page = page > 1
    return Pagination(
        current_page=page,
        limit=limit,
        total_results=total_results,
        actual_results=actual_results,
        total_pages=total_pages,
        has_next_page=has_next_page,
        has_previous_page=has_previous_page,
        next_page=page + 1 if has_next_page else None,
        previous_page=page - 1 if has_previous_page else None,
        client_side_pagination=client_side,
    )


class NewsClient:
    """Search and headline access across all registered providers.

    Search results are cached per query key for the lifetime of the client so
    that repeated page requests see a stable view; headlines are always
    forwarded to the provider.
    """

    def __init__(self, registry: ProviderRegistry) -> None:
        self.registry = registry
        self._cache: Dict[str, QueryCacheEntry] = {}
        self._inflight: Dict[str, "asyncio.Task[None]"] = {}

    @classmethod
    def from_settings(
        cls,
        settings: NewsSettings,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "NewsClient":
        return cls(ProviderRegistry.from_settings(settings, http_client=http_client))

    async def search_news(
        self,
        query: Any,
        *,
        provider: Optional[str] = None,
        page: Any = DEFAULT_PAGE,
        limit: Any = DEFAULT_LIMIT,
        country: Optional[str] = None,
        lang: Optional[str] = None,
        sort_by: Optional[str] = None,
        search_in: Optional[str] = None,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
    ) -> NewsPage:
        if not isinstance(query, str) or not query.strip():
            raise InvalidQueryError(
                query if isinstance(query, str) else "",
                "Search query is required and must be non-empty",
            )
        page_num = parse_positive_int(page, "Page must be a positive integer")
        limit_num = parse_positive_int(limit, "Limit must be 1 or more")
        validate_options(sort_by=sort_by, search_in=search_in)

        news_provider = self.registry.resolve(provider)
        capabilities = news_provider.capabilities
        query = query.strip()
        options = {
            key: value
            for key, value in {
                "country": country,
                "lang": lang,
                "sort_by": sort_by,
                "search_in": search_in,
                "from_date": from_date,
                "to_date": to_date,
            }.items()
            if value is not None
        }

        key = self._cache_key(query, news_provider.name, options)
        entry = self._cache.setdefault(key, QueryCacheEntry())
        start = (page_num - 1) * limit_num
        end = start + limit_num

        if not entry.populated and entry.has_more:
            if capabilities.is_capped:
                fetch_size = capabilities.result_ceiling
            else:
                fetch_size = min(max(end, limit_num * 2), capabilities.max_page_size)
            await self._populate(key, entry, news_provider, query, fetch_size, options)
        else:
            LOGGER.debug("Serving %r page %d from cache", query, page_num)

        page_articles = entry.articles[start:end]
        total = entry.total_articles
        if capabilities.is_capped:
            # Nothing beyond the cached set will ever be retrievable.
            has_next = len(entry.articles) > end
            total = len(entry.articles)
        elif total > 0:
            has_next = end < total
        else:
            has_next = len(entry.articles) > end or entry.has_more
            total = max(len(entry.articles) * 2, end + limit_num) if has_next else len(entry.articles)

        return NewsPage(
            provider=news_provider.name,
            articles=page_articles,
            total_results=total,
            pagination=build_pagination(
                page_num, limit_num, total, len(page_articles), has_next, client_side=True
            ),
        )

    async def get_top_headlines(
        self,
        *,
        provider: Optional[str] = None,
        page: Any = DEFAULT_PAGE,
        limit: Any = DEFAULT_LIMIT,
        category: Optional[str] = None,
        country: Optional[str] = None,
        lang: Optional[str] = None,
    ) -> NewsPage:
        page_num = parse_positive_int(page, "Page must be a positive integer")
        limit_num = parse_positive_int(limit, "Limit must be 1 or more")
        validate_options(category=category)

        news_provider = self.registry.resolve(provider)
        result = await news_provider.get_top_headlines(
            max_results=limit_num,
            page=page_num,
            category=category,
            country=country,
            lang=lang,
        )
        total = result.total_results or len(result.articles)
        has_next = page_num < math.ceil(total / limit_num)
        return NewsPage(
            provider=news_provider.name,
            articles=list(result.articles),
            total_results=total,
            pagination=build_pagination(
                page_num, limit_num, total, len(result.articles), has_next, client_side=False
            ),
        )

    def available_providers(self) -> List[str]:
        return self.registry.available()

    @property
    def default_provider(self) -> Optional[str]:
        return self.registry.default

    def set_default_provider(self, name: str) -> None:
        self.registry.set_default(name)

    def find_article(self, article_id: str) -> Optional[Article]:
        """Look up an article among cached search results; ``None`` when absent."""

        for entry in self._cache.values():
            for article in entry.articles:
                if article.id == article_id:
                    return article
        return None

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> int:
        cleared = len(self._cache)
        self._cache.clear()
        self._inflight.clear()
        LOGGER.info("Cleared %d cached queries", cleared)
        return cleared

    async def aclose(self) -> None:
        self.clear_cache()
        await self.registry.aclose()

    @staticmethod
    def _cache_key(query: str, provider_name: str, options: Dict[str, Any]) -> str:
        return json.dumps(
            {"query": query, "provider": provider_name, **options},
            sort_keys=True,
            default=str,
        )

    async def _populate(
        self,
        key: str,
        entry: QueryCacheEntry,
        provider: NewsProvider,
        query: str,
        fetch_size: int,
        options: Dict[str, Any],
    ) -> None:
        # Concurrent callers for the same key share one fetch.
        task = self._inflight.get(key)
        if task is None or task.done():
            task = asyncio.ensure_future(
                self._fetch_into(entry, provider, query, fetch_size, options)
            )
            self._inflight[key] = task
            task.add_done_callback(lambda done: self._forget(key, done))
        else:
            LOGGER.debug("Joining in-flight fetch for %r", query)
        await asyncio.shield(task)

    def _forget(self, key: str, task: "asyncio.Task[None]") -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        # Waiters may all have been cancelled; mark the failure as retrieved.
        if not task.cancelled() and task.exception() is not None:
            LOGGER.debug("Fetch for key %s failed: %r", key, task.exception())

    async def _fetch_into(
        self,
        entry: QueryCacheEntry,
        provider: NewsProvider,
        query: str,
        fetch_size: int,
        options: Dict[str, Any],
    ) -> None:
        LOGGER.info("Fetching up to %d articles from %s for %r", fetch_size, provider.name, query)
        result = await provider.search_news(query, max_results=fetch_size, page=1, **options)
        entry.articles = list(result.articles)
        entry.total_articles = result.total_results
        entry.last_fetch_size = fetch_size
        if provider.capabilities.is_capped:
            entry.has_more = False
        else:
            entry.has_more = len(result.articles) >= fetch_size
        entry.populated = True
        LOGGER.info("Cached %d articles from %s for %r", len(entry.articles), provider.name, query)


__all__ = ["NewsClient", "QueryCacheEntry", "build_pagination", "parse_positive_int"]
