"""GNews provider (https://gnews.io), free tier."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from ..enums import ProviderName, SearchIn, SortBy, validate_options
from ..models import ProviderResult
from ..normalizer import normalize_articles
from .base import DEFAULT_TIMEOUT, ProviderCapabilities, ProviderTransport, compact

LOGGER = logging.getLogger(__name__)

BASE_URL = "https://gnews.io/api/v4"
FREE_TIER_CEILING = 10

SORT_MAPPING = {
    SortBy.RELEVANCE.value: "relevance",
    SortBy.DATE.value: "publishedAt",
    SortBy.PUBLISH_TIME.value: "publishedAt",
}
DEFAULT_SORT = "relevance"

SEARCH_IN_MAPPING = {member.value: member.value for member in SearchIn}


def adapt_article(item: Mapping[str, Any]) -> Dict[str, Any]:
    source = item.get("source")
    if not isinstance(source, Mapping):
        source = {}
    return {
        "title": item.get("title"),
        "description": item.get("description"),
        "content": item.get("content"),
        "url": item.get("url"),
        "urlToImage": item.get("image"),
        "publishedAt": item.get("publishedAt"),
        "source": {"name": source.get("name") or "Unknown", "url": source.get("url")},
    }


class GNewsProvider:
    """GNews search and headlines.

    The free tier returns at most ten articles per query and has no real
    offset, so the whole capped set is the only thing worth fetching.
    """

    name = ProviderName.GNEWS.value
    capabilities = ProviderCapabilities(
        supports_pagination=False,
        max_page_size=FREE_TIER_CEILING,
        result_ceiling=FREE_TIER_CEILING,
    )

    def __init__(
        self,
        api_key: Optional[str],
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = BASE_URL,
    ) -> None:
        # GNews answers 403 once the daily request quota is used up.
        self._transport = ProviderTransport(
            self.name,
            base_url,
            api_key,
            client=client,
            timeout=timeout,
            rate_limit_statuses=(403, 429),
        )

    @property
    def is_ready(self) -> bool:
        return self._transport.is_ready

    async def search_news(
        self,
        query: str,
        *,
        max_results: int = 10,
        page: int = 1,
        country: Optional[str] = None,
        lang: Optional[str] = None,
        sort_by: Optional[str] = None,
        search_in: Optional[str] = None,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
    ) -> ProviderResult:
        self._transport.ensure_ready()
        validate_options(sort_by=sort_by, search_in=search_in)
        params = compact(
            {
                "q": query,
                "max": min(max_results, FREE_TIER_CEILING),
                "lang": lang,
                "country": country,
                "from": from_date,
                "to": to_date,
                "sortby": SORT_MAPPING.get(sort_by, DEFAULT_SORT) if sort_by else None,
                "in": SEARCH_IN_MAPPING.get(search_in) if search_in else None,
                "apikey": self._transport.api_key,
            }
        )
        LOGGER.debug("GNews search q=%r max=%s", query, params["max"])
        data = await self._transport.get_json("/search", params)
        return self._normalize(data)

    async def get_top_headlines(
        self,
        *,
        max_results: int = 10,
        page: int = 1,
        category: Optional[str] = None,
        country: Optional[str] = None,
        lang: Optional[str] = None,
    ) -> ProviderResult:
        self._transport.ensure_ready()
        validate_options(category=category)
        params = compact(
            {
                "category": category,
                "max": min(max_results, FREE_TIER_CEILING),
                "page": page if page > 1 else None,
                "lang": lang,
                "country": country,
                "apikey": self._transport.api_key,
            }
        )
        data = await self._transport.get_json("/top-headlines", params)
        return self._normalize(data)

    def _normalize(self, data: Mapping[str, Any]) -> ProviderResult:
        raw = data.get("articles")
        if not isinstance(raw, list):
            raw = []
        adapted = [adapt_article(item) for item in raw if isinstance(item, Mapping)]
        articles = normalize_articles(adapted, self.name)
        total = data.get("totalArticles")
        return ProviderResult(
            provider=self.name,
            total_results=total if isinstance(total, int) and total > 0 else 0,
            articles=articles,
        )

    async def aclose(self) -> None:
        await self._transport.aclose()


__all__ = ["GNewsProvider", "FREE_TIER_CEILING"]
