"""The Guardian Open Platform provider."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import httpx

from ..enums import NewsCategory, ProviderName, SearchIn, SortBy, validate_options
from ..models import ProviderResult
from ..normalizer import normalize_articles, only_with_url
from .base import DEFAULT_TIMEOUT, ProviderCapabilities, ProviderTransport, compact

BASE_URL = "https://content.guardianapis.com"
MAX_PAGE_SIZE = 200
SHOW_FIELDS = "headline,trailText,body,thumbnail"
GUARDIAN_SOURCE = {"name": "The Guardian", "url": "https://www.theguardian.com"}

SORT_MAPPING = {
    SortBy.RELEVANCE.value: "relevance",
    SortBy.DATE.value: "newest",
    SortBy.PUBLISH_TIME.value: "newest",
}
DEFAULT_SORT = "relevance"

SEARCH_IN_MAPPING = {
    SearchIn.TITLE.value: "headline",
    SearchIn.DESCRIPTION.value: "trailText",
    SearchIn.CONTENT.value: "body",
}

SECTION_MAPPING = {
    NewsCategory.BUSINESS.value: "business",
    NewsCategory.ENTERTAINMENT.value: "culture",
    NewsCategory.HEALTH.value: "society",
    NewsCategory.SCIENCE.value: "science",
    NewsCategory.SPORTS.value: "sport",
    NewsCategory.TECHNOLOGY.value: "technology",
}


def adapt_article(item: Mapping[str, Any]) -> Dict[str, Any]:
    fields = item.get("fields")
    if not isinstance(fields, Mapping):
        fields = {}
    return {
        "title": fields.get("headline") or item.get("webTitle"),
        "description": fields.get("trailText") or "",
        "content": fields.get("body") or "",
        "url": item.get("webUrl"),
        "urlToImage": fields.get("thumbnail"),
        "publishedAt": item.get("webPublicationDate"),
        "source": dict(GUARDIAN_SOURCE),
    }


class GuardianProvider:
    name = ProviderName.GUARDIAN.value
    capabilities = ProviderCapabilities(supports_pagination=True, max_page_size=MAX_PAGE_SIZE)

    def __init__(
        self,
        api_key: Optional[str],
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str = BASE_URL,
    ) -> None:
        self._transport = ProviderTransport(
            self.name, base_url, api_key, client=client, timeout=timeout
        )

    @property
    def is_ready(self) -> bool:
        return self._transport.is_ready

    async def search_news(
        self,
        query: str,
        *,
        max_results: int = 20,
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
                "page-size": min(max_results, MAX_PAGE_SIZE),
                "page": page,
                "show-fields": SHOW_FIELDS,
                "order-by": SORT_MAPPING.get(sort_by or "", DEFAULT_SORT),
                "query-fields": SEARCH_IN_MAPPING.get(search_in) if search_in else None,
                "lang": lang,
                "from-date": from_date,
                "to-date": to_date,
                "api-key": self._transport.api_key,
            }
        )
        data = await self._transport.get_json("/search", params)
        return self._normalize(data)

    async def get_top_headlines(
        self,
        *,
        max_results: int = 20,
        page: int = 1,
        category: Optional[str] = None,
        country: Optional[str] = None,
        lang: Optional[str] = None,
    ) -> ProviderResult:
        self._transport.ensure_ready()
        validate_options(category=category)
        section = None
        if category and category != NewsCategory.GENERAL.value:
            section = SECTION_MAPPING.get(category, category)
        params = compact(
            {
                "page-size": min(max_results, MAX_PAGE_SIZE),
                "page": page,
                "show-fields": SHOW_FIELDS,
                "order-by": "newest",
                "section": section,
                "lang": lang,
                "api-key": self._transport.api_key,
            }
        )
        data = await self._transport.get_json("/search", params)
        return self._normalize(data)

    def _normalize(self, data: Mapping[str, Any]) -> ProviderResult:
        body = data.get("response")
        if not isinstance(body, Mapping):
            body = {}
        raw = body.get("results")
        if not isinstance(raw, list):
            raw = []
        adapted = [adapt_article(item) for item in raw if isinstance(item, Mapping)]
        articles = only_with_url(normalize_articles(adapted, self.name))
        total = body.get("total")
        return ProviderResult(
            provider=self.name,
            total_results=total if isinstance(total, int) and total > 0 else 0,
            articles=articles,
        )

    async def aclose(self) -> None:
        await self._transport.aclose()


__all__ = ["GuardianProvider"]
