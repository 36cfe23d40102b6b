"""NewsAPI.org provider."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

import httpx

from ..enums import ProviderName, SearchIn, SortBy, validate_options
from ..errors import ExternalAPIError, ProviderConfigurationError, RateLimitError
from ..models import ProviderResult
from ..normalizer import normalize_articles, only_with_url
from .base import DEFAULT_TIMEOUT, ProviderCapabilities, ProviderTransport, compact

BASE_URL = "https://newsapi.org/v2"
MAX_PAGE_SIZE = 100

SORT_MAPPING = {
    SortBy.RELEVANCE.value: "relevancy",
    SortBy.DATE.value: "publishedAt",
    SortBy.PUBLISH_TIME.value: "publishedAt",
}
DEFAULT_SORT = "relevancy"

SEARCH_IN_MAPPING = {member.value: member.value for member in SearchIn}

AUTH_ERROR_CODES = {"apiKeyInvalid", "apiKeyMissing", "apiKeyDisabled", "apiKeyExhausted"}
RATE_LIMIT_ERROR_CODES = {"rateLimited"}


def adapt_article(item: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "title": item.get("title"),
        "description": item.get("description"),
        "content": item.get("content"),
        "url": item.get("url"),
        "urlToImage": item.get("urlToImage"),
        "publishedAt": item.get("publishedAt"),
        "source": item.get("source"),
    }


class NewsAPIProvider:
    name = ProviderName.NEWSAPI.value
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

    @property
    def _auth_headers(self) -> Dict[str, str]:
        return {"X-Api-Key": self._transport.api_key or ""}

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
        # /everything has no country filter; ``country`` is accepted and ignored.
        self._transport.ensure_ready()
        validate_options(sort_by=sort_by, search_in=search_in)
        params = compact(
            {
                "q": query,
                "pageSize": min(max_results, MAX_PAGE_SIZE),
                "page": page,
                "language": lang or "en",
                "sortBy": SORT_MAPPING.get(sort_by or "", DEFAULT_SORT),
                "searchIn": SEARCH_IN_MAPPING.get(search_in) if search_in else None,
                "from": from_date,
                "to": to_date,
            }
        )
        data = await self._transport.get_json("/everything", params, headers=self._auth_headers)
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
        params = compact(
            {
                "pageSize": min(max_results, MAX_PAGE_SIZE),
                "page": page,
                "country": country or "us",
                "category": category,
            }
        )
        data = await self._transport.get_json("/top-headlines", params, headers=self._auth_headers)
        return self._normalize(data)

    def _raise_for_body(self, data: Mapping[str, Any]) -> None:
        """NewsAPI can report failures in a 200 body with ``status: error``."""

        if data.get("status") != "error":
            return
        code = str(data.get("code") or "")
        message = str(data.get("message") or code or "unknown error")
        if code in RATE_LIMIT_ERROR_CODES:
            raise RateLimitError(self.name)
        if code in AUTH_ERROR_CODES:
            self._transport.mark_unavailable(message)
            raise ProviderConfigurationError(
                f"{self.name} provider is not properly configured: {message}", self.name
            )
        raise ExternalAPIError(self.name, RuntimeError(message))

    def _normalize(self, data: Mapping[str, Any]) -> ProviderResult:
        self._raise_for_body(data)
        raw = data.get("articles")
        if not isinstance(raw, list):
            raw = []
        adapted = [adapt_article(item) for item in raw if isinstance(item, Mapping)]
        articles = only_with_url(normalize_articles(adapted, self.name))
        total = data.get("totalResults")
        return ProviderResult(
            provider=self.name,
            total_results=total if isinstance(total, int) and total > 0 else 0,
            articles=articles,
        )

    async def aclose(self) -> None:
        await self._transport.aclose()


__all__ = ["NewsAPIProvider"]
