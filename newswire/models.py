"""Core data models for the news aggregator."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

SUMMARY_MAX_CHARS = 150


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class ArticleSource:
    name: str = "Unknown"
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "url": self.url}


@dataclass(frozen=True)
class Article:
    """Canonical, provider-independent representation of a news article."""

    id: str
    title: str
    description: str
    content: str
    url: Optional[str]
    url_to_image: Optional[str]
    published_at: Optional[datetime]
    source: ArticleSource
    provider: str
    created_at: datetime

    def has_url(self) -> bool:
        return self.url is not None

    def summary(self) -> str:
        """Return a short teaser built from the content or description."""

        text = self.content or self.description
        if not text:
            return ""
        if len(text) > SUMMARY_MAX_CHARS:
            return text[:SUMMARY_MAX_CHARS] + "..."
        return text

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "content": self.content,
            "url": self.url,
            "urlToImage": self.url_to_image,
            "publishedAt": _isoformat(self.published_at),
            "source": self.source.to_dict(),
            "provider": self.provider,
            "createdAt": _isoformat(self.created_at),
        }


@dataclass
class ProviderResult:
    """Normalized response of a single provider call."""

    provider: str
    total_results: int
    articles: List[Article] = field(default_factory=list)
    status: str = "ok"

    @property
    def actual_results(self) -> int:
        return len(self.articles)


@dataclass
class Pagination:
    current_page: int
    limit: int
    total_results: int
    actual_results: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool
    next_page: Optional[int]
    previous_page: Optional[int]
    client_side_pagination: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currentPage": self.current_page,
            "limit": self.limit,
            "totalResults": self.total_results,
            "actualResults": self.actual_results,
            "totalPages": self.total_pages,
            "hasNextPage": self.has_next_page,
            "hasPreviousPage": self.has_previous_page,
            "nextPage": self.next_page,
            "previousPage": self.previous_page,
            "clientSidePagination": self.client_side_pagination,
        }


@dataclass
class NewsPage:
    """Uniform envelope returned for both search and headline requests."""

    provider: str
    articles: List[Article]
    total_results: int
    pagination: Pagination
    status: str = "ok"

    @property
    def actual_results(self) -> int:
        return len(self.articles)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "provider": self.provider,
            "articles": [article.to_dict() for article in self.articles],
            "totalResults": self.total_results,
            "actualResults": self.actual_results,
            "pagination": self.pagination.to_dict(),
        }


__all__ = [
    "Article",
    "ArticleSource",
    "NewsPage",
    "Pagination",
    "ProviderResult",
]
