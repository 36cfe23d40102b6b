"""Closed option vocabularies shared by every news provider."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Type

from .errors import ValidationError


class SortBy(str, Enum):
    RELEVANCE = "relevance"
    DATE = "date"
    PUBLISH_TIME = "publishedAt"


class SearchIn(str, Enum):
    TITLE = "title"
    DESCRIPTION = "description"
    CONTENT = "content"


class NewsCategory(str, Enum):
    GENERAL = "general"
    BUSINESS = "business"
    ENTERTAINMENT = "entertainment"
    HEALTH = "health"
    SCIENCE = "science"
    SPORTS = "sports"
    TECHNOLOGY = "technology"


class ProviderName(str, Enum):
    """Identifiers of the providers this service knows how to build."""

    GNEWS = "gnews"
    NEWSAPI = "newsapi"
    GUARDIAN = "guardian"


def values(enum_cls: Type[Enum]) -> list[str]:
    return [member.value for member in enum_cls]


def _check(value: Optional[str], enum_cls: Type[Enum], label: str) -> None:
    if not value:
        return
    allowed = values(enum_cls)
    if value not in allowed:
        raise ValidationError(f"Invalid {label} option. Must be one of: {', '.join(allowed)}")


def validate_options(
    sort_by: Optional[str] = None,
    search_in: Optional[str] = None,
    category: Optional[str] = None,
) -> None:
    """Reject enumerated option values outside the shared vocabularies."""

    _check(sort_by, SortBy, "sortBy")
    _check(search_in, SearchIn, "searchIn")
    _check(category, NewsCategory, "category")


__all__ = [
    "NewsCategory",
    "ProviderName",
    "SearchIn",
    "SortBy",
    "validate_options",
    "values",
]
