"""Multi-provider news aggregation package."""

from .client import NewsClient
from .config import NewsSettings, ProviderCredentials, load_config
from .enums import NewsCategory, ProviderName, SearchIn, SortBy
from .models import Article, ArticleSource, NewsPage, Pagination
from .normalizer import normalize_article
from .registry import ProviderRegistry

__all__ = [
    "Article",
    "ArticleSource",
    "NewsCategory",
    "NewsClient",
    "NewsPage",
    "NewsSettings",
    "Pagination",
    "ProviderCredentials",
    "ProviderName",
    "ProviderRegistry",
    "SearchIn",
    "SortBy",
    "load_config",
    "normalize_article",
]
