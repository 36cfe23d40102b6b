"""Conversion of raw provider payloads into canonical :class:`Article` values."""

from __future__ import annotations

import re
import struct
from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional
from urllib.parse import urlparse

from dateutil import parser as dtparse

from .models import Article, ArticleSource

MAX_TEXT_LENGTH = 5000
DEFAULT_TITLE = "No title available"
DEFAULT_SOURCE_NAME = "Unknown"

_WHITESPACE_RE = re.compile(r"\s+")
_FORBIDDEN_HOST_RE = re.compile(r"[\s#%/<>?@\[\]\\^|]")


def sanitize_text(value: Any) -> str:
    if not value or not isinstance(value, str):
        return ""
    return _WHITESPACE_RE.sub(" ", value.strip())[:MAX_TEXT_LENGTH]


def validate_url(value: Any) -> Optional[str]:
    """Return ``value`` when it is an absolute URL, otherwise ``None``."""

    if not value or not isinstance(value, str):
        return None
    try:
        parsed = urlparse(value)
        parsed.port
    except ValueError:
        return None
    hostname = parsed.hostname
    if not parsed.scheme or not hostname or _FORBIDDEN_HOST_RE.search(hostname):
        return None
    return value


def parse_published_at(value: Any) -> Optional[datetime]:
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = dtparse.parse(value)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def normalize_source(value: Any) -> ArticleSource:
    if not isinstance(value, Mapping):
        return ArticleSource()
    return ArticleSource(
        name=sanitize_text(value.get("name")) or DEFAULT_SOURCE_NAME,
        url=validate_url(value.get("url")),
    )


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def article_id(url: Optional[str], provider: str, title: str) -> str:
    """Deterministic identifier derived from url, provider and title.

    A 31-multiplier rolling hash over the UTF-16 code units of the
    concatenated text, kept in signed 32-bit range at every step, so
    characters outside the BMP contribute their surrogate pair. A missing
    url hashes as the text ``null``.
    """

    text = f"{'null' if url is None else url}{provider}{title}"
    value = 0
    for (unit,) in struct.iter_unpack("<H", text.encode("utf-16-le", "surrogatepass")):
        value = _to_int32((value << 5) - value + unit)
    return f"{provider}_{abs(value)}"


def normalize_article(raw: Mapping[str, Any], provider: str) -> Article:
    """Build an :class:`Article` from a raw payload; never raises on bad fields."""

    if not isinstance(raw, Mapping):
        raw = {}
    provider = provider or "unknown"
    title = sanitize_text(raw.get("title")) or DEFAULT_TITLE
    url = validate_url(raw.get("url"))
    return Article(
        id=article_id(url, provider, title),
        title=title,
        description=sanitize_text(raw.get("description")),
        content=sanitize_text(raw.get("content")),
        url=url,
        url_to_image=validate_url(raw.get("urlToImage")),
        published_at=parse_published_at(raw.get("publishedAt")),
        source=normalize_source(raw.get("source")),
        provider=provider,
        created_at=datetime.now(timezone.utc),
    )


def normalize_articles(raws: Any, provider: str) -> List[Article]:
    if not isinstance(raws, list):
        return []
    return [normalize_article(raw, provider) for raw in raws]


def only_with_url(articles: Iterable[Article]) -> List[Article]:
    return [article for article in articles if article.has_url()]


__all__ = [
    "MAX_TEXT_LENGTH",
    "article_id",
    "normalize_article",
    "normalize_articles",
    "normalize_source",
    "only_with_url",
    "parse_published_at",
    "sanitize_text",
    "validate_url",
]
