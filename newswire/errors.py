"""Error taxonomy raised by the news core and translated at the HTTP boundary."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Sequence


class NewsError(Exception):
    """Base class for every failure the news core reports.

    Each subclass carries an HTTP-style status code so the route layer can
    translate it without inspecting the message.
    """

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    @property
    def type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error": self.message,
            "type": self.type,
            "statusCode": self.status_code,
        }


class ValidationError(NewsError):
    status_code = 400


class InvalidQueryError(ValidationError):
    """Malformed query, page or limit; the offending literal is kept on ``query``."""

    def __init__(self, query: Any, reason: str = "Invalid search query") -> None:
        super().__init__(f"{reason}: '{query}'")
        self.query = query


class ProviderNotFoundError(NewsError):
    status_code = 404

    def __init__(self, provider_name: str, available_providers: Sequence[str] = ()) -> None:
        available = list(available_providers)
        if available:
            message = (
                f"Provider '{provider_name}' not found. "
                f"Available providers: {', '.join(available)}"
            )
        else:
            message = f"Provider '{provider_name}' not found"
        super().__init__(message)
        self.provider_name = provider_name
        self.available_providers: List[str] = available

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["availableProviders"] = self.available_providers
        return payload


class NoProvidersAvailableError(NewsError):
    status_code = 503

    def __init__(self) -> None:
        super().__init__(
            "No news providers are configured. Please set API keys in environment variables."
        )


class ProviderConfigurationError(NewsError):
    status_code = 503

    def __init__(self, message: str, provider_name: Optional[str] = None) -> None:
        super().__init__(message)
        self.provider_name = provider_name


class RateLimitError(NewsError):
    status_code = 429

    def __init__(self, provider_name: str, reset_time: Optional[str] = None) -> None:
        if reset_time:
            message = f"Rate limit exceeded for {provider_name}. Resets at {reset_time}"
        else:
            message = f"Rate limit exceeded for {provider_name}"
        super().__init__(message)
        self.provider_name = provider_name
        self.reset_time = reset_time


class ExternalAPIError(NewsError):
    status_code = 502

    def __init__(self, provider_name: str, original_error: BaseException) -> None:
        detail = str(original_error) or original_error.__class__.__name__
        super().__init__(f"External API error from {provider_name}: {detail}")
        self.provider_name = provider_name
        self.original_error = original_error


class ArticleNotFoundError(NewsError):
    status_code = 404

    def __init__(self, article_id: str) -> None:
        super().__init__(f"Article with ID '{article_id}' not found")
        self.article_id = article_id


_PROVIDER_NOT_FOUND_RE = re.compile(r"Provider '(.+?)' not found")


def coerce_error(exc: BaseException, default_status: int = 500) -> NewsError:
    """Map an arbitrary exception onto the taxonomy using its message."""

    if isinstance(exc, NewsError):
        return exc

    message = str(exc) or exc.__class__.__name__
    if any(marker in message for marker in ("Invalid sortBy", "Invalid searchIn", "Invalid category")):
        return ValidationError(message)
    if any(marker in message for marker in ("not properly configured", "API key", "not configured")):
        return ProviderConfigurationError(message)
    match = _PROVIDER_NOT_FOUND_RE.search(message)
    if match:
        return ProviderNotFoundError(match.group(1))
    lowered = message.lower()
    if "rate limit" in lowered or "quota exceeded" in lowered:
        return RateLimitError("unknown provider")
    return NewsError(message, default_status)


__all__ = [
    "ArticleNotFoundError",
    "ExternalAPIError",
    "InvalidQueryError",
    "NewsError",
    "NoProvidersAvailableError",
    "ProviderConfigurationError",
    "ProviderNotFoundError",
    "RateLimitError",
    "ValidationError",
    "coerce_error",
]
