"""Configuration helpers for the news aggregation service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import os

from .enums import ProviderName


@dataclass
class ProviderCredentials:
    """API keys for the upstream providers; an empty key disables that provider."""

    gnews_api_key: Optional[str] = None
    newsapi_key: Optional[str] = None
    guardian_api_key: Optional[str] = None

    def as_mapping(self) -> Dict[str, Optional[str]]:
        """Return credentials keyed by provider name, in registration order."""

        return {
            ProviderName.GNEWS.value: self.gnews_api_key,
            ProviderName.NEWSAPI.value: self.newsapi_key,
            ProviderName.GUARDIAN.value: self.guardian_api_key,
        }


@dataclass
class NewsSettings:
    """Top-level configuration for the service."""

    credentials: ProviderCredentials = field(default_factory=ProviderCredentials)
    request_timeout: float = 15.0
    default_provider: Optional[str] = None
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


def _optional(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


def _split_origins(raw: str) -> List[str]:
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


def load_config() -> NewsSettings:
    """Load configuration from environment variables with sensible defaults."""

    credentials = ProviderCredentials(
        gnews_api_key=_optional("GNEWS_API_KEY"),
        newsapi_key=_optional("NEWSAPI_KEY"),
        guardian_api_key=_optional("GUARDIAN_API_KEY"),
    )
    request_timeout = float(os.getenv("NEWS_REQUEST_TIMEOUT", "15"))
    if request_timeout <= 0:
        raise ValueError("NEWS_REQUEST_TIMEOUT must be positive")

    return NewsSettings(
        credentials=credentials,
        request_timeout=request_timeout,
        default_provider=_optional("NEWS_DEFAULT_PROVIDER"),
        api_host=os.getenv("API_HOST", "0.0.0.0"),
        api_port=int(os.getenv("PORT", "8080")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
    )


__all__ = [
    "NewsSettings",
    "ProviderCredentials",
    "load_config",
]
