"""News provider adapters."""

from typing import Callable, Dict

from ..enums import ProviderName
from .base import NewsProvider, ProviderCapabilities, ProviderTransport
from .gnews import GNewsProvider
from .guardian import GuardianProvider
from .newsapi import NewsAPIProvider

PROVIDER_FACTORIES: Dict[str, Callable[..., NewsProvider]] = {
    ProviderName.GNEWS.value: GNewsProvider,
    ProviderName.NEWSAPI.value: NewsAPIProvider,
    ProviderName.GUARDIAN.value: GuardianProvider,
}

__all__ = [
    "GNewsProvider",
    "GuardianProvider",
    "NewsAPIProvider",
    "NewsProvider",
    "PROVIDER_FACTORIES",
    "ProviderCapabilities",
    "ProviderTransport",
]
