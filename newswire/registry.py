"""Registry of configured news providers."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import httpx

from .config import NewsSettings
from .errors import NoProvidersAvailableError, ProviderConfigurationError, ProviderNotFoundError
from .providers import PROVIDER_FACTORIES, NewsProvider

LOGGER = logging.getLogger(__name__)


class ProviderRegistry:
    """Hold the usable providers and track which one serves unqualified requests.

    Providers whose credential is present but whose construction failed are
    remembered as misconfigured, so asking for them is a configuration error
    rather than an unknown name.
    """

    def __init__(self) -> None:
        self._providers: Dict[str, NewsProvider] = {}
        self._misconfigured: Dict[str, str] = {}
        self._default: Optional[str] = None

    @classmethod
    def from_settings(
        cls,
        settings: NewsSettings,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "ProviderRegistry":
        """Build one provider per non-empty credential.

        Providers share ``http_client`` when one is given; otherwise each owns
        its own client with the configured timeout.
        """

        registry = cls()
        for name, api_key in settings.credentials.as_mapping().items():
            if not api_key:
                LOGGER.info("No API key configured for %s, skipping", name)
                continue
            factory = PROVIDER_FACTORIES[name]
            try:
                provider = factory(api_key, client=http_client, timeout=settings.request_timeout)
            except Exception as exc:
                LOGGER.warning("Failed to construct provider %s: %s", name, exc)
                registry.mark_misconfigured(name, str(exc))
                continue
            registry.register(provider)

        if settings.default_provider:
            if settings.default_provider in registry:
                registry.set_default(settings.default_provider)
            else:
                LOGGER.warning(
                    "Configured default provider %s is not registered; keeping %s",
                    settings.default_provider,
                    registry.default,
                )

        LOGGER.info("News registry initialized with %d providers", len(registry))
        if registry.default:
            LOGGER.info("Default provider: %s", registry.default)
        else:
            LOGGER.warning("No news providers configured. Set API keys in environment variables.")
        return registry

    def register(self, provider: NewsProvider) -> bool:
        if not provider.is_ready:
            LOGGER.warning("Provider %s is not ready, skipping registration", provider.name)
            return False
        self._providers[provider.name] = provider
        if self._default is None:
            self._default = provider.name
        LOGGER.info("Registered provider: %s", provider.name)
        return True

    def mark_misconfigured(self, name: str, reason: str) -> None:
        self._misconfigured[name] = reason

    @property
    def default(self) -> Optional[str]:
        return self._default

    def set_default(self, name: str) -> None:
        self._lookup(name)
        self._default = name

    def resolve(self, name: Optional[str] = None) -> NewsProvider:
        provider_name = name or self._default
        if not provider_name:
            raise NoProvidersAvailableError()
        return self._lookup(provider_name)

    def _lookup(self, name: str) -> NewsProvider:
        provider = self._providers.get(name)
        if provider is not None:
            return provider
        if name in self._misconfigured:
            raise ProviderConfigurationError(f"{name} provider is not properly configured", name)
        raise ProviderNotFoundError(name, self.available())

    def available(self) -> List[str]:
        return list(self._providers)

    async def aclose(self) -> None:
        for provider in self._providers.values():
            await provider.aclose()

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def __len__(self) -> int:
        return len(self._providers)


__all__ = ["ProviderRegistry"]
