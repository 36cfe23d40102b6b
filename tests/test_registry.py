"""Tests for provider registration and resolution."""

import pytest

from newswire.config import NewsSettings, ProviderCredentials
from newswire.errors import (
    NoProvidersAvailableError,
    ProviderConfigurationError,
    ProviderNotFoundError,
)
from newswire.providers import PROVIDER_FACTORIES, GNewsProvider, GuardianProvider
from newswire.registry import ProviderRegistry

from conftest import FakeProvider


def test_first_registered_provider_becomes_default():
    registry = ProviderRegistry()
    registry.register(FakeProvider("gnews"))
    registry.register(FakeProvider("guardian"))

    assert registry.default == "gnews"
    assert registry.available() == ["gnews", "guardian"]


def test_not_ready_provider_is_skipped():
    registry = ProviderRegistry()

    assert registry.register(FakeProvider("gnews", ready=False)) is False
    assert registry.available() == []
    assert registry.default is None


def test_resolve_without_providers():
    with pytest.raises(NoProvidersAvailableError) as exc_info:
        ProviderRegistry().resolve()
    assert exc_info.value.status_code == 503


def test_resolve_unknown_provider_lists_available():
    registry = ProviderRegistry()
    registry.register(FakeProvider("gnews"))

    with pytest.raises(ProviderNotFoundError) as exc_info:
        registry.resolve("bing")

    assert exc_info.value.status_code == 404
    assert exc_info.value.available_providers == ["gnews"]


def test_resolve_by_name_and_default():
    registry = ProviderRegistry()
    gnews = FakeProvider("gnews")
    guardian = FakeProvider("guardian")
    registry.register(gnews)
    registry.register(guardian)

    assert registry.resolve() is gnews
    assert registry.resolve("guardian") is guardian


def test_set_default_rejects_unregistered():
    registry = ProviderRegistry()
    registry.register(FakeProvider("gnews"))

    with pytest.raises(ProviderNotFoundError) as exc_info:
        registry.set_default("unregistered")

    assert exc_info.value.available_providers == registry.available()
    assert registry.default == "gnews"


def test_from_settings_registers_only_configured_providers():
    settings = NewsSettings(
        credentials=ProviderCredentials(gnews_api_key="g-key", guardian_api_key="gu-key")
    )

    registry = ProviderRegistry.from_settings(settings)

    assert registry.available() == ["gnews", "guardian"]
    assert registry.default == "gnews"
    assert isinstance(registry.resolve("gnews"), GNewsProvider)
    assert isinstance(registry.resolve("guardian"), GuardianProvider)


def test_from_settings_honours_configured_default():
    settings = NewsSettings(
        credentials=ProviderCredentials(gnews_api_key="g", newsapi_key="n"),
        default_provider="newsapi",
    )

    assert ProviderRegistry.from_settings(settings).default == "newsapi"


def test_from_settings_ignores_unknown_default():
    settings = NewsSettings(
        credentials=ProviderCredentials(newsapi_key="n"),
        default_provider="guardian",
    )

    assert ProviderRegistry.from_settings(settings).default == "newsapi"


def test_from_settings_without_credentials():
    registry = ProviderRegistry.from_settings(NewsSettings())

    assert len(registry) == 0
    with pytest.raises(NoProvidersAvailableError):
        registry.resolve()


@pytest.mark.asyncio
async def test_aclose_closes_providers():
    registry = ProviderRegistry()
    provider = FakeProvider("gnews")
    registry.register(provider)

    await registry.aclose()

    assert provider.closed


def test_failed_construction_is_a_configuration_error(monkeypatch):
    def broken(api_key, **kwargs):
        raise RuntimeError("client construction failed")

    monkeypatch.setitem(PROVIDER_FACTORIES, "guardian", broken)
    settings = NewsSettings(
        credentials=ProviderCredentials(gnews_api_key="g", guardian_api_key="gu")
    )

    registry = ProviderRegistry.from_settings(settings)

    assert registry.available() == ["gnews"]
    with pytest.raises(ProviderConfigurationError) as exc_info:
        registry.resolve("guardian")
    assert exc_info.value.status_code == 503
    assert "guardian provider is not properly configured" in str(exc_info.value)
    with pytest.raises(ProviderConfigurationError):
        registry.set_default("guardian")
    assert registry.default == "gnews"
    with pytest.raises(ProviderNotFoundError):
        registry.resolve("bing")
