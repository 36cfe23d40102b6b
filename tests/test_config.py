import pytest

from newswire.config import NewsSettings, load_config

ENV_VARS = (
    "GNEWS_API_KEY",
    "NEWSAPI_KEY",
    "GUARDIAN_API_KEY",
    "NEWS_REQUEST_TIMEOUT",
    "NEWS_DEFAULT_PROVIDER",
    "API_HOST",
    "PORT",
    "LOG_LEVEL",
    "CORS_ORIGINS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = load_config()

    assert config == NewsSettings()
    assert config.credentials.as_mapping() == {"gnews": None, "newsapi": None, "guardian": None}
    assert config.api_port == 8080
    assert config.cors_origins == ["*"]


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("GNEWS_API_KEY", " g-key ")
    monkeypatch.setenv("GUARDIAN_API_KEY", "gu-key")
    monkeypatch.setenv("NEWSAPI_KEY", "   ")
    monkeypatch.setenv("NEWS_REQUEST_TIMEOUT", "4.5")
    monkeypatch.setenv("NEWS_DEFAULT_PROVIDER", "guardian")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,")

    config = load_config()

    assert config.credentials.gnews_api_key == "g-key"
    assert config.credentials.newsapi_key is None
    assert config.credentials.guardian_api_key == "gu-key"
    assert config.request_timeout == 4.5
    assert config.default_provider == "guardian"
    assert config.api_port == 9000
    assert config.log_level == "DEBUG"
    assert config.cors_origins == ["https://a.example", "https://b.example"]


def test_rejects_non_positive_timeout(monkeypatch):
    monkeypatch.setenv("NEWS_REQUEST_TIMEOUT", "0")

    with pytest.raises(ValueError):
        load_config()
