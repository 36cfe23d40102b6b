"""Tests for the error taxonomy."""

import pytest

from newswire.errors import (
    ArticleNotFoundError,
    ExternalAPIError,
    InvalidQueryError,
    NewsError,
    NoProvidersAvailableError,
    ProviderConfigurationError,
    ProviderNotFoundError,
    RateLimitError,
    ValidationError,
    coerce_error,
)


@pytest.mark.parametrize(
    "error, status",
    [
        (ValidationError("bad"), 400),
        (InvalidQueryError("", "Search query is required"), 400),
        (ProviderNotFoundError("bing", ["gnews"]), 404),
        (NoProvidersAvailableError(), 503),
        (ProviderConfigurationError("broken"), 503),
        (RateLimitError("gnews"), 429),
        (ExternalAPIError("gnews", RuntimeError("boom")), 502),
        (ArticleNotFoundError("gnews_1"), 404),
    ],
)
def test_status_codes(error, status):
    assert error.status_code == status
    payload = error.to_dict()
    assert payload["success"] is False
    assert payload["statusCode"] == status
    assert payload["type"] == type(error).__name__
    assert payload["error"] == str(error)


def test_invalid_query_keeps_literal():
    error = InvalidQueryError("abc", "Page must be a positive integer")
    assert error.query == "abc"
    assert str(error) == "Page must be a positive integer: 'abc'"
    assert isinstance(error, ValidationError)


def test_provider_not_found_lists_available():
    error = ProviderNotFoundError("bing", ["gnews", "guardian"])
    assert error.available_providers == ["gnews", "guardian"]
    assert "Available providers: gnews, guardian" in str(error)
    assert error.to_dict()["availableProviders"] == ["gnews", "guardian"]
    assert str(ProviderNotFoundError("bing")) == "Provider 'bing' not found"


def test_rate_limit_mentions_reset_time():
    assert str(RateLimitError("newsapi", "120")) == "Rate limit exceeded for newsapi. Resets at 120"
    assert RateLimitError("newsapi").reset_time is None


def test_external_api_error_preserves_original():
    original = ConnectionError("connection refused")
    error = ExternalAPIError("guardian", original)
    assert error.original_error is original
    assert error.provider_name == "guardian"
    assert "connection refused" in str(error)


@pytest.mark.parametrize(
    "message, expected",
    [
        ("Invalid sortBy option. Must be one of: relevance", ValidationError),
        ("GNews provider is not properly configured", ProviderConfigurationError),
        ("Provider 'bing' not found", ProviderNotFoundError),
        ("daily quota exceeded", RateLimitError),
        ("something else entirely", NewsError),
    ],
)
def test_coerce_error(message, expected):
    error = coerce_error(RuntimeError(message))
    assert type(error) is expected


def test_coerce_error_passes_news_errors_through():
    error = RateLimitError("gnews")
    assert coerce_error(error) is error
    assert coerce_error(RuntimeError("x")).status_code == 500
