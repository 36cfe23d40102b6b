"""Provider capability contract and the HTTP transport shared by all providers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Collection, Dict, Mapping, Optional, Protocol, runtime_checkable

import httpx

from ..errors import ExternalAPIError, ProviderConfigurationError, RateLimitError
from ..models import ProviderResult

LOGGER = logging.getLogger(__name__)

USER_AGENT = "newswire/1.0"
DEFAULT_TIMEOUT = 15.0
RESET_HEADERS = ("Retry-After", "X-RateLimit-Reset", "X-Ratelimit-Reset")


@dataclass(frozen=True)
class ProviderCapabilities:
    """Pagination traits implied by a provider's identity.

    ``result_ceiling`` is set for providers that never return more than a
    fixed number of results per query and ignore offsets.
    """

    supports_pagination: bool
    max_page_size: int
    result_ceiling: Optional[int] = None

    @property
    def is_capped(self) -> bool:
        return self.result_ceiling is not None


@runtime_checkable
class NewsProvider(Protocol):
    name: str
    capabilities: ProviderCapabilities

    @property
    def is_ready(self) -> bool: ...

    async def search_news(
        self,
        query: str,
        *,
        max_results: int = 10,
        page: int = 1,
        country: Optional[str] = None,
        lang: Optional[str] = None,
        sort_by: Optional[str] = None,
        search_in: Optional[str] = None,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
    ) -> ProviderResult: ...

    async def get_top_headlines(
        self,
        *,
        max_results: int = 10,
        page: int = 1,
        category: Optional[str] = None,
        country: Optional[str] = None,
        lang: Optional[str] = None,
    ) -> ProviderResult: ...

    async def aclose(self) -> None: ...


def compact(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop unset query parameters."""

    return {key: value for key, value in params.items() if value is not None and value != ""}


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return ""
    if isinstance(body, dict):
        message = body.get("message") or body.get("errors")
        if isinstance(message, list):
            message = "; ".join(str(item) for item in message)
        if message:
            return str(message)
    return ""


class ProviderTransport:
    """Issue authenticated GET requests and translate failures into the taxonomy.

    The transport owns the credential and the readiness flag: a provider is
    ready while it holds a key that the upstream has not rejected.
    """

    def __init__(
        self,
        provider_name: str,
        base_url: str,
        api_key: Optional[str],
        *,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = DEFAULT_TIMEOUT,
        rate_limit_statuses: Collection[int] = (429,),
        auth_statuses: Collection[int] = (401,),
    ) -> None:
        self.provider_name = provider_name
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key or None
        self.rate_limit_statuses = frozenset(rate_limit_statuses)
        self.auth_statuses = frozenset(auth_statuses)
        self._rejected = False
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout, headers={"User-Agent": USER_AGENT}
        )

    @property
    def is_ready(self) -> bool:
        return self.api_key is not None and not self._rejected

    def ensure_ready(self) -> None:
        if self.api_key is None:
            raise ProviderConfigurationError(
                f"{self.provider_name} API key not provided", self.provider_name
            )
        if self._rejected:
            raise ProviderConfigurationError(
                f"{self.provider_name} provider is not properly configured", self.provider_name
            )

    def mark_unavailable(self, reason: str) -> None:
        LOGGER.warning("Disabling provider %s: %s", self.provider_name, reason)
        self._rejected = True

    async def get_json(
        self,
        path: str,
        params: Mapping[str, Any],
        headers: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, Any]:
        self.ensure_ready()
        url = f"{self.base_url}{path}"
        try:
            response = await self._client.get(url, params=dict(params), headers=headers)
        except httpx.HTTPError as exc:
            LOGGER.warning("Request to %s failed: %r", self.provider_name, exc)
            raise ExternalAPIError(self.provider_name, exc) from exc

        status = response.status_code
        if status in self.rate_limit_statuses:
            reset_time = next(
                (response.headers[name] for name in RESET_HEADERS if name in response.headers),
                None,
            )
            LOGGER.warning("Rate limit hit for %s (reset: %s)", self.provider_name, reset_time)
            raise RateLimitError(self.provider_name, reset_time)
        if status in self.auth_statuses:
            detail = _error_detail(response) or f"credential rejected with status {status}"
            self.mark_unavailable(detail)
            raise ProviderConfigurationError(
                f"{self.provider_name} provider is not properly configured: {detail}",
                self.provider_name,
            )
        if not response.is_success:
            detail = _error_detail(response) or response.reason_phrase
            # Built by hand so the message never carries the keyed request URL.
            error = httpx.HTTPStatusError(
                f"{self.provider_name} request failed: {status} {detail}".strip(),
                request=response.request,
                response=response,
            )
            LOGGER.warning("%s", error)
            raise ExternalAPIError(self.provider_name, error)

        try:
            data = response.json()
        except ValueError as exc:
            raise ExternalAPIError(self.provider_name, exc) from exc
        if not isinstance(data, dict):
            raise ExternalAPIError(
                self.provider_name, ValueError("response body is not a JSON object")
            )
        return data

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


__all__ = [
    "NewsProvider",
    "ProviderCapabilities",
    "ProviderTransport",
    "compact",
]
