# ABOUTME: Async HTTP client for the Discogs API and marketplace pages.
# ABOUTME: Adds the token header, no-cache directives, retry with backoff, and injectable transport.

import asyncio
import logging
from typing import Any, Protocol, runtime_checkable

import httpx

from cratekeeper.config import (
    ACCEPT_LANGUAGE,
    API_USER_AGENT,
    BROWSER_USER_AGENT,
    MarketplaceSettings,
)

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

_NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


class MarketplaceFetchError(Exception):
    """Raised when a marketplace request does not produce a usable response."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for the GET operations the marketplace layer needs."""

    @property
    def token(self) -> str | None: ...

    async def get_json(self, url: str, params: dict[str, str] | None = None) -> Any: ...

    async def get_text(self, url: str) -> str: ...


class MarketplaceHttpClient:
    """HTTP client for structured API calls and rendered page fetches.

    API calls carry the `Discogs token=` authorization header and the
    cratekeeper User-Agent. Page fetches present a browser identity and a
    language preference instead, and never send the token. Every request asks
    intermediaries not to serve a cached copy.
    """

    def __init__(
        self,
        *,
        token: str | None = None,
        user_agent: str = API_USER_AGENT,
        browser_user_agent: str = BROWSER_USER_AGENT,
        accept_language: str = ACCEPT_LANGUAGE,
        timeout: float = 30.0,
        max_retries: int = 2,
        retry_delay: float = 1.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": dict(_NO_CACHE_HEADERS),
            "timeout": timeout,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)
        self._token = token
        self._user_agent = user_agent
        self._browser_user_agent = browser_user_agent
        self._accept_language = accept_language
        self._max_retries = max_retries
        self._retry_delay = retry_delay

    @classmethod
    def from_settings(
        cls,
        settings: MarketplaceSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "MarketplaceHttpClient":
        return cls(
            token=settings.token,
            user_agent=settings.user_agent,
            browser_user_agent=settings.browser_user_agent,
            accept_language=settings.accept_language,
            timeout=settings.timeout,
            max_retries=settings.max_retries,
            transport=transport,
        )

    @property
    def token(self) -> str | None:
        return self._token

    async def __aenter__(self) -> "MarketplaceHttpClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_json(self, url: str, params: dict[str, str] | None = None) -> Any:
        """GET a structured API endpoint and return the parsed JSON body.

        Raises:
            MarketplaceFetchError: On transport failure, a non-retryable
                status, or exhausted retries.
            ValueError: If the body is not valid JSON.
        """
        headers = {"User-Agent": self._user_agent}
        if self._token:
            headers["Authorization"] = f"Discogs token={self._token}"
        response = await self._request(url, params=params, headers=headers)
        return response.json()

    async def get_text(self, url: str) -> str:
        """GET a rendered marketplace page and return its markup.

        Raises:
            MarketplaceFetchError: On transport failure, a non-retryable
                status, or exhausted retries.
        """
        headers = {
            "User-Agent": self._browser_user_agent,
            "Accept-Language": self._accept_language,
        }
        response = await self._request(url, headers=headers)
        return response.text

    async def _request(
        self,
        url: str,
        *,
        params: dict[str, str] | None = None,
        headers: dict[str, str],
    ) -> httpx.Response:
        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            logger.debug("GET %s params=%s", url, params)
            try:
                response = await self._client.get(url, params=params, headers=headers)
                last_status = response.status_code
            except httpx.HTTPError as exc:
                raise MarketplaceFetchError(f"Request failed: {url}: {exc}") from exc

            if response.is_success:
                return response

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise MarketplaceFetchError(
                    f"HTTP {response.status_code} from {url}",
                    status_code=response.status_code,
                )

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                await asyncio.sleep(delay)

        raise MarketplaceFetchError(
            f"HTTP {last_status} from {url} after {attempts} attempts",
            status_code=last_status,
        )
