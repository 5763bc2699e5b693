# ABOUTME: Price aggregator combining Discogs API data with scraped marketplace pages.
# ABOUTME: Fans out to five sources, tolerates each failing, and merges by a precedence table.

import asyncio
import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from cratekeeper.config import DISCOGS_API_BASE, DISCOGS_WEB_BASE
from cratekeeper.marketplace.errors import (
    CatalogError,
    InternalError,
    InvalidQuery,
    MissingCredential,
)
from cratekeeper.marketplace.http import HttpClient, MarketplaceFetchError
from cratekeeper.marketplace.parser import parse_price, parse_price_suggestions
from cratekeeper.marketplace.scrape import extract_history_stats, extract_released_year
from cratekeeper.marketplace.types import PriceQuote

logger = logging.getLogger(__name__)

SUGGESTIONS = "suggestions"
RELEASE = "release"
STATS = "stats"
HISTORY_PAGE = "history_page"
RELEASE_PAGE = "release_page"

_YEAR_RE = re.compile(r"(\d{4})(?!\d)")


@dataclass(frozen=True)
class Available:
    """A source that answered; payload is its parsed content."""

    payload: Any


@dataclass(frozen=True)
class Unavailable:
    """A source that failed; its contribution to the quote is absent."""

    reason: str


SourceResult = Available | Unavailable

Getter = Callable[[Any], Any]


def _path(*keys: str) -> Getter:
    """Build a getter that walks nested dicts, returning None on any gap."""

    def get(payload: Any) -> Any:
        for key in keys:
            if not isinstance(payload, dict):
                return None
            payload = payload.get(key)
        return payload

    return get


def _as_str(getter: Getter) -> Getter:
    def get(payload: Any) -> Any:
        value = getter(payload)
        return None if value is None else str(value)

    return get


def _year(getter: Getter) -> Getter:
    """Reduce "1997", 1997 or "1997-01-20" to "1997"; 0 and blanks are absent."""

    def get(payload: Any) -> Any:
        value = getter(payload)
        if value is None:
            return None
        match = _YEAR_RE.match(str(value).strip())
        if match is None or match.group(1) == "0000":
            return None
        return match.group(1)

    return get


def _as_price(getter: Getter) -> Getter:
    return lambda payload: parse_price(getter(payload))


# Field -> ordered (source, getter) pairs. The first available source that
# yields a non-empty value wins. Scraped sources lead wherever they apply.
PRECEDENCE: dict[str, tuple[tuple[str, Getter], ...]] = {
    "released_year": (
        (RELEASE_PAGE, _path("released_year")),
        (RELEASE, _year(_path("released"))),
        (RELEASE, _year(_path("year"))),
    ),
    "last_sold_date": (
        (HISTORY_PAGE, _path("last_sold")),
        (STATS, _as_str(_path("last_sold"))),
    ),
    "want_count": (
        (STATS, _path("num_want")),
        (RELEASE, _path("community", "want")),
    ),
    "have_count": (
        (STATS, _path("num_have")),
        (RELEASE, _path("community", "have")),
    ),
    "avg_rating": ((RELEASE, _path("community", "rating", "average")),),
    "lowest_listing_price": (
        (STATS, _as_price(_path("lowest_price"))),
        (RELEASE, _as_price(_path("lowest_price"))),
    ),
    "for_sale_count": (
        (STATS, _path("num_for_sale")),
        (RELEASE, _path("num_for_sale")),
    ),
    "history_low": ((HISTORY_PAGE, _path("low")),),
    "history_median": ((HISTORY_PAGE, _path("median")),),
    "history_high": ((HISTORY_PAGE, _path("high")),),
    "history_average": ((HISTORY_PAGE, _path("average")),),
    "suggestions": ((SUGGESTIONS, parse_price_suggestions),),
}


def merge_sources(sources: dict[str, SourceResult]) -> dict[str, Any]:
    """Resolve every field in PRECEDENCE against the available sources.

    Fields with no available value are omitted from the result.
    """
    merged: dict[str, Any] = {}
    for field_name, candidates in PRECEDENCE.items():
        for source_name, getter in candidates:
            result = sources.get(source_name)
            if not isinstance(result, Available):
                continue
            value = getter(result.payload)
            if value is None or value == "" or value == {}:
                continue
            merged[field_name] = value
            break
    return merged


def history_url(release_id: str, web_base: str = DISCOGS_WEB_BASE) -> str:
    return f"{web_base.rstrip('/')}/sell/history/{release_id}"


class PriceAggregator:
    """Builds a PriceQuote for one release from five independent sources.

    The three API sources are fetched concurrently; the two pages are
    scraped afterwards, one at a time. Any single source failing only
    removes its fields from the quote.
    """

    def __init__(
        self,
        http_client: HttpClient,
        *,
        api_base: str = DISCOGS_API_BASE,
        web_base: str = DISCOGS_WEB_BASE,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._http = http_client
        self._api_base = api_base.rstrip("/")
        self._web_base = web_base.rstrip("/")
        self._clock = clock or (lambda: datetime.now(UTC))

    async def get_quote(self, release_id: str | int) -> PriceQuote:
        """Fetch and merge current market data for a release.

        Raises:
            InvalidQuery: If release_id is blank.
            MissingCredential: If the HTTP client has no token.
            InternalError: On any unexpected failure while building the quote.
        """
        release_id = str(release_id).strip()
        if not release_id:
            raise InvalidQuery("A release id is required")
        if not self._http.token:
            raise MissingCredential("No Discogs token configured (set DISCOGS_TOKEN)")

        try:
            return await self._build_quote(release_id)
        except CatalogError:
            raise
        except Exception as exc:
            logger.exception("Price lookup failed for release %s", release_id)
            raise InternalError(f"Price lookup failed for release {release_id}: {exc}") from exc

    async def _build_quote(self, release_id: str) -> PriceQuote:
        suggestions, release, stats = await asyncio.gather(
            self._fetch_json(f"{self._api_base}/marketplace/price_suggestions/{release_id}"),
            self._fetch_json(f"{self._api_base}/releases/{release_id}"),
            self._fetch_json(f"{self._api_base}/releases/{release_id}/stats"),
        )
        source_url = history_url(release_id, self._web_base)
        history = await self._scrape(source_url, _history_payload)
        release_page = await self._scrape(
            f"{self._web_base}/release/{release_id}", _release_page_payload
        )

        sources: dict[str, SourceResult] = {
            SUGGESTIONS: suggestions,
            RELEASE: release,
            STATS: stats,
            HISTORY_PAGE: history,
            RELEASE_PAGE: release_page,
        }
        for name, result in sources.items():
            if isinstance(result, Unavailable):
                logger.warning("Release %s: %s unavailable (%s)", release_id, name, result.reason)

        scraped = isinstance(history, Available) and history.payload is not None
        degraded = scraped and not history.payload["recognized"]  # type: ignore[union-attr]
        if degraded:
            logger.warning(
                "Release %s: sales history page has no recognizable summary; layout may have changed",
                release_id,
            )

        return PriceQuote(
            release_id=release_id,
            source_url=source_url,
            fetched_at=self._clock(),
            scraped=scraped,
            extraction_degraded=degraded,
            **merge_sources(sources),
        )

    async def _fetch_json(self, url: str) -> SourceResult:
        try:
            return Available(await self._http.get_json(url))
        except MarketplaceFetchError as exc:
            return Unavailable(str(exc))

    async def _scrape(self, url: str, extract: Callable[[str], dict[str, Any]]) -> SourceResult:
        try:
            html = await self._http.get_text(url)
        except MarketplaceFetchError as exc:
            return Unavailable(str(exc))
        return Available(extract(html))


def _history_payload(html: str) -> dict[str, Any]:
    stats = extract_history_stats(html)
    return {
        "low": stats.low,
        "median": stats.median,
        "high": stats.high,
        "average": stats.average,
        "last_sold": stats.last_sold,
        "recognized": stats.recognized,
    }


def _release_page_payload(html: str) -> dict[str, Any]:
    return {"released_year": extract_released_year(html)}
