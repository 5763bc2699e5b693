# ABOUTME: Parsing functions for Discogs API JSON responses.
# ABOUTME: Converts search results into CandidateRelease and reads structured price fields.

from typing import Any

from cratekeeper.marketplace.types import CandidateRelease, Price

_TITLE_SEPARATOR = " - "


def split_combined_title(combined: str) -> tuple[str, str]:
    """Split a Discogs "Artist - Title" string into (artist, title).

    Splits on the first separator only, so titles that themselves contain
    " - " survive intact. Without a separator the whole string is the title
    and the artist is empty.
    """
    artist, sep, title = combined.partition(_TITLE_SEPARATOR)
    if not sep:
        return "", combined.strip()
    return artist.strip(), title.strip()


def _first(values: Any) -> str | None:
    if isinstance(values, list) and values:
        return str(values[0]) or None
    return None


def _text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_search_result(result: dict[str, Any], catalog_no: str | None = None) -> CandidateRelease:
    """Parse one entry of a /database/search response.

    catalog_no is used when the result itself omits `catno`.
    """
    artist, title = split_combined_title(str(result.get("title", "")))
    return CandidateRelease(
        title=title,
        artist=artist,
        catalog_no=_text(result.get("catno")) or _text(catalog_no),
        year=_text(result.get("year")),
        label=_first(result.get("label")),
        format=_first(result.get("format")),
        resource_url=_text(result.get("resource_url")),
        thumbnail_url=_text(result.get("thumb")),
        release_id=_text(result.get("id")),
    )


def parse_search_results(
    data: dict[str, Any], *, catalog_no: str | None = None, limit: int | None = None
) -> list[CandidateRelease]:
    """Parse a /database/search response into candidates, keeping upstream order.

    Raises:
        ValueError: If the body is not a search response object.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    results = data.get("results") or []
    if not isinstance(results, list):
        raise ValueError("Search response 'results' is not a list")
    if limit is not None:
        results = results[:limit]
    return [parse_search_result(result, catalog_no) for result in results]


def parse_price(value: Any) -> Price | float | None:
    """Read a price that is either a {value, currency} object or a bare number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, dict):
        amount = value.get("value")
        if amount is None:
            return None
        currency = str(value.get("currency") or "JPY").upper()
        return Price(value=float(amount), currency=currency)
    return None


def parse_price_suggestions(data: Any) -> dict[str, Price]:
    """Parse a /marketplace/price_suggestions response.

    The endpoint maps condition grades ("Mint (M)", "Very Good Plus (VG+)", ...)
    to price objects. Entries without a usable value are dropped.
    """
    if not isinstance(data, dict):
        return {}
    suggestions: dict[str, Price] = {}
    for condition, raw in data.items():
        price = parse_price(raw)
        if isinstance(price, Price):
            suggestions[condition] = price
    return suggestions
