# ABOUTME: Data structures for catalog candidates and market price quotes.
# ABOUTME: CandidateRelease and PriceQuote are transient results, never persisted.

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class CandidateRelease:
    """One search result that may identify a physical item.

    Produced by the resolver and used to populate an item record or to
    present a disambiguation choice. Optional fields are None when the
    upstream result did not carry them.
    """

    title: str
    artist: str
    catalog_no: str | None = None
    year: str | None = None
    label: str | None = None
    format: str | None = None
    resource_url: str | None = None
    thumbnail_url: str | None = None
    release_id: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.artist} - {self.title}" if self.artist else self.title

    def to_dict(self) -> dict[str, Any]:
        return {
            "releaseId": self.release_id,
            "title": self.title,
            "artist": self.artist,
            "catalogNo": self.catalog_no,
            "year": self.year,
            "label": self.label,
            "format": self.format,
            "resourceUrl": self.resource_url,
            "thumbnailUrl": self.thumbnail_url,
        }


@dataclass(frozen=True)
class Price:
    """A structured price as the API reports it."""

    value: float
    currency: str

    def to_dict(self) -> dict[str, Any]:
        return {"value": self.value, "currency": self.currency}


# Lowest-listing prices arrive either as a Price pair or as a bare number.
PriceValue = Price | float


@dataclass
class PriceQuote:
    """Aggregated market statistics for one release.

    Every statistic is optional: None means unknown, never zero. history_*
    values and last_sold are kept as the text the page displayed (for
    example "¥2,500" or "$12.00"); the display layer normalizes currency.
    """

    release_id: str
    source_url: str
    fetched_at: datetime
    scraped: bool = False
    extraction_degraded: bool = False
    want_count: int | None = None
    have_count: int | None = None
    avg_rating: float | None = None
    released_year: str | None = None
    lowest_listing_price: PriceValue | None = None
    for_sale_count: int | None = None
    history_low: str | None = None
    history_median: str | None = None
    history_high: str | None = None
    history_average: str | None = None
    last_sold_date: str | None = None
    suggestions: dict[str, Price] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        lowest = self.lowest_listing_price
        return {
            "releaseId": self.release_id,
            "wantCount": self.want_count,
            "haveCount": self.have_count,
            "avgRating": self.avg_rating,
            "releasedYear": self.released_year,
            "lowestListingPrice": lowest.to_dict() if isinstance(lowest, Price) else lowest,
            "forSaleCount": self.for_sale_count,
            "historyLow": self.history_low,
            "historyMedian": self.history_median,
            "historyHigh": self.history_high,
            "historyAverage": self.history_average,
            "lastSoldDate": self.last_sold_date,
            "suggestions": {k: v.to_dict() for k, v in self.suggestions.items()},
            "sourceUrl": self.source_url,
            "scraped": self.scraped,
            "extractionDegraded": self.extraction_degraded,
            "fetchedAt": self.fetched_at.isoformat(),
        }
