# ABOUTME: Catalog resolver that searches Discogs for releases matching an item.
# ABOUTME: Validates the query, issues one search request, and normalizes up to five candidates.

import logging

from cratekeeper.config import DISCOGS_API_BASE
from cratekeeper.marketplace.errors import (
    InternalError,
    InvalidQuery,
    MissingCredential,
    UpstreamError,
)
from cratekeeper.marketplace.http import HttpClient, MarketplaceFetchError
from cratekeeper.marketplace.parser import parse_search_results
from cratekeeper.marketplace.types import CandidateRelease

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 5


def _present(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class CatalogResolver:
    """Resolves catalog numbers or free-text queries to candidate releases.

    The resolver performs no ranking of its own: candidates come back in the
    order the upstream search returned them, truncated to SEARCH_LIMIT.
    """

    def __init__(self, http_client: HttpClient, *, api_base: str = DISCOGS_API_BASE) -> None:
        self._http = http_client
        self._api_base = api_base.rstrip("/")

    async def search(
        self,
        *,
        catalog_no: str | None = None,
        query: str | None = None,
        artist: str | None = None,
        title: str | None = None,
    ) -> list[CandidateRelease]:
        """Search the catalog with whichever fields are given.

        Returns:
            Zero to five candidates. An empty list is a valid "not found"
            outcome, not an error.

        Raises:
            InvalidQuery: If none of the four fields is set.
            MissingCredential: If the HTTP client has no token.
            UpstreamError: If the search endpoint fails.
            InternalError: If the response body cannot be parsed.
        """
        params: dict[str, str] = {}
        for key, value in (
            ("catno", catalog_no),
            ("q", query),
            ("artist", artist),
            ("title", title),
        ):
            present = _present(value)
            if present is not None:
                params[key] = present

        if not params:
            raise InvalidQuery("Provide at least one of catalog number, query, artist, or title")
        if not self._http.token:
            raise MissingCredential("No Discogs token configured (set DISCOGS_TOKEN)")

        url = f"{self._api_base}/database/search"
        try:
            data = await self._http.get_json(url, params=params)
        except MarketplaceFetchError as exc:
            raise UpstreamError(str(exc), status_code=exc.status_code) from exc
        except ValueError as exc:
            raise InternalError(f"Malformed search response: {exc}") from exc

        try:
            candidates = parse_search_results(
                data, catalog_no=params.get("catno"), limit=SEARCH_LIMIT
            )
        except (ValueError, TypeError, AttributeError) as exc:
            raise InternalError(f"Malformed search response: {exc}") from exc

        logger.info("Search %s returned %d candidate(s)", params, len(candidates))
        return candidates
