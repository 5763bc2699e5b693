# ABOUTME: Marketplace package for catalog identification and price aggregation.
# ABOUTME: Exports the resolver, aggregator, result types, and error taxonomy.

from cratekeeper.marketplace.errors import (
    CatalogError,
    InternalError,
    InvalidQuery,
    MissingCredential,
    UpstreamError,
)
from cratekeeper.marketplace.http import MarketplaceHttpClient
from cratekeeper.marketplace.pricing import PriceAggregator
from cratekeeper.marketplace.resolver import CatalogResolver
from cratekeeper.marketplace.types import CandidateRelease, Price, PriceQuote

__all__ = [
    "CandidateRelease",
    "CatalogError",
    "CatalogResolver",
    "InternalError",
    "InvalidQuery",
    "MarketplaceHttpClient",
    "MissingCredential",
    "Price",
    "PriceAggregator",
    "PriceQuote",
    "UpstreamError",
]
