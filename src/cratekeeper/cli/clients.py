# ABOUTME: Factories wiring configuration into marketplace clients for CLI commands.
# ABOUTME: Commands go through these so tests can patch the HTTP client in one place.

from cratekeeper.config import MarketplaceSettings
from cratekeeper.marketplace.http import MarketplaceHttpClient
from cratekeeper.marketplace.pricing import PriceAggregator
from cratekeeper.marketplace.resolver import CatalogResolver


def create_http_client(settings: MarketplaceSettings) -> MarketplaceHttpClient:
    """Create the marketplace HTTP client for one command invocation."""
    return MarketplaceHttpClient.from_settings(settings)


def create_resolver(http: MarketplaceHttpClient, settings: MarketplaceSettings) -> CatalogResolver:
    return CatalogResolver(http, api_base=settings.api_base)


def create_aggregator(
    http: MarketplaceHttpClient, settings: MarketplaceSettings
) -> PriceAggregator:
    return PriceAggregator(http, api_base=settings.api_base, web_base=settings.web_base)
