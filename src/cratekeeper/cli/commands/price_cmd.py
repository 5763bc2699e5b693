# ABOUTME: The `cratekeeper price` command for estimating a release's market value.
# ABOUTME: Aggregates Discogs statistics and sales history into one quote shown in yen.

import asyncio

import click
from rich.console import Console

from cratekeeper.cli import clients
from cratekeeper.cli.display import print_json, quote_table, report_catalog_error
from cratekeeper.cli.options import json_option, token_option
from cratekeeper.config import MarketplaceSettings
from cratekeeper.marketplace.errors import CatalogError
from cratekeeper.marketplace.types import PriceQuote


async def fetch_quote(settings: MarketplaceSettings, release_id: str) -> PriceQuote:
    async with clients.create_http_client(settings) as http:
        return await clients.create_aggregator(http, settings).get_quote(release_id)


@click.command("price")
@click.argument("release_id")
@token_option
@json_option
def price(release_id: str, token: str | None, as_json: bool) -> None:
    """Show current market statistics for a Discogs release ID."""
    console = Console()
    settings = MarketplaceSettings.from_env(token=token)

    try:
        quote = asyncio.run(fetch_quote(settings, release_id))
    except CatalogError as exc:
        report_catalog_error(console, exc)
        raise SystemExit(1) from exc

    if as_json:
        print_json(quote.to_dict())
        return

    console.print(quote_table(quote))
