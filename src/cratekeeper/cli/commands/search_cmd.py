# ABOUTME: The `cratekeeper search` command for looking up releases on Discogs.
# ABOUTME: Searches by catalog number, free text, artist, or title and lists up to five candidates.

import asyncio

import click
from rich.console import Console

from cratekeeper.cli import clients
from cratekeeper.cli.display import print_json, report_catalog_error
from cratekeeper.cli.options import json_option, token_option
from cratekeeper.cli.review import candidate_table
from cratekeeper.config import MarketplaceSettings
from cratekeeper.marketplace.errors import CatalogError
from cratekeeper.marketplace.types import CandidateRelease


async def _search(settings: MarketplaceSettings, **query: str | None) -> list[CandidateRelease]:
    async with clients.create_http_client(settings) as http:
        return await clients.create_resolver(http, settings).search(**query)


@click.command("search")
@click.option("--catno", "catalog_no", default=None, help="Catalog number.")
@click.option("-q", "--query", default=None, help="Free-text query.")
@click.option("--artist", default=None)
@click.option("--title", default=None)
@token_option
@json_option
def search(
    catalog_no: str | None,
    query: str | None,
    artist: str | None,
    title: str | None,
    token: str | None,
    as_json: bool,
) -> None:
    """Search Discogs for releases matching the given fields."""
    console = Console()
    settings = MarketplaceSettings.from_env(token=token)

    try:
        candidates = asyncio.run(
            _search(settings, catalog_no=catalog_no, query=query, artist=artist, title=title)
        )
    except CatalogError as exc:
        report_catalog_error(console, exc)
        raise SystemExit(1) from exc

    if as_json:
        print_json([c.to_dict() for c in candidates])
        return

    if not candidates:
        console.print("[yellow]No matching releases.[/yellow]")
        return

    console.print(candidate_table(candidates))
    console.print(f"\n[dim]{len(candidates)} candidate(s)[/dim]")
