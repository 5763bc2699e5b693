# ABOUTME: The `cratekeeper resolve` command for identifying a single item interactively.
# ABOUTME: Searches Discogs, lets the user pick a candidate, applies it, and optionally shows a quote.

import asyncio
from pathlib import Path

import click
from rich.console import Console

from cratekeeper.cli import clients
from cratekeeper.cli.commands.price_cmd import fetch_quote
from cratekeeper.cli.display import quote_table, report_catalog_error
from cratekeeper.cli.options import db_option, token_option
from cratekeeper.cli.review import ReviewSession
from cratekeeper.config import MarketplaceSettings
from cratekeeper.db.connection import DEFAULT_DB_PATH, open_inventory
from cratekeeper.db.inventory import ItemStore
from cratekeeper.db.mapping import ItemRecord
from cratekeeper.marketplace.errors import CatalogError
from cratekeeper.marketplace.types import CandidateRelease


def _search_fields(item: ItemRecord, query: str | None) -> dict[str, str | None]:
    """Pick what to search by: explicit query, else catalog number, else artist/title."""
    if query:
        return {"query": query}
    if item.catalog_no:
        return {"catalog_no": item.catalog_no}
    return {"artist": item.artist, "title": item.title}


async def _search(settings: MarketplaceSettings, **fields: str | None) -> list[CandidateRelease]:
    async with clients.create_http_client(settings) as http:
        return await clients.create_resolver(http, settings).search(**fields)


@click.command("resolve")
@click.argument("item_id", type=int)
@click.option("-q", "--query", default=None, help="Search with this text instead of the item's fields.")
@click.option(
    "--price/--no-price",
    "show_price",
    default=True,
    help="Fetch a market quote for the chosen release (default: --price).",
)
@click.option(
    "-y",
    "--yes",
    is_flag=True,
    default=False,
    help="Accept a single candidate without prompting.",
)
@token_option
@db_option
def resolve(
    item_id: int,
    query: str | None,
    show_price: bool,
    yes: bool,
    token: str | None,
    db_path: Path | None,
) -> None:
    """Identify one item against Discogs and apply the chosen release."""
    console = Console()
    settings = MarketplaceSettings.from_env(token=token)

    conn = open_inventory(db_path or DEFAULT_DB_PATH)
    try:
        store = ItemStore(conn)
        item = store.get_by_id(item_id)
        if item is None:
            console.print(f"[red]Item {item_id} not found.[/red]")
            raise SystemExit(1)

        try:
            candidates = asyncio.run(_search(settings, **_search_fields(item, query)))
        except CatalogError as exc:
            report_catalog_error(console, exc)
            raise SystemExit(1) from exc

        if not candidates:
            console.print("[yellow]No matching releases.[/yellow]")
            return

        chosen = ReviewSession(console=console, assume_yes=yes).review(item, candidates)
        if chosen is None:
            console.print("[dim]Skipped.[/dim]")
            return

        store.update_fields(
            item.id,
            title=chosen.title,
            artist=chosen.artist,
            catalog_no=chosen.catalog_no or item.catalog_no,
            status="IDENTIFIED",
        )
    finally:
        conn.close()

    console.print(f"[green]Updated[/green] {item.sku}: {chosen.display_name}")

    if not show_price or not chosen.release_id:
        return

    try:
        quote = asyncio.run(fetch_quote(settings, chosen.release_id))
    except CatalogError as exc:
        report_catalog_error(console, exc)
        raise SystemExit(1) from exc
    console.print(quote_table(quote))
