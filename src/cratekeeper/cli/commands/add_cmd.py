# ABOUTME: The `cratekeeper add` command for registering a new inventory item.
# ABOUTME: Allocates the next SKU for today and stores the item.

from pathlib import Path

import click
from rich.console import Console

from cratekeeper.cli.options import db_option
from cratekeeper.core.items import create_item
from cratekeeper.core.sku import DEFAULT_SKU_PREFIX, SkuAllocationError
from cratekeeper.db.connection import DEFAULT_DB_PATH, open_inventory
from cratekeeper.db.inventory import DuplicateSkuError, ItemStore
from cratekeeper.db.mapping import ITEM_TYPES


@click.command("add")
@click.option(
    "-t",
    "--type",
    "item_type",
    type=click.Choice(ITEM_TYPES, case_sensitive=False),
    default="VINYL",
    show_default=True,
    help="Kind of item.",
)
@click.option("--title", default=None, help="Title, if already known.")
@click.option("--artist", default=None, help="Artist, if already known.")
@click.option("--catalog-no", default=None, help="Catalog number printed on the item.")
@click.option("--notes", default="", help="Free-form notes.")
@click.option("--location", "storage_location", default=None, help="Storage location.")
@click.option(
    "--prefix",
    envvar="CRATEKEEPER_SKU_PREFIX",
    default=DEFAULT_SKU_PREFIX,
    show_default=True,
    help="SKU prefix.",
)
@db_option
def add(
    item_type: str,
    title: str | None,
    artist: str | None,
    catalog_no: str | None,
    notes: str,
    storage_location: str | None,
    prefix: str,
    db_path: Path | None,
) -> None:
    """Register a new item and print its SKU."""
    console = Console()
    conn = open_inventory(db_path or DEFAULT_DB_PATH)
    try:
        store = ItemStore(conn)
        try:
            record = create_item(
                store,
                item_type.upper(),
                prefix=prefix,
                title=title,
                artist=artist,
                catalog_no=catalog_no,
                notes=notes,
                storage_location=storage_location,
            )
        except (DuplicateSkuError, SkuAllocationError) as exc:
            console.print(f"[red]Could not allocate a SKU:[/red] {exc}")
            raise SystemExit(1) from exc
    finally:
        conn.close()

    console.print(f"Added [bold]{record.sku}[/bold] (id {record.id}, {record.item_type}).")
