# ABOUTME: The `cratekeeper info` command for displaying one inventory item.
# ABOUTME: Shows all stored fields for a single item by ID.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from cratekeeper.cli.options import db_option
from cratekeeper.db.connection import DEFAULT_DB_PATH, open_inventory
from cratekeeper.db.inventory import ItemStore


@click.command("info")
@click.argument("item_id", type=int)
@db_option
def info(item_id: int, db_path: Path | None) -> None:
    """Show all fields for an item by ID."""
    console = Console()
    conn = open_inventory(db_path or DEFAULT_DB_PATH)
    try:
        record = ItemStore(conn).get_by_id(item_id)
    finally:
        conn.close()

    if record is None:
        console.print(f"[red]Item {item_id} not found.[/red]")
        raise SystemExit(1)

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    table.add_row("ID", str(record.id))
    table.add_row("SKU", record.sku)
    table.add_row("Type", record.item_type)
    table.add_row("Status", record.status)
    table.add_row("Rank", record.rank)
    table.add_row("Title", record.title or "unknown")
    table.add_row("Artist", record.artist or "unknown")
    if record.catalog_no:
        table.add_row("Cat#", record.catalog_no)
    if record.storage_location:
        table.add_row("Location", record.storage_location)
    if record.notes:
        table.add_row("Notes", record.notes)
    table.add_row("Added", record.created_at)
    table.add_row("Modified", record.updated_at)

    console.print(table)
