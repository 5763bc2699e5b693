# ABOUTME: The `cratekeeper ls` command for listing inventory items.
# ABOUTME: Displays a Rich table of items, optionally filtered by status or a free-text query.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from cratekeeper.cli.options import db_option
from cratekeeper.db.connection import DEFAULT_DB_PATH, open_inventory
from cratekeeper.db.inventory import ItemStore
from cratekeeper.db.mapping import STATUSES


@click.command("ls")
@db_option
@click.option(
    "--status",
    "status_filter",
    type=click.Choice(STATUSES, case_sensitive=False),
    default=None,
    help="Only show items with this status.",
)
@click.option(
    "-q",
    "--query",
    default=None,
    help="Only show items whose SKU, title, or artist contains this text.",
)
def ls(db_path: Path | None, status_filter: str | None, query: str | None) -> None:
    """List inventory items."""
    console = Console()
    status = status_filter.upper() if status_filter else None
    conn = open_inventory(db_path or DEFAULT_DB_PATH)
    try:
        store = ItemStore(conn)
        records = store.search(query, status) if query else store.list_all(status)
    finally:
        conn.close()

    if not records:
        if query or status:
            console.print("[yellow]No items match.[/yellow]")
        else:
            console.print("[yellow]No items in the inventory.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("SKU", style="bold")
    table.add_column("Type", width=6)
    table.add_column("Status")
    table.add_column("Artist")
    table.add_column("Title")
    table.add_column("Cat#")

    for record in records:
        table.add_row(
            str(record.id),
            record.sku,
            record.item_type,
            record.status,
            record.artist or "[dim]unknown[/dim]",
            record.title or "[dim]unknown[/dim]",
            record.catalog_no or "",
        )

    console.print(table)
    console.print(f"\n[dim]{len(records)} item(s)[/dim]")
