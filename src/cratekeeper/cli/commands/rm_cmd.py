# ABOUTME: The `cratekeeper rm` command for deleting inventory items.

from pathlib import Path

import click
from rich.console import Console

from cratekeeper.cli.options import db_option
from cratekeeper.db.connection import DEFAULT_DB_PATH, open_inventory
from cratekeeper.db.inventory import ItemStore


@click.command("rm")
@click.argument("item_ids", type=int, nargs=-1, required=True)
@click.option("-y", "--yes", is_flag=True, default=False, help="Do not ask for confirmation.")
@db_option
def rm(item_ids: tuple[int, ...], yes: bool, db_path: Path | None) -> None:
    """Delete one or more items by ID."""
    console = Console()
    if not yes:
        click.confirm(f"Delete {len(item_ids)} item(s)?", abort=True)

    conn = open_inventory(db_path or DEFAULT_DB_PATH)
    store = ItemStore(conn)
    failed = 0
    try:
        for item_id in item_ids:
            try:
                store.delete_item(item_id)
            except ValueError as exc:
                console.print(f"[red]{exc}[/red]")
                failed += 1
    finally:
        conn.close()

    console.print(f"Deleted {len(item_ids) - failed} item(s).")
    if failed:
        raise SystemExit(1)
