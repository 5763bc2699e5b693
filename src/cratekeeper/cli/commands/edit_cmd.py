# ABOUTME: The `cratekeeper edit` command for changing fields on an item.
# ABOUTME: Only the options given on the command line are written.

from pathlib import Path

import click
from rich.console import Console

from cratekeeper.cli.options import db_option
from cratekeeper.db.connection import DEFAULT_DB_PATH, open_inventory
from cratekeeper.db.inventory import ItemStore
from cratekeeper.db.mapping import RANKS, STATUSES


@click.command("edit")
@click.argument("item_id", type=int)
@click.option("--title", default=None)
@click.option("--artist", default=None)
@click.option("--catalog-no", default=None)
@click.option("--notes", default=None)
@click.option("--location", "storage_location", default=None)
@click.option("--status", type=click.Choice(STATUSES, case_sensitive=False), default=None)
@click.option("--rank", type=click.Choice(RANKS, case_sensitive=False), default=None)
@db_option
def edit(item_id: int, db_path: Path | None, **options: str | None) -> None:
    """Update fields on an item."""
    console = Console()
    fields = {k: v for k, v in options.items() if v is not None}
    for key in ("status", "rank"):
        if key in fields:
            fields[key] = fields[key].upper()  # type: ignore[union-attr]

    if not fields:
        console.print("[yellow]Nothing to change.[/yellow]")
        return

    conn = open_inventory(db_path or DEFAULT_DB_PATH)
    try:
        ItemStore(conn).update_fields(item_id, **fields)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise SystemExit(1) from exc
    finally:
        conn.close()

    console.print(f"Updated item {item_id}: {', '.join(sorted(fields))}.")
