# ABOUTME: The `cratekeeper export` command for writing items to CSV.
# ABOUTME: Exports the given item IDs, or every item, to a file or stdout.

from io import StringIO
from pathlib import Path

import click
from rich.console import Console

from cratekeeper.cli.options import db_option
from cratekeeper.core.export import write_items_csv
from cratekeeper.db.connection import DEFAULT_DB_PATH, open_inventory
from cratekeeper.db.inventory import ItemStore


@click.command("export")
@click.argument("item_ids", type=int, nargs=-1)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="CSV file to write (default: stdout).",
)
@db_option
def export(item_ids: tuple[int, ...], output: Path | None, db_path: Path | None) -> None:
    """Export items as CSV (all items when no IDs are given)."""
    conn = open_inventory(db_path or DEFAULT_DB_PATH)
    try:
        store = ItemStore(conn)
        records = store.list_by_ids(list(item_ids)) if item_ids else store.list_all()
    finally:
        conn.close()

    if output is None:
        buffer = StringIO()
        write_items_csv(records, buffer)
        click.echo(buffer.getvalue(), nl=False)
        return

    with output.open("w", encoding="utf-8", newline="") as handle:
        count = write_items_csv(records, handle)
    Console().print(f"Wrote {count} item(s) to {output}.")
