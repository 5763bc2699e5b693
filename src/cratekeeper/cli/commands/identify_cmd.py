# ABOUTME: The `cratekeeper identify` command for batch identification by catalog number.
# ABOUTME: Runs the batch workflow with a live progress bar and prints per-item outcomes.

import asyncio
from pathlib import Path

import click
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from cratekeeper.cli import clients
from cratekeeper.cli.options import db_option, token_option
from cratekeeper.config import MarketplaceSettings
from cratekeeper.core.batch import (
    DEFAULT_DELAY,
    BatchIdentifier,
    BatchItemState,
    BatchOutcome,
    BatchReport,
)
from cratekeeper.db.connection import DEFAULT_DB_PATH, open_inventory
from cratekeeper.db.inventory import ItemStore

_OUTCOME_LABELS = {
    BatchOutcome.PENDING: "[dim]pending[/dim]",
    BatchOutcome.SEARCHING: "[blue]searching[/blue]",
    BatchOutcome.FOUND: "[green]found[/green]",
    BatchOutcome.MULTIPLE: "[yellow]multiple[/yellow]",
    BatchOutcome.NOT_FOUND: "[dim]not found[/dim]",
    BatchOutcome.ERROR: "[red]error[/red]",
}


def _make_progress(console: Console) -> Progress:
    """Create a Rich progress bar for batch processing."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=console,
    )


async def _run_batch(
    settings: MarketplaceSettings,
    store: ItemStore,
    item_ids: list[int],
    delay: float,
    progress: Progress,
) -> BatchReport:
    task_id = progress.add_task("Identifying", total=len(item_ids))

    def on_progress(states: list[BatchItemState]) -> None:
        current = next((s for s in states if s.outcome is BatchOutcome.SEARCHING), None)
        progress.update(
            task_id,
            total=len(states),
            completed=sum(1 for s in states if s.outcome.is_terminal),
            description=current.sku if current else "Identifying",
        )

    async with clients.create_http_client(settings) as http:
        identifier = BatchIdentifier(
            clients.create_resolver(http, settings),
            store,
            delay=delay,
            on_progress=on_progress,
        )
        return await identifier.run(item_ids)


def _results_table(report: BatchReport) -> Table:
    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("SKU", style="bold")
    table.add_column("Cat#")
    table.add_column("Outcome")
    table.add_column("Match")
    for state in report.states:
        if state.candidate is not None:
            match = state.candidate.display_name
        else:
            match = state.error or ""
        table.add_row(
            str(state.item_id),
            state.sku,
            state.catalog_no or "[dim](no cat#)[/dim]",
            _OUTCOME_LABELS[state.outcome],
            match,
        )
    return table


@click.command("identify")
@click.argument("item_ids", type=int, nargs=-1)
@click.option(
    "--all-unprocessed",
    is_flag=True,
    default=False,
    help="Identify every item still in UNPROCESSED status.",
)
@click.option(
    "--delay",
    type=click.FloatRange(min=0.0),
    default=DEFAULT_DELAY,
    show_default=True,
    help="Seconds to wait between items.",
)
@token_option
@db_option
def identify(
    item_ids: tuple[int, ...],
    all_unprocessed: bool,
    delay: float,
    token: str | None,
    db_path: Path | None,
) -> None:
    """Look up items by catalog number and fill in unambiguous matches."""
    console = Console()
    settings = MarketplaceSettings.from_env(token=token)

    if not item_ids and not all_unprocessed:
        raise click.UsageError("Give item IDs or --all-unprocessed.")
    if not settings.token:
        console.print("[red]Missing credential:[/red] No Discogs token configured (set DISCOGS_TOKEN)")
        raise SystemExit(1)

    conn = open_inventory(db_path or DEFAULT_DB_PATH)
    try:
        store = ItemStore(conn)
        ids = list(item_ids)
        if all_unprocessed:
            ids.extend(r.id for r in store.list_all("UNPROCESSED") if r.id not in ids)
        if not ids:
            console.print("[yellow]No items to identify.[/yellow]")
            return

        with _make_progress(console) as progress:
            report = asyncio.run(_run_batch(settings, store, ids, delay, progress))
    finally:
        conn.close()

    console.print(_results_table(report))

    parts = [f"[green]{report.found_count} updated[/green]"]
    multiple = report.count(BatchOutcome.MULTIPLE)
    if multiple:
        parts.append(f"[yellow]{multiple} need manual review[/yellow]")
    not_found = report.count(BatchOutcome.NOT_FOUND)
    if not_found:
        parts.append(f"{not_found} not found")
    errors = report.count(BatchOutcome.ERROR)
    if errors:
        parts.append(f"[red]{errors} error{'s' if errors != 1 else ''}[/red]")
    console.print(f"\nDone: {', '.join(parts)}")
