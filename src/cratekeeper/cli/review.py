# ABOUTME: Interactive disambiguation of catalog candidates for one item.
# ABOUTME: Displays candidates in a Rich table and prompts the user to choose one or skip.

import click
from rich.console import Console
from rich.table import Table

from cratekeeper.db.mapping import ItemRecord
from cratekeeper.marketplace.types import CandidateRelease


def candidate_table(candidates: list[CandidateRelease], title: str | None = None) -> Table:
    """Build the numbered candidate table shared by `search` and `resolve`."""
    table = Table(title=title)
    table.add_column("#", style="bold", width=3)
    table.add_column("Artist")
    table.add_column("Title", style="bold")
    table.add_column("Cat#")
    table.add_column("Year", width=6)
    table.add_column("Label")
    table.add_column("Format")
    table.add_column("Release", style="dim")

    for i, candidate in enumerate(candidates, start=1):
        table.add_row(
            str(i),
            candidate.artist or "-",
            candidate.title,
            candidate.catalog_no or "-",
            candidate.year or "-",
            candidate.label or "-",
            candidate.format or "-",
            candidate.release_id or "-",
        )
    return table


class ReviewSession:
    """Interactive selection among candidate releases.

    A single candidate still needs confirmation unless `assume_yes` is set;
    several candidates always need an explicit choice.
    """

    def __init__(self, *, console: Console | None = None, assume_yes: bool = False) -> None:
        self._console = console or Console()
        self._assume_yes = assume_yes

    def review(
        self, item: ItemRecord, candidates: list[CandidateRelease]
    ) -> CandidateRelease | None:
        """Present candidates for the item and return the chosen one, or None to skip."""
        if not candidates:
            return None

        if self._assume_yes and len(candidates) == 1:
            return candidates[0]

        self._console.print(f"\n[bold]{item.sku}[/bold]  {item.display_title or '(untitled)'}")
        if item.catalog_no:
            self._console.print(f"  Cat#: {item.catalog_no}")
        self._console.print(candidate_table(candidates, title="Candidates"))

        while True:
            choice = click.prompt("[1-N] Accept  [s] Skip", type=str, default="s")
            if choice.lower() == "s":
                return None
            try:
                idx = int(choice) - 1
            except ValueError:
                continue
            if 0 <= idx < len(candidates):
                return candidates[idx]
