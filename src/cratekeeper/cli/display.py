# ABOUTME: Rich rendering helpers shared by the marketplace CLI commands.
# ABOUTME: Formats price quotes with yen conversion and reports catalog errors.

import json
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from cratekeeper.marketplace.currency import format_price
from cratekeeper.marketplace.errors import (
    CatalogError,
    InvalidQuery,
    MissingCredential,
    UpstreamError,
)
from cratekeeper.marketplace.types import PriceQuote


def _price_cell(value: Any) -> str:
    display = format_price(value)
    text = display.text
    if display.estimated:
        text += " [dim](est.)[/dim]"
    if display.sub_label:
        text += f" [dim]{display.sub_label}[/dim]"
    return text


def _count_cell(value: int | float | None) -> str:
    if value is None:
        return "-"
    if isinstance(value, int):
        return f"{value:,}"
    return f"{value:.2f}"


def quote_table(quote: PriceQuote) -> Table:
    """Render a PriceQuote as a two-column field/value table."""
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=16)
    table.add_column("Value")

    table.add_row("Release", quote.release_id)
    table.add_row("Released", quote.released_year or "-")
    table.add_row("Want / Have", f"{_count_cell(quote.want_count)} / {_count_cell(quote.have_count)}")
    table.add_row("Rating", _count_cell(quote.avg_rating))
    table.add_row("For sale", _count_cell(quote.for_sale_count))
    table.add_row("Lowest listing", _price_cell(quote.lowest_listing_price))
    table.add_row("Sold low", _price_cell(quote.history_low))
    table.add_row("Sold median", _price_cell(quote.history_median))
    table.add_row("Sold high", _price_cell(quote.history_high))
    table.add_row("Sold average", _price_cell(quote.history_average))
    table.add_row("Last sold", quote.last_sold_date or "-")
    for condition, price in quote.suggestions.items():
        table.add_row(f"Suggest {condition}", _price_cell(price))
    table.add_row("History", quote.source_url)
    if not quote.scraped:
        table.add_row("", "[yellow]Sales history page unavailable[/yellow]")
    elif quote.extraction_degraded:
        table.add_row("", "[yellow]Sales history layout not recognized[/yellow]")
    return table


def print_json(payload: Any) -> None:
    """Write payload as indented JSON, unwrapped, for piping into other tools."""
    click.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def report_catalog_error(console: Console, exc: CatalogError) -> None:
    """Print a one-line explanation for a marketplace failure."""
    if isinstance(exc, InvalidQuery):
        console.print(f"[red]Invalid query:[/red] {exc}")
    elif isinstance(exc, MissingCredential):
        console.print(f"[red]Missing credential:[/red] {exc}")
    elif isinstance(exc, UpstreamError):
        status = f" (HTTP {exc.status_code})" if exc.status_code else ""
        console.print(f"[red]Discogs request failed{status}:[/red] {exc}")
    else:
        console.print(f"[red]Internal error:[/red] {exc}")
