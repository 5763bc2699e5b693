# ABOUTME: CLI package for Cratekeeper, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from cratekeeper.cli.commands import (
    add_cmd,
    edit_cmd,
    export_cmd,
    identify_cmd,
    info_cmd,
    ls_cmd,
    price_cmd,
    resolve_cmd,
    rm_cmd,
    search_cmd,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True), rich_tracebacks=verbose, show_path=False
            )
        ],
        force=True,
    )


@click.group()
@click.version_option(package_name="cratekeeper")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """Cratekeeper - inventory and market pricing for resold records, CDs, and books."""
    _configure_logging(verbose)


cli.add_command(add_cmd.add)
cli.add_command(ls_cmd.ls)
cli.add_command(info_cmd.info)
cli.add_command(edit_cmd.edit)
cli.add_command(rm_cmd.rm)
cli.add_command(search_cmd.search)
cli.add_command(price_cmd.price)
cli.add_command(resolve_cmd.resolve)
cli.add_command(identify_cmd.identify)
cli.add_command(export_cmd.export)
