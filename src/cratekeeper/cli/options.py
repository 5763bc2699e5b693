# ABOUTME: Shared Click options for Cratekeeper CLI commands.
# ABOUTME: Provides reusable decorators for common flags like --db, --token, and --json.

from pathlib import Path

import click

from cratekeeper.config import TOKEN_ENV
from cratekeeper.db.connection import DEFAULT_DB_PATH

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    help=f"Path to inventory database (default: {DEFAULT_DB_PATH})",
)

token_option = click.option(
    "--token",
    envvar=TOKEN_ENV,
    default=None,
    help=f"Discogs personal access token (default: ${TOKEN_ENV}).",
)

json_option = click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the result as JSON instead of a table.",
)
