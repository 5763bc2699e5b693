# ABOUTME: SQLite connection setup for the Cratekeeper inventory.
# ABOUTME: Opens or creates the database and brings it up to the latest schema version, one atomic step at a time.

import logging
import sqlite3
from pathlib import Path

from cratekeeper.db.schema import MIGRATIONS, SCHEMA_V1

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".cratekeeper" / "inventory.db"

# Seconds a writer waits on a locked database before giving up.
BUSY_TIMEOUT = 5.0

_SCHEMA_STEPS: list[tuple[int, str]] = [(1, SCHEMA_V1), *MIGRATIONS]
LATEST_VERSION = _SCHEMA_STEPS[-1][0]


class SchemaVersionError(RuntimeError):
    """Raised when an inventory was written by a newer schema than this build knows."""


def current_version(conn: sqlite3.Connection) -> int:
    """Return the inventory's schema version, 0 for an empty database."""
    has_table = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'schema_version'"
    ).fetchone()
    if has_table is None:
        return 0
    row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    return row[0] or 0


def _upgrade(conn: sqlite3.Connection) -> None:
    version = current_version(conn)
    if version > LATEST_VERSION:
        raise SchemaVersionError(
            f"Inventory schema v{version} is newer than the supported v{LATEST_VERSION}"
        )
    for target, script in _SCHEMA_STEPS:
        if target <= version:
            continue
        logger.info("Upgrading inventory schema to v%d", target)
        try:
            conn.executescript(f"BEGIN;\n{script}\nCOMMIT;")
        except sqlite3.Error:
            conn.rollback()
            raise


def open_inventory(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the Cratekeeper inventory database.

    Missing parent directories are created. The connection uses WAL
    journaling, foreign keys, and sqlite3.Row rows.

    Args:
        path: Database file. Defaults to ~/.cratekeeper/inventory.db.

    Raises:
        SchemaVersionError: If the file was written by a newer schema.
    """
    db_path = path or DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path), timeout=BUSY_TIMEOUT)
    try:
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        _upgrade(conn)
    except (sqlite3.Error, SchemaVersionError):
        conn.close()
        raise
    return conn
