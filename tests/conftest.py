# ABOUTME: Shared pytest fixtures for Cratekeeper tests.
# ABOUTME: Provides temporary inventory databases and item stores.

import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest

from cratekeeper.db.connection import open_inventory
from cratekeeper.db.inventory import ItemStore


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path for a fresh inventory database."""
    return tmp_path / "inventory.db"


@pytest.fixture
def conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    """An open inventory connection, closed after the test."""
    connection = open_inventory(db_path)
    yield connection
    connection.close()


@pytest.fixture
def store(conn: sqlite3.Connection) -> ItemStore:
    """An ItemStore backed by a temporary database."""
    return ItemStore(conn)
