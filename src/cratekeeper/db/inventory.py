# ABOUTME: CRUD operations for the Cratekeeper item inventory.
# ABOUTME: Add, query, update, and delete items, plus the SKU lookup used for allocation.

import sqlite3

from cratekeeper.db.mapping import ITEM_TYPES, RANKS, STATUSES, ItemRecord, row_to_record

# Columns update_fields may touch. sku, item_type, and timestamps are fixed.
UPDATABLE_FIELDS = (
    "title",
    "artist",
    "catalog_no",
    "notes",
    "storage_location",
    "status",
    "rank",
)


class DuplicateSkuError(Exception):
    """Raised when attempting to add an item whose SKU already exists."""


class ItemStore:
    """Wraps a sqlite3 connection and provides typed CRUD for the items table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def add_item(
        self,
        sku: str,
        item_type: str,
        *,
        title: str | None = None,
        artist: str | None = None,
        catalog_no: str | None = None,
        notes: str = "",
        storage_location: str | None = None,
    ) -> int:
        """Add an item to the inventory.

        Returns:
            The row ID of the inserted item.

        Raises:
            ValueError: If item_type is not one of ITEM_TYPES.
            DuplicateSkuError: If an item with this SKU already exists.
        """
        if item_type not in ITEM_TYPES:
            raise ValueError(f"Unknown item type {item_type!r}")

        try:
            cursor = self._conn.execute(
                "INSERT INTO items (sku, item_type, title, artist, catalog_no, notes, "
                "storage_location) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (sku, item_type, title, artist, catalog_no, notes, storage_location),
            )
            self._conn.commit()
        except sqlite3.IntegrityError as exc:
            if "UNIQUE constraint failed: items.sku" in str(exc):
                raise DuplicateSkuError(f"Item with SKU {sku} already exists") from exc
            raise

        return cursor.lastrowid  # type: ignore[return-value]

    def get_by_id(self, item_id: int) -> ItemRecord | None:
        """Retrieve an item by its row ID."""
        cursor = self._conn.execute("SELECT * FROM items WHERE id = ?", (item_id,))
        row = cursor.fetchone()
        return row_to_record(row) if row else None

    def get_by_sku(self, sku: str) -> ItemRecord | None:
        """Retrieve an item by its SKU."""
        cursor = self._conn.execute("SELECT * FROM items WHERE sku = ?", (sku,))
        row = cursor.fetchone()
        return row_to_record(row) if row else None

    def list_all(self, status: str | None = None) -> list[ItemRecord]:
        """Return all items, optionally filtered by status, ordered by SKU."""
        if status is not None:
            cursor = self._conn.execute(
                "SELECT * FROM items WHERE status = ? ORDER BY sku", (status,)
            )
        else:
            cursor = self._conn.execute("SELECT * FROM items ORDER BY sku")
        return [row_to_record(row) for row in cursor.fetchall()]

    def search(self, query: str, status: str | None = None) -> list[ItemRecord]:
        """Case-insensitive substring search across SKU, title, and artist.

        LIKE wildcards in the query match literally. Results are ordered by SKU.

        Args:
            query: Text to look for in any of the three fields.
            status: Optionally restrict matches to items with this status.
        """
        escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        sql = (
            "SELECT * FROM items WHERE ("
            "sku LIKE ? ESCAPE '\\' OR title LIKE ? ESCAPE '\\' OR artist LIKE ? ESCAPE '\\')"
        )
        params: list[str] = [pattern, pattern, pattern]
        if status is not None:
            sql += " AND status = ?"
            params.append(status)
        cursor = self._conn.execute(sql + " ORDER BY sku", params)
        return [row_to_record(row) for row in cursor.fetchall()]

    def list_by_ids(self, item_ids: list[int]) -> list[ItemRecord]:
        """Return the items with the given IDs, in the order the IDs were given.

        IDs with no matching item are omitted.
        """
        if not item_ids:
            return []
        placeholders = ", ".join("?" for _ in item_ids)
        cursor = self._conn.execute(
            f"SELECT * FROM items WHERE id IN ({placeholders})", list(item_ids)
        )
        by_id = {row["id"]: row_to_record(row) for row in cursor.fetchall()}
        return [by_id[item_id] for item_id in item_ids if item_id in by_id]

    def update_fields(self, item_id: int, **fields: str | None) -> None:
        """Update one or more fields on an item.

        Accepts keyword arguments named in UPDATABLE_FIELDS. Bumps updated_at.

        Raises:
            ValueError: If a field is not updatable, a status or rank value
                is invalid, or the item_id does not exist.
        """
        if not fields:
            return

        unknown = sorted(set(fields) - set(UPDATABLE_FIELDS))
        if unknown:
            raise ValueError(f"Cannot update field(s): {', '.join(unknown)}")
        if "status" in fields and fields["status"] not in STATUSES:
            raise ValueError(f"Unknown status {fields['status']!r}")
        if "rank" in fields and fields["rank"] not in RANKS:
            raise ValueError(f"Unknown rank {fields['rank']!r}")
        if "notes" in fields and fields["notes"] is None:
            fields["notes"] = ""

        set_clause = ", ".join(f"{k} = ?" for k in fields)
        set_clause += ", updated_at = strftime('%Y-%m-%dT%H:%M:%S', 'now')"
        values = [*list(fields.values()), item_id]

        cursor = self._conn.execute(
            f"UPDATE items SET {set_clause} WHERE id = ?",
            values,
        )
        self._conn.commit()

        if cursor.rowcount == 0:
            raise ValueError(f"Item with id {item_id} not found")

    def delete_item(self, item_id: int) -> None:
        """Delete an item from the inventory.

        Raises:
            ValueError: If the item_id does not exist.
        """
        cursor = self._conn.execute("DELETE FROM items WHERE id = ?", (item_id,))
        self._conn.commit()

        if cursor.rowcount == 0:
            raise ValueError(f"Item with id {item_id} not found")

    def greatest_sku(self, prefix: str, stamp: str) -> str | None:
        """Return the lexicographically greatest SKU starting with `{prefix}-{stamp}-`."""
        cursor = self._conn.execute(
            "SELECT sku FROM items WHERE substr(sku, 1, ?) = ? ORDER BY sku DESC LIMIT 1",
            (len(prefix) + len(stamp) + 2, f"{prefix}-{stamp}-"),
        )
        row = cursor.fetchone()
        return row["sku"] if row else None
