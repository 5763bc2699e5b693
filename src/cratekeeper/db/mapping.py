# ABOUTME: Converts SQLite item rows into ItemRecord dataclasses.
# ABOUTME: Also holds the allowed item types, statuses, and ranks.

from dataclasses import dataclass
from typing import Any

ITEM_TYPES = ("VINYL", "CD", "BOOK")
STATUSES = ("UNPROCESSED", "IDENTIFIED", "READY", "LISTED", "SOLD")
RANKS = ("N", "R", "SR", "SSR", "UR")


@dataclass
class ItemRecord:
    """One inventory item as stored in the database."""

    id: int
    sku: str
    item_type: str
    status: str
    rank: str
    title: str | None
    artist: str | None
    catalog_no: str | None
    notes: str
    storage_location: str | None
    created_at: str
    updated_at: str

    @property
    def display_title(self) -> str:
        """Convenience property: "Artist - Title" or whatever part is known."""
        parts = [p for p in (self.artist, self.title) if p]
        return " - ".join(parts)


def row_to_record(row: Any) -> ItemRecord:
    """Convert a full items row (dict-like) to an ItemRecord."""
    return ItemRecord(
        id=row["id"],
        sku=row["sku"],
        item_type=row["item_type"],
        status=row["status"],
        rank=row["rank"],
        title=row["title"],
        artist=row["artist"],
        catalog_no=row["catalog_no"],
        notes=row["notes"] or "",
        storage_location=row["storage_location"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
