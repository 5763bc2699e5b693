# ABOUTME: CSV export of inventory items.
# ABOUTME: Writes one header row and one row per item to any text stream.

import csv
from collections.abc import Iterable
from typing import TextIO

from cratekeeper.db.mapping import ItemRecord

CSV_HEADER = ["SKU", "Type", "Status", "Title", "Artist", "CatalogNo", "CreatedAt"]


def write_items_csv(records: Iterable[ItemRecord], stream: TextIO) -> int:
    """Write records as CSV to stream.

    Returns:
        The number of item rows written (header excluded).
    """
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    count = 0
    for record in records:
        writer.writerow(
            [
                record.sku,
                record.item_type,
                record.status,
                record.title or "",
                record.artist or "",
                record.catalog_no or "",
                record.created_at,
            ]
        )
        count += 1
    return count
