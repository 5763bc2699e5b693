# ABOUTME: Integration tests for the inventory across connections.
# ABOUTME: Covers persistence, SKU allocation after reopen and deletion, and export of edited items.

from datetime import date
from io import StringIO
from pathlib import Path

from cratekeeper.core.export import write_items_csv
from cratekeeper.core.items import create_item
from cratekeeper.db.connection import open_inventory
from cratekeeper.db.inventory import ItemStore

DAY = date(2024, 3, 15)


class TestInventoryLifecycle:
    """Items created, edited, and removed across separate connections."""

    def test_allocation_continues_after_reopen(self, db_path: Path) -> None:
        conn = open_inventory(db_path)
        create_item(ItemStore(conn), "VINYL", on=DAY)
        create_item(ItemStore(conn), "VINYL", on=DAY)
        conn.close()

        conn = open_inventory(db_path)
        try:
            record = create_item(ItemStore(conn), "CD", on=DAY)
        finally:
            conn.close()
        assert record.sku == "BB-20240315-0003"

    def test_deleting_the_newest_item_frees_its_serial(self, db_path: Path) -> None:
        """Serials follow the greatest remaining SKU, so the top one can be reissued."""
        conn = open_inventory(db_path)
        try:
            store = ItemStore(conn)
            create_item(store, "VINYL", on=DAY)
            newest = create_item(store, "VINYL", on=DAY)
            store.delete_item(newest.id)
            assert create_item(store, "VINYL", on=DAY).sku == "BB-20240315-0002"
        finally:
            conn.close()

    def test_deleting_an_older_item_keeps_sequence(self, db_path: Path) -> None:
        conn = open_inventory(db_path)
        try:
            store = ItemStore(conn)
            oldest = create_item(store, "VINYL", on=DAY)
            create_item(store, "VINYL", on=DAY)
            store.delete_item(oldest.id)
            assert create_item(store, "VINYL", on=DAY).sku == "BB-20240315-0003"
        finally:
            conn.close()

    def test_edits_persist_and_export(self, db_path: Path) -> None:
        conn = open_inventory(db_path)
        item_id = create_item(ItemStore(conn), "VINYL", on=DAY, catalog_no="RAL-8801").id
        ItemStore(conn).update_fields(
            item_id, title="For You", artist="Tatsuro Yamashita", status="READY"
        )
        conn.close()

        conn = open_inventory(db_path)
        try:
            stream = StringIO()
            write_items_csv(ItemStore(conn).list_all("READY"), stream)
        finally:
            conn.close()

        lines = stream.getvalue().splitlines()
        assert len(lines) == 2
        assert lines[1].startswith(
            "BB-20240315-0001,VINYL,READY,For You,Tatsuro Yamashita,RAL-8801,"
        )
