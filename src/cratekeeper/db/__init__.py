# ABOUTME: Public API for the Cratekeeper inventory database layer.
# ABOUTME: Exports connection management, the item store, and record types.

from cratekeeper.db.connection import DEFAULT_DB_PATH, open_inventory
from cratekeeper.db.inventory import DuplicateSkuError, ItemStore
from cratekeeper.db.mapping import ITEM_TYPES, RANKS, STATUSES, ItemRecord

__all__ = [
    "DEFAULT_DB_PATH",
    "ITEM_TYPES",
    "RANKS",
    "STATUSES",
    "DuplicateSkuError",
    "ItemRecord",
    "ItemStore",
    "open_inventory",
]
