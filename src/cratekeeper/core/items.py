# ABOUTME: Item creation: allocates a SKU and inserts the item, retrying on SKU collisions.
# ABOUTME: Closes the read-then-write gap of SKU allocation using the store's unique constraint.

import logging
from datetime import date

from cratekeeper.core.sku import DEFAULT_SKU_PREFIX, allocate_sku
from cratekeeper.db.inventory import DuplicateSkuError, ItemStore
from cratekeeper.db.mapping import ItemRecord

logger = logging.getLogger(__name__)

_MAX_ATTEMPTS = 3


def create_item(
    store: ItemStore,
    item_type: str,
    *,
    prefix: str = DEFAULT_SKU_PREFIX,
    on: date | None = None,
    max_attempts: int = _MAX_ATTEMPTS,
    title: str | None = None,
    artist: str | None = None,
    catalog_no: str | None = None,
    notes: str = "",
    storage_location: str | None = None,
) -> ItemRecord:
    """Create a new item with a freshly allocated SKU.

    If another writer took the same SKU between allocation and insert, the
    allocation is repeated up to max_attempts times.

    Raises:
        DuplicateSkuError: If every attempt collided.
        SkuAllocationError: If the day's serials are exhausted.
    """
    for attempt in range(1, max_attempts + 1):
        sku = allocate_sku(store, prefix, on)
        try:
            item_id = store.add_item(
                sku,
                item_type,
                title=title,
                artist=artist,
                catalog_no=catalog_no,
                notes=notes,
                storage_location=storage_location,
            )
        except DuplicateSkuError:
            logger.warning("SKU %s taken concurrently (attempt %d/%d)", sku, attempt, max_attempts)
            if attempt == max_attempts:
                raise
            continue

        record = store.get_by_id(item_id)
        assert record is not None
        logger.info("Created item %d with SKU %s", item_id, sku)
        return record

    raise DuplicateSkuError(f"Could not allocate a SKU after {max_attempts} attempts")
