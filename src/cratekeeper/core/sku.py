# ABOUTME: Sequential SKU allocation of the form PREFIX-YYYYMMDD-NNNN.
# ABOUTME: The next serial is derived from the greatest existing SKU for the same day.

import re
from datetime import date
from typing import Protocol

DEFAULT_SKU_PREFIX = "BB"
SERIAL_WIDTH = 4
_MAX_SERIAL = 10**SERIAL_WIDTH - 1


class SkuAllocationError(Exception):
    """Raised when no further serial fits in the fixed-width serial field."""


class SkuSource(Protocol):
    """Anything that can report the greatest existing SKU for a day."""

    def greatest_sku(self, prefix: str, stamp: str) -> str | None: ...


def date_stamp(on: date) -> str:
    """Format a date as YYYYMMDD."""
    return on.strftime("%Y%m%d")


def format_serial(serial: int) -> str:
    return str(serial).zfill(SERIAL_WIDTH)


def make_sku(prefix: str, stamp: str, serial: str) -> str:
    return f"{prefix}-{stamp}-{serial}"


def next_serial(last_sku: str | None, prefix: str, stamp: str) -> int:
    """Compute the serial following last_sku.

    Returns 1 when there is no prior SKU for the day or it does not parse.
    """
    if not last_sku:
        return 1
    pattern = rf"^{re.escape(prefix)}-{re.escape(stamp)}-(\d{{{SERIAL_WIDTH}}})$"
    match = re.match(pattern, last_sku)
    if match is None:
        return 1
    return int(match.group(1)) + 1


def allocate_sku(source: SkuSource, prefix: str = DEFAULT_SKU_PREFIX, on: date | None = None) -> str:
    """Produce the next SKU for `prefix` on the given day (default: today).

    This reads the current maximum and does not reserve anything: two
    callers racing can get the same answer. Callers that insert must rely
    on the store's unique constraint (see create_item).

    Raises:
        SkuAllocationError: If the day's serials are exhausted.
    """
    stamp = date_stamp(on or date.today())
    serial = next_serial(source.greatest_sku(prefix, stamp), prefix, stamp)
    if serial > _MAX_SERIAL:
        raise SkuAllocationError(f"No serials left for {prefix}-{stamp}")
    return make_sku(prefix, stamp, format_serial(serial))
