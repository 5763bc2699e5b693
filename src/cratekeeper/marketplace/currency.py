# ABOUTME: Currency normalization for displaying marketplace prices in yen.
# ABOUTME: Converts USD strings, {value, currency} pairs, and bare numbers into JPY display text.

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from cratekeeper.marketplace.types import Price

USD_TO_JPY = 150
PLACEHOLDER = "-"

_JPY_MARKERS = ("¥", "￥", "JPY", "円")
# A leading $, US$ or USD, or a trailing USD code. Other dollars (CA$, A$) are not USD.
_USD_RE = re.compile(r"^(?:US\s?\$|USD|\$)|USD$", re.IGNORECASE)

_NUMBER_RE = re.compile(r"[0-9][0-9,]*(?:\.[0-9]+)?")


@dataclass(frozen=True)
class PriceDisplay:
    """A price ready for display.

    sub_label carries the original amount when a conversion happened.
    estimated is True whenever the yen figure is not what the source reported.
    """

    text: str
    sub_label: str = ""
    estimated: bool = False


def _format_jpy(amount: Decimal | float | int) -> str:
    rounded = Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"¥{int(rounded):,}"


def _usd_to_jpy(amount: Decimal | float | int) -> str:
    return _format_jpy(Decimal(str(amount)) * USD_TO_JPY)


def _parse_number(text: str) -> Decimal | None:
    match = _NUMBER_RE.search(text)
    if match is None:
        return None
    return Decimal(match.group(0).replace(",", ""))


def format_price(value: Any) -> PriceDisplay:
    """Normalize a marketplace price for display in yen.

    Accepts a pre-formatted string, a Price (or {"value", "currency"} dict),
    a bare number (taken as yen), or None.
    """
    if value is None or value == "":
        return PriceDisplay(PLACEHOLDER)

    if isinstance(value, dict):
        amount = value.get("value")
        if amount is None:
            return PriceDisplay(PLACEHOLDER)
        value = Price(value=float(amount), currency=str(value.get("currency") or "JPY"))

    if isinstance(value, Price):
        currency = value.currency.upper()
        if currency == "JPY":
            return PriceDisplay(_format_jpy(value.value))
        if currency == "USD":
            return PriceDisplay(
                _usd_to_jpy(value.value), sub_label=f"${value.value:,.2f}", estimated=True
            )
        return PriceDisplay(
            _format_jpy(value.value), sub_label=f"{value.value:,.2f} {currency}", estimated=True
        )

    if isinstance(value, str):
        text = value.strip()
        if any(marker in text for marker in _JPY_MARKERS):
            return PriceDisplay(value)
        if _USD_RE.search(text):
            amount = _parse_number(text)
            if amount is None:
                return PriceDisplay(value)
            return PriceDisplay(_usd_to_jpy(amount), sub_label=text, estimated=True)
        return PriceDisplay(value)

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return PriceDisplay(_format_jpy(value))

    return PriceDisplay(PLACEHOLDER)
