# ABOUTME: Pure extraction of market statistics from Discogs page markup.
# ABOUTME: Label-anchored regex patterns per field, evaluated first-match-wins, no network access.

import re
from dataclasses import dataclass

# Each field lists its label variants in lookup order, Japanese first since
# pages are requested with a Japanese language preference.
HISTORY_LABELS: dict[str, tuple[str, ...]] = {
    "low": ("低", "Low", "Lowest"),
    "median": ("中間点", "Median"),
    "high": ("高", "High", "Highest"),
    "average": ("平均", "Average"),
}

LAST_SOLD_LABELS: tuple[str, ...] = ("最終販売日", "Last Sold")

RELEASED_LABELS: tuple[str, ...] = ("リリース済み", "リリース", "Released")

# Currency code prefixes ("US$", "CA $") are matched case-sensitively.
_PRICE_VALUE = r"((?:(?-i:[A-Z]{1,3})\s?)?[¥$€£][0-9][0-9,.]*|--)"

# Arrangements the summary block has been seen in. The value normally sits
# immediately before its <small> label.
_STAT_SHAPES: tuple[str, ...] = (
    r"{value}\s*<small>\s*{label}\s*</small>",
    r"<small>\s*{label}\s*</small>\s*{value}",
    r"{label}[^<]*</small>[^<]*<span[^>]*>{value}",
)

_TAGS = r"(?:<[^>]+>\s*)*"

_ABSENT_VALUES = {"--", "never", "なし"}


def _compile_stat_patterns(labels: tuple[str, ...]) -> list[re.Pattern[str]]:
    patterns = []
    for label in labels:
        for shape in _STAT_SHAPES:
            source = shape.format(value=_PRICE_VALUE, label=re.escape(label))
            patterns.append(re.compile(source, re.IGNORECASE))
    return patterns


def _compile_anchored(labels: tuple[str, ...], value: str) -> list[re.Pattern[str]]:
    return [
        re.compile(rf"{re.escape(label)}\s*[:：]?\s*{_TAGS}{value}", re.IGNORECASE)
        for label in labels
    ]


_HISTORY_PATTERNS: dict[str, list[re.Pattern[str]]] = {
    name: _compile_stat_patterns(labels) for name, labels in HISTORY_LABELS.items()
}
_LAST_SOLD_PATTERNS = _compile_anchored(LAST_SOLD_LABELS, r"([^<]+?)\s*<")
_RELEASED_PATTERNS = _compile_anchored(RELEASED_LABELS, r"[^<]*?(?<!\d)(\d{4})(?!\d)")


@dataclass(frozen=True)
class HistoryStats:
    """Values read from the sales-history page.

    recognized is False when none of the summary labels appear at all,
    which usually means the page layout changed rather than that the
    release has no sales.
    """

    low: str | None = None
    median: str | None = None
    high: str | None = None
    average: str | None = None
    last_sold: str | None = None
    recognized: bool = False


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value or value.lower() in _ABSENT_VALUES:
        return None
    return value


def first_match(html: str, patterns: list[re.Pattern[str]]) -> str | None:
    """Return the first capture of the first pattern that matches, trimmed."""
    for pattern in patterns:
        match = pattern.search(html)
        if match:
            return _clean(match.group(1))
    return None


def has_history_summary(html: str) -> bool:
    """Whether the markup contains any recognizable sales-summary label."""
    labels = [label for variants in HISTORY_LABELS.values() for label in variants]
    labels.extend(LAST_SOLD_LABELS)
    return any(
        re.search(rf"<small>\s*{re.escape(label)}\s*</small>|{re.escape(label)}\s*[:：]", html)
        for label in labels
    )


def extract_history_stats(html: str) -> HistoryStats:
    """Extract low/median/high/average and the last-sold date from a sales-history page."""
    return HistoryStats(
        low=first_match(html, _HISTORY_PATTERNS["low"]),
        median=first_match(html, _HISTORY_PATTERNS["median"]),
        high=first_match(html, _HISTORY_PATTERNS["high"]),
        average=first_match(html, _HISTORY_PATTERNS["average"]),
        last_sold=first_match(html, _LAST_SOLD_PATTERNS),
        recognized=has_history_summary(html),
    )


def extract_released_year(html: str) -> str | None:
    """Extract the four-digit release year from a release detail page."""
    return first_match(html, _RELEASED_PATTERNS)
