# ABOUTME: Unit tests for marketplace page extraction.
# ABOUTME: Feeds Japanese and English markup variants through the label-anchored extractors.

from cratekeeper.marketplace.scrape import (
    extract_history_stats,
    extract_released_year,
    has_history_summary,
)
from tests.fixtures.discogs_responses import (
    HISTORY_HTML_EN,
    HISTORY_HTML_JA,
    HISTORY_HTML_NO_SALES,
    HISTORY_HTML_UNRECOGNIZED,
    RELEASE_PAGE_HTML_EN,
    RELEASE_PAGE_HTML_JA,
)


class TestExtractHistoryStats:
    """Tests for extract_history_stats."""

    def test_japanese_labels(self) -> None:
        stats = extract_history_stats(HISTORY_HTML_JA)
        assert stats.low == "¥2,500"
        assert stats.median == "¥4,800"
        assert stats.high == "¥9,000"
        assert stats.average == "¥5,120"
        assert stats.last_sold == "2024-03-15"
        assert stats.recognized is True

    def test_english_labels_value_after_label(self) -> None:
        stats = extract_history_stats(HISTORY_HTML_EN)
        assert stats.low == "$12.00"
        assert stats.median == "$30.50"
        assert stats.high == "$60.00"
        assert stats.average == "$31.25"
        assert stats.last_sold == "Mar 15, 2024"

    def test_currency_code_prefix_is_kept(self) -> None:
        stats = extract_history_stats("<li>US $12.00 <small>Low</small></li>")
        assert stats.low == "US $12.00"

    def test_value_inside_span_after_label(self) -> None:
        html = '<small>Median</small>\n<span class="price">€18.40</span>'
        assert extract_history_stats(html).median == "€18.40"

    def test_placeholders_are_absent(self) -> None:
        stats = extract_history_stats(HISTORY_HTML_NO_SALES)
        assert stats.low is None
        assert stats.median is None
        assert stats.high is None
        assert stats.average is None
        assert stats.last_sold is None
        assert stats.recognized is True

    def test_unrecognized_page(self) -> None:
        stats = extract_history_stats(HISTORY_HTML_UNRECOGNIZED)
        assert stats.low is None
        assert stats.last_sold is None
        assert stats.recognized is False

    def test_empty_markup(self) -> None:
        stats = extract_history_stats("")
        assert stats.recognized is False

    def test_highest_label_variant(self) -> None:
        assert extract_history_stats("<li>$99.00 <small>Highest</small></li>").high == "$99.00"

    def test_full_width_colon(self) -> None:
        html = "<p>最終販売日：<span>2023-12-01</span></p>"
        assert extract_history_stats(html).last_sold == "2023-12-01"


class TestHasHistorySummary:
    """Tests for has_history_summary."""

    def test_label_in_small_tag(self) -> None:
        assert has_history_summary("<small>平均</small>")

    def test_label_with_colon(self) -> None:
        assert has_history_summary("Last Sold: never")

    def test_plain_words_are_not_labels(self) -> None:
        assert not has_history_summary("<p>Low prices and high quality</p>")


class TestExtractReleasedYear:
    """Tests for extract_released_year."""

    def test_japanese_date(self) -> None:
        assert extract_released_year(RELEASE_PAGE_HTML_JA) == "1982"

    def test_english_date(self) -> None:
        assert extract_released_year(RELEASE_PAGE_HTML_EN) == "1997"

    def test_year_only(self) -> None:
        assert extract_released_year("<div>Released:</div><div>2001</div>") == "2001"

    def test_missing(self) -> None:
        assert extract_released_year("<div>Format: Vinyl</div>") is None

    def test_longer_digit_runs_are_not_years(self) -> None:
        assert extract_released_year("<div>Released:</div><div>123456</div>") is None
