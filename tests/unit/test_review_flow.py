# ABOUTME: Unit tests for the interactive candidate review flow.
# ABOUTME: Tests candidate display, user selection, auto-accept, and skip behavior.

from io import StringIO
from unittest.mock import patch

from rich.console import Console

from cratekeeper.cli.review import ReviewSession, candidate_table
from cratekeeper.db.mapping import ItemRecord
from cratekeeper.marketplace.types import CandidateRelease


def _item(**overrides: object) -> ItemRecord:
    fields: dict[str, object] = {
        "id": 1,
        "sku": "BB-20240315-0001",
        "item_type": "VINYL",
        "status": "UNPROCESSED",
        "rank": "N",
        "title": None,
        "artist": None,
        "catalog_no": "RAL-8801",
        "notes": "",
        "storage_location": None,
        "created_at": "2024-03-15T10:00:00",
        "updated_at": "2024-03-15T10:00:00",
    }
    fields.update(overrides)
    return ItemRecord(**fields)  # type: ignore[arg-type]


def _candidate(title: str, artist: str = "Tatsuro Yamashita", **kwargs: str) -> CandidateRelease:
    return CandidateRelease(title=title, artist=artist, **kwargs)


class TestReviewSession:
    """Tests for ReviewSession interactive flow."""

    def test_user_selects_candidate(self) -> None:
        """User entering '1' selects the first candidate."""
        candidates = [_candidate("For You"), _candidate("Ride On Time")]
        session = ReviewSession(console=Console(file=StringIO()))

        with patch("cratekeeper.cli.review.click.prompt", return_value="1"):
            result = session.review(_item(), candidates)

        assert result == candidates[0]

    def test_user_selects_second_candidate(self) -> None:
        candidates = [_candidate("For You"), _candidate("Ride On Time")]
        session = ReviewSession(console=Console(file=StringIO()))

        with patch("cratekeeper.cli.review.click.prompt", return_value="2"):
            result = session.review(_item(), candidates)

        assert result is not None
        assert result.title == "Ride On Time"

    def test_user_skips(self) -> None:
        """User entering 's' returns None."""
        session = ReviewSession(console=Console(file=StringIO()))

        with patch("cratekeeper.cli.review.click.prompt", return_value="s"):
            result = session.review(_item(), [_candidate("For You")])

        assert result is None

    def test_invalid_input_reprompts(self) -> None:
        """Out-of-range and non-numeric input asks again."""
        candidates = [_candidate("For You")]
        session = ReviewSession(console=Console(file=StringIO()))

        with patch("cratekeeper.cli.review.click.prompt", side_effect=["7", "x", "1"]) as prompt:
            result = session.review(_item(), candidates)

        assert result == candidates[0]
        assert prompt.call_count == 3

    def test_assume_yes_accepts_single_candidate(self) -> None:
        session = ReviewSession(console=Console(file=StringIO()), assume_yes=True)

        with patch("cratekeeper.cli.review.click.prompt") as prompt:
            result = session.review(_item(), [_candidate("For You")])

        assert result is not None
        prompt.assert_not_called()

    def test_assume_yes_still_prompts_for_several(self) -> None:
        session = ReviewSession(console=Console(file=StringIO()), assume_yes=True)

        with patch("cratekeeper.cli.review.click.prompt", return_value="s") as prompt:
            session.review(_item(), [_candidate("For You"), _candidate("Ride On Time")])

        prompt.assert_called_once()

    def test_no_candidates_returns_none(self) -> None:
        session = ReviewSession(console=Console(file=StringIO()))
        assert session.review(_item(), []) is None

    def test_shows_item_and_candidates(self) -> None:
        output = StringIO()
        session = ReviewSession(console=Console(file=output, width=200))

        with patch("cratekeeper.cli.review.click.prompt", return_value="s"):
            session.review(
                _item(title="For You"),
                [_candidate("For You", catalog_no="RAL-8801", year="1982", label="Air Records")],
            )

        text = output.getvalue()
        assert "BB-20240315-0001" in text
        assert "Cat#: RAL-8801" in text
        assert "Air Records" in text
        assert "1982" in text


class TestCandidateTable:
    """Tests for candidate_table."""

    def test_one_row_per_candidate(self) -> None:
        table = candidate_table([_candidate("For You"), _candidate("Ride On Time")])
        assert table.row_count == 2

    def test_missing_fields_render_as_dash(self) -> None:
        output = StringIO()
        Console(file=output, width=200).print(candidate_table([_candidate("Sampler", artist="")]))
        assert "Sampler" in output.getvalue()
        assert "-" in output.getvalue()
