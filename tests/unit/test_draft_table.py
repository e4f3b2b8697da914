"""
Unit tests for the Wikipedia draft table parser.
"""

from collections import Counter

from scrapers.wikipedia.draft_table import (
    clean_cell_text,
    clean_player_name,
    extract_draft_records,
    parse_draft_row,
    parse_int,
)
from services.entities import DraftRecord


class TestExtractDraftRecords:
    """Tests for whole-page extraction."""

    def test_five_cell_row(self, draft_page):
        html = draft_page([["", "3", "88", "Dallas Cowboys", "John†&nbsp;Smith"]])

        records = list(extract_draft_records(2019, html))

        assert records == [DraftRecord(
            year=2019, round=3, pick=88, team="Dallas Cowboys", player_name="john smith"
        )]

    def test_short_row_skipped(self, draft_page):
        html = draft_page([
            ["", "1", "1", "Chicago Bears"],
            ["", "1", "2", "Washington Commanders", "Jayden Daniels"],
        ])
        stats = Counter()

        records = list(extract_draft_records(2024, html, stats=stats))

        assert [r.player_name for r in records] == ["jayden daniels"]
        assert stats["rows"] == 2
        assert stats["rows_skipped"] == 1

    def test_non_numeric_round_or_pick_skipped(self, draft_page):
        html = draft_page([
            ["Rnd.", "Rnd.", "Pick No.", "NFL team", "Player"],
            ["", "1", "Forfeited", "Miami Dolphins", "Forfeited pick"],
            ["", "1", "3", "New England Patriots", "Drake Maye"],
        ])

        records = list(extract_draft_records(2024, html))

        assert len(records) == 1
        assert records[0].pick == 3
        assert records[0].player_name == "drake maye"

    def test_marked_pick_numbers_kept(self, draft_page):
        html = draft_page([
            ["", "3", "97*", "Dallas Cowboys", "John Smith"],
            ["", "1", "32[a]", "Kansas City Chiefs", "Xavier Worthy"],
        ])

        records = list(extract_draft_records(2024, html))

        assert [(r.pick, r.player_name) for r in records] == [
            (97, "john smith"), (32, "xavier worthy")
        ]

    def test_rows_outside_body_ignored(self, draft_page):
        html = draft_page(
            [["", "2", "33", "Carolina Panthers", "Xavier Legette"]],
            head_rows=[["", "1", "1", "Header Team", "Header Row"]],
        )

        records = list(extract_draft_records(2024, html))

        assert [r.player_name for r in records] == ["xavier legette"]

    def test_cell_whitespace_collapsed(self, draft_page):
        html = draft_page([["", " 1 ", "\n4", "\n  Arizona\n   Cardinals ", "  Marvin   Harrison Jr. "]])

        record = next(extract_draft_records(2024, html))

        assert record.team == "Arizona Cardinals"
        assert record.player_name == "marvin harrison jr."

    def test_footnotes_and_markup_removed(self, draft_page):
        html = draft_page([
            ["", "6", "199", "New England Patriots", "Tom Brady&lt;sup&gt;*&lt;/sup&gt; ‡"],
            ["", "1", "2", "St. Louis Rams", "<a href='/wiki/x'>Tom</a>&amp;nbsp;Jones"],
        ])

        records = list(extract_draft_records(2000, html))

        assert [r.player_name for r in records] == ["tom brady", "tom jones"]

    def test_records_tagged_with_requested_year(self, draft_page):
        html = draft_page([["", "1", "1", "Jacksonville Jaguars", "Travon Walker"]])

        record = next(extract_draft_records(1999, html))

        assert record.year == 1999

    def test_table_needs_all_three_classes(self, draft_page):
        html = draft_page(
            [["", "1", "1", "Chicago Bears", "Caleb Williams"]],
            classes="wikitable sortable",
        )
        stats = Counter()

        assert list(extract_draft_records(2024, html, stats=stats)) == []
        assert stats["missing_table"] == 1

    def test_extra_classes_allowed(self, draft_page):
        html = draft_page(
            [["", "1", "1", "Chicago Bears", "Caleb Williams"]],
            classes="wikitable sortable plainrowheaders jquery-tablesorter",
        )

        assert len(list(extract_draft_records(2024, html))) == 1

    def test_only_first_matching_table_used(self, draft_page):
        first = draft_page([["", "1", "1", "Chicago Bears", "Caleb Williams"]])
        second = draft_page([["", "1", "2", "Washington Commanders", "Jayden Daniels"]])
        html = first.replace(b"</body></html>", b"") + second

        records = list(extract_draft_records(2024, html))

        assert [r.player_name for r in records] == ["caleb williams"]

    def test_empty_document(self):
        assert list(extract_draft_records(2024, b"")) == []

    def test_garbage_document(self):
        assert list(extract_draft_records(2024, b"\x00\xff<<<table class=")) == []

    def test_same_input_same_output(self, draft_page):
        html = draft_page([["", "1", "1", "Chicago Bears", "Caleb Williams"]])

        assert list(extract_draft_records(2024, html)) == list(extract_draft_records(2024, html))


class TestParseDraftRow:
    """Tests for single-row parsing."""

    def test_valid_row(self):
        record = parse_draft_row(2023, ["1", "1", "1", "Carolina Panthers", "Bryce Young", "QB"])

        assert record == DraftRecord(2023, 1, 1, "Carolina Panthers", "bryce young")

    def test_too_few_cells(self):
        assert parse_draft_row(2023, ["1", "1", "1", "Carolina Panthers"]) is None

    def test_empty_player_cell(self):
        assert parse_draft_row(2023, ["1", "1", "1", "Carolina Panthers", "†"]) is None
        assert parse_draft_row(2023, ["", "1", "1", "Carolina Panthers", ""]) is None


def test_parse_int():
    assert parse_int("88") == 88
    assert parse_int("") is None
    assert parse_int("3a") == 3
    assert parse_int("97*") == 97
    assert parse_int("32[a]") == 32
    assert parse_int("Forfeited") is None
    assert parse_int("a3") is None
    assert parse_int("0") is None
    assert parse_int("²") is None


def test_clean_cell_text():
    assert clean_cell_text("\n  Green Bay\t Packers \n") == "Green Bay Packers"


def test_clean_player_name():
    assert clean_player_name("Aaron Rodgers*†") == "aaron rodgers"
