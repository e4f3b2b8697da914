"""
Unit tests for the high draft picks report.
"""

from services.entities import DraftRecord, Player
from services.report_service import (
    ReportService, display_fantasy_team, format_high_draft_report, format_row,
)
from services.roster_service import RosterService


def drafted(player_id, name, year, round_number, pick, position="QB", pro_team="CHI",
            fantasy_team="Team Taco"):
    player = Player(player_id, name, position=position, pro_team=pro_team, fantasy_team=fantasy_team)
    player.apply_draft(DraftRecord(year, round_number, pick, "Chicago Bears", name.lower()))
    return player


class TestFormatting:
    """Tests for the plain text layout."""

    def test_format_row_columns(self):
        row = format_row(["Caleb Williams", "QB", "CHI", 1, 1, "Team Taco"])

        assert row.startswith("Caleb Williams" + " " * 16 + "QB   CHI")
        assert row.endswith("Team Taco")
        assert row.index("Team Taco") == 30 + 5 + 15 + 10 + 5

    def test_unrostered_in_upper_case(self):
        assert display_fantasy_team("Unrostered") == "UNROSTERED"
        assert display_fantasy_team("Team Taco") == "Team Taco"

    def test_grouped_by_year(self):
        report = format_high_draft_report([
            drafted("1", "Caleb Williams", 2024, 1, 1),
            drafted("2", "Rome Odunze", 2024, 1, 9, position="WR"),
            drafted("3", "Bryce Young", 2023, 1, 1, pro_team="CAR", fantasy_team="Unrostered"),
        ], draft_count=3)

        assert "High Draft Picks (Last 3 Drafts)" in report
        assert report.count("Draft Year:") == 2
        assert report.index("Draft Year: 2024") < report.index("Rome Odunze")
        assert report.index("Rome Odunze") < report.index("Draft Year: 2023")
        assert "UNROSTERED" in report
        assert report.rstrip().endswith("=" * 100)

    def test_no_players(self):
        report = format_high_draft_report([], draft_count=3)

        assert "No drafted players found." in report
        assert "Draft Year" not in report


class TestReportService:
    """Tests for pulling the report out of the database."""

    def test_recent_early_rounds_only(self, db):
        roster = RosterService(db)
        roster.store_processed_players([
            drafted("1", "Caleb Williams", 2024, 1, 1),
            drafted("2", "Sam LaPorta", 2023, 2, 34, position="TE", pro_team="DET"),
            drafted("3", "Puka Nacua", 2023, 5, 177, position="WR", pro_team="LAR"),
            drafted("4", "Justin Fields", 2021, 1, 11, pro_team="PIT"),
        ])

        report = ReportService(roster).high_draft_report(end_year=2024)

        assert "Caleb Williams" in report
        assert "Sam LaPorta" in report
        assert "Puka Nacua" not in report
        assert "Justin Fields" not in report

    def test_overrides(self, db):
        roster = RosterService(db)
        roster.store_processed_players([
            drafted("3", "Puka Nacua", 2023, 5, 177, position="WR", pro_team="LAR"),
            drafted("4", "Justin Fields", 2021, 1, 11, pro_team="PIT"),
        ])

        report = ReportService(roster).high_draft_report(max_round=7, years=4, end_year=2024)

        assert "Last 4 Drafts" in report
        assert "Puka Nacua" in report
        assert "Justin Fields" in report

    def test_empty_database(self, db):
        report = ReportService(RosterService(db)).high_draft_report(end_year=2024)

        assert "No drafted players found." in report
