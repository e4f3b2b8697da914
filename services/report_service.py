"""
Draft Report Module
====================

Builds the console report of recent high draft picks.

Output looks like:

    ========== High Draft Picks (Last 3 Drafts) ==========

    Draft Year: 2024
    ----------------------------------------------------------------------------------------------------
    Player                        Pos  NFL Team       Round     Pick Fantasy Team
    ----------------------------------------------------------------------------------------------------
    Caleb Williams                QB   CHI            1         1    Team Taco
    ...
    ====================================================================================================

Usage:
    from services.report_service import ReportService

    report = ReportService().high_draft_report()
    click.echo(report)
"""

from typing import List, Optional

from loguru import logger

from config.settings import Config
from services.entities import Player
from services.reconciliation import current_year
from services.roster_service import RosterService

RULE_WIDTH = 100

# (header, width) for each report column
COLUMNS = (
    ('Player', 30),
    ('Pos', 5),
    ('NFL Team', 15),
    ('Round', 10),
    ('Pick', 5),
    ('Fantasy Team', 25),
)


def format_row(values) -> str:
    """Left-align each value in its column."""
    return ''.join(
        f"{str(value):<{width}}" for value, (_, width) in zip(values, COLUMNS)
    ).rstrip()


def display_fantasy_team(fantasy_team: str) -> str:
    """Unrostered players stand out in upper case."""
    if fantasy_team == Config.UNROSTERED_TEAM:
        return fantasy_team.upper()
    return fantasy_team


def format_high_draft_report(players: List[Player], draft_count: int) -> str:
    """
    Render drafted players grouped by draft year.

    Args:
        players: Drafted players, already ordered by year (desc) and pick
        draft_count: Number of draft classes covered, for the title

    Returns:
        The report as a single string
    """
    lines = [f"\n========== High Draft Picks (Last {draft_count} Drafts) =========="]
    rule = '-' * RULE_WIDTH

    previous_year = None
    for player in players:
        if player.draft_year != previous_year:
            if previous_year is not None:
                lines.append(rule)
            lines.append(f"\nDraft Year: {player.draft_year}")
            lines.append(rule)
            lines.append(format_row(header for header, _ in COLUMNS))
            lines.append(rule)
            previous_year = player.draft_year

        lines.append(format_row((
            player.full_name,
            player.position,
            player.pro_team,
            player.draft_round,
            player.draft_pick,
            display_fantasy_team(player.fantasy_team),
        )))

    if not players:
        lines.append("\nNo drafted players found.")

    lines.append('=' * RULE_WIDTH)
    return '\n'.join(lines)


class ReportService:
    """
    Service class for draft reports.

    Attributes:
        roster_service: Source of the stored drafted players
    """

    def __init__(self, roster_service: Optional[RosterService] = None):
        self.roster_service = roster_service or RosterService()
        self.logger = logger.bind(service='ReportService')

    def high_draft_report(
        self,
        max_round: Optional[int] = None,
        years: Optional[int] = None,
        end_year: Optional[int] = None
    ) -> str:
        """
        Report the early-round picks of the most recent draft classes.

        Args:
            max_round: Latest round to include (defaults to Config.REPORT_MAX_ROUND)
            years: Number of draft classes, counting the current one
                (defaults to Config.REPORT_YEARS)
            end_year: Most recent draft class (defaults to the current year)

        Returns:
            The formatted report
        """
        max_round = max_round if max_round is not None else Config.REPORT_MAX_ROUND
        years = years if years is not None else Config.REPORT_YEARS
        end_year = end_year if end_year is not None else current_year()

        since_year = end_year - (years - 1)
        players = self.roster_service.get_drafted_players(
            max_round=max_round,
            since_year=since_year
        )

        self.logger.debug(f"Reporting {len(players)} players drafted since {since_year}")
        return format_high_draft_report(players, years)
