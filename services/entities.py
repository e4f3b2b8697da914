"""
Roster Entities
================

In-memory value types that flow through a reconciliation run.

Player is loaded from the roster store, annotated with draft information,
and handed back for persistence. DraftRecord is one row scraped from a
draft page; it only lives long enough to be folded into a Player.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DraftRecord:
    """One pick from a draft class."""
    year: int
    round: int
    pick: int
    team: str
    player_name: str


@dataclass
class Player:
    """
    A roster player and, once matched, the draft details.

    The draft fields are only ever written together through apply_draft(),
    so a player is either fully annotated or not annotated at all.
    """
    player_id: str
    full_name: str
    position: str = ''
    pro_team: str = ''
    fantasy_team: str = ''
    years_experience: int = 0
    draft_year: Optional[int] = None
    draft_round: Optional[int] = None
    draft_pick: Optional[int] = None
    draft_team: Optional[str] = None
    is_drafted: bool = False

    def apply_draft(self, record: DraftRecord) -> bool:
        """
        Annotate the player with a draft record.

        The first record wins: a player that is already drafted is left
        untouched.

        Returns:
            True if the record was applied
        """
        if self.is_drafted:
            return False

        self.draft_year = record.year
        self.draft_round = record.round
        self.draft_pick = record.pick
        self.draft_team = record.team
        self.is_drafted = True
        return True
