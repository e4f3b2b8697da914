"""
Roster Service Module
======================

Business logic for reading the roster out of the database and writing the
reconciled players back.

Usage:
    from services.roster_service import RosterService

    service = RosterService()

    players = service.load_players()
    ...
    service.store_processed_players(players)

    recent = service.get_drafted_players(max_round=3, since_year=2022)
"""

from typing import List, Optional

from sqlalchemy import select
from loguru import logger

from config.settings import Config
from database.connection import DatabaseManager
from database.models import FantasyTeam, NFLPlayer, ProcessedPlayer, RosterEntry
from services.entities import Player


class RosterService:
    """
    Service class for roster-related operations.

    Attributes:
        db: DatabaseManager instance for database access
        logger: Logger for this service
    """

    def __init__(self, db: Optional[DatabaseManager] = None):
        """
        Initialize the roster service.

        Args:
            db: Optional database manager (uses the shared one if not provided)
        """
        self.db = db or DatabaseManager()
        self.logger = logger.bind(service='RosterService')

    def load_players(self) -> List[Player]:
        """
        Load every player worth reconciling.

        Only active players with an NFL team at a fantasy position are
        loaded. Rostered players come first, tagged with their fantasy team,
        followed by everyone else tagged as unrostered.

        Returns:
            List of undrafted Player objects in reconciliation order
        """
        positions = Config.FANTASY_POSITIONS

        with self.db.get_session() as session:
            rostered = (
                session.query(NFLPlayer, FantasyTeam.name)
                .join(RosterEntry, RosterEntry.player_id == NFLPlayer.player_id)
                .join(FantasyTeam, FantasyTeam.team_id == RosterEntry.team_id)
                .filter(
                    NFLPlayer.team.isnot(None),
                    NFLPlayer.position.in_(positions),
                    NFLPlayer.status == 'Active',
                )
                .order_by(FantasyTeam.name, NFLPlayer.player_id)
                .all()
            )

            rostered_ids = select(RosterEntry.player_id)
            unrostered = (
                session.query(NFLPlayer)
                .filter(
                    NFLPlayer.player_id.notin_(rostered_ids),
                    NFLPlayer.team.isnot(None),
                    NFLPlayer.position.in_(positions),
                    NFLPlayer.status == 'Active',
                )
                .order_by(NFLPlayer.player_id)
                .all()
            )

            players = [self._to_player(p, team_name) for p, team_name in rostered]
            players.extend(self._to_player(p, Config.UNROSTERED_TEAM) for p in unrostered)

        self.logger.info(
            f"Loaded {len(rostered)} rostered and {len(unrostered)} unrostered players"
        )
        return players

    def store_processed_players(self, players: List[Player]) -> int:
        """
        Upsert every drafted player into processed_players.

        Args:
            players: Reconciled players; undrafted ones are ignored

        Returns:
            Number of players stored
        """
        stored = 0

        with self.db.get_session() as session:
            for player in players:
                if not player.is_drafted:
                    continue

                session.merge(ProcessedPlayer(
                    player_id=player.player_id,
                    full_name=player.full_name,
                    position=player.position,
                    nfl_team=player.pro_team,
                    fantasy_team=player.fantasy_team,
                    years_exp=player.years_experience,
                    draft_year=player.draft_year,
                    draft_round=player.draft_round,
                    draft_pick=player.draft_pick,
                    draft_team=player.draft_team,
                ))
                stored += 1

        self.logger.info(f"Successfully stored {stored} drafted players in the database")
        return stored

    def load_processed_players(self) -> List[Player]:
        """Read back every stored player with the draft annotations."""
        with self.db.get_session() as session:
            rows = session.query(ProcessedPlayer).order_by(ProcessedPlayer.player_id).all()
            return [self._processed_to_player(row) for row in rows]

    def get_drafted_players(
        self,
        max_round: Optional[int] = None,
        since_year: Optional[int] = None
    ) -> List[Player]:
        """
        Query stored drafted players.

        Args:
            max_round: Only include picks from this round or earlier
            since_year: Only include draft classes from this year onwards

        Returns:
            Players ordered by draft year (newest first), then pick
        """
        with self.db.get_session() as session:
            query = session.query(ProcessedPlayer)

            if max_round is not None:
                query = query.filter(ProcessedPlayer.draft_round <= max_round)

            if since_year is not None:
                query = query.filter(ProcessedPlayer.draft_year >= since_year)

            rows = query.order_by(
                ProcessedPlayer.draft_year.desc(),
                ProcessedPlayer.draft_pick.asc()
            ).all()

            return [self._processed_to_player(row) for row in rows]

    def _to_player(self, player: NFLPlayer, fantasy_team: str) -> Player:
        return Player(
            player_id=player.player_id,
            full_name=player.full_name or '',
            position=player.position or '',
            pro_team=player.team or '',
            fantasy_team=fantasy_team or '',
            years_experience=player.years_exp or 0,
        )

    def _processed_to_player(self, row: ProcessedPlayer) -> Player:
        return Player(
            player_id=row.player_id,
            full_name=row.full_name or '',
            position=row.position or '',
            pro_team=row.nfl_team or '',
            fantasy_team=row.fantasy_team or '',
            years_experience=row.years_exp or 0,
            draft_year=row.draft_year,
            draft_round=row.draft_round,
            draft_pick=row.draft_pick,
            draft_team=row.draft_team,
            is_drafted=row.draft_year is not None,
        )
