"""
Draft Sync Service
===================

Runs the whole pipeline for one league:

    1. Optionally refresh the Sleeper player catalogue
    2. Store the league's teams and rosters
    3. Load the roster into memory
    4. Reconcile it against each NFL draft class it can contain
    5. Store the drafted players

Each step degrades on its own: a failed refresh or league fetch is logged
and the run continues with whatever is already in the database.

Usage:
    from services.draft_sync_service import DraftSyncService

    summary = DraftSyncService().sync('1048226412345678912', refresh_players=True)
"""

from typing import Dict, Any, Optional

from loguru import logger

from database.connection import DatabaseManager
from scrapers.sleeper.league_scraper import SleeperLeagueScraper
from scrapers.sleeper.player_scraper import SleeperPlayerScraper
from scrapers.wikipedia.draft_scraper import WikipediaDraftScraper
from services.roster_service import RosterService


class DraftSyncService:
    """
    Orchestrates a full draft sync.

    Attributes:
        db: DatabaseManager shared by every step
    """

    def __init__(self, db: Optional[DatabaseManager] = None):
        self.db = db or DatabaseManager()
        self.roster_service = RosterService(self.db)
        self.logger = logger.bind(service='DraftSyncService')

    def sync(
        self,
        league_id: str,
        refresh_players: bool = False,
        start_year: Optional[int] = None,
        end_year: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Sync draft information for a league.

        Args:
            league_id: Sleeper league id
            refresh_players: Re-download the Sleeper player catalogue first
            start_year: First draft class (defaults to the roster's span)
            end_year: Last draft class (defaults to the current year)

        Returns:
            Dictionary with the result of every step
        """
        self.db.create_all_tables()
        summary: Dict[str, Any] = {}

        if refresh_players:
            summary['players'] = SleeperPlayerScraper(db=self.db).run()
        else:
            self.logger.info("Skipping player database update")

        summary['league'] = SleeperLeagueScraper(db=self.db).run(league_id=league_id)

        players = self.roster_service.load_players()
        summary['roster_size'] = len(players)

        summary['draft'] = WikipediaDraftScraper(db=self.db).run(
            players=players,
            start_year=start_year,
            end_year=end_year
        )

        summary['stored'] = self.roster_service.store_processed_players(players)

        self.logger.info(
            f"Draft sync complete: {summary['stored']} of {len(players)} players drafted"
        )
        return summary
