"""
Sleeper Player Catalogue Scraper
=================================

Downloads the full Sleeper NFL player catalogue and upserts it into the
players table.

The catalogue is one large JSON object keyed by player id:

    {
        "4034": {"full_name": "Christian McCaffrey", "position": "RB",
                 "team": "SF", "years_exp": 7, "status": "Active", ...},
        ...
    }

Usage:
    from scrapers.sleeper.player_scraper import SleeperPlayerScraper

    scraper = SleeperPlayerScraper()
    result = scraper.run()
    print(f"Stored {result['records_processed']} players")
"""

from typing import Dict, Any, Optional

from loguru import logger

from config.settings import Config
from database.connection import DatabaseManager
from database.models import NFLPlayer
from scrapers.base_scraper import BaseScraper
from scrapers.sleeper.payload import get_int, get_str, player_full_name


class SleeperPlayerScraper(BaseScraper):
    """
    Refreshes the NFL player catalogue from the Sleeper API.

    Players are upserted by Sleeper id in a single transaction, so a failed
    refresh leaves the previous catalogue intact.
    """

    scrape_type = 'players'

    def __init__(self, db: Optional[DatabaseManager] = None):
        super().__init__('sleeper', Config.SLEEPER_API_BASE_URL, db=db)

        self.source_url = f"{Config.SLEEPER_API_BASE_URL}/players/nfl"
        self.logger = logger.bind(scraper='SleeperPlayerScraper')

    def fetch_players(self) -> Optional[Dict[str, Any]]:
        """Fetch the catalogue, None if the request or payload is unusable."""
        data = self.get_json(self.source_url)

        if not isinstance(data, dict):
            if data is not None:
                self.logger.error("Players payload is not a JSON object")
                self._stats['errors'].append("Unexpected players payload")
            return None

        return data

    def scrape(self, **kwargs) -> Dict[str, Any]:
        """Fetch the catalogue and save every player."""
        self.logger.info("Starting Sleeper player refresh")

        players_data = self.fetch_players()

        if not players_data:
            return {
                'status': 'failed',
                'records_processed': 0,
                'records_created': 0,
                'records_updated': 0,
                'records_skipped': 0,
                'errors': self._stats['errors'] or ['Could not fetch player data']
            }

        with self.db.get_session() as session:
            for player_id, player_data in players_data.items():
                if not isinstance(player_data, dict):
                    self._stats['records_skipped'] += 1
                    continue

                self._save_player(session, str(player_id), player_data)
                self._stats['records_processed'] += 1

                if self._stats['records_processed'] % 1000 == 0:
                    self.logger.debug(f"Saved {self._stats['records_processed']} players")

        self.logger.info(
            f"Player refresh complete: {self._stats['records_created']} created, "
            f"{self._stats['records_updated']} updated"
        )
        return self.result()

    def _save_player(self, session, player_id: str, player_data: Dict[str, Any]):
        """
        Insert or update one catalogue player.

        Args:
            session: Database session
            player_id: Sleeper player id
            player_data: Raw catalogue object
        """
        player = session.get(NFLPlayer, player_id)

        if player is None:
            player = NFLPlayer(player_id=player_id)
            session.add(player)
            self._stats['records_created'] += 1
        else:
            self._stats['records_updated'] += 1

        player.full_name = player_full_name(player_data)
        player.first_name = get_str(player_data, 'first_name')
        player.last_name = get_str(player_data, 'last_name')
        player.position = get_str(player_data, 'position')
        player.team = get_str(player_data, 'team')
        player.years_exp = get_int(player_data, 'years_exp', 0)
        player.status = get_str(player_data, 'status')
        player.raw_data = player_data


def refresh_sleeper_players() -> Dict[str, Any]:
    """Convenience function to refresh the player catalogue."""
    scraper = SleeperPlayerScraper()
    return scraper.run()
