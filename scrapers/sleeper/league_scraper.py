"""
Sleeper League Scraper
=======================

Stores the fantasy teams of a Sleeper league and the players on each
team's roster.

Two endpoints are used:
    /league/<league_id>/users    -> [{"user_id": "...", "display_name": "..."}]
    /league/<league_id>/rosters  -> [{"owner_id": "...", "players": ["4034", ...]}]

Usage:
    from scrapers.sleeper.league_scraper import SleeperLeagueScraper

    scraper = SleeperLeagueScraper()
    result = scraper.run(league_id='1048226412345678912')
"""

from typing import Dict, Any, List, Optional

from loguru import logger

from config.settings import Config
from database.connection import DatabaseManager
from database.models import FantasyTeam, RosterEntry
from scrapers.base_scraper import BaseScraper
from scrapers.sleeper.payload import get_list, get_str


class SleeperLeagueScraper(BaseScraper):
    """
    Saves league teams and rosters from the Sleeper API.

    Users or rosters without the ids we key on are skipped and counted in
    records_skipped rather than failing the whole league.
    """

    scrape_type = 'league'

    def __init__(self, db: Optional[DatabaseManager] = None):
        super().__init__('sleeper', Config.SLEEPER_API_BASE_URL, db=db)
        self.logger = logger.bind(scraper='SleeperLeagueScraper')

    def league_url(self, league_id: str, resource: str) -> str:
        return f"{Config.SLEEPER_API_BASE_URL}/league/{league_id}/{resource}"

    def fetch_list(self, league_id: str, resource: str) -> Optional[List[Any]]:
        """Fetch a league resource that should be a JSON list."""
        data = self.get_json(self.league_url(league_id, resource))

        if not isinstance(data, list):
            if data is not None:
                self.logger.error(f"League {resource} payload is not a JSON list")
                self._stats['errors'].append(f"Unexpected {resource} payload")
            return None

        return data

    def scrape(self, **kwargs) -> Dict[str, Any]:
        """
        Save the teams and rosters of a league.

        Args:
            league_id: Sleeper league id

        Returns:
            Dictionary with scrape results, plus 'teams' and 'roster_entries'
        """
        league_id = kwargs.get('league_id')
        if not league_id:
            raise ValueError("league_id is required")

        self.source_url = self.league_url(league_id, '')
        self.logger.info(f"Starting league scrape for {league_id}")

        users = self.fetch_list(league_id, 'users')
        if users is None:
            return self.result(status='failed', teams=0, roster_entries=0)

        rosters = self.fetch_list(league_id, 'rosters')
        if rosters is None:
            return self.result(status='failed', teams=0, roster_entries=0)

        with self.db.get_session() as session:
            teams = self._save_teams(session, users)
            entries = self._save_rosters(session, rosters)

        self.logger.info(f"Saved {teams} teams and {entries} roster entries")
        return self.result(teams=teams, roster_entries=entries)

    def _save_teams(self, session, users: List[Any]) -> int:
        saved = 0

        for user in users:
            user_id = get_str(user, 'user_id')
            if not user_id:
                self._stats['records_skipped'] += 1
                continue

            team = session.get(FantasyTeam, user_id)
            if team is None:
                team = FantasyTeam(team_id=user_id)
                session.add(team)
                self._stats['records_created'] += 1
            else:
                self._stats['records_updated'] += 1

            team.name = get_str(user, 'display_name', user_id)
            team.owner_id = user_id
            self._stats['records_processed'] += 1
            saved += 1

        session.flush()
        return saved

    def _save_rosters(self, session, rosters: List[Any]) -> int:
        saved = 0
        seen = set()

        for roster in rosters:
            owner_id = get_str(roster, 'owner_id')
            if not owner_id:
                self._stats['records_skipped'] += 1
                continue

            for player_id in get_list(roster, 'players'):
                if not isinstance(player_id, (str, int)) or isinstance(player_id, bool):
                    self._stats['records_skipped'] += 1
                    continue

                key = (owner_id, str(player_id))
                if key in seen:
                    continue
                seen.add(key)

                if session.get(RosterEntry, key) is None:
                    session.add(RosterEntry(team_id=owner_id, player_id=str(player_id)))
                    self._stats['records_created'] += 1

                self._stats['records_processed'] += 1
                saved += 1

        return saved


def store_league(league_id: str) -> Dict[str, Any]:
    """Convenience function to store a league's teams and rosters."""
    scraper = SleeperLeagueScraper()
    return scraper.run(league_id=league_id)
