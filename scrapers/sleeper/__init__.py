"""
Sleeper Scrapers
=================

Scrapers for the Sleeper fantasy football API.
"""

from scrapers.sleeper.player_scraper import SleeperPlayerScraper, refresh_sleeper_players
from scrapers.sleeper.league_scraper import SleeperLeagueScraper, store_league

__all__ = [
    'SleeperPlayerScraper',
    'refresh_sleeper_players',
    'SleeperLeagueScraper',
    'store_league',
]
