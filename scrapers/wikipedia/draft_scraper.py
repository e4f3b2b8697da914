"""
Wikipedia Draft Scraper
========================

Fetches the Wikipedia page of each NFL draft class and reconciles the
picks on it against the fantasy roster.

Every year is independent: a page that fails to download or has no draft
table contributes no records, and the scraper moves on to the next year.

Usage:
    from scrapers.wikipedia.draft_scraper import WikipediaDraftScraper

    scraper = WikipediaDraftScraper()
    result = scraper.run(players=players, start_year=2012, end_year=2024)
"""

from collections import Counter
from typing import Dict, Any, List, Optional

from loguru import logger

from config.settings import Config
from database.connection import DatabaseManager
from scrapers.base_scraper import BaseScraper
from scrapers.wikipedia.draft_table import extract_draft_records
from services.entities import DraftRecord, Player
from services.reconciliation import draft_year_span, reconcile


class WikipediaDraftScraper(BaseScraper):
    """
    Scrapes NFL draft results from Wikipedia.

    The per-year table counters (rows seen, rows skipped, pages without a
    table) are kept in self.table_stats across the whole run.
    """

    scrape_type = 'draft'

    def __init__(self, db: Optional[DatabaseManager] = None):
        super().__init__('wikipedia', 'https://en.wikipedia.org', db=db)

        self.source_url = Config.WIKIPEDIA_DRAFT_URL
        self.table_stats: Counter = Counter()
        self.logger = logger.bind(scraper='WikipediaDraftScraper')

    def fetch_draft_page(self, year: int) -> bytes:
        """Download the draft page of one year, empty bytes on failure."""
        return self.fetch(Config.draft_url(year))

    def fetch_draft_records(self, year: int) -> List[DraftRecord]:
        """
        Fetch and parse the picks of one draft class.

        Args:
            year: Draft class

        Returns:
            DraftRecords in table order, empty if the page is unavailable
        """
        html = self.fetch_draft_page(year)
        if not html:
            self.logger.warning(f"No draft page for {year}")
            self.table_stats['pages_missing'] += 1
            return []

        records = list(extract_draft_records(year, html, stats=self.table_stats))
        self.logger.info(f"Found {len(records)} picks in the {year} draft")
        return records

    def scrape(self, **kwargs) -> Dict[str, Any]:
        """
        Reconcile a roster against a range of draft classes.

        Args:
            players: List of Player objects, annotated in place
            start_year: First draft class (defaults to the roster's span)
            end_year: Last draft class (defaults to the current year)

        Returns:
            Dictionary with scrape results and the reconciliation counters
        """
        players: List[Player] = kwargs.get('players') or []
        span_start, span_end = draft_year_span(players, kwargs.get('end_year'))
        start_year = kwargs.get('start_year') or span_start
        end_year = kwargs.get('end_year') or span_end

        self.logger.info(f"Fetching draft information for years {start_year} to {end_year}")
        self.table_stats = Counter()

        summary = reconcile(players, range(start_year, end_year + 1), self.fetch_draft_records)

        self._stats['records_processed'] = summary['records_seen']
        self._stats['records_updated'] = summary['records_matched']
        self._stats['records_skipped'] = self.table_stats['rows_skipped']

        return self.result(
            start_year=start_year,
            end_year=end_year,
            reconciliation=summary,
            tables=dict(self.table_stats),
        )


def scrape_draft_history(players: List[Player], **kwargs) -> Dict[str, Any]:
    """
    Convenience function to reconcile a roster against draft history.

    Args:
        players: Players to annotate in place
        **kwargs: start_year / end_year overrides

    Returns:
        Dictionary with scrape results
    """
    scraper = WikipediaDraftScraper()
    return scraper.run(players=players, **kwargs)
