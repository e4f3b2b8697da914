"""
Wikipedia Scrapers
===================

NFL draft history from Wikipedia's "<year> NFL draft" pages.
"""

from scrapers.wikipedia.draft_scraper import WikipediaDraftScraper, scrape_draft_history
from scrapers.wikipedia.draft_table import extract_draft_records, parse_draft_row

__all__ = [
    'WikipediaDraftScraper',
    'scrape_draft_history',
    'extract_draft_records',
    'parse_draft_row',
]
