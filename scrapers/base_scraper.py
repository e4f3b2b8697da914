"""
Base Scraper Module
===================

This module provides the abstract base class that every data source
scraper inherits from. It handles common functionality like:
- HTTP request management with retries
- Rate limiting to be respectful to source websites
- Logging of all scraping operations
- Error handling and reporting

A failed request never raises out of a scraper. It is logged, recorded in
the scraper's error list, and turned into an empty result so the caller can
carry on with the next unit of work.

Example:
    class WikipediaDraftScraper(BaseScraper):
        def scrape(self, **kwargs):
            # Your scraping logic here
            pass
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
import time
from datetime import datetime
import traceback

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from loguru import logger

from config.settings import Config
from database.connection import DatabaseManager
from database.models import ScrapeLog


class BaseScraper(ABC):
    """
    Abstract base class for all data scrapers.

    Attributes:
        source (str): Short name of the data source (e.g., 'sleeper')
        base_url (str): The base URL of the source
        session (requests.Session): Reusable HTTP session with retry logic
        db (DatabaseManager): Database connection manager

    Methods you MUST implement in subclasses:
    - scrape(): The main scraping logic

    Methods you CAN override if needed:
    - get_headers(): Custom HTTP headers
    """

    scrape_type = 'draft'

    def __init__(self, source: str, base_url: str, db: Optional[DatabaseManager] = None):
        """
        Initialize the scraper with source information.

        Args:
            source: Short name for the source (e.g., 'sleeper', 'wikipedia')
            base_url: The main URL for this source
            db: Optional database manager (uses the shared one if not provided)
        """
        self.source = source
        self.base_url = base_url

        self.db = db or DatabaseManager()

        self.session = self._create_session()

        self.delay_seconds = Config.SCRAPE_DELAY_SECONDS
        self.user_agent = Config.USER_AGENT
        self.timeout = Config.REQUEST_TIMEOUT

        self._current_scrape_log_id: Optional[int] = None

        self._stats = self._empty_stats()

        self.logger = logger.bind(
            scraper=self.__class__.__name__,
            source=self.source
        )

    @staticmethod
    def _empty_stats() -> Dict[str, Any]:
        return {
            'records_processed': 0,
            'records_created': 0,
            'records_updated': 0,
            'records_skipped': 0,
            'errors': []
        }

    def _create_session(self) -> requests.Session:
        """
        Create an HTTP session with automatic retry logic.

        The retry strategy:
        - total: Try up to MAX_RETRIES times
        - backoff_factor=1: Wait 1s, 2s, 4s between retries (exponential)
        - status_forcelist: Retry on these HTTP error codes

        Returns:
            A configured requests.Session object
        """
        session = requests.Session()

        retry_strategy = Retry(
            total=Config.MAX_RETRIES,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "OPTIONS"]
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        return session

    def get_headers(self) -> Dict[str, str]:
        """
        Get HTTP headers for requests.

        Returns:
            Dictionary of HTTP headers
        """
        return {
            'User-Agent': self.user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.5',
            'Connection': 'keep-alive',
        }

    def fetch(self, url: str, params: Optional[Dict] = None) -> bytes:
        """
        Fetch a URL and return the raw response body.

        Args:
            url: The URL to fetch
            params: Optional query parameters

        Returns:
            The response body, or empty bytes if the request failed
        """
        try:
            self.logger.info(f"Fetching: {url}")

            response = self.session.get(
                url,
                params=params,
                headers=self.get_headers(),
                timeout=self.timeout
            )
            response.raise_for_status()

            self.logger.debug(f"Received {len(response.content)} bytes")

            self._rate_limit()

            return response.content

        except requests.Timeout:
            self.logger.error(f"Timeout fetching {url}")
            self._stats['errors'].append(f"Timeout: {url}")
            return b''

        except requests.HTTPError as e:
            self.logger.error(f"HTTP error fetching {url}: {e}")
            status = e.response.status_code if e.response is not None else 'unknown'
            self._stats['errors'].append(f"HTTP {status}: {url}")
            return b''

        except requests.RequestException as e:
            self.logger.error(f"Failed to fetch {url}: {str(e)}")
            self._stats['errors'].append(f"Request failed: {url} - {str(e)}")
            return b''

    def get_json(
        self,
        url: str,
        params: Optional[Dict] = None
    ) -> Optional[Any]:
        """
        Fetch a URL that returns JSON data.

        Args:
            url: The URL to fetch
            params: Optional query parameters

        Returns:
            Parsed JSON (dict or list), or None if the request or parse failed
        """
        try:
            self.logger.info(f"Fetching JSON: {url}")

            response = self.session.get(
                url,
                params=params,
                headers={
                    **self.get_headers(),
                    'Accept': 'application/json',
                },
                timeout=self.timeout
            )
            response.raise_for_status()

            self._rate_limit()

            return response.json()

        except requests.RequestException as e:
            self.logger.error(f"Failed to fetch JSON {url}: {str(e)}")
            self._stats['errors'].append(f"JSON request failed: {url}")
            return None

        except ValueError as e:
            self.logger.error(f"Invalid JSON from {url}: {str(e)}")
            self._stats['errors'].append(f"Invalid JSON: {url}")
            return None

    def _rate_limit(self):
        """Wait between requests to be respectful to websites."""
        if self.delay_seconds > 0:
            time.sleep(self.delay_seconds)

    def start_scrape_log(
        self,
        scrape_type: str,
        source_url: Optional[str] = None
    ) -> int:
        """
        Start logging a scrape operation in the database.

        Args:
            scrape_type: Type of scrape ('players', 'league', 'draft')
            source_url: The URL being scraped

        Returns:
            The log ID for this scrape operation
        """
        with self.db.get_session() as session:
            log = ScrapeLog(
                scrape_type=scrape_type,
                source=self.source,
                status='started',
                source_url=source_url,
                started_at=datetime.utcnow()
            )
            session.add(log)
            session.flush()

            self._current_scrape_log_id = log.log_id
            self.logger.info(f"Started {scrape_type} scrape (log_id={log.log_id})")

            self._stats = self._empty_stats()

            return log.log_id

    def complete_scrape_log(
        self,
        status: str,
        error_message: Optional[str] = None
    ):
        """
        Mark a scrape operation as complete in the database.

        Args:
            status: Final status ('success', 'partial', 'failed')
            error_message: Error details if something went wrong
        """
        if not self._current_scrape_log_id:
            return

        with self.db.get_session() as session:
            log = session.get(ScrapeLog, self._current_scrape_log_id)
            if log:
                log.status = status
                log.records_processed = self._stats['records_processed']
                log.records_created = self._stats['records_created']
                log.records_updated = self._stats['records_updated']
                log.records_skipped = self._stats['records_skipped']
                log.completed_at = datetime.utcnow()

                if log.started_at:
                    duration = (log.completed_at - log.started_at).total_seconds()
                    log.duration_seconds = int(duration)

                if error_message:
                    log.error_message = error_message
                elif self._stats['errors']:
                    log.error_message = '\n'.join(self._stats['errors'][:10])

        self.logger.info(
            f"Completed scrape: {status}, "
            f"{self._stats['records_processed']} processed, "
            f"{self._stats['records_created']} created, "
            f"{self._stats['records_updated']} updated, "
            f"{self._stats['records_skipped']} skipped"
        )

        self._current_scrape_log_id = None

    def result(self, **extra) -> Dict[str, Any]:
        """Build the summary dictionary returned by scrape()."""
        result = {
            'status': 'success' if not self._stats['errors'] else 'partial',
            'records_processed': self._stats['records_processed'],
            'records_created': self._stats['records_created'],
            'records_updated': self._stats['records_updated'],
            'records_skipped': self._stats['records_skipped'],
            'errors': list(self._stats['errors']),
        }
        result.update(extra)
        return result

    @abstractmethod
    def scrape(self, **kwargs) -> Dict[str, Any]:
        """
        Execute the scraping operation.

        Returns:
            Dictionary with scrape results:
            {
                'status': 'success', 'partial' or 'failed',
                'records_processed': int,
                'records_created': int,
                'records_updated': int,
                'records_skipped': int,
                'errors': list of error messages
            }
        """
        pass

    def run(self, **kwargs) -> Dict[str, Any]:
        """
        Run the scraper with full logging and error handling.

        This is the main entry point for running a scraper.
        It wraps the scrape() method with a scrape_logs entry.

        Args:
            **kwargs: Arguments to pass to scrape()

        Returns:
            Dictionary with scrape results
        """
        scrape_type = getattr(self, 'scrape_type', 'draft')
        source_url = getattr(self, 'source_url', self.base_url)

        try:
            self.start_scrape_log(scrape_type, source_url)

            result = self.scrape(**kwargs)

            status = result.get('status', 'success')
            self.complete_scrape_log(status)

            return result

        except Exception as e:
            error_msg = f"{type(e).__name__}: {str(e)}"
            stack_trace = traceback.format_exc()

            self.logger.error(f"Scrape failed: {error_msg}")
            self.logger.debug(f"Stack trace:\n{stack_trace}")

            self.complete_scrape_log('failed', error_msg)

            return {
                'status': 'failed',
                'error': error_msg,
                'records_processed': self._stats['records_processed'],
                'records_created': self._stats['records_created'],
                'records_updated': self._stats['records_updated'],
                'records_skipped': self._stats['records_skipped'],
                'errors': self._stats['errors'] + [error_msg]
            }
