"""
Unit tests for the Wikipedia draft scraper.

Draft pages are served from memory; no network access is needed.
"""

from database.models import ScrapeLog
from scrapers.wikipedia.draft_scraper import WikipediaDraftScraper
from services.entities import Player


def serve_pages(scraper, monkeypatch, pages):
    """Serve fetch_draft_page() from a {year: html} mapping."""
    requested = []

    def fake_fetch(year):
        requested.append(year)
        return pages.get(year, b"")

    monkeypatch.setattr(scraper, "fetch_draft_page", fake_fetch)
    return requested


class TestWikipediaDraftScraper:
    """Tests for reconciling a roster against draft pages."""

    def test_players_annotated(self, db, monkeypatch, draft_page):
        players = [Player("9493", "Puka Nacua", years_experience=1), Player("11560", "Caleb Williams")]
        scraper = WikipediaDraftScraper(db=db)
        requested = serve_pages(scraper, monkeypatch, {
            2023: draft_page([["177", "5", "18", "Los Angeles Rams", "Puka Nacua"]]),
            2024: draft_page([
                ["1", "1", "1", "Chicago Bears", "Caleb Williams†"],
                ["2", "1", "2", "Washington Commanders", "Jayden Daniels"],
            ]),
        })

        result = scraper.run(players=players, end_year=2024)

        assert requested == [2023, 2024]
        assert result["status"] == "success"
        assert (result["start_year"], result["end_year"]) == (2023, 2024)
        assert result["records_processed"] == 3
        assert result["records_updated"] == 2
        assert result["reconciliation"]["records_unmatched"] == 1

        puka, caleb = players
        assert (puka.draft_year, puka.draft_round, puka.draft_pick, puka.draft_team) == (
            2023, 5, 18, "Los Angeles Rams"
        )
        assert (caleb.draft_year, caleb.draft_round, caleb.draft_pick) == (2024, 1, 1)

    def test_missing_pages_counted(self, db, monkeypatch, draft_page):
        players = [Player("1", "Puka Nacua")]
        scraper = WikipediaDraftScraper(db=db)
        serve_pages(scraper, monkeypatch, {
            2023: draft_page([["177", "5", "18", "Los Angeles Rams", "Puka Nacua"]]),
            2024: b"<html><body><p>No tables here</p></body></html>",
        })

        result = scraper.run(players=players, start_year=2021, end_year=2024)

        assert players[0].draft_year == 2023
        assert result["tables"]["pages_missing"] == 2
        assert result["tables"]["missing_table"] == 1
        assert result["reconciliation"]["years_empty"] == 3

    def test_skipped_rows_counted(self, db, monkeypatch, draft_page):
        scraper = WikipediaDraftScraper(db=db)
        serve_pages(scraper, monkeypatch, {
            2024: draft_page([
                ["Forfeited pick"],
                ["1", "1", "1", "Chicago Bears", "Caleb Williams"],
            ]),
        })

        result = scraper.run(players=[Player("1", "Caleb Williams")], start_year=2024, end_year=2024)

        assert result["records_skipped"] == 1
        assert result["tables"]["rows"] == 2

    def test_scrape_logged(self, db, monkeypatch, draft_page):
        scraper = WikipediaDraftScraper(db=db)
        serve_pages(scraper, monkeypatch, {
            2024: draft_page([["1", "1", "1", "Chicago Bears", "Caleb Williams"]]),
        })

        scraper.run(players=[Player("1", "Caleb Williams")], start_year=2024, end_year=2024)

        with db.get_session() as session:
            log = session.query(ScrapeLog).one()
            assert log.scrape_type == "draft"
            assert log.status == "success"
            assert log.records_processed == 1
            assert log.records_updated == 1

    def test_empty_roster_fetches_nothing(self, db, monkeypatch):
        scraper = WikipediaDraftScraper(db=db)
        requested = serve_pages(scraper, monkeypatch, {})

        result = scraper.run(players=[], end_year=2024)

        assert requested == []
        assert result["records_processed"] == 0

    def test_fetch_failure_is_an_empty_year(self, db, monkeypatch):
        scraper = WikipediaDraftScraper(db=db)
        monkeypatch.setattr(scraper, "fetch", lambda url, params=None: b"")

        assert scraper.fetch_draft_records(2024) == []
        assert scraper.table_stats["pages_missing"] == 1
