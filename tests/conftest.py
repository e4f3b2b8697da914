"""
Pytest configuration and fixtures.

This file is automatically loaded by pytest and provides
shared fixtures for all tests.
"""

import os

import pytest

# Read by Config at import time, before any test module imports the CLI
os.environ["LOG_FILE"] = ""

from config.settings import Config
from database.connection import DatabaseManager
from database.models import FantasyTeam, NFLPlayer, RosterEntry


@pytest.fixture(autouse=True)
def test_config(monkeypatch):
    """No request delays and no log file while testing."""
    monkeypatch.setattr(Config, "SCRAPE_DELAY_SECONDS", 0.0)
    monkeypatch.setattr(Config, "LOG_FILE", "")


@pytest.fixture
def db():
    """
    A fresh in-memory SQLite database with all tables created.

    Each test gets its own database, so tests don't affect each other.
    """
    manager = DatabaseManager("sqlite:///:memory:")
    manager.create_all_tables()
    yield manager
    manager.dispose()


@pytest.fixture
def shared_db(db, monkeypatch):
    """Make the test database the one DatabaseManager() hands out."""
    monkeypatch.setattr(DatabaseManager, "_instance", db)
    return db


def build_draft_page(rows, classes="wikitable sortable plainrowheaders", head_rows=()):
    """
    Build a minimal draft page.

    Each row is a list of cell texts; the first cell is rendered as a
    header cell like on Wikipedia.
    """
    def render(cells):
        html = "<tr>"
        for index, cell in enumerate(cells):
            tag = "th" if index == 0 else "td"
            html += f"<{tag}>{cell}</{tag}>"
        return html + "</tr>"

    head = "".join(render(cells) for cells in head_rows)
    body = "".join(render(cells) for cells in rows)
    page = (
        '<html><head><meta charset="utf-8"></head><body>'
        f'<table class="{classes}"><thead>{head}</thead><tbody>{body}</tbody></table>'
        "</body></html>"
    )
    return page.encode("utf-8")


@pytest.fixture
def draft_page():
    """Factory for minimal draft pages, see build_draft_page."""
    return build_draft_page


@pytest.fixture
def league_db(db):
    """
    A database with a small league loaded.

    Team Taco rosters Caleb Williams and Puka Nacua; everyone else is a
    free agent or filtered out of reconciliation.
    """
    with db.get_session() as session:
        session.add_all([
            NFLPlayer(player_id="11560", full_name="Caleb Williams", position="QB",
                      team="CHI", years_exp=0, status="Active"),
            NFLPlayer(player_id="9493", full_name="Puka Nacua", position="WR",
                      team="LAR", years_exp=1, status="Active"),
            NFLPlayer(player_id="4034", full_name="Christian McCaffrey", position="RB",
                      team="SF", years_exp=7, status="Active"),
            NFLPlayer(player_id="4881", full_name="Lamar Jackson", position="QB",
                      team="BAL", years_exp=6, status="Inactive"),
            NFLPlayer(player_id="1234", full_name="Free Agent", position="WR",
                      team=None, years_exp=3, status="Active"),
            NFLPlayer(player_id="SF", full_name="San Francisco 49ers", position="DEF",
                      team="SF", years_exp=0, status="Active"),
            FantasyTeam(team_id="u1", name="Team Taco", owner_id="u1"),
        ])
        session.flush()
        session.add_all([
            RosterEntry(team_id="u1", player_id="11560"),
            RosterEntry(team_id="u1", player_id="9493"),
        ])
    return db
