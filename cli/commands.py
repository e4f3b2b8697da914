"""
CLI Commands for Draft Tracker
===============================

This module provides command-line interface commands for syncing a Sleeper
league against NFL draft history and reporting on the result.

Usage:
    python -m cli.commands run --league-id 1048226412345678912 --refresh
    python -m cli.commands refresh-players
    python -m cli.commands report --max-round 2 --years 5
    python -m cli.commands init-db
    python -m cli.commands stats
"""

import click
from loguru import logger
import sys

from config.settings import Config

# Configure loguru for CLI
logger.remove()
logger.add(
    sys.stderr,
    level=Config.LOG_LEVEL,
    format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
)
if Config.LOG_FILE:
    logger.add(Config.LOG_FILE, level='DEBUG', rotation='10 MB', retention=5)


@click.group()
def cli():
    """Draft Tracker CLI - Annotate a fantasy roster with NFL draft history."""
    pass


@cli.command()
@click.option('--league-id', default=None, help='Sleeper league ID')
@click.option('--refresh/--no-refresh', default=None,
              help='Update the player database from Sleeper first')
@click.option('--start-year', default=None, type=int, help='First draft class to fetch')
@click.option('--end-year', default=None, type=int, help='Last draft class to fetch')
def run(league_id: str, refresh: bool, start_year: int, end_year: int):
    """
    Sync a league against NFL draft history and print the report.

    Missing options are prompted for.

    Examples:
        python -m cli.commands run
        python -m cli.commands run --league-id 1048226412345678912 --no-refresh
    """
    if not league_id:
        league_id = click.prompt('Enter your Sleeper league ID')
    if refresh is None:
        refresh = click.confirm('Do you want to update the player database from Sleeper?')

    try:
        from services.draft_sync_service import DraftSyncService
        from services.report_service import ReportService

        service = DraftSyncService()
        summary = service.sync(
            league_id,
            refresh_players=refresh,
            start_year=start_year,
            end_year=end_year
        )

        draft = summary['draft']
        click.echo(f"\nFetched draft information for years "
                   f"{draft.get('start_year')} to {draft.get('end_year')}")
        click.echo(f"  Roster Players: {summary['roster_size']}")
        click.echo(f"  Draft Records Processed: {draft.get('records_processed', 0)}")
        click.echo(f"  Players Matched: {draft.get('records_updated', 0)}")
        click.echo(f"  Drafted Players Stored: {summary['stored']}")

        errors = draft.get('errors', []) + summary['league'].get('errors', [])
        if errors:
            click.echo(f"\nErrors ({len(errors)}):")
            for error in errors[:5]:
                click.echo(f"  - {error}")

        click.echo(ReportService(service.roster_service).high_draft_report(end_year=end_year))

    except Exception as e:
        logger.error(f"Draft sync failed: {str(e)}")
        raise click.ClickException(str(e))


@cli.command('refresh-players')
def refresh_players():
    """
    Update the player database from the Sleeper API.
    """
    click.echo("\nRefreshing Sleeper player catalogue...")

    try:
        from database.connection import DatabaseManager
        from scrapers.sleeper.player_scraper import SleeperPlayerScraper

        db = DatabaseManager()
        db.create_all_tables()

        result = SleeperPlayerScraper(db=db).run()

        click.echo("\nRefresh Complete!")
        click.echo(f"  Status: {result.get('status')}")
        click.echo(f"  Records Processed: {result.get('records_processed', 0)}")
        click.echo(f"  Records Created: {result.get('records_created', 0)}")
        click.echo(f"  Records Updated: {result.get('records_updated', 0)}")

    except Exception as e:
        logger.error(f"Player refresh failed: {str(e)}")
        raise click.ClickException(str(e))


@cli.command()
@click.option('--max-round', default=None, type=int, help='Latest draft round to include')
@click.option('--years', default=None, type=int, help='Number of recent draft classes')
def report(max_round: int, years: int):
    """
    Print the high draft picks report from stored data.

    Examples:
        python -m cli.commands report
        python -m cli.commands report --max-round 1 --years 5
    """
    try:
        from database.connection import DatabaseManager
        from services.report_service import ReportService
        from services.roster_service import RosterService

        db = DatabaseManager()
        db.create_all_tables()

        report_service = ReportService(RosterService(db))
        click.echo(report_service.high_draft_report(max_round=max_round, years=years))

    except Exception as e:
        logger.error(f"Report failed: {str(e)}")
        raise click.ClickException(str(e))


@cli.command('init-db')
def init_db():
    """
    Initialize the database tables.
    """
    click.echo("\nInitializing database...")

    try:
        from database.connection import DatabaseManager

        db = DatabaseManager()

        click.echo("  Testing connection...")
        db.test_connection()
        click.echo("  Connection successful!")

        click.echo("  Creating tables...")
        db.create_all_tables()
        click.echo("  Tables created!")

        click.echo("\nDatabase initialized successfully!")

    except Exception as e:
        logger.error(f"Database initialization failed: {str(e)}")
        raise click.ClickException(str(e))


@cli.command('test-db')
def test_db():
    """
    Test the database connection.
    """
    click.echo("\nTesting database connection...")

    try:
        from database.connection import DatabaseManager

        db = DatabaseManager()
        db.test_connection()
        click.echo("Connection successful!")

    except Exception as e:
        logger.error(f"Connection test failed: {str(e)}")
        raise click.ClickException(str(e))


@cli.command()
def stats():
    """
    Show database statistics.
    """
    click.echo("\nDatabase Statistics:")

    try:
        from database.connection import DatabaseManager
        from database.models import FantasyTeam, NFLPlayer, ProcessedPlayer, RosterEntry, ScrapeLog

        db = DatabaseManager()
        db.create_all_tables()

        with db.get_session() as session:
            click.echo(f"  Players: {session.query(NFLPlayer).count()}")
            click.echo(f"  Fantasy Teams: {session.query(FantasyTeam).count()}")
            click.echo(f"  Roster Entries: {session.query(RosterEntry).count()}")
            click.echo(f"  Drafted Players: {session.query(ProcessedPlayer).count()}")

            last_scrape = session.query(ScrapeLog).order_by(ScrapeLog.log_id.desc()).first()
            if last_scrape:
                click.echo(
                    f"  Last Scrape: {last_scrape.scrape_type} ({last_scrape.status}), "
                    f"{last_scrape.records_processed} processed, "
                    f"{last_scrape.records_skipped} skipped"
                )

    except Exception as e:
        logger.error(f"Failed to get stats: {str(e)}")
        raise click.ClickException(str(e))


if __name__ == '__main__':
    cli()
