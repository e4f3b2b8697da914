"""
Configuration Settings Module
==============================

This module manages all configuration settings for the Draft Tracker application.
It loads settings from environment variables and provides sensible defaults.

We use environment variables loaded from a .env file for local development.
Anything not set falls back to a default that works out of the box with a
local SQLite file.

Usage:
    from config.settings import Config

    database_url = Config.get_database_url()
    draft_url = Config.WIKIPEDIA_DRAFT_URL.format(year=2024)

Environment Variables:
    DATABASE_URL, SQLALCHEMY_ECHO, SLEEPER_API_BASE_URL, WIKIPEDIA_DRAFT_URL,
    SCRAPE_DELAY_SECONDS, USER_AGENT, REQUEST_TIMEOUT, MAX_RETRIES,
    LOG_LEVEL, LOG_FILE, REPORT_MAX_ROUND, REPORT_YEARS, APP_ENV
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# ==============================================================================
# Load Environment Variables
# ==============================================================================
PROJECT_ROOT = Path(__file__).parent.parent

env_path = PROJECT_ROOT / '.env'
if env_path.exists():
    load_dotenv(env_path)


class Config:
    """
    Base configuration class with all settings.

    All settings are class attributes, so you access them directly:
        Config.DATABASE_URL
    """

    # ==========================================================================
    # Project Paths
    # ==========================================================================
    PROJECT_ROOT = PROJECT_ROOT

    # ==========================================================================
    # Database Configuration
    # ==========================================================================
    DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///fantasy_league.db')
    SQLALCHEMY_ECHO = os.getenv('SQLALCHEMY_ECHO', 'false').lower() == 'true'

    # ==========================================================================
    # Source URLs
    # ==========================================================================
    SLEEPER_API_BASE_URL = os.getenv('SLEEPER_API_BASE_URL', 'https://api.sleeper.app/v1')

    # {year} is replaced with the draft class
    WIKIPEDIA_DRAFT_URL = os.getenv(
        'WIKIPEDIA_DRAFT_URL',
        'https://en.wikipedia.org/wiki/{year}_NFL_draft'
    )

    # ==========================================================================
    # Scraping Configuration
    # ==========================================================================
    # Delay between HTTP requests (in seconds)
    SCRAPE_DELAY_SECONDS = float(os.getenv('SCRAPE_DELAY_SECONDS', '1'))

    USER_AGENT = os.getenv(
        'USER_AGENT',
        'DraftTracker/1.0 (Fantasy league research)'
    )

    REQUEST_TIMEOUT = int(os.getenv('REQUEST_TIMEOUT', '30'))
    MAX_RETRIES = int(os.getenv('MAX_RETRIES', '3'))

    # ==========================================================================
    # Roster Configuration
    # ==========================================================================
    # Only these positions are reconciled against draft history
    FANTASY_POSITIONS = ('K', 'QB', 'RB', 'WR', 'TE')

    # fantasy_team value for players that are not on any roster
    UNROSTERED_TEAM = 'Unrostered'

    # ==========================================================================
    # Report Configuration
    # ==========================================================================
    REPORT_MAX_ROUND = int(os.getenv('REPORT_MAX_ROUND', '3'))
    REPORT_YEARS = int(os.getenv('REPORT_YEARS', '3'))

    # ==========================================================================
    # Logging Configuration
    # ==========================================================================
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FILE = os.getenv('LOG_FILE', 'logs/draft_tracker.log')

    @classmethod
    def get_database_url(cls) -> str:
        """Get the database URL used by SQLAlchemy."""
        return cls.DATABASE_URL

    @classmethod
    def draft_url(cls, year: int) -> str:
        """Build the Wikipedia draft page URL for a draft class."""
        return cls.WIKIPEDIA_DRAFT_URL.format(year=year)


class DevelopmentConfig(Config):
    """Development configuration - used for local runs."""
    SQLALCHEMY_ECHO = os.getenv('SQLALCHEMY_ECHO', 'false').lower() == 'true'


class ProductionConfig(Config):
    """Production configuration - never echoes SQL."""
    SQLALCHEMY_ECHO = False


class TestingConfig(Config):
    """
    Testing configuration - used when running pytest.

    Uses an in-memory SQLite database and no request delay.
    """
    TESTING = True
    DATABASE_URL = 'sqlite:///:memory:'
    SCRAPE_DELAY_SECONDS = 0.0
    LOG_FILE = ''


# ==============================================================================
# Configuration Factory
# ==============================================================================
config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config():
    """
    Get the appropriate configuration based on APP_ENV.

    Returns:
        The configuration class for the current environment.
    """
    env = os.getenv('APP_ENV', 'development')
    return config_by_name.get(env, DevelopmentConfig)
