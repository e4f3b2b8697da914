"""
Database Connection Manager
============================

This module manages database connections for the Draft Tracker application.
It provides a centralized way to connect to the database, execute queries,
and manage sessions with proper error handling.

Usage:
    from database.connection import DatabaseManager

    db = DatabaseManager()

    with db.get_session() as session:
        players = session.query(NFLPlayer).all()

    # Or for raw SQL
    results = db.execute_query(
        "SELECT * FROM processed_players WHERE draft_round = :round",
        {"round": 1}
    )
"""

from contextlib import contextmanager
from typing import Optional, Any, List, Dict, Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session, scoped_session
from sqlalchemy.exc import SQLAlchemyError, OperationalError
from sqlalchemy.pool import StaticPool
from loguru import logger
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from config.settings import Config


class DatabaseManager:
    """
    Manages database connections and sessions.

    This class provides:
    1. One engine (connection pool) per database URL
    2. Automatic retries on connection test failures
    3. Session management with commit/rollback and cleanup
    4. Logging of database operations

    Calling DatabaseManager() with no arguments returns the shared
    application instance configured from Config. Passing an explicit
    database_url builds an independent manager, which is what tests use.

    Example:
        db = DatabaseManager()

        with db.get_session() as session:
            player = session.get(NFLPlayer, '4034')
    """

    _instance: Optional['DatabaseManager'] = None

    def __new__(cls, database_url: Optional[str] = None):
        """
        Singleton pattern for the default database.

        The application shares a single connection pool rather than
        creating new pools everywhere.
        """
        if database_url is not None:
            instance = super().__new__(cls)
            instance._initialized = False
            return instance

        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, database_url: Optional[str] = None):
        """
        Initialize the database manager.

        Args:
            database_url: Optional SQLAlchemy URL, defaults to Config.get_database_url()
        """
        if self._initialized:
            return

        self.logger = logger.bind(component='DatabaseManager')
        self._database_url = database_url or Config.get_database_url()
        self._engine = None
        self._session_factory = None
        self._Session = None

        self._initialize_engine()
        self._initialized = True

    def _initialize_engine(self):
        """
        Create the SQLAlchemy engine and the session factory.

        An in-memory SQLite database only exists for the lifetime of one
        connection, so it gets a StaticPool that hands out that single
        connection every time.
        """
        database_url = self._database_url

        self.logger.info("Initializing database connection...")
        self.logger.debug(f"Database URL: {database_url.split('@')[-1]}")

        engine_options: Dict[str, Any] = {'echo': Config.SQLALCHEMY_ECHO}

        if database_url.startswith('sqlite'):
            engine_options['connect_args'] = {'check_same_thread': False}
            if ':memory:' in database_url or database_url in ('sqlite://', 'sqlite:///'):
                engine_options['poolclass'] = StaticPool
        else:
            engine_options.update({
                'pool_size': 5,
                'max_overflow': 10,
                'pool_recycle': 3600,
                'pool_pre_ping': True,
            })

        try:
            self._engine = create_engine(database_url, **engine_options)

            self._session_factory = sessionmaker(bind=self._engine)

            # Thread-local sessions
            self._Session = scoped_session(self._session_factory)

            self.logger.info("Database engine initialized successfully")

        except Exception as e:
            self.logger.error(f"Failed to initialize database engine: {e}")
            raise

    @property
    def engine(self):
        """Get the SQLAlchemy engine."""
        return self._engine

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(OperationalError),
        before_sleep=lambda retry_state: logger.warning(
            f"Database connection failed, retrying in {retry_state.next_action.sleep} seconds..."
        )
    )
    def test_connection(self) -> bool:
        """
        Test the database connection.

        Returns:
            True if connection is successful

        Raises:
            OperationalError: If connection fails after retries
        """
        self.logger.info("Testing database connection...")

        with self._engine.connect() as connection:
            result = connection.execute(text("SELECT 1"))
            result.fetchone()

        self.logger.info("Database connection test successful!")
        return True

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session as a context manager.

        The session commits when the block exits normally, rolls back on
        any error (which is re-raised), and is always closed.

        Yields:
            SQLAlchemy Session object
        """
        session = self._Session()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            self.logger.error(f"Database error, rolling back: {e}")
            raise
        except Exception as e:
            session.rollback()
            self.logger.error(f"Unexpected error, rolling back: {e}")
            raise
        finally:
            session.close()

    def execute_query(
        self,
        query: str,
        params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        Execute a raw SQL query and return results.

        Args:
            query: SQL query string (use :name for parameters)
            params: Dictionary of parameters to safely bind

        Returns:
            List of dictionaries, one per row
        """
        self.logger.debug(f"Executing query: {query[:100]}...")

        with self._engine.connect() as connection:
            if params:
                result = connection.execute(text(query), params)
            else:
                result = connection.execute(text(query))

            columns = result.keys()
            rows = [dict(zip(columns, row)) for row in result.fetchall()]

        self.logger.debug(f"Query returned {len(rows)} rows")
        return rows

    def create_all_tables(self):
        """
        Create all database tables defined in models.

        Existing tables are left alone.
        """
        from database.models import Base

        self.logger.info("Creating all database tables...")

        try:
            Base.metadata.create_all(self._engine)
            self.logger.info("All tables created successfully")
        except Exception as e:
            self.logger.error(f"Failed to create tables: {e}")
            raise

    def drop_all_tables(self):
        """
        Drop all database tables.

        WARNING: This deletes all data! Only use in development/testing.
        """
        from database.models import Base

        self.logger.warning("Dropping all database tables...")

        try:
            Base.metadata.drop_all(self._engine)
            self.logger.info("All tables dropped")
        except Exception as e:
            self.logger.error(f"Failed to drop tables: {e}")
            raise

    def dispose(self):
        """Close every pooled connection."""
        self._Session.remove()
        self._engine.dispose()


def get_db() -> DatabaseManager:
    """
    Get the shared database manager instance.

    Returns:
        DatabaseManager instance
    """
    return DatabaseManager()
