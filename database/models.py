"""
Database Models (SQLAlchemy ORM)
=================================

This module defines all database models for the Draft Tracker application
using SQLAlchemy ORM (Object-Relational Mapper).

Tables:
    players            - The Sleeper NFL player catalogue
    teams              - Fantasy teams in the league (one per Sleeper user)
    rosters            - Which player sits on which fantasy team
    processed_players  - Players annotated with their NFL draft information
    scrape_logs        - One row per scrape run, with counters

Usage:
    from database.models import NFLPlayer, ProcessedPlayer

    with db.get_session() as session:
        quarterbacks = session.query(NFLPlayer).filter_by(position='QB').all()
"""

from datetime import datetime
from typing import Dict, Any

from sqlalchemy import (
    Column, Integer, String, Text, DateTime, Enum, ForeignKey, Index, JSON
)
from sqlalchemy.orm import declarative_base, relationship

# ==============================================================================
# Base Class
# ==============================================================================
Base = declarative_base()


class NFLPlayer(Base):
    """
    A player from the Sleeper NFL player catalogue.

    Sleeper returns a large, loosely structured object per player. We keep
    the handful of columns we query on and store the whole source object in
    raw_data so nothing is lost.

    Attributes:
        player_id: Sleeper player id (string key)
        full_name: Display name, built from first/last name if Sleeper omits it
        position: Fantasy position (QB, RB, WR, TE, K, DEF, ...)
        team: NFL team abbreviation, NULL for free agents
        years_exp: Seasons in the league, 0 for rookies
        status: Sleeper status ('Active', 'Inactive', ...)
    """
    __tablename__ = 'players'

    player_id = Column(String(50), primary_key=True)

    full_name = Column(String(200))
    first_name = Column(String(100))
    last_name = Column(String(100), index=True)

    position = Column(String(10), index=True)
    team = Column(String(10))
    years_exp = Column(Integer, default=0)
    status = Column(String(50))

    raw_data = Column(JSON)

    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    roster_entries = relationship('RosterEntry', back_populates='player')

    def __repr__(self):
        return f"<NFLPlayer({self.player_id}: {self.full_name})>"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'player_id': self.player_id,
            'full_name': self.full_name,
            'position': self.position,
            'team': self.team,
            'years_exp': self.years_exp,
            'status': self.status,
        }


class FantasyTeam(Base):
    """
    A fantasy team in the league.

    Sleeper models teams as users, so team_id and owner_id are both the
    Sleeper user id.
    """
    __tablename__ = 'teams'

    team_id = Column(String(50), primary_key=True)
    name = Column(String(200))
    owner_id = Column(String(50))

    roster_entries = relationship('RosterEntry', back_populates='team')

    def __repr__(self):
        return f"<FantasyTeam({self.team_id}: {self.name})>"


class RosterEntry(Base):
    """
    Associates players with fantasy teams (many-to-many relationship).
    """
    __tablename__ = 'rosters'

    team_id = Column(String(50), ForeignKey('teams.team_id'), primary_key=True)
    player_id = Column(String(50), ForeignKey('players.player_id'), primary_key=True)

    team = relationship('FantasyTeam', back_populates='roster_entries')
    player = relationship('NFLPlayer', back_populates='roster_entries')

    def __repr__(self):
        return f"<RosterEntry(team={self.team_id}, player={self.player_id})>"


class ProcessedPlayer(Base):
    """
    A player annotated with NFL draft information.

    Only players that were matched to a draft record are stored here, so
    every row has all four draft columns populated.
    """
    __tablename__ = 'processed_players'

    player_id = Column(String(50), primary_key=True)
    full_name = Column(String(200))
    position = Column(String(10))
    nfl_team = Column(String(10))
    fantasy_team = Column(String(200))
    years_exp = Column(Integer)

    draft_year = Column(Integer)
    draft_round = Column(Integer)
    draft_pick = Column(Integer)
    draft_team = Column(String(100))

    __table_args__ = (
        Index('idx_draft_year_pick', 'draft_year', 'draft_pick'),
    )

    def __repr__(self):
        return f"<ProcessedPlayer({self.player_id}: {self.full_name} {self.draft_year})>"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'player_id': self.player_id,
            'full_name': self.full_name,
            'position': self.position,
            'nfl_team': self.nfl_team,
            'fantasy_team': self.fantasy_team,
            'years_exp': self.years_exp,
            'draft_year': self.draft_year,
            'draft_round': self.draft_round,
            'draft_pick': self.draft_pick,
            'draft_team': self.draft_team,
        }


class ScrapeLog(Base):
    """
    Tracks all scraping operations for debugging and monitoring.

    Scrapes never abort on bad data, so this table is where degraded
    outcomes (failed years, skipped rows, unmatched records) get counted.
    """
    __tablename__ = 'scrape_logs'

    log_id = Column(Integer, primary_key=True, autoincrement=True)

    scrape_type = Column(
        Enum('players', 'league', 'draft', name='scrape_type'),
        nullable=False
    )
    source = Column(String(50))

    status = Column(
        Enum('started', 'success', 'partial', 'failed', name='scrape_status'),
        nullable=False
    )
    records_processed = Column(Integer, default=0)
    records_created = Column(Integer, default=0)
    records_updated = Column(Integer, default=0)
    records_skipped = Column(Integer, default=0)

    error_message = Column(Text)

    started_at = Column(DateTime, default=datetime.utcnow)
    completed_at = Column(DateTime)
    duration_seconds = Column(Integer)

    source_url = Column(String(500))

    __table_args__ = (
        Index('idx_scrape_date', 'started_at'),
        Index('idx_scrape_status', 'status'),
    )

    def __repr__(self):
        return f"<ScrapeLog({self.log_id}: {self.scrape_type} - {self.status})>"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'log_id': self.log_id,
            'scrape_type': self.scrape_type,
            'source': self.source,
            'status': self.status,
            'records_processed': self.records_processed,
            'records_created': self.records_created,
            'records_updated': self.records_updated,
            'records_skipped': self.records_skipped,
            'error_message': self.error_message,
            'started_at': self.started_at.isoformat() if self.started_at else None,
            'completed_at': self.completed_at.isoformat() if self.completed_at else None,
            'duration_seconds': self.duration_seconds,
        }
