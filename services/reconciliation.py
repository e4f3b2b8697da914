"""
Draft Reconciliation
=====================

Folds scraped draft records into an in-memory roster.

Matching is first-match-wins, so ordering matters everywhere:
years are processed oldest first, records in table order, and each record
goes to the first roster player whose name matches it. A player who has
already been annotated keeps the first draft record.

Usage:
    from services.reconciliation import draft_year_span, reconcile

    start, end = draft_year_span(players)
    summary = reconcile(players, range(start, end + 1), scraper.fetch_draft_records)
"""

from datetime import date
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from services.entities import DraftRecord, Player
from services.name_matcher import names_match

log = logger.bind(service='Reconciliation')

FetchAndExtract = Callable[[int], Iterable[DraftRecord]]


def current_year() -> int:
    """The current calendar year."""
    return date.today().year


def draft_year_span(
    players: Sequence[Player],
    end_year: Optional[int] = None
) -> Tuple[int, int]:
    """
    Work out which draft classes can contain anyone on the roster.

    The oldest useful class is this year minus the longest tenure on the
    roster. Rookies and players with unknown tenure (years_experience 0)
    do not widen the span.

    Args:
        players: Roster players
        end_year: Latest draft class, defaults to the current year

    Returns:
        (start_year, end_year), both inclusive
    """
    if end_year is None:
        end_year = current_year()

    start_year = min(
        (end_year - p.years_experience for p in players if p.years_experience > 0),
        default=end_year
    )
    return start_year, end_year


def find_match(players: Sequence[Player], record: DraftRecord) -> Optional[Player]:
    """First player, in roster order, whose name matches the record."""
    for player in players:
        if names_match(player.full_name, record.player_name):
            return player
    return None


def new_summary() -> Dict[str, int]:
    return {
        'years_processed': 0,
        'years_failed': 0,
        'years_empty': 0,
        'records_seen': 0,
        'records_matched': 0,
        'records_unmatched': 0,
        'records_already_drafted': 0,
    }


def reconcile(
    players: List[Player],
    years: Iterable[int],
    fetch_and_extract: FetchAndExtract
) -> Dict[str, int]:
    """
    Annotate players in place with the draft records of each year.

    A year whose fetch or extraction fails counts as a year without
    records; the run carries on with the next year.

    Args:
        players: Roster players, mutated in place
        years: Draft classes to process, in the order given
        fetch_and_extract: Returns the draft records of one year

    Returns:
        Dictionary of counters describing the run
    """
    summary = new_summary()

    if not players:
        log.info("Empty roster, nothing to reconcile")
        return summary

    for year in years:
        seen_before = summary['records_seen']

        try:
            for record in fetch_and_extract(year):
                summary['records_seen'] += 1
                _apply_record(players, record, summary)
        except Exception as e:
            log.error(f"Draft data for {year} failed: {e}")
            summary['years_failed'] += 1
            continue

        summary['years_processed'] += 1
        year_records = summary['records_seen'] - seen_before
        if not year_records:
            summary['years_empty'] += 1

        log.info(f"Processed {year_records} draft records for {year}")

    log.info(
        f"Reconciliation complete: {summary['records_matched']} matched, "
        f"{summary['records_unmatched']} unmatched, "
        f"{summary['years_failed']} years failed"
    )
    return summary


def _apply_record(players: Sequence[Player], record: DraftRecord, summary: Dict[str, int]):
    player = find_match(players, record)

    if player is None:
        summary['records_unmatched'] += 1
        return

    if player.apply_draft(record):
        summary['records_matched'] += 1
        log.debug(
            f"{player.full_name}: {record.year} round {record.round} "
            f"pick {record.pick} ({record.team})"
        )
    else:
        summary['records_already_drafted'] += 1
