"""
Wikipedia Draft Table Parser
=============================

Pulls draft picks out of a Wikipedia "<year> NFL draft" page.

Draft pages have changed shape over the years, but every one of them
carries a single pick-by-pick table with the classes "wikitable sortable
plainrowheaders" (usually with a few extra classes). Its body rows look like:

    <tr>
        <th>1</th>            <- overall pick, a header cell
        <td>1</td>            <- round
        <td>1</td>            <- pick
        <td>Chicago Bears</td>
        <td>Caleb Williams †</td>
        ...
    </tr>

Nothing here raises to the caller: a page that will not parse, a missing
table or a malformed row just produces fewer records. Pass a Counter as
`stats` to see what was skipped.

Usage:
    from scrapers.wikipedia.draft_table import extract_draft_records

    for record in extract_draft_records(2024, html_bytes):
        print(record.round, record.pick, record.player_name)
"""

from collections import Counter
from typing import Iterator, List, Optional, Sequence
import re

from bs4 import BeautifulSoup
from loguru import logger

from services.entities import DraftRecord
from services.name_matcher import normalize_name

# Class tokens the draft table must carry (substring match on the attribute)
DRAFT_TABLE_CLASSES = ('wikitable', 'sortable', 'plainrowheaders')

# Column positions within a body row
ROUND_COLUMN = 1
PICK_COLUMN = 2
TEAM_COLUMN = 3
PLAYER_COLUMN = 4
MIN_CELLS = PLAYER_COLUMN + 1

_WHITESPACE_RUN = re.compile(r'\s+')
_TAG_FRAGMENT = re.compile(r'<[^>]*>')
_FOOTNOTE_GLYPHS = re.compile(r'[†‡*]')
_LEADING_DIGITS = re.compile(r'[0-9]+')

log = logger.bind(parser='DraftTableParser')


def is_draft_table(tag) -> bool:
    """Check whether a tag is the pick-by-pick draft table."""
    if tag.name != 'table':
        return False

    classes = tag.get('class') or []
    if isinstance(classes, str):
        class_attr = classes
    else:
        class_attr = ' '.join(classes)

    return all(token in class_attr for token in DRAFT_TABLE_CLASSES)


def clean_cell_text(text: str) -> str:
    """Drop newlines, collapse whitespace runs and trim."""
    text = text.replace('\n', '')
    return _WHITESPACE_RUN.sub(' ', text).strip()


def clean_player_name(text: str) -> str:
    """
    Clean the player cell of a draft row.

    Footnote markers (†, ‡, *) flag Pro Bowlers and Hall of Famers on
    Wikipedia, so they are stripped along with any markup left in the text.
    """
    name = normalize_name(text)
    name = _TAG_FRAGMENT.sub('', name)
    name = name.replace('&nbsp;', ' ')
    name = _FOOTNOTE_GLYPHS.sub('', name)
    return name.strip()


def parse_int(text: str) -> Optional[int]:
    """
    Parse the leading positive integer of a cell.

    Trailing markers are ignored, so "97*" (compensatory pick) gives 97 and
    "32[a]" (footnote) gives 32. None if the text does not start with digits.
    """
    match = _LEADING_DIGITS.match(text)
    if match is None:
        return None

    value = int(match.group())
    return value if value > 0 else None


def parse_draft_row(year: int, cells: Sequence[str]) -> Optional[DraftRecord]:
    """
    Turn the cell texts of one body row into a DraftRecord.

    Args:
        year: Draft class the table belongs to
        cells: Cleaned text of every cell in the row, in order

    Returns:
        DraftRecord, or None if the row does not describe a pick
    """
    if len(cells) < MIN_CELLS:
        return None

    round_number = parse_int(cells[ROUND_COLUMN])
    pick = parse_int(cells[PICK_COLUMN])
    if round_number is None or pick is None:
        return None

    player_name = clean_player_name(cells[PLAYER_COLUMN])
    # An empty name would match any roster player under the word-subset rule
    if not player_name:
        return None

    return DraftRecord(
        year=year,
        round=round_number,
        pick=pick,
        team=cells[TEAM_COLUMN],
        player_name=player_name,
    )


def row_cells(row) -> List[str]:
    """Cleaned text of the th/td cells directly inside a row."""
    return [
        clean_cell_text(cell.get_text())
        for cell in row.find_all(['td', 'th'], recursive=False)
    ]


def parse_document(html: bytes) -> Optional[BeautifulSoup]:
    """Parse a page leniently, None if the parser gives up entirely."""
    try:
        return BeautifulSoup(html, 'lxml')
    except Exception as e:
        log.warning(f"Could not parse HTML document: {e}")
        return None


def extract_draft_records(
    year: int,
    html: bytes,
    stats: Optional[Counter] = None
) -> Iterator[DraftRecord]:
    """
    Yield a DraftRecord for every pick in a draft page.

    Args:
        year: Draft class, attached to every record
        html: Raw page body
        stats: Optional Counter updated with 'rows', 'records',
            'rows_skipped', 'missing_table' and 'missing_body'

    Yields:
        DraftRecord objects in table order
    """
    if stats is None:
        stats = Counter()

    if not html:
        stats['missing_table'] += 1
        return

    soup = parse_document(html)
    if soup is None:
        stats['missing_table'] += 1
        return

    table = soup.find(is_draft_table)
    if table is None:
        log.warning(f"No draft table found for {year}")
        stats['missing_table'] += 1
        return

    body = table.find('tbody', recursive=False)
    if body is None:
        log.warning(f"Draft table for {year} has no body")
        stats['missing_body'] += 1
        return

    for row in body.find_all('tr', recursive=False):
        stats['rows'] += 1

        record = parse_draft_row(year, row_cells(row))
        if record is None:
            stats['rows_skipped'] += 1
            continue

        stats['records'] += 1
        yield record
