"""
Player Name Matching
=====================

Decides whether a name from the Sleeper catalogue and a name scraped from a
draft page belong to the same player.

Matching works in three steps:
    1. Normalize both names and compare them directly.
    2. Otherwise compare word lists. Names with the same number of words
       must be identical, so "A.J. Brown" never matches "A.J. Green".
    3. When one name has more words than the other, every word of the
       shorter name must appear somewhere in the longer one. This lets
       "Kenneth Walker III" match "Kenneth Walker".

Usage:
    from services.name_matcher import normalize_name, names_match

    names_match("Cooper Kupp", "cooper  kupp")  # True
"""

from typing import List

# Bytes of a UTF-8 encoded non-breaking space. Scraped text sometimes
# carries only one of them, so each byte is dropped on its own.
_NBSP_BYTES = (b'\xc2', b'\xa0')

_ASCII_WHITESPACE = ' \t\n\r\x0b\x0c'

_ASCII_LOWER = str.maketrans(
    'ABCDEFGHIJKLMNOPQRSTUVWXYZ',
    'abcdefghijklmnopqrstuvwxyz'
)


def normalize_name(raw: str) -> str:
    """
    Canonicalize a name for comparison.

    Removes stray non-breaking-space bytes, trims trailing whitespace and
    lower-cases ASCII letters. Non-ASCII letters are left as they are.

    Args:
        raw: Name as supplied by a data source

    Returns:
        Normalized name, never raises
    """
    data = (raw or '').encode('utf-8', errors='ignore')
    for byte in _NBSP_BYTES:
        data = data.replace(byte, b'')

    # Dropping a byte can orphan the rest of a multi-byte character
    cleaned = data.decode('utf-8', errors='ignore')

    return cleaned.rstrip(_ASCII_WHITESPACE).translate(_ASCII_LOWER)


def name_tokens(name: str) -> List[str]:
    """Split a normalized name into words."""
    return name.split()


def names_match(name_a: str, name_b: str) -> bool:
    """
    Check whether two names denote the same player.

    Args:
        name_a: First name (raw)
        name_b: Second name (raw)

    Returns:
        True if the names match under the word-subset rule

    Example:
        names_match("A.J. Brown", "Brown")       # True
        names_match("A.J. Brown", "A.J. Green")  # False
    """
    clean_a = normalize_name(name_a)
    clean_b = normalize_name(name_b)

    if clean_a == clean_b:
        return True

    tokens_a = name_tokens(clean_a)
    tokens_b = name_tokens(clean_b)

    # Same word count but different words: different people
    if len(tokens_a) == len(tokens_b):
        return tokens_a == tokens_b

    shorter, longer = sorted((tokens_a, tokens_b), key=len)
    return all(token in longer for token in shorter)
