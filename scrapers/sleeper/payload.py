"""
Sleeper Payload Accessors
==========================

The Sleeper API returns loosely typed JSON: keys come and go between
players, numbers sometimes arrive as strings and lists can be null.
These helpers read a value of the expected type and return None when the
key is missing or the value has the wrong shape, so callers never have to
guard every lookup.

Usage:
    from scrapers.sleeper.payload import get_str, get_int

    name = get_str(player, 'full_name')       # None if absent
    years = get_int(player, 'years_exp', 0)   # 0 if absent
"""

from typing import Any, List, Optional


def get_value(obj: Any, key: str) -> Any:
    """Value stored under key, None if obj is not an object or lacks it."""
    if not isinstance(obj, dict):
        return None
    return obj.get(key)


def get_str(obj: Any, key: str, default: Optional[str] = None) -> Optional[str]:
    """
    Read a string value.

    Integers are accepted and converted, since Sleeper ids are sometimes
    sent as numbers. Empty strings count as absent.
    """
    value = get_value(obj, key)

    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str) and value:
        return value
    return default


def get_int(obj: Any, key: str, default: Optional[int] = None) -> Optional[int]:
    """Read an integer value, accepting numeric strings and whole floats."""
    value = get_value(obj, key)

    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def get_list(obj: Any, key: str) -> List[Any]:
    """Read a list value, an empty list if absent or null."""
    value = get_value(obj, key)
    return value if isinstance(value, list) else []


def player_full_name(player: Any) -> Optional[str]:
    """
    Display name of a catalogue player.

    Team defenses and some retired players have no full_name, so it is
    rebuilt from first_name and last_name when missing.
    """
    full_name = get_str(player, 'full_name')
    if full_name:
        return full_name

    parts = [get_str(player, 'first_name'), get_str(player, 'last_name')]
    joined = ' '.join(part for part in parts if part)
    return joined or None
