"""Roster filtering."""

from collections.abc import Iterable

from .timezone_entry import TimezoneEntry

Roster = tuple[TimezoneEntry, ...]


def filter_roster(roster: Iterable[TimezoneEntry], term: str) -> Roster:
    """Return the entries matching a search term, in input order.

    An empty term returns the whole roster. Otherwise an entry is kept when
    the lowercased term occurs in its lowercased name, handle or timezone.
    """
    entries = tuple(roster)
    if not term:
        return entries
    return tuple(entry for entry in entries if entry.matches(term))
