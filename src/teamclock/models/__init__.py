"""Data models for teamclock."""

from .roster import Roster, filter_roster
from .timezone_entry import (
    DEFAULT_TIMEZONE,
    SAME_OFFSET,
    UNKNOWN_OFFSET,
    TimeOfDay,
    TimezoneEntry,
    format_offset_hours,
    resolve_zone,
    status_for_hour,
)

__all__ = [
    "DEFAULT_TIMEZONE",
    "Roster",
    "SAME_OFFSET",
    "TimeOfDay",
    "TimezoneEntry",
    "UNKNOWN_OFFSET",
    "filter_roster",
    "format_offset_hours",
    "resolve_zone",
    "status_for_hour",
]
